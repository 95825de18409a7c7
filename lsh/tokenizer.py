from __future__ import annotations

import re
from typing import List


DELIMITERS = " \t\r\n\a"
_DELIM_RE = re.compile("[" + re.escape(DELIMITERS) + "]+")


def split_line(line: str) -> List[str]:
    """Split a finished line on whitespace runs. No quoting or escaping."""
    return [tok for tok in _DELIM_RE.split(line) if tok]


def last_delimiter_end(text: str) -> int:
    """Offset just past the last delimiter run in `text`, or -1 when none."""
    last = -1
    for m in _DELIM_RE.finditer(text):
        last = m.end()
    return last
