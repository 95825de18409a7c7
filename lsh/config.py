from __future__ import annotations

import os
import sys
from typing import List, Mapping, Optional

from typing_extensions import TypedDict

from .errors import ConfigError


DEFAULT_PROMPT = "❯"
EDITORS = ("raw", "prompt", "plain")


class Settings(TypedDict, total=False):
    prompt: str
    editor: str  # 'raw' | 'prompt' | 'plain'
    escape_timeout: Optional[float]
    color: bool


def _default_editor() -> str:
    try:
        return "raw" if sys.stdin.isatty() else "plain"
    except (AttributeError, ValueError):
        return "plain"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from LSH_* variables.

    Env:
      - LSH_PROMPT: prompt symbol, default "❯"
      - LSH_EDITOR: "raw", "prompt" or "plain" (default raw on a TTY)
      - LSH_ESCAPE_TIMEOUT: seconds to wait for the rest of an escape sequence
      - NO_COLOR: disable colors when set
    """
    env = os.environ if environ is None else environ

    editor = (env.get("LSH_EDITOR") or "").strip().lower() or _default_editor()
    if editor not in EDITORS:
        raise ConfigError(f"LSH_EDITOR must be one of {', '.join(EDITORS)}, got {editor!r}")

    return {
        "prompt": env.get("LSH_PROMPT") or DEFAULT_PROMPT,
        "editor": editor,
        "escape_timeout": parse_timeout(env.get("LSH_ESCAPE_TIMEOUT")),
        "color": env.get("NO_COLOR") is None,
    }


def parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"escape timeout must be a number of seconds, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"escape timeout must be positive, got {raw!r}")
    return value


# ----------------------------
# Environment helpers
# ----------------------------

def home_dir(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    env = os.environ if environ is None else environ
    return env.get("HOME") or None


def search_path(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """PATH entries in order; empty entries are skipped."""
    env = os.environ if environ is None else environ
    raw = env.get("PATH")
    if not raw:
        return []
    return [d for d in raw.split(":") if d]


def expand_tilde(path: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Expand a leading "~" using HOME.

    Returns None when the path needs HOME and HOME is unset. "~user" forms are
    left to os.path.expanduser.
    """
    if not path.startswith("~"):
        return path
    if path == "~" or path.startswith("~/"):
        home = home_dir(environ)
        if home is None:
            return None
        return home + path[1:]
    return os.path.expanduser(path)
