"""
Tab completion for command names, directories and glob patterns.

Every call scans from scratch; nothing is cached between tab presses.
"""

from __future__ import annotations

import glob
import os
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Mapping, Optional, Sequence, Tuple

from .config import expand_tilde, search_path
from .tokenizer import DELIMITERS, last_delimiter_end


MAX_MATCHES = 100
DIRECTORY_BUILTINS = ("cd",)


class CompletionResult:
    """Deduplicated, insertion-ordered candidates, bounded by `limit`."""

    def __init__(self, limit: int = MAX_MATCHES):
        self.limit = limit
        self.matches: List[str] = []
        self._seen = set()

    @property
    def full(self) -> bool:
        return len(self.matches) >= self.limit

    def add(self, candidate: str) -> bool:
        """Add a candidate. Returns False once the result is full."""
        if self.full:
            return False
        if candidate not in self._seen:
            self._seen.add(candidate)
            self.matches.append(candidate)
        return not self.full

    def release(self) -> None:
        self.matches.clear()
        self._seen.clear()

    def __len__(self) -> int:
        return len(self.matches)

    def __iter__(self) -> Iterator[str]:
        return iter(self.matches)

    def __getitem__(self, index: int) -> str:
        return self.matches[index]

    def __contains__(self, candidate: object) -> bool:
        return candidate in self._seen

    def __enter__(self) -> "CompletionResult":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"CompletionResult({self.matches!r})"


class CompletionMode(Enum):
    COMMAND = "command"
    ARGUMENT = "argument"


@dataclass(frozen=True)
class CompletionQuery:
    mode: CompletionMode
    partial: str
    start: int  # offset in the line where `partial` begins

    @property
    def is_argument(self) -> bool:
        return self.mode is CompletionMode.ARGUMENT


def split_directory_command(
    text: str, builtins: Sequence[str] = DIRECTORY_BUILTINS
) -> Optional[Tuple[str, str]]:
    """Split "cd so" into ("cd", "so") and "cd " into ("cd", "").

    None when `text` is not a directory-changing builtin followed by exactly
    one (possibly empty) argument.
    """
    for i, ch in enumerate(text):
        if ch in DELIMITERS:
            head, rest = text[:i], text[i:].lstrip(DELIMITERS)
            break
    else:
        return None
    if head not in builtins:
        return None
    if any(ch in DELIMITERS for ch in rest):
        return None
    return head, rest


def classify(
    text: str,
    cursor: Optional[int] = None,
    builtins: Sequence[str] = DIRECTORY_BUILTINS,
) -> CompletionQuery:
    """Decide once per tab press what is being completed.

    Text with no whitespace before the cursor, or a directory-changing builtin
    with its single argument, completes as a command over the whole line.
    Anything else completes the segment after the last whitespace run.
    """
    before = text if cursor is None else text[:cursor]
    has_space = any(ch in DELIMITERS for ch in before)
    if not has_space or split_directory_command(before, builtins) is not None:
        return CompletionQuery(CompletionMode.COMMAND, text, 0)
    start = last_delimiter_end(text)
    return CompletionQuery(CompletionMode.ARGUMENT, text[start:], start)


def _split_dir(path: str):
    # "src/ma" -> ("src/", "ma")
    idx = path.rfind("/")
    if idx < 0:
        return "", path
    return path[:idx + 1], path[idx + 1:]


class CompletionProvider:
    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        directory_builtins: Sequence[str] = DIRECTORY_BUILTINS,
        limit: int = MAX_MATCHES,
    ):
        self.environ = os.environ if environ is None else environ
        self.directory_builtins = tuple(directory_builtins)
        self.limit = limit

    def complete(self, partial: str, is_argument: bool) -> CompletionResult:
        result = CompletionResult(self.limit)
        if not partial:
            return result

        if is_argument:
            self._complete_glob(partial, result)
            return result

        dir_command = split_directory_command(partial, self.directory_builtins)
        if dir_command is not None:
            self._complete_directories(*dir_command, result)
        elif "/" not in partial:
            self._complete_commands(partial, result)
        else:
            self._complete_paths(partial, result)
        return result

    # --- scanners

    def _scan(self, directory: str):
        """Directory entries, or nothing when the directory can't be read."""
        try:
            with os.scandir(directory) as it:
                yield from it
        except OSError:
            return

    def _complete_glob(self, partial: str, result: CompletionResult) -> None:
        pattern = expand_tilde(partial, self.environ)
        if pattern is None:
            return
        for match in glob.iglob(pattern + "*"):
            if os.path.isdir(match) and not match.endswith("/"):
                match += "/"
            if not result.add(match):
                return

    def _complete_directories(self, builtin: str, arg: str, result: CompletionResult) -> None:
        dirpart, prefix = _split_dir(arg)
        scan_dir = expand_tilde(dirpart, self.environ) if dirpart else "."
        if scan_dir is None:
            return
        for entry in self._scan(scan_dir):
            if not entry.name.startswith(prefix):
                continue
            try:
                is_dir = entry.is_dir()
            except OSError:
                continue
            if is_dir and not result.add(f"{builtin} {dirpart}{entry.name}/"):
                return

    def _complete_commands(self, partial: str, result: CompletionResult) -> None:
        for directory in search_path(self.environ):
            for entry in self._scan(directory):
                if entry.name in result or not entry.name.startswith(partial):
                    continue
                if _is_executable(entry.path) and not result.add(entry.name):
                    return

    def _complete_paths(self, partial: str, result: CompletionResult) -> None:
        dirpart, prefix = _split_dir(partial)
        # candidates carry the expanded directory so they can be executed as typed
        scan_dir = expand_tilde(dirpart, self.environ)
        if scan_dir is None:
            return
        for entry in self._scan(scan_dir):
            if not entry.name.startswith(prefix):
                continue
            if os.path.isdir(entry.path):
                candidate = f"{scan_dir}{entry.name}/"
            elif _is_executable(entry.path):
                candidate = scan_dir + entry.name
            else:
                continue
            if not result.add(candidate):
                return


def _is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)
