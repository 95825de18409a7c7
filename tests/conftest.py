from __future__ import annotations

import io
from typing import Iterable, List, Optional

import pytest
from rich.console import Console

from lsh import ux
from lsh.commands import ShellContext
from lsh.completion import DIRECTORY_BUILTINS, CompletionResult
from lsh.errors import TerminalError


EOF_MARK = b""
TIMEOUT = None


class Screen:
    """Tracks what a VT100 terminal would show for the bytes written to it."""

    def __init__(self):
        self.rows: List[bytearray] = [bytearray()]
        self.col = 0

    @property
    def line(self) -> bytes:
        return bytes(self.rows[-1]).rstrip(b" ")

    def _put(self, byte: int) -> None:
        row = self.rows[-1]
        if self.col >= len(row):
            row.extend(b" " * (self.col - len(row) + 1))
        row[self.col] = byte
        self.col += 1

    def feed(self, data: bytes) -> None:
        i = 0
        while i < len(data):
            b = data[i]
            if b == 0x1B and data[i + 1:i + 2] == b"[":
                j = i + 2
                while j < len(data) and not 0x40 <= data[j] <= 0x7E:
                    j += 1
                params, final = data[i + 2:j], data[j:j + 1]
                count = int(params or b"1") if final in (b"C", b"D") else 0
                if final == b"C":
                    self.col += count
                elif final == b"D":
                    self.col = max(0, self.col - count)
                elif final == b"K":
                    del self.rows[-1][self.col:]
                i = j + 1
                continue
            if b == 0x08:
                self.col = max(0, self.col - 1)
            elif b == 0x0D:
                self.col = 0
            elif b == 0x0A:
                self.rows.append(bytearray())
                self.col = 0
            else:
                self._put(b)
            i += 1


class FakeRawMode:
    def __init__(self, terminal: "FakeTerminal"):
        self.terminal = terminal
        self.active = False

    def enter(self) -> None:
        if self.terminal.fail_raw:
            raise TerminalError("cannot read terminal attributes: not a tty")
        if self.active:
            raise TerminalError("raw mode is already active")
        self.active = True
        self.terminal.enters += 1

    def restore(self) -> None:
        if not self.active:
            return
        self.active = False
        self.terminal.restores += 1
        if self.terminal.fail_restore:
            raise TerminalError("cannot restore terminal attributes: device gone")


class FakeTerminal:
    """Scripted input: single bytes, EOF_MARK for end of input, TIMEOUT for an
    expired timed read, or an exception instance to raise."""

    def __init__(self, script: Iterable = (), fail_raw: bool = False, fail_restore: bool = False):
        self.script = []
        for item in script:
            if isinstance(item, (bytes, bytearray)) and len(item) > 1:
                self.script.extend(bytes([b]) for b in item)
            elif isinstance(item, int):
                self.script.append(bytes([item]))
            else:
                self.script.append(item)
        self.fail_raw = fail_raw
        self.fail_restore = fail_restore
        self.enters = 0
        self.restores = 0
        self.output = bytearray()
        self.screen = Screen()
        self.timeouts = []

    def raw_mode(self) -> FakeRawMode:
        return FakeRawMode(self)

    def read_byte(self, timeout: Optional[float] = None):
        self.timeouts.append(timeout)
        if not self.script:
            return EOF_MARK
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        if item is TIMEOUT:
            assert timeout is not None, "timed out on a blocking read"
        return item

    def write(self, data: bytes) -> None:
        self.output += data
        self.screen.feed(data)


class FakeCompleter:
    def __init__(self, matches=()):
        self.matches = list(matches)
        self.calls = []
        self.results = []
        self.directory_builtins = DIRECTORY_BUILTINS

    def complete(self, partial: str, is_argument: bool) -> CompletionResult:
        self.calls.append((partial, is_argument))
        result = CompletionResult()
        for m in self.matches:
            result.add(m)
        self.results.append(result)
        return result


def make_context(environ=None) -> ShellContext:
    return ShellContext(
        environ={} if environ is None else environ,
        out=Console(file=io.StringIO(), highlight=False, markup=False, width=200),
        err=Console(file=io.StringIO(), highlight=False, markup=False, width=200),
    )


def console_text(console: Console) -> str:
    return console.file.getvalue()


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    monkeypatch.setattr(ux, "_COLOR_ENABLED", False)


@pytest.fixture
def make_executable():
    def _make(path, body: str = "#!/bin/sh\nexit 0\n"):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
        path.chmod(0o755)
        return path

    return _make
