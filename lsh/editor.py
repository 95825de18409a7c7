"""
Interactive line editor.

- Reads one byte at a time under raw mode
- Keeps an EditBuffer and redraws only the suffix a change touched
- Tab completion through a CompletionProvider
"""

from __future__ import annotations

from typing import Optional, TextIO

from . import ux
from .buffer import EditBuffer
from .completion import CompletionProvider, classify
from .errors import TerminalError
from .terminal import Terminal


ESC = 0x1B
TAB = 0x09
EOT = 0x04
BACKSPACE = 0x08
DELETE = 0x7F
NEWLINES = (0x0A, 0x0D)


def _encode(text: str) -> bytes:
    return text.encode("utf-8", "surrogateescape")


def _is_printable(byte: int) -> bool:
    return 0x20 <= byte < DELETE or byte >= 0x80


class LineEditor:
    def __init__(
        self,
        terminal: Optional[Terminal] = None,
        completer: Optional[CompletionProvider] = None,
        escape_timeout: Optional[float] = None,
    ):
        self.terminal = terminal or Terminal()
        self.completer = completer or CompletionProvider()
        self.escape_timeout = escape_timeout
        self.buffer = EditBuffer()
        self.prompt = b""

    def read_line(self, prompt: str = "") -> Optional[str]:
        """Read one line. Returns None at end of input on an empty line."""
        self.buffer = EditBuffer()
        self.prompt = prompt.encode("utf-8")
        self.terminal.write(self.prompt)

        guard = self.terminal.raw_mode()
        try:
            guard.enter()
        except TerminalError as exc:
            ux.report(str(exc))
        try:
            line = self._edit()
        except OSError as exc:
            # the line is abandoned; the loop gets an empty one
            line = b""
            ux.report(f"read: {exc.strerror or exc}")
        finally:
            try:
                guard.restore()
            except TerminalError as exc:
                ux.report(str(exc))

        if line is None:
            return None
        self.terminal.write(b"\n")
        return line.decode("utf-8", "surrogateescape")

    def _edit(self) -> Optional[bytes]:
        while True:
            ch = self.terminal.read_byte()
            if not ch or ch[0] == EOT:
                if not self.buffer:
                    return None
                return self.buffer.finalize()
            byte = ch[0]
            if byte in NEWLINES:
                return self.buffer.finalize()
            if byte in (DELETE, BACKSPACE):
                self.delete_backward()
            elif byte == ESC:
                self._escape()
            elif byte == TAB:
                self.complete()
            elif _is_printable(byte):
                self.insert(byte)

    # --- transitions

    def insert(self, byte: int) -> None:
        buf = self.buffer
        buf.insert(byte)
        self.terminal.write(buf.suffix(buf.cursor - 1) + b"\b" * (buf.length - buf.cursor))

    def delete_backward(self) -> None:
        buf = self.buffer
        if not buf.delete_backward():
            return
        # blank out the old last glyph, then walk back over it and the suffix
        back = buf.length - buf.cursor + 1
        self.terminal.write(b"\b" + buf.suffix(buf.cursor) + b" " + b"\b" * back)

    def move_left(self) -> None:
        if self.buffer.move_left():
            self.terminal.write(ux.CURSOR_LEFT)

    def move_right(self) -> None:
        if self.buffer.move_right():
            self.terminal.write(ux.CURSOR_RIGHT)

    def _escape(self) -> None:
        # blocks for the rest of the sequence unless escape_timeout is set
        first = self.terminal.read_byte(self.escape_timeout)
        if first != b"[":
            return
        # CSI: parameter and intermediate bytes, then one final byte
        params = b""
        while True:
            ch = self.terminal.read_byte(self.escape_timeout)
            if not ch:
                return
            if 0x40 <= ch[0] <= 0x7E:
                break
            if not 0x20 <= ch[0] <= 0x3F:
                return
            params += ch
        if params:
            return
        if ch == b"C":
            self.move_right()
        elif ch == b"D":
            self.move_left()

    def complete(self) -> None:
        buf = self.buffer
        text = buf.text()
        before = buf.getvalue()[:buf.cursor].decode("utf-8", "surrogateescape")
        query = classify(text, len(before), self.completer.directory_builtins)
        with self.completer.complete(query.partial, query.is_argument) as result:
            if not result:
                return
            if len(result) == 1:
                start = len(_encode(text[:query.start]))
                buf.replace_from(start, _encode(result[0]))
                self._redraw(b"\r", erase=True)
                return
            # directories carry a trailing slash
            listing = "  ".join(ux.directory(c) if c.endswith("/") else c for c in result)
            self._redraw(b"\n" + _encode(listing) + b"\n")

    def _redraw(self, lead: bytes, erase: bool = False) -> None:
        buf = self.buffer
        out = lead + self.prompt + buf.getvalue()
        if erase:
            out += ux.ERASE_TO_EOL
        self.terminal.write(out + b"\b" * (buf.length - buf.cursor))


class StreamReader:
    """Line reader for non-interactive input: no raw mode, no completion."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def read_line(self, prompt: str = "") -> Optional[str]:
        line = self.stream.readline()
        if not line:
            return None
        return line.rstrip("\n")
