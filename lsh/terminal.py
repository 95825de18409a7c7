"""
Terminal access for the line editor.

- RawMode: scoped non-canonical, non-echoing mode for one line read
- Terminal: single-byte reads (optionally bounded by a timeout) and raw writes
"""

from __future__ import annotations

import os
import select
import sys
import termios
from typing import Optional

from .errors import TerminalError


class RawMode:
    """Owns the terminal attribute snapshot for the duration of one read.

    enter() may only be called once before restore(); restore() is a no-op
    when nothing was captured.
    """

    def __init__(self, fd: int):
        self.fd = fd
        self._saved = None

    @property
    def active(self) -> bool:
        return self._saved is not None

    def enter(self) -> None:
        if self._saved is not None:
            raise TerminalError("raw mode is already active")
        try:
            saved = termios.tcgetattr(self.fd)
        except (termios.error, OSError) as exc:
            raise TerminalError(f"cannot read terminal attributes: {exc}") from exc

        attrs = list(saved)
        attrs[3] &= ~(termios.ICANON | termios.ECHO)
        cc = list(saved[6])
        cc[termios.VMIN] = 1
        cc[termios.VTIME] = 0
        attrs[6] = cc
        try:
            termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
        except (termios.error, OSError) as exc:
            raise TerminalError(f"cannot set terminal attributes: {exc}") from exc
        self._saved = saved

    def restore(self) -> None:
        if self._saved is None:
            return
        saved, self._saved = self._saved, None
        try:
            termios.tcsetattr(self.fd, termios.TCSANOW, saved)
        except (termios.error, OSError) as exc:
            raise TerminalError(f"cannot restore terminal attributes: {exc}") from exc

    def __enter__(self) -> "RawMode":
        self.enter()
        return self

    def __exit__(self, *exc_info) -> None:
        self.restore()


class Terminal:
    """Byte I/O on the given descriptors, or on the current stdin/stdout."""

    def __init__(self, in_fd: Optional[int] = None, out_fd: Optional[int] = None):
        self._in_fd = in_fd
        self._out_fd = out_fd

    @property
    def in_fd(self) -> int:
        return sys.stdin.fileno() if self._in_fd is None else self._in_fd

    @property
    def out_fd(self) -> int:
        return sys.stdout.fileno() if self._out_fd is None else self._out_fd

    def raw_mode(self) -> RawMode:
        return RawMode(self.in_fd)

    def read_byte(self, timeout: Optional[float] = None) -> Optional[bytes]:
        """Read one byte.

        Returns b"" at end of input and None when `timeout` expires first.
        Without a timeout the read blocks.
        """
        if timeout is not None:
            r, _, _ = select.select([self.in_fd], [], [], timeout)
            if not r:
                return None
        return os.read(self.in_fd, 1)

    def write(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            n = os.write(self.out_fd, view)
            view = view[n:]
