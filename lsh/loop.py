from __future__ import annotations

from typing import Optional, Protocol

from .dispatcher import Dispatcher
from .tokenizer import split_line


class LineReader(Protocol):
    def read_line(self, prompt: str = "") -> Optional[str]: ...


class CommandLoop:
    def __init__(self, reader: LineReader, dispatcher: Dispatcher, prompt: str = ""):
        self.reader = reader
        self.dispatcher = dispatcher
        self.prompt = prompt

    def run(self) -> int:
        """Read and execute lines until a builtin stops the loop.

        End of input exits the process with status 0.
        """
        status = True
        while status:
            try:
                line = self.reader.read_line(self.prompt)
            except KeyboardInterrupt:
                self.dispatcher.context.out.print()
                continue
            if line is None:
                # leave the parent shell a clean line
                self.dispatcher.context.out.print()
                raise SystemExit(0)
            status = self.dispatcher.execute(split_line(line))
        return 0
