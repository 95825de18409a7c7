from __future__ import annotations


BUFFER_INCREMENT = 1024


class EditBuffer:
    """Byte buffer plus cursor for the line being typed.

    Storage is preallocated in fixed increments and never shrinks. The
    invariants `0 <= cursor <= length < capacity` hold after every public
    operation; nothing outside [0, length) is ever exposed.
    """

    def __init__(self, increment: int = BUFFER_INCREMENT):
        if increment <= 0:
            raise ValueError("increment must be positive")
        self.increment = increment
        self._data = bytearray(increment)
        self._length = 0
        self._cursor = 0

    @property
    def length(self) -> int:
        return self._length

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def capacity(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return self._length

    def __bool__(self) -> bool:
        return self._length > 0

    def _reserve(self, needed: int) -> None:
        # keep one spare byte for the terminator
        while needed >= len(self._data):
            self._data.extend(bytes(self.increment))

    def insert(self, byte: int) -> None:
        """Insert one byte at the cursor and advance the cursor."""
        self._reserve(self._length + 1)
        c, n = self._cursor, self._length
        self._data[c + 1:n + 1] = self._data[c:n]
        self._data[c] = byte
        self._length += 1
        self._cursor += 1

    def delete_backward(self) -> bool:
        """Remove the byte before the cursor. Returns False at cursor 0."""
        if self._cursor == 0:
            return False
        c, n = self._cursor, self._length
        self._data[c - 1:n - 1] = self._data[c:n]
        self._length -= 1
        self._cursor -= 1
        return True

    def move_left(self) -> bool:
        if self._cursor == 0:
            return False
        self._cursor -= 1
        return True

    def move_right(self) -> bool:
        if self._cursor >= self._length:
            return False
        self._cursor += 1
        return True

    def replace_from(self, start: int, data: bytes) -> None:
        """Replace bytes [start, length) with `data`; cursor moves to the end."""
        if not 0 <= start <= self._length:
            raise IndexError(f"start {start} outside buffer of length {self._length}")
        end = start + len(data)
        self._reserve(end)
        self._data[start:end] = data
        self._length = end
        self._cursor = end

    def suffix(self, start: int) -> bytes:
        start = max(0, min(start, self._length))
        return bytes(self._data[start:self._length])

    def getvalue(self) -> bytes:
        return bytes(self._data[:self._length])

    def finalize(self) -> bytes:
        """Terminate the buffer at its length and return its contents."""
        self._data[self._length] = 0
        return self.getvalue()

    def text(self) -> str:
        return self.getvalue().decode("utf-8", "surrogateescape")
