"""
solana_idls/cursor.py

Forward-only reader over an immutable byte buffer.
"""
from .errors import TooShort


class ByteCursor:
    """
    Left-to-right reader; reading past the end raises TooShort.

    Reads return copies of the underlying bytes, so callers can keep them
    after the cursor is gone.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes):
        self._data = memoryview(bytes(data))
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def remaining(self) -> int:
        return len(self._data) - self._pos

    def take(self, n: int) -> bytes:
        """Consume exactly ``n`` bytes or raise TooShort(remaining)."""
        if n < 0:
            raise ValueError(f"take() needs a non-negative count, got {n}")
        left = self.remaining()
        if n > left:
            raise TooShort(left, n)
        chunk = self._data[self._pos:self._pos + n].tobytes()
        self._pos += n
        return chunk

    def peek(self, n: int) -> bytes:
        left = self.remaining()
        if n > left:
            raise TooShort(left, n)
        return self._data[self._pos:self._pos + n].tobytes()

    def rest(self) -> bytes:
        """Consume and return every byte left."""
        return self.take(self.remaining())

    def __repr__(self) -> str:
        return f"ByteCursor(position={self._pos}, remaining={self.remaining()})"
