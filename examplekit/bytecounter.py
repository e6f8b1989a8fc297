"""A writable object that counts the bytes written to it."""

from __future__ import annotations

from typing import Union


class ByteCounter:
    """Counts bytes written; text is counted in its UTF-8 encoding."""

    def __init__(self) -> None:
        self.count = 0

    def write(self, data: Union[str, bytes, bytearray, memoryview]) -> int:
        """Count data and return the number of bytes it holds."""
        if isinstance(data, str):
            n = len(data.encode("utf-8"))
        else:
            n = memoryview(data).nbytes
        self.count += n
        return n

    def __int__(self) -> int:
        return self.count

    def __str__(self) -> str:
        return str(self.count)