"""Byte streams: a fan-out stream over several others and a null stream."""

from __future__ import annotations

from typing import Any, List, Optional, Union

DEFAULT_MAX_STREAMS = 6

BytesLike = Union[bytes, bytearray, memoryview, int]


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, int):
        return bytes([data])
    return bytes(data)


class MultiStream:
    """Writes go to every attached stream; reads come from the first with data."""

    def __init__(self, max_streams: int = DEFAULT_MAX_STREAMS) -> None:
        self.max_streams = max_streams
        self._streams: List[Any] = []

    def add_stream(self, stream: Any) -> bool:
        """Attach a stream; return False if it is None or the limit is reached."""
        if stream is None or len(self._streams) >= self.max_streams:
            return False
        self._streams.append(stream)
        return True

    def write(self, data: BytesLike) -> int:
        payload = _as_bytes(data)
        for stream in self._streams:
            stream.write(payload)
        return len(payload)

    def flush(self) -> None:
        """Flush the first attached stream."""
        if self._streams:
            self._streams[0].flush()

    def available(self) -> int:
        for stream in self._streams:
            avail = stream.available()
            if avail > 0:
                return avail
        return 0

    def read(self) -> Optional[int]:
        """Read one byte from the first stream with data, or None."""
        for stream in self._streams:
            if stream.available():
                return stream.read()
        return None

    def peek(self) -> Optional[int]:
        for stream in self._streams:
            if stream.available():
                return stream.peek()
        return None


class NullStream:
    """Accepts and discards all writes; never has anything to read.

    ``discarded`` counts the bytes thrown away and ``flushes`` the flush calls.
    """

    discarded: int = 0
    flushes: int = 0

    def write(self, data: BytesLike) -> int:
        size = len(_as_bytes(data))
        self.discarded += size
        return size

    def available_for_write(self) -> int:
        return 4096

    def flush(self) -> None:
        self.flushes += 1

    def available(self) -> int:
        return 0

    def _next_byte(self) -> Optional[int]:
        data = self.read_bytes(1)
        return data[0] if data else None

    def read(self) -> Optional[int]:
        return self._next_byte()

    def peek(self) -> Optional[int]:
        return self._next_byte()

    def read_bytes(self, n: int) -> bytes:
        if n < 0:
            raise ValueError("byte count must not be negative")
        return b""[: min(n, self.available())]