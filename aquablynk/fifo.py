"""Bounded first-in, first-out ring buffer."""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Iterable, List


class Fifo:
    """A bounded FIFO that holds at most ``capacity - 1`` items.

    One slot of the ring is always kept empty, so a buffer created with
    capacity ``N`` stores up to ``N - 1`` items.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._items: Deque[Any] = deque()

    def __len__(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        """Drop all buffered items."""
        self._items.clear()

    def free(self) -> int:
        """Number of items that can still be written."""
        return self.capacity - 1 - len(self._items)

    def writeable(self) -> bool:
        return self.free() > 0

    def readable(self) -> bool:
        return bool(self._items)

    def size(self) -> int:
        """Number of items waiting to be read."""
        return len(self._items)

    def put(self, item: Any) -> Any:
        """Append one item; raise OverflowError if the buffer is full."""
        if not self.writeable():
            raise OverflowError("fifo is full")
        self._items.append(item)
        return item

    def put_many(self, data: Iterable[Any]) -> int:
        """Append as many items as fit and return how many were written."""
        written = 0
        for item in data:
            if not self.writeable():
                break
            self._items.append(item)
            written += 1
        return written

    def get(self) -> Any:
        """Remove and return the oldest item; raise IndexError if empty."""
        if not self._items:
            raise IndexError("fifo is empty")
        return self._items.popleft()

    def get_many(self, n: int) -> List[Any]:
        """Remove and return up to ``n`` of the oldest items."""
        count = min(max(n, 0), len(self._items))
        return [self._items.popleft() for _ in range(count)]

    def peek(self) -> Any:
        """Return the oldest item without removing it; raise IndexError if empty."""
        if not self._items:
            raise IndexError("fifo is empty")
        return self._items[0]