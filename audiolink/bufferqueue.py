"""Bounded single-producer single-consumer queue for audio data."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class BufferQueue(Generic[T]):
    """Fixed-capacity FIFO shared between one producer and one consumer thread.

    ``push`` never blocks: when the queue is full the item is dropped and
    ``False`` is returned, as audio callbacks must not wait.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._items: deque[T] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, item: T) -> bool:
        """Append ``item``; return ``False`` if the queue was full and it was dropped."""
        with self._lock:
            if len(self._items) >= self._capacity:
                return False
            self._items.append(item)
            return True

    def pop(self) -> T:
        """Remove and return the oldest item; raise IndexError if empty."""
        with self._lock:
            if not self._items:
                raise IndexError("pop from an empty BufferQueue")
            return self._items.popleft()

    def front(self) -> T:
        """Return the oldest item without removing it; raise IndexError if empty."""
        with self._lock:
            if not self._items:
                raise IndexError("front of an empty BufferQueue")
            return self._items[0]

    def read_available(self) -> int:
        """Number of items ready to be popped."""
        with self._lock:
            return len(self._items)

    def write_available(self) -> int:
        """Number of items that can still be pushed."""
        with self._lock:
            return self._capacity - len(self._items)

    def __len__(self) -> int:
        return self.read_available()