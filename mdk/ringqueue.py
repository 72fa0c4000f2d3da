"""Fixed-capacity first-in first-out queue."""

from __future__ import annotations

import threading
from typing import Any


class BoundedQueue:
    """A ring buffer holding at most ``size`` objects; ``None`` cannot be stored."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("queue size must be positive")
        self._size = size
        self._slots: list[Any] = [None] * size
        self._push = 0
        self._pop = 0
        self._count = 0
        self._lock = threading.Lock()

    def push(self, obj: Any) -> bool:
        """Add ``obj`` at the back; return False if the queue is full."""
        if obj is None:
            raise ValueError("None cannot be queued")
        with self._lock:
            if self._count >= self._size:
                return False
            self._slots[self._push] = obj
            self._push = (self._push + 1) % self._size
            self._count += 1
            return True

    def pop(self) -> Any:
        """Remove and return the front object, or None if the queue is empty."""
        with self._lock:
            if not self._count:
                return None
            obj = self._slots[self._pop]
            self._slots[self._pop] = None
            self._pop = (self._pop + 1) % self._size
            self._count -= 1
            return obj

    def clear(self) -> None:
        """Discard all queued objects."""
        with self._lock:
            self._slots = [None] * self._size
            self._push = 0
            self._pop = 0
            self._count = 0