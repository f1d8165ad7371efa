"""Thread-safe FIFO queues."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class BoundedQueue(Generic[T]):
    """A FIFO queue that silently drops items once it holds ``size_limit``."""

    def __init__(self, size_limit: int = 100):
        self._items: deque[T] = deque()
        self._cond = threading.Condition()
        self._size_limit = size_limit

    def push(self, item: T) -> bool:
        """Append ``item`` unless the queue is full; return whether it was kept."""
        with self._cond:
            if len(self._items) >= self._size_limit:
                return False
            self._items.append(item)
            self._cond.notify()
            return True

    def pop(self) -> T | None:
        """Remove and return the oldest item, or None if the queue is empty."""
        with self._cond:
            return self._items.popleft() if self._items else None

    def wait(self, timeout: float | None = None) -> bool:
        """Block until notified; return False if ``timeout`` ran out first."""
        with self._cond:
            return self._cond.wait(timeout)

    def exit_blocking_calls(self) -> None:
        """Wake one thread blocked in :meth:`wait`."""
        with self._cond:
            self._cond.notify()

    def __len__(self) -> int:
        return len(self._items)


class ThreadSafeQueue(Generic[T]):
    """An unbounded FIFO queue whose dequeue blocks until an item arrives."""

    def __init__(self):
        self._items: deque[T] = deque()
        self._cond = threading.Condition()

    def enqueue(self, value: T) -> None:
        with self._cond:
            self._items.append(value)
            self._cond.notify()

    def dequeue(self) -> T:
        with self._cond:
            self._cond.wait_for(lambda: bool(self._items))
            return self._items.popleft()

    def empty(self) -> bool:
        with self._cond:
            return not self._items