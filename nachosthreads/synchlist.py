"""A list whose readers wait until there is something to take.

Every operation holds the list's lock; ``remove_front`` waits on a
condition variable while the list is empty, and ``append`` signals it.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Deque, Generic, TypeVar

from nachosthreads.synch import Condition, Lock
from nachosthreads.thread import Thread

T = TypeVar("T")


class SynchList(Generic[T]):
    """A FIFO list with mutual exclusion and blocking removal."""

    def __init__(self, kernel: Any) -> None:
        self.kernel = kernel
        self._items: Deque[T] = deque()
        self._lock = Lock(kernel, "list lock")
        self._list_empty = Condition(kernel, "list empty cond")

    def __len__(self) -> int:
        return len(self._items)

    def append(self, item: T) -> None:
        """Add ``item`` at the end and wake a thread waiting to remove one."""
        with self._lock:
            self._items.append(item)
            self._list_empty.signal(self._lock)

    def remove_front(self) -> T:
        """Remove and return the first item, waiting while the list is empty."""
        with self._lock:
            while not self._items:
                self._list_empty.wait(self._lock)
            return self._items.popleft()

    def apply(self, func: Callable[[T], Any]) -> None:
        """Call ``func`` on every item, front first."""
        with self._lock:
            for item in self._items:
                func(item)

    def self_test(self, value: T) -> None:
        """Ping-pong ``value`` ten times with a forked thread through two lists."""
        if self._items:
            raise RuntimeError("synchronized list self test needs an empty list")
        ping: SynchList[T] = SynchList(self.kernel)

        def helper(target: SynchList[T]) -> None:
            for _ in range(10):
                target.append(ping.remove_front())

        Thread(self.kernel, "ping").fork(helper, self)
        for _ in range(10):
            ping.append(value)
            if value != self.remove_front():
                raise RuntimeError("synchronized list returned a different value")