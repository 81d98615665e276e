"""Semaphores, locks and condition variables for cooperative kernel threads.

Locks are built on a semaphore of value one; condition variables give each
waiter a semaphore of its own, so a signal can never be missed. Condition
variables follow Mesa semantics: a woken thread re-acquires the lock itself.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Optional

from nachosthreads.thread import Thread


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise RuntimeError(message)


class Semaphore:
    """A non-negative counter with atomic wait (``p``) and signal (``v``)."""

    def __init__(self, kernel: Any, name: str, initial_value: int) -> None:
        self.kernel = kernel
        self.name = name
        self.value = initial_value
        self._queue: Deque[Thread] = deque()

    def __repr__(self) -> str:
        return f"Semaphore({self.name!r}, {self.value})"

    def p(self) -> None:
        """Wait until the value is positive, then decrement it."""
        current = self.kernel.current_thread
        while self.value == 0:
            self._queue.append(current)
            current.sleep(False)
        self.value -= 1

    def v(self) -> None:
        """Increment the value, waking one waiting thread if there is one."""
        if self._queue:
            self.kernel.scheduler.ready_to_run(self._queue.popleft())
        self.value += 1

    def self_test(self) -> None:
        """Ping-pong ten times with a forked thread through two semaphores."""
        _require(self.value == 0, "semaphore self test needs a value of 0")
        ping = Semaphore(self.kernel, "ping", 0)

        def helper(pong: Semaphore) -> None:
            for _ in range(10):
                ping.p()
                pong.v()

        Thread(self.kernel, "ping").fork(helper, self)
        for _ in range(10):
            ping.v()
            self.p()


class Lock:
    """A mutual-exclusion lock; only the thread holding it may release it."""

    def __init__(self, kernel: Any, name: str) -> None:
        self.kernel = kernel
        self.name = name
        self._semaphore = Semaphore(kernel, "lock", 1)
        self._holder: Optional[Thread] = None

    def __repr__(self) -> str:
        return f"Lock({self.name!r})"

    def acquire(self) -> None:
        """Wait until the lock is free, then take it."""
        self._semaphore.p()
        self._holder = self.kernel.current_thread

    def release(self) -> None:
        """Free the lock, waking a thread waiting for it."""
        _require(self.is_held_by_current_thread(),
                 f"lock {self.name} released by a thread that does not hold it")
        self._holder = None
        self._semaphore.v()

    def is_held_by_current_thread(self) -> bool:
        """True if the running thread holds this lock."""
        return self._holder is self.kernel.current_thread

    def __enter__(self) -> Lock:
        self.acquire()
        return self

    def __exit__(self, *args: Any) -> None:
        self.release()


class Condition:
    """A condition variable with Mesa semantics, used under one lock."""

    def __init__(self, kernel: Any, name: str) -> None:
        self.kernel = kernel
        self.name = name
        self._waiters: Deque[Semaphore] = deque()

    def __repr__(self) -> str:
        return f"Condition({self.name!r})"

    def wait(self, lock: Lock) -> None:
        """Release ``lock``, sleep until signalled, then re-acquire ``lock``."""
        _require(lock.is_held_by_current_thread(),
                 f"wait on {self.name} without holding {lock.name}")
        waiter = Semaphore(self.kernel, "condition", 0)
        self._waiters.append(waiter)
        lock.release()
        waiter.p()
        lock.acquire()

    def signal(self, lock: Lock) -> None:
        """Wake one waiting thread, if any."""
        _require(lock.is_held_by_current_thread(),
                 f"signal on {self.name} without holding {lock.name}")
        if self._waiters:
            self._waiters.popleft().v()

    def broadcast(self, lock: Lock) -> None:
        """Wake every waiting thread."""
        while self._waiters:
            self.signal(lock)