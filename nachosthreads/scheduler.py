"""Choosing the next thread to run and dispatching the CPU to it.

Threads run one at a time and switch only at explicit points, so the
scheduler needs no locking of its own. The policy is plain FIFO.
"""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Any, Deque, Optional, Tuple

from nachosthreads.thread import Thread, ThreadStatus

log = logging.getLogger(__name__)


class SchedulerType(Enum):
    """Scheduling policies."""

    RR = "round robin"
    SJF = "shortest job first"
    PRIORITY = "priority"


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise RuntimeError(message)


class Scheduler:
    """The ready list and the dispatcher that hands the CPU between threads."""

    def __init__(self, kernel: Any) -> None:
        self.kernel = kernel
        self.scheduler_type = SchedulerType.RR
        self._ready: Deque[Thread] = deque()
        self.to_be_destroyed: Optional[Thread] = None

    @property
    def ready_threads(self) -> Tuple[Thread, ...]:
        """The threads waiting to run, front of the queue first."""
        return tuple(self._ready)

    def ready_to_run(self, thread: Thread) -> None:
        """Mark ``thread`` ready and put it at the back of the ready list."""
        log.debug("Putting thread on ready list: %s", thread.name)
        thread.status = ThreadStatus.READY
        self._ready.append(thread)

    def find_next_to_run(self) -> Optional[Thread]:
        """Remove and return the front of the ready list, or None if it is empty."""
        return self._ready.popleft() if self._ready else None

    def run(self, next_thread: Thread, finishing: bool) -> None:
        """Dispatch the CPU to ``next_thread``.

        The running thread is expected to be marked ready or blocked already.
        If ``finishing`` is true it is destroyed once another thread runs.
        Returns when the old thread is given the CPU again.
        """
        old_thread = self.kernel.current_thread
        if finishing:
            _require(self.to_be_destroyed is None,
                     "a finished thread is already waiting to be destroyed")
            self.to_be_destroyed = old_thread

        self.kernel.current_thread = next_thread
        next_thread.status = ThreadStatus.RUNNING
        log.debug("Switching from: %s to: %s", old_thread.name, next_thread.name)

        old_thread._switch_to(next_thread)

        log.debug("Now in thread: %s", old_thread.name)
        self.check_to_be_destroyed()

    def check_to_be_destroyed(self) -> None:
        """Dispose of the thread that finished before this one ran, if any."""
        if self.to_be_destroyed is not None:
            thread, self.to_be_destroyed = self.to_be_destroyed, None
            thread._destroy()

    def print(self) -> None:
        """Print the contents of the ready list."""
        print("Ready list contents:")
        for thread in self._ready:
            print(thread.name, end="")