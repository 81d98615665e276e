"""Kernel threads that take turns on a single simulated CPU.

Every ``Thread`` is backed by an operating-system thread, but only the one
holding the CPU ever runs: control is handed from one thread to the next
explicitly, so code running in a thread is never preempted.

The ``kernel`` a thread belongs to must provide:

* ``current_thread`` -- the thread holding the CPU;
* ``scheduler`` -- with ``ready_to_run(thread)``, ``find_next_to_run()``,
  ``run(next_thread, finishing)`` and ``check_to_be_destroyed()``;
* ``idle()`` -- called when no thread is ready to run.

The scheduler hands the CPU over with ``old._switch_to(new)`` and disposes of
a finished thread with ``thread._destroy()``.
"""

from __future__ import annotations

import functools
import threading
from enum import Enum
from typing import Any, Callable, Optional


class ThreadStatus(Enum):
    """Life-cycle state of a thread."""

    JUST_CREATED = "just created"
    RUNNING = "running"
    READY = "ready"
    BLOCKED = "blocked"


class _ThreadExit(BaseException):
    """Unwinds the host thread of a destroyed kernel thread."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise RuntimeError(message)


def _simple_thread(kernel: Any, which: int) -> None:
    for num in range(5):
        print(f"*** thread {which} looped {num} times")
        kernel.current_thread.yield_cpu()


class Thread:
    """A thread control block: a name, a status and a saved execution."""

    def __init__(self, kernel: Any, name: str) -> None:
        self.kernel = kernel
        self.name = name
        self.status = ThreadStatus.JUST_CREATED
        self._cpu = threading.Semaphore(0)
        self._forked = False
        self._destroyed = False
        self._wakeup_error: Optional[BaseException] = None
        self._origin: Optional[Thread] = None
        self._host: Optional[threading.Thread] = None

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Thread({self.name!r}, {self.status.name})"

    # basic thread operations

    def fork(self, func: Callable[[Any], Any], arg: Any) -> None:
        """Arrange for ``func(arg)`` to run in this thread, and make it ready."""
        creator = self.kernel.current_thread
        if creator is not None:
            self._origin = creator._origin or creator
        self._forked = True
        self._host = threading.Thread(
            target=self._root, args=(func, arg), name=self.name, daemon=True
        )
        self._host.start()
        self.kernel.scheduler.ready_to_run(self)

    def yield_cpu(self) -> None:
        """Give the CPU to the next ready thread, if any, and requeue this one."""
        _require(self is self.kernel.current_thread,
                 f"thread {self.name} yields but is not running")
        scheduler = self.kernel.scheduler
        next_thread = scheduler.find_next_to_run()
        if next_thread is not None:
            scheduler.ready_to_run(self)
            scheduler.run(next_thread, False)

    def sleep(self, finishing: bool) -> None:
        """Block this thread and run the next ready one, idling until there is one."""
        _require(self is self.kernel.current_thread,
                 f"thread {self.name} sleeps but is not running")
        self.status = ThreadStatus.BLOCKED
        scheduler = self.kernel.scheduler
        while (next_thread := scheduler.find_next_to_run()) is None:
            self.kernel.idle()
        scheduler.run(next_thread, finishing)

    def begin(self) -> None:
        """Start-up work for a forked thread: clean up a thread that just finished."""
        _require(self is self.kernel.current_thread,
                 f"thread {self.name} begins but is not running")
        self.kernel.scheduler.check_to_be_destroyed()

    def finish(self) -> None:
        """Finish this thread; the next thread to run disposes of it."""
        _require(self is self.kernel.current_thread,
                 f"thread {self.name} finishes but is not running")
        self.sleep(True)

    def self_test(self) -> None:
        """Ping-pong between this thread and a forked one, five rounds each."""
        forked = Thread(self.kernel, "forked thread")
        forked.fork(functools.partial(_simple_thread, self.kernel), 1)
        _simple_thread(self.kernel, 0)

    # context switching

    def _switch_to(self, next_thread: Thread) -> None:
        """Hand the CPU to ``next_thread`` and wait until it comes back."""
        next_thread._cpu.release()
        self._wait_for_cpu()

    def _destroy(self) -> None:
        """Dispose of a thread that no longer runs."""
        _require(self is not self.kernel.current_thread,
                 f"thread {self.name} cannot be destroyed while running")
        self._destroyed = True
        self._cpu.release()

    def _wake_with(self, error: BaseException) -> None:
        self._wakeup_error = error
        self._cpu.release()

    def _wait_for_cpu(self) -> None:
        while True:
            self._cpu.acquire()
            if self._wakeup_error is not None:
                error, self._wakeup_error = self._wakeup_error, None
                raise error
            if self._destroyed:
                if self._forked:
                    raise _ThreadExit
                # A thread that was not forked keeps its host until woken
                # with an error, which is how the kernel stops.
                continue
            return

    def _root(self, func: Callable[[Any], Any], arg: Any) -> None:
        try:
            self._wait_for_cpu()
            self.begin()
            func(arg)
            self.finish()
        except _ThreadExit:
            return
        except BaseException as error:  # hand it to the thread that started it all
            if self._origin is None:
                raise
            self._origin._wake_with(error)