"""The threaded kernel: start-up, self test and the command that runs them."""

from __future__ import annotations

import logging
import random
import re
import sys
from enum import Enum
from typing import Iterable, Optional

from nachosthreads.scheduler import Scheduler
from nachosthreads.synch import Semaphore
from nachosthreads.synchlist import SynchList
from nachosthreads.thread import Thread, ThreadStatus

log = logging.getLogger(__name__)


class IntStatus(Enum):
    """Whether interrupts are enabled."""

    INT_OFF = "off"
    INT_ON = "on"


class DeadlockError(RuntimeError):
    """No thread is ready to run and nothing can make one ready."""


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


class Kernel:
    """Holds the running thread, the scheduler and the interrupt level."""

    def __init__(self, argv: Optional[Iterable[str]] = None) -> None:
        self.random_slice = False
        self.random = random.Random()
        self.current_thread: Optional[Thread] = None
        self.scheduler: Optional[Scheduler] = None
        self.interrupt_level = IntStatus.INT_OFF
        self.halted = False

        args = iter(list(argv or ()))
        for arg in args:
            if arg == "-rs":
                seed = next(args, None)
                if seed is None:
                    raise ValueError("-rs needs a random seed")
                self.random.seed(_atoi(seed))
                self.random_slice = True
            elif arg == "-u":
                print("Partial usage: nachos [-rs randomSeed]")

    def initialize(self) -> None:
        """Create the scheduler and the thread the kernel is running in."""
        self.scheduler = Scheduler(self)
        self.current_thread = Thread(self, "main")
        self.current_thread.status = ThreadStatus.RUNNING
        self.set_level(IntStatus.INT_ON)

    def set_level(self, level: IntStatus) -> IntStatus:
        """Set the interrupt level and return the previous one."""
        old, self.interrupt_level = self.interrupt_level, level
        return old

    def idle(self) -> None:
        """Called when no thread is ready; with no interrupts pending, nothing ever will be."""
        raise DeadlockError("no threads ready or runnable, and no pending interrupts")

    def run(self) -> None:
        """Finish the main thread and let every other thread run until none can."""
        if self.current_thread is None:
            raise RuntimeError("kernel is not initialized")
        try:
            self.current_thread.finish()
        except DeadlockError:
            self.halted = True

    def self_test(self) -> None:
        """Exercise thread switching, semaphores, locks and condition variables."""
        if self.current_thread is None:
            raise RuntimeError("kernel is not initialized")
        self.current_thread.self_test()
        Semaphore(self, "test", 0).self_test()
        SynchList(self).self_test(9)


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Start the kernel, run its self test, then run it until no thread can run."""
    args = sys.argv[1:] if argv is None else list(argv)
    debug_flags = ""
    remaining = iter(args)
    for arg in remaining:
        if arg == "-d":
            flags = next(remaining, None)
            if flags is None:
                raise ValueError("-d needs debug flags")
            debug_flags = flags
        elif arg == "-u":
            print("Partial usage: nachos [-z -d debugFlags]")
    if debug_flags:
        logging.basicConfig(level=logging.DEBUG)
    log.debug("Entering main")

    kernel = Kernel(args)
    kernel.initialize()
    try:
        kernel.self_test()
        kernel.run()
    except KeyboardInterrupt:
        print("\nCleaning up after signal", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())