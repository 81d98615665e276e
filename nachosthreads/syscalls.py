"""System call codes and the kernel's handler for system call traps.

A user program puts the call code in register 2 and its first argument
in register 4.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, Sequence

log = logging.getLogger(__name__)

CODE_REGISTER = 2
ARG1_REGISTER = 4

# Open-file ids every address space starts with.
CONSOLE_INPUT = 0
CONSOLE_OUTPUT = 1


class SyscallCode(IntEnum):
    """System call codes placed in register 2."""

    HALT = 0
    EXIT = 1
    EXEC = 2
    JOIN = 3
    CREATE = 4
    OPEN = 5
    READ = 6
    WRITE = 7
    CLOSE = 8
    THREAD_FORK = 9
    THREAD_YIELD = 10
    PRINT_INT = 11


class UnexpectedSyscallError(RuntimeError):
    """A user program asked for a system call the kernel does not handle."""


def handle_syscall(kernel: Any, registers: Sequence[int]) -> None:
    """Carry out the system call described by ``registers``.

    Halt stops the machine by raising ``SystemExit(0)``; Exit finishes the
    current thread; PrintInt prints its argument. Anything else raises
    ``UnexpectedSyscallError``.
    """
    code = registers[CODE_REGISTER]
    if code == SyscallCode.HALT:
        log.debug("Shutdown, initiated by user program.")
        raise SystemExit(0)
    if code == SyscallCode.PRINT_INT:
        print(f"Print integer:{registers[ARG1_REGISTER]}")
        return
    if code == SyscallCode.EXIT:
        log.debug("Program exit")
        print(f"return value:{registers[ARG1_REGISTER]}")
        kernel.current_thread.finish()
        return
    raise UnexpectedSyscallError(f"Unexpected system call {code}")