"""Cooperatively switched kernel threads with a FIFO scheduler, synchronization primitives and a system call handler."""

__version__ = "0.1.0"
__all__ = ["kernel", "scheduler", "synch", "synchlist", "syscalls", "thread"]