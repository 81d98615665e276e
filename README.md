# nachosthreads

A small teaching kernel in which threads share one simulated CPU. Only
one thread runs at a time, and the CPU changes hands only at explicit
points (yielding, sleeping, finishing), so a thread is never preempted.
That is also what makes the synchronization operations atomic. Threads
wait in a FIFO ready list.

## What is in it

- `nachosthreads.thread`
  - `ThreadStatus`: `JUST_CREATED`, `RUNNING`, `READY`, `BLOCKED`.
  - `Thread(kernel, name)` with `fork(func, arg)`, `yield_cpu()`,
    `sleep(finishing)`, `begin()`, `finish()` and `self_test()`.
    `self_test` forks a thread, and the two threads take turns printing
    `*** thread N looped M times`, five times each.
- `nachosthreads.scheduler`
  - `Scheduler(kernel)` with `ready_to_run(thread)`,
    `find_next_to_run()`, `run(next_thread, finishing)`,
    `check_to_be_destroyed()`, `print()`, and a read-only
    `ready_threads` tuple.
  - `SchedulerType` (`RR`, `SJF`, `PRIORITY`). The scheduler is always
    set to `RR` and always schedules FIFO.
- `nachosthreads.synch`
  - `Semaphore(kernel, name, initial_value)` with `p()`, `v()` and
    `self_test()`.
  - `Lock(kernel, name)` with `acquire()`, `release()`,
    `is_held_by_current_thread()`. It can be used as a context manager.
    Releasing a lock the running thread does not hold raises
    `RuntimeError`.
  - `Condition(kernel, name)` with `wait(lock)`, `signal(lock)` and
    `broadcast(lock)`. It uses Mesa semantics, so a woken thread takes
    the lock back itself.
- `nachosthreads.synchlist`
  - `SynchList(kernel)` with `append(item)`, `remove_front()`, which
    waits while the list is empty, `apply(func)`, `len()` and
    `self_test(value)`.
- `nachosthreads.kernel`
  - `Kernel(argv)` with `initialize()`, `set_level(level)`, `idle()`,
    `run()` and `self_test()`. `IntStatus` holds the interrupt levels.
  - `DeadlockError`, raised by `Kernel.idle()` when no thread is ready
    to run.
  - `main(argv=None)`, the command-line entry point.
- `nachosthreads.syscalls`
  - `SyscallCode`, the system call numbers from `HALT` (0) to
    `PRINT_INT` (11).
  - `handle_syscall(kernel, registers)`. It reads the call code from
    register 2 and its argument from register 4. It handles three calls:
    - `HALT` raises `SystemExit(0)`.
    - `PRINT_INT` prints `Print integer:N`.
    - `EXIT` prints `return value:N` and finishes the current thread.

    Any other code raises `UnexpectedSyscallError`.

## Installing

```
pip install .
```

## Running the kernel

```
nachosthreads
```

This command does the following, in order:

1. Initializes the kernel.
2. Runs the self tests: thread ping-pong, semaphore ping-pong and
   synchronized-list ping-pong.
3. Finishes the main thread, so the remaining ready threads run until
   none can.

Options:

- `-rs SEED` seeds the kernel's random number generator with `SEED` and
  sets its `random_slice` flag.
- `-d FLAGS` turns on debug logging.
- `-u` prints the partial usage lines.

## Using it from Python

```python
from nachosthreads.kernel import Kernel
from nachosthreads.synch import Semaphore
from nachosthreads.thread import Thread

kernel = Kernel([])
kernel.initialize()

done = Semaphore(kernel, "done", 0)

def worker(arg):
    print("worker got", arg)
    done.v()

Thread(kernel, "worker").fork(worker, 42)
done.p()          # the main thread blocks until the worker has run
```

A `Lock` can guard a critical section with `with`:

```python
from nachosthreads.synch import Condition, Lock

lock = Lock(kernel, "state")
ready = Condition(kernel, "ready")
with lock:
    ready.signal(lock)
```

If a forked thread raises an exception, the exception is passed to the
thread that the chain of forks began from, and is raised there.

When every thread is blocked and none is ready, `Kernel.idle` raises
`DeadlockError` instead of hanging. `Kernel.run` treats that as the end
of the run and sets `kernel.halted`.

## What it does not do

- There is no timer and there are no interrupts. `-rs` does not cause
  any time slicing, and a thread gives up the CPU only by yielding,
  sleeping or finishing.
- The interrupt level kept by `set_level` is only recorded. Nothing else
  reads it.
- There is no machine simulator, address space, program loader,
  console or file system. User programs cannot be run, and
  `handle_syscall` works on a plain sequence of register values that
  you pass in.

## Running the tests

```
pip install .[test]
pytest
```