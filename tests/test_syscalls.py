import pytest

from nachosthreads.kernel import Kernel
from nachosthreads.syscalls import (
    SyscallCode,
    UnexpectedSyscallError,
    handle_syscall,
)
from nachosthreads.thread import Thread


def _kernel():
    kernel = Kernel([])
    kernel.initialize()
    return kernel


def _registers(code, arg=0):
    registers = [0] * 8
    registers[2] = int(code)
    registers[4] = arg
    return registers


def test_print_int_prints_argument(capsys):
    kernel = _kernel()
    handle_syscall(kernel, _registers(SyscallCode.PRINT_INT, 42))
    assert capsys.readouterr().out == "Print integer:42\n"


def test_halt_stops_the_machine():
    kernel = _kernel()
    with pytest.raises(SystemExit) as excinfo:
        handle_syscall(kernel, _registers(SyscallCode.HALT))
    assert excinfo.value.code == 0


def test_halt_in_forked_thread_reaches_main():
    kernel = _kernel()
    Thread(kernel, "user").fork(
        lambda regs: handle_syscall(kernel, regs), _registers(SyscallCode.HALT))
    with pytest.raises(SystemExit):
        kernel.current_thread.yield_cpu()


def test_unknown_code_is_rejected():
    kernel = _kernel()
    with pytest.raises(UnexpectedSyscallError, match="99"):
        handle_syscall(kernel, _registers(99))


@pytest.mark.parametrize("code", [SyscallCode.EXEC, SyscallCode.OPEN,
                                  SyscallCode.THREAD_YIELD])
def test_unhandled_known_codes_are_rejected(code):
    kernel = _kernel()
    with pytest.raises(UnexpectedSyscallError):
        handle_syscall(kernel, _registers(code))


def test_exit_prints_status_and_finishes_thread(capsys):
    kernel = _kernel()
    after_exit = []

    def user_program(regs):
        handle_syscall(kernel, regs)
        after_exit.append("reached")

    Thread(kernel, "user").fork(user_program, _registers(SyscallCode.EXIT, 7))
    kernel.current_thread.yield_cpu()
    assert capsys.readouterr().out == "return value:7\n"
    assert after_exit == []
    assert kernel.current_thread.name == "main"
    assert kernel.scheduler.ready_threads == ()