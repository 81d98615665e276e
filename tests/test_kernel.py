import pytest

from nachosthreads.kernel import DeadlockError, IntStatus, Kernel, main
from nachosthreads.synch import Semaphore
from nachosthreads.thread import Thread, ThreadStatus


def _kernel(argv=()):
    kernel = Kernel(list(argv))
    kernel.initialize()
    return kernel


def _thread_test_lines():
    return [f"*** thread {which} looped {num} times"
            for num in range(5) for which in (0, 1)]


def test_random_seed_flag_enables_random_slicing():
    assert Kernel(["-rs", "5"]).random_slice is True
    assert Kernel([]).random_slice is False


def test_random_seed_flag_needs_a_value():
    with pytest.raises(ValueError):
        Kernel(["-rs"])


def test_usage_flag_prints_partial_usage(capsys):
    Kernel(["-u"])
    assert "Partial usage: nachos [-rs randomSeed]" in capsys.readouterr().out


def test_initialize_makes_main_the_running_thread():
    kernel = _kernel()
    assert kernel.current_thread.name == "main"
    assert kernel.current_thread.status is ThreadStatus.RUNNING
    assert kernel.interrupt_level is IntStatus.INT_ON
    assert kernel.scheduler.ready_threads == ()


def test_set_level_returns_previous_level():
    kernel = _kernel()
    assert kernel.set_level(IntStatus.INT_OFF) is IntStatus.INT_ON
    assert kernel.interrupt_level is IntStatus.INT_OFF
    assert kernel.set_level(IntStatus.INT_ON) is IntStatus.INT_OFF


def test_idle_raises_deadlock():
    kernel = _kernel()
    with pytest.raises(DeadlockError):
        kernel.idle()


def test_waiting_on_semaphore_with_nothing_ready_deadlocks():
    kernel = _kernel()
    with pytest.raises(DeadlockError):
        Semaphore(kernel, "never", 0).p()


def test_run_with_no_other_threads_halts():
    kernel = _kernel()
    kernel.run()
    assert kernel.halted is True
    assert kernel.current_thread.status is ThreadStatus.BLOCKED


def test_run_lets_forked_threads_finish_in_fifo_order():
    kernel = _kernel()
    seen = []
    for name in ("a", "b", "c"):
        Thread(kernel, name).fork(seen.append, name)
    kernel.run()
    assert seen == ["a", "b", "c"]
    assert kernel.halted is True


def test_error_in_forked_thread_reaches_run():
    kernel = _kernel()

    def boom(_):
        raise ValueError("boom")

    Thread(kernel, "bad").fork(boom, None)
    with pytest.raises(ValueError, match="boom"):
        kernel.run()
    assert kernel.halted is False


def test_self_test_alternates_two_threads(capsys):
    kernel = _kernel()
    kernel.self_test()
    kernel.run()
    lines = capsys.readouterr().out.splitlines()
    assert lines == _thread_test_lines()
    assert kernel.halted is True


def test_main_runs_self_test_and_returns_zero(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out.splitlines() == _thread_test_lines()


def test_main_usage_prints_both_usages(capsys):
    assert main(["-u"]) == 0
    out = capsys.readouterr().out
    assert "Partial usage: nachos [-z -d debugFlags]" in out
    assert "Partial usage: nachos [-rs randomSeed]" in out


def test_main_debug_flag_needs_a_value():
    with pytest.raises(ValueError):
        main(["-d"])