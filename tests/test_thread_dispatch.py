"""Tests for the command worker and tickers."""

import threading
import time
import typing
import pytest
from tunequeue.concurrency.ticker import ManualTicker, ThreadTicker
from tunequeue.concurrency.worker import Command, CommandWorker
from tunequeue.core.exceptions import WorkerNotRunningError


def wait_for(predicate, timeout: float = 2.0) -> bool:
    """Poll predicate until it is true or timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_worker_start_stop():
    """Test worker thread start and stop."""
    worker = CommandWorker()

    worker.start()
    assert worker._thread is not None
    assert worker._thread.is_alive()
    assert worker.is_running

    worker.stop()
    assert worker._thread is None or not worker._thread.is_alive()
    assert not worker.is_running

    worker.stop()


def test_worker_execute():
    """Test executing commands in worker thread."""
    worker = CommandWorker()
    worker.start()

    result = worker.execute(lambda: 42)
    assert result == 42

    thread_name = worker.execute(lambda: threading.current_thread().name)
    assert thread_name == "tunequeue-worker"

    worker.stop()


def test_worker_execute_with_error():
    """Test error handling in worker thread."""
    worker = CommandWorker()
    worker.start()

    def failing_function():
        raise ValueError("Test error")

    with pytest.raises(ValueError, match="Test error"):
        worker.execute(failing_function)

    # Worker keeps running after a failed command
    assert worker.execute(lambda: "still alive") == "still alive"

    worker.stop()


def test_worker_execute_timeout():
    """Test command execution timeout."""
    worker = CommandWorker()
    worker.start()

    def slow_function():
        time.sleep(0.5)
        return 42

    with pytest.raises(TimeoutError):
        worker.execute(slow_function, timeout=0.1)

    worker.stop()


def test_worker_not_initialized():
    """Test executing before worker is started."""
    worker = CommandWorker()

    with pytest.raises(RuntimeError, match="not initialized"):
        worker.execute(lambda: 42)

    with pytest.raises(WorkerNotRunningError):
        worker.execute(lambda: 42)


def test_worker_nested_execute_runs_inline():
    """Test execute() from inside the worker thread does not deadlock."""
    worker = CommandWorker()
    worker.start()

    result = worker.execute(lambda: worker.execute(lambda: "inner"), timeout=1.0)

    assert result == "inner"
    worker.stop()


def test_concurrent_executions():
    """Test concurrent command executions are serialized."""
    worker = CommandWorker()
    worker.start()

    counter = {"value": 0}
    errors = []

    def increment():
        current = counter["value"]
        time.sleep(0.001)
        counter["value"] = current + 1

    def run_task():
        try:
            worker.execute(increment)
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=run_task) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(errors) == 0
    assert counter["value"] == 10

    worker.stop()


def test_thread_ticker_fires_until_cancelled():
    """Test ThreadTicker fires repeatedly and stops on cancel."""
    ticker = ThreadTicker(interval=0.01)
    ticks = []

    ticker.start(lambda: ticks.append(time.monotonic()))
    assert ticker.is_active
    assert wait_for(lambda: len(ticks) >= 3)

    ticker.cancel()
    assert not ticker.is_active
    time.sleep(0.05)
    count = len(ticks)
    time.sleep(0.05)
    assert len(ticks) == count


def test_thread_ticker_restart_replaces_previous_run():
    """Test start() cancels the previous callback."""
    ticker = ThreadTicker(interval=0.01)
    first, second = [], []

    ticker.start(lambda: first.append(1))
    assert wait_for(lambda: len(first) >= 1)
    ticker.start(lambda: second.append(1))
    time.sleep(0.05)
    count = len(first)

    assert wait_for(lambda: len(second) >= 3)
    assert len(first) == count
    ticker.cancel()


def test_thread_ticker_survives_callback_errors():
    """Test a failing callback does not end the ticker."""
    ticker = ThreadTicker(interval=0.01)
    calls = []

    def flaky():
        calls.append(1)
        raise ValueError("tick failed")

    ticker.start(flaky)
    assert wait_for(lambda: len(calls) >= 2)
    ticker.cancel()


def test_thread_ticker_exits_when_worker_stops():
    """Test the ticker loop ends once its worker is gone."""
    worker = CommandWorker()
    worker.start()
    worker.stop()
    ticker = ThreadTicker(interval=0.01)
    calls = []

    def dispatch():
        calls.append(1)
        worker.execute(lambda: None)

    ticker.start(dispatch)
    assert wait_for(lambda: len(calls) == 1)
    time.sleep(0.05)
    assert len(calls) == 1


def test_manual_ticker():
    """Test ManualTicker fires only while started."""
    ticker = ManualTicker()
    calls = []

    assert ticker.fire() == 0
    ticker.start(lambda: calls.append(1))
    assert ticker.fire(3) == 3
    ticker.cancel()
    assert ticker.fire(3) == 0

    assert len(calls) == 3
    assert ticker.starts == 1
    assert ticker.cancels == 1


def test_thread_ticker_does_not_drift_with_slow_callbacks():
    """Test callback time is not added to the tick spacing."""
    ticker = ThreadTicker(interval=0.05)
    ticks = []

    def slow_callback():
        ticks.append(time.monotonic())
        time.sleep(0.035)

    ticker.start(slow_callback)
    time.sleep(0.6)
    ticker.cancel()

    # Drifting spacing (interval + callback time) would give about 7 ticks
    assert len(ticks) >= 10


def test_command_func_annotation():
    """Test Command.func is typed as an untyped zero-argument callable."""
    hints = typing.get_type_hints(Command)
    assert hints["func"] == typing.Callable[[], typing.Any]
