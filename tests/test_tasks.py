import threading

import pytest

from pcskit.tasks import Statistic, retry_wait


def test_retry_wait_caps_at_six():
    assert retry_wait(3) == 6
    assert retry_wait(100) == 6


def test_retry_wait_early_values():
    assert retry_wait(0) == 0
    assert retry_wait(2) == 4


def test_retry_wait_non_decreasing():
    waits = [retry_wait(r) for r in range(10)]
    assert waits == sorted(waits)


def test_add_total_size_accumulates():
    stat = Statistic()
    assert stat.add_total_size(10) == 10
    assert stat.add_total_size(5) == 15
    assert stat.total_size == 15


def test_add_total_size_thread_safe():
    stat = Statistic()

    def work():
        for _ in range(1000):
            stat.add_total_size(1)

    threads = [threading.Thread(target=work) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert stat.total_size == 8 * 1000


def test_elapsed_uses_monotonic(monkeypatch):
    ticks = iter([10.0, 12.5])
    monkeypatch.setattr("time.monotonic", lambda: next(ticks))
    stat = Statistic()
    stat.start_timer()
    assert stat.elapsed() == 12.5 - 10.0


def test_elapsed_before_start_raises():
    with pytest.raises(RuntimeError):
        Statistic().elapsed()