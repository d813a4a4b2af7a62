"""Retry timing and transfer statistics shared by tasks."""

import threading
import time


def retry_wait(retry):
    """Seconds to wait before the given retry attempt."""
    if retry < 3:
        return 2 * retry
    return 6


class Statistic:
    """Running total of transferred bytes and elapsed time."""

    def __init__(self):
        self._total_size = 0
        self._start = None
        self._lock = threading.Lock()

    def add_total_size(self, size):
        """Add ``size`` bytes and return the new total."""
        with self._lock:
            self._total_size += size
            return self._total_size

    @property
    def total_size(self):
        return self._total_size

    def start_timer(self):
        self._start = time.monotonic()

    def elapsed(self):
        """Seconds since ``start_timer`` was called."""
        if self._start is None:
            raise RuntimeError("timer not started")
        return time.monotonic() - self._start