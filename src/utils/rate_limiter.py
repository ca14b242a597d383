# -*- coding: utf-8 -*-
"""
Thread-Safe Rate Limiter for the Justel portal

Enforces a minimum interval between request *starts*. The timestamp is taken
right before a request is issued, so the limiter bounds initiation rate, not
completion rate. One instance is shared by everything that talks to the portal.

The clock and sleep functions are injectable so tests can assert exact wait
durations without real delays.
"""

import threading
import time
from typing import Callable, Optional


class RateLimiter:
    """
    Thread-safe minimum-interval rate limiter.

    THREAD SAFETY:
    - The lock is held while waiting, so concurrent callers are serialized and
      the spacing holds globally as seen by the remote server

    Usage:
        limiter = RateLimiter(min_interval=0.5)

        # Before each HTTP request
        limiter.acquire()  # Blocks until min_interval has elapsed
        response = session.get(...)
    """

    def __init__(
        self,
        min_interval: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize rate limiter.

        Args:
            min_interval: Minimum seconds between two request starts
            clock: Monotonic time source (seconds)
            sleep: Function used to suspend the caller
        """
        self.min_interval = min_interval
        self.clock = clock
        self.sleep = sleep
        self.last_request: Optional[float] = None
        self.lock = threading.Lock()

        # Statistics
        self.total_calls = 0
        self.total_wait_time = 0.0

    def acquire(self) -> float:
        """
        Wait if necessary, then record the start of a request.

        Returns:
            Wait time in seconds (0.0 if no wait needed)
        """
        with self.lock:
            wait_time = 0.0

            if self.last_request is not None:
                elapsed = self.clock() - self.last_request
                if elapsed < self.min_interval:
                    wait_time = self.min_interval - elapsed
                    self.sleep(wait_time)

            self.last_request = self.clock()
            self.total_calls += 1
            self.total_wait_time += wait_time

            return wait_time

    def get_stats(self) -> dict:
        """
        Get rate limiter statistics.

        Returns:
            Dictionary with total_calls, total_wait_time_sec, min_interval
        """
        with self.lock:
            return {
                'total_calls': self.total_calls,
                'total_wait_time_sec': round(self.total_wait_time, 2),
                'min_interval': self.min_interval,
            }

    def reset_stats(self):
        """Reset statistics counters"""
        with self.lock:
            self.total_calls = 0
            self.total_wait_time = 0.0
