"""Sliding-window rate limiter for outbound Sveriges Radio API requests.

Keeps the timestamps of admitted requests in a deque and admits a new request
only while fewer than ``max_requests`` of them fall inside the trailing
window. Expired timestamps are purged lazily on every admission check.
"""

import logging
import math
import time
from collections import deque
from typing import Callable

logger = logging.getLogger(__name__)

RATE_LIMIT_MAX_REQUESTS = 10
RATE_LIMIT_WINDOW_SECONDS = 60.0


class RateLimiter:
    """Client-side sliding-window rate limiter.

    Attributes:
        max_requests: Maximum admitted requests inside one window
        window_seconds: Length of the trailing window in seconds
        requests: Admitted request instants, oldest first
    """

    def __init__(
        self,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        window_seconds: float = RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize rate limiter.

        Args:
            max_requests: Maximum requests per window (default: 10)
            window_seconds: Window length in seconds (default: 60)
            clock: Monotonic time source in seconds (injectable for tests)
        """
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self.requests: deque[float] = deque()

    def _purge(self, now: float):
        """Drop timestamps that have left the window."""
        while self.requests and now - self.requests[0] >= self.window_seconds:
            self.requests.popleft()

    def allow(self) -> bool:
        """Admit and record a request if the window has room.

        Returns:
            bool: True if admitted, False if the limit is reached (state unchanged)
        """
        now = self._clock()
        self._purge(now)

        if len(self.requests) >= self.max_requests:
            logger.warning(
                f"Rate limit reached: {len(self.requests)}/{self.max_requests} "
                f"requests in the last {self.window_seconds:.0f}s"
            )
            return False

        self.requests.append(now)
        return True

    def wait_seconds(self) -> int:
        """Seconds until the oldest retained request leaves the window.

        Returns:
            int: Whole seconds (rounded up), 0 if nothing is retained
        """
        if not self.requests:
            return 0

        remaining = self.window_seconds - (self._clock() - self.requests[0])
        return max(0, math.ceil(remaining))

    def reset(self):
        """Forget all admitted requests."""
        self.requests.clear()
