"""Sliding-Window Rate Limiter — explicit, per-pass budget for oracle calls.

Invariants:
    - At most max_requests acquisitions inside any window_seconds span
    - Timestamps older than the window are discarded on every call
    - No module-level instance: the owner constructs and passes it in

Design Decisions:
    - Plain object with its window as an ordinary field: a pass is a short-lived
      unit of work, so a process-wide singleton buys nothing
    - Injected clock (default time.monotonic) for deterministic tests
"""

import time
from collections import deque
from collections.abc import Callable


class SlidingWindowRateLimiter:
    """Admits up to `max_requests` calls per sliding `window_seconds`."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self.requests: deque[float] = deque()

    def _evict(self, now: float) -> None:
        while self.requests and now - self.requests[0] >= self.window_seconds:
            self.requests.popleft()

    def try_acquire(self) -> bool:
        """Record a request and return True, or return False when exhausted."""
        now = self._clock()
        self._evict(now)
        if len(self.requests) < self.max_requests:
            self.requests.append(now)
            return True
        return False

    def next_available_at(self) -> float:
        """Clock value at which the next request will be admitted."""
        now = self._clock()
        self._evict(now)
        if len(self.requests) < self.max_requests:
            return now
        return self.requests[0] + self.window_seconds

    def retry_after_ms(self) -> int:
        return max(0, int((self.next_available_at() - self._clock()) * 1000))
