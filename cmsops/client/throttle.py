"""
Token-bucket throttle for mutating API calls.

Webflow rate-limits writes per token. Every create/patch/delete goes through
`Throttle.acquire()`, which blocks until a token is available. With the
default capacity of 1 this spaces calls `1 / rate` seconds apart.
"""

import time


class Throttle:
    """Blocking token bucket. Not adaptive: it never looks at 429 responses."""

    def __init__(self, rate_per_second: float, capacity: int = 1, clock=None, sleep=None):
        if rate_per_second <= 0:
            raise ValueError(f"rate_per_second must be positive, got {rate_per_second}")
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.rate = rate_per_second
        self.capacity = capacity
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self._tokens = float(capacity)
        self._last = self._clock()

    def _refill(self):
        now = self._clock()
        elapsed = max(0.0, now - self._last)
        self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)
        self._last = now

    def acquire(self) -> float:
        """Take one token, sleeping off any deficit. Returns seconds slept."""
        self._refill()
        self._tokens -= 1
        if self._tokens >= 0:
            return 0.0
        # Deficit is repaid by the next refill, which counts the time slept
        wait = -self._tokens / self.rate
        self._sleep(wait)
        return wait
