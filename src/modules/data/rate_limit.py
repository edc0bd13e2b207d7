"""Request budget bookkeeping reported alongside every market data response."""

import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimit:
    """Snapshot of the request budget after a call."""

    remaining: int
    total: int
    reset_in: int

    def to_dict(self) -> dict[str, int]:
        """Serialize with the keys the terminal front end reads."""
        return {"remaining": self.remaining, "total": self.total, "resetIn": self.reset_in}


class RateLimitTracker:
    """Counts requests against a fixed budget that refills every window.

    Every call consumes one unit; the budget never goes below zero. The
    tracker reports the budget, it does not refuse requests.
    """

    def __init__(
        self,
        total: int = 100,
        window_seconds: int = 3600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize RateLimitTracker.

        Args:
            total: Requests allowed per window.
            window_seconds: Window length in seconds.
            clock: Monotonic time source (injectable for testing).
        """
        self._total = total
        self._window = window_seconds
        self._clock = clock
        self._remaining = total
        self._window_start = clock()

    def consume(self) -> RateLimit:
        """Record one request and return the updated budget."""
        now = self._clock()
        if now - self._window_start >= self._window:
            self._remaining = self._total
            self._window_start = now

        self._remaining = max(0, self._remaining - 1)
        reset_in = max(0, int(self._window - (now - self._window_start)))
        return RateLimit(remaining=self._remaining, total=self._total, reset_in=reset_in)
