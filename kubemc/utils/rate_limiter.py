"""Token bucket rate limiter for kubectl calls."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable

# Float clock deltas undershoot; this close to one token counts as one.
_TOKEN_EPSILON = 1e-9


class TokenBucket:
    """Token bucket refilled at ``qps`` tokens per second up to ``burst``."""

    def __init__(
        self,
        qps: float,
        burst: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if qps <= 0:
            raise ValueError("qps must be positive")
        self.qps = float(qps)
        self.burst = max(1, int(burst))
        self._clock = clock
        self._tokens = float(self.burst)
        self._last_update = clock()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._last_update)
        self._tokens = min(float(self.burst), self._tokens + elapsed * self.qps)
        self._last_update = now

    def try_acquire(self) -> bool:
        """Take one token if available without waiting."""
        self._refill()
        if self._tokens >= 1.0 - _TOKEN_EPSILON:
            self._tokens = max(0.0, self._tokens - 1.0)
            return True
        return False

    async def acquire(self) -> None:
        """Wait until one token is available and take it."""
        async with self._lock:
            while not self.try_acquire():
                await asyncio.sleep(max(0.0, 1.0 - self._tokens) / self.qps)

    @property
    def available(self) -> float:
        """Tokens currently in the bucket."""
        self._refill()
        return self._tokens


__all__ = ["TokenBucket"]
