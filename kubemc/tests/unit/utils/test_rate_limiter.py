"""Tests for the token bucket rate limiter."""

from __future__ import annotations

import time

import pytest

from kubemc.utils.rate_limiter import TokenBucket


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestTokenBucket:
    """Tests for TokenBucket."""

    @pytest.fixture
    def clock(self) -> FakeClock:
        return FakeClock()

    def test_starts_full(self, clock: FakeClock) -> None:
        bucket = TokenBucket(qps=5, burst=3, clock=clock)
        assert bucket.available == 3

    def test_burst_then_empty(self, clock: FakeClock) -> None:
        bucket = TokenBucket(qps=5, burst=2, clock=clock)
        assert bucket.try_acquire()
        assert bucket.try_acquire()
        assert not bucket.try_acquire()

    def test_refills_at_qps(self, clock: FakeClock) -> None:
        bucket = TokenBucket(qps=10, burst=1, clock=clock)
        assert bucket.try_acquire()
        assert not bucket.try_acquire()
        clock.now += 0.1
        assert bucket.try_acquire()

    def test_refills_over_many_fractional_steps(self, clock: FakeClock) -> None:
        bucket = TokenBucket(qps=3, burst=1, clock=clock)
        assert bucket.try_acquire()
        for _ in range(50):
            clock.now += 1 / 3
            assert bucket.try_acquire()
            assert not bucket.try_acquire()

    def test_refill_capped_at_burst(self, clock: FakeClock) -> None:
        bucket = TokenBucket(qps=50, burst=4, clock=clock)
        bucket.try_acquire()
        clock.now += 60
        assert bucket.available == 4

    def test_burst_floor_is_one(self, clock: FakeClock) -> None:
        bucket = TokenBucket(qps=1, burst=0, clock=clock)
        assert bucket.burst == 1

    def test_non_positive_qps_rejected(self) -> None:
        with pytest.raises(ValueError):
            TokenBucket(qps=0, burst=1)

    @pytest.mark.asyncio
    async def test_acquire_waits_for_refill(self) -> None:
        bucket = TokenBucket(qps=1000, burst=1)
        started = time.monotonic()
        for _ in range(3):
            await bucket.acquire()
        assert time.monotonic() - started >= 0.001
