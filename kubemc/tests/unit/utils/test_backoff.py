"""Tests for ExponentialBackoff."""

from __future__ import annotations

import pytest

from kubemc.utils.backoff import ExponentialBackoff


class TestExponentialBackoff:
    """Tests for the capped exponential delay sequence."""

    def test_delays_double_until_ceiling(self) -> None:
        backoff = ExponentialBackoff(15, 120)
        delays = [backoff.next_delay() for _ in range(5)]
        assert delays == [30, 60, 120, 120, 120]

    def test_attempt_counter(self) -> None:
        backoff = ExponentialBackoff(1, 10)
        backoff.next_delay()
        backoff.next_delay()
        assert backoff.attempt == 2

    def test_reset_restarts_sequence(self) -> None:
        backoff = ExponentialBackoff(1, 10)
        backoff.next_delay()
        backoff.next_delay()
        backoff.reset()
        assert backoff.attempt == 0
        assert backoff.next_delay() == 2

    def test_ceiling_below_base_is_raised_to_base(self) -> None:
        backoff = ExponentialBackoff(10, 5)
        assert backoff.max_delay == 10
        assert backoff.next_delay() == 10

    def test_custom_multiplier(self) -> None:
        backoff = ExponentialBackoff(1, 100, multiplier=3)
        assert [backoff.next_delay() for _ in range(3)] == [3, 9, 27]

    def test_non_positive_base_rejected(self) -> None:
        with pytest.raises(ValueError):
            ExponentialBackoff(0, 10)
