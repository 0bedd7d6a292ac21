"""Exponential backoff with a ceiling."""

from __future__ import annotations


class ExponentialBackoff:
    """Delay sequence starting at ``base_delay`` and growing by ``multiplier``.

    Each call to :meth:`next_delay` returns the next step, capped at
    ``max_delay``. :meth:`reset` restarts from the base cadence.
    """

    def __init__(
        self,
        base_delay: float,
        max_delay: float,
        multiplier: float = 2.0,
    ) -> None:
        if base_delay <= 0:
            raise ValueError("base_delay must be positive")
        self.base_delay = float(base_delay)
        self.max_delay = max(float(max_delay), self.base_delay)
        self.multiplier = max(1.0, float(multiplier))
        self._attempt = 0

    @property
    def attempt(self) -> int:
        return self._attempt

    def next_delay(self) -> float:
        self._attempt += 1
        delay = self.base_delay * (self.multiplier ** self._attempt)
        return min(delay, self.max_delay)

    def reset(self) -> None:
        self._attempt = 0


__all__ = ["ExponentialBackoff"]
