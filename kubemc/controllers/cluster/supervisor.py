"""Connectivity supervisor: periodic health checks with backoff and fail-fast.

The supervisor probes the active connection on a fixed cadence. Failures back
off exponentially up to a ceiling and pause the session's live refresh; once
``max_failures`` consecutive probes fail the session is terminated instead of
retrying forever against an unreachable cluster.

States: HEALTHY -> DEGRADED -> FATALLY_DISCONNECTED (terminal).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from contextlib import suppress
from dataclasses import dataclass
from typing import Protocol

from kubemc.constants.enums import ConnectivityState
from kubemc.constants.limits import MAX_CONN_RETRY_DEFAULT
from kubemc.constants.timeouts import CLUSTER_REFRESH_INTERVAL, MAX_BACKOFF_DELAY
from kubemc.utils.backoff import ExponentialBackoff

logger = logging.getLogger(__name__)

Probe = Callable[[], Awaitable[bool]]
SideRefresh = Callable[[], Awaitable[None]]


class SupervisedSession(Protocol):
    """Hooks the supervisor drives on the owning session."""

    def pause_refresh(self) -> None: ...

    def resume_refresh(self) -> None: ...

    def show_info(self, message: str) -> None: ...

    def show_warning(self, message: str) -> None: ...

    def clear_warning(self) -> None: ...

    def terminate(self, message: str) -> None: ...


@dataclass
class RetryState:
    """Retry bookkeeping, mutated only by the supervisor."""

    base_delay: float = CLUSTER_REFRESH_INTERVAL
    max_delay: float = MAX_BACKOFF_DELAY
    max_failures: int = MAX_CONN_RETRY_DEFAULT
    consecutive_failures: int = 0
    current_delay: float = CLUSTER_REFRESH_INTERVAL

    def reset(self) -> None:
        self.consecutive_failures = 0
        self.current_delay = self.base_delay

    @property
    def exhausted(self) -> bool:
        return self.consecutive_failures >= self.max_failures


class ConnectivitySupervisor:
    """Runs the connectivity loop for one session.

    Args:
        probe: Coroutine returning True when the cluster is reachable. A probe
            that raises counts as a failure.
        session: Session hooks (refresh pause/resume, status, termination).
        interval: Base cadence in seconds.
        max_delay: Backoff ceiling in seconds.
        max_failures: Consecutive failures that end the session.
        side_refresh: Best-effort work kicked off after each healthy probe.
    """

    def __init__(
        self,
        probe: Probe,
        session: SupervisedSession,
        *,
        interval: float = CLUSTER_REFRESH_INTERVAL,
        max_delay: float = MAX_BACKOFF_DELAY,
        max_failures: int = MAX_CONN_RETRY_DEFAULT,
        side_refresh: SideRefresh | None = None,
    ) -> None:
        self._probe = probe
        self._session = session
        self._side_refresh = side_refresh
        self.retry = RetryState(
            base_delay=interval,
            max_delay=max(max_delay, interval),
            max_failures=max(1, max_failures),
            current_delay=interval,
        )
        self._backoff = ExponentialBackoff(interval, self.retry.max_delay)
        self.state = ConnectivityState.HEALTHY
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None
        self._side_tasks: set[asyncio.Task[None]] = set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    @property
    def is_terminal(self) -> bool:
        return self.state is ConnectivityState.FATALLY_DISCONNECTED

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> asyncio.Task[None]:
        """Run the loop in a background task."""
        if self._task is None or self._task.done():
            self._stop_event.clear()
            self._task = asyncio.create_task(self.run(), name="connectivity-supervisor")
        return self._task

    def stop(self) -> None:
        """Stop future probes. An in-flight probe finishes first."""
        self._stop_event.set()

    async def wait_stopped(self) -> None:
        if self._task is not None:
            with suppress(asyncio.CancelledError):
                await self._task

    async def run(self) -> None:
        """Probe now, then keep probing on the current delay until stopped."""
        await self.probe_once()
        while not self.stopped and not self.is_terminal:
            if await self._wait(self.retry.current_delay):
                logger.debug("Connectivity supervisor stopped")
                break
            await self.probe_once()

    async def _wait(self, delay: float) -> bool:
        """Sleep for ``delay``; return True when stopped meanwhile."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True

    # =========================================================================
    # Probing
    # =========================================================================

    async def probe_once(self) -> ConnectivityState:
        """Run one probe and apply the resulting transition."""
        if self.is_terminal:
            return self.state
        try:
            healthy = bool(await self._probe())
        except Exception as exc:
            logger.warning("Connectivity probe raised: %s", exc)
            healthy = False

        if healthy:
            self._on_success()
        else:
            self._on_failure()
        return self.state

    def _on_success(self) -> None:
        recovered = self.retry.consecutive_failures > 0
        self.retry.reset()
        self._backoff.reset()
        self.state = ConnectivityState.HEALTHY
        self._session.resume_refresh()
        self._session.clear_warning()
        if recovered:
            logger.info("K8s connectivity restored")
            self._session.show_info("K8s connectivity OK")
        self._kick_side_refresh()

    def _on_failure(self) -> None:
        self.retry.consecutive_failures += 1
        count, limit = self.retry.consecutive_failures, self.retry.max_failures
        self.retry.current_delay = self._backoff.next_delay()
        self._session.pause_refresh()

        if self.retry.exhausted:
            self.state = ConnectivityState.FATALLY_DISCONNECTED
            logger.error(
                "Conn check failed (%d/%d). Bailing out!",
                count,
                limit,
            )
            self.stop()
            self._session.terminate(f"Lost K8s connection ({count}). Bailing out!")
            return

        self.state = ConnectivityState.DEGRADED
        logger.warning(
            "Conn check failed (%d/%d), next probe in %.1fs",
            count,
            limit,
            self.retry.current_delay,
        )
        self._session.show_warning(f"Dial K8s Toast [{count}/{limit}]")

    def _kick_side_refresh(self) -> None:
        if self._side_refresh is None:
            return
        task = asyncio.create_task(self._run_side_refresh())
        self._side_tasks.add(task)
        task.add_done_callback(self._side_tasks.discard)

    async def _run_side_refresh(self) -> None:
        assert self._side_refresh is not None
        try:
            await self._side_refresh()
        except Exception as exc:
            logger.warning("Side refresh failed: %s", exc)
            self._session.show_warning("Cluster info refresh failed!")


__all__ = [
    "ConnectivitySupervisor",
    "RetryState",
    "SupervisedSession",
]
