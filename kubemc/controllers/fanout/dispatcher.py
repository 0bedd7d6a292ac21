"""Bounded-concurrency fan-out across contexts.

One task is launched per context. Admission into the running state goes
through a semaphore sized ``max_parallel``, and results land in a pre-sized
list by input index so callers get them back in input order regardless of
completion order.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import Generic, TypeVar

from kubemc.constants.limits import MAX_PARALLEL_DEFAULT
from kubemc.controllers.errors import MultiContextError, ProbeTimeoutError
from kubemc.models.core.batch_result import BatchResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

ContextOperation = Callable[[str], Awaitable[T]]


class FanOutDispatcher(Generic[T]):
    """Runs one operation across many contexts.

    Per-context failures are captured as error entries and never abort
    siblings; :meth:`run` always returns ``len(contexts)`` results.
    """

    def __init__(
        self,
        max_parallel: int = MAX_PARALLEL_DEFAULT,
        task_timeout: float | None = None,
        name: str = "fanout",
    ) -> None:
        self.max_parallel = max_parallel if max_parallel >= 1 else MAX_PARALLEL_DEFAULT
        self.task_timeout = task_timeout if task_timeout and task_timeout > 0 else None
        self.name = name

    async def run(
        self,
        contexts: Sequence[str],
        op: ContextOperation[T],
    ) -> list[BatchResult[T]]:
        """Run ``op`` once per context and wait for every task to finish."""
        if not contexts:
            return []

        semaphore = asyncio.Semaphore(self.max_parallel)
        results: list[BatchResult[T] | None] = [None] * len(contexts)
        started = time.monotonic()

        async def _run_one(index: int, context: str) -> None:
            async with semaphore:
                try:
                    if self.task_timeout is None:
                        value = await op(context)
                    else:
                        value = await asyncio.wait_for(op(context), self.task_timeout)
                except MultiContextError as exc:
                    if exc.context is None:
                        exc.context = context
                    results[index] = BatchResult(context, error=exc)
                except asyncio.TimeoutError as exc:
                    error: Exception = exc
                    if self.task_timeout is not None:
                        error = ProbeTimeoutError(
                            f"{self.name} timed out after {self.task_timeout}s",
                            context,
                        )
                    results[index] = BatchResult(context, error=error)
                except Exception as exc:
                    results[index] = BatchResult(context, error=exc)
                else:
                    results[index] = BatchResult(context, value=value)

        tasks = [
            asyncio.create_task(_run_one(index, context))
            for index, context in enumerate(contexts)
        ]
        try:
            await asyncio.gather(*tasks)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        failures = sum(1 for result in results if result is not None and not result.ok)
        logger.debug(
            "%s batch finished: %d context(s), %d failed, %.0f ms",
            self.name,
            len(contexts),
            failures,
            (time.monotonic() - started) * 1000,
        )
        return [result for result in results if result is not None]


__all__ = [
    "ContextOperation",
    "FanOutDispatcher",
]
