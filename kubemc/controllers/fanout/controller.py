"""Multi-context controller: listing, version probing and command fan-out.

This module is the caller-facing surface of the fan-out layer. It consults
the connection registry for per-context clients, runs each operation through
a FanOutDispatcher and shapes the outcome with the aggregator helpers.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from kubemc.constants.defaults import DEFAULT_RESOURCE
from kubemc.constants.limits import MAX_PARALLEL_DEFAULT
from kubemc.constants.timeouts import VERSION_PROBE_TIMEOUT
from kubemc.controllers.base import BaseController
from kubemc.controllers.contexts.client import (
    ClientTuning,
    GroupVersionResource,
    run_kubectl,
)
from kubemc.controllers.contexts.registry import ConnectionRegistry
from kubemc.controllers.errors import ConfigResolutionError
from kubemc.controllers.fanout.aggregator import (
    flatten_tagged,
    fold_command_results,
    versions_map,
)
from kubemc.controllers.fanout.command import inject_context_flag, insert_flags
from kubemc.controllers.fanout.dispatcher import FanOutDispatcher
from kubemc.models.core.context_object import CommandResult, ContextObject
from kubemc.models.state.app_settings import AppSettings
from kubemc.models.state.selection import SelectedContexts, resolve_targets
from kubemc.utils.row_id import split_multi_context_id

logger = logging.getLogger(__name__)


def _as_gvr(resource: str | GroupVersionResource) -> GroupVersionResource:
    if isinstance(resource, GroupVersionResource):
        return resource
    return GroupVersionResource.parse(resource)


@dataclass(frozen=True, slots=True)
class TimeoutPolicy:
    """Per-task timeouts in seconds for each fan-out operation.

    ``None`` leaves tasks of that operation unbounded: a hung context then
    holds one parallelism slot until kubectl returns.
    """

    list_seconds: float | None = None
    version_seconds: float | None = VERSION_PROBE_TIMEOUT
    command_seconds: float | None = None


class MultiContextController(BaseController):
    """Fan-out operations across a set of kubeconfig contexts."""

    def __init__(
        self,
        registry: ConnectionRegistry,
        *,
        selection: SelectedContexts | None = None,
        context: str | None = None,
        max_parallel: int = MAX_PARALLEL_DEFAULT,
        timeouts: TimeoutPolicy | None = None,
        default_resource: str = DEFAULT_RESOURCE,
    ) -> None:
        self.registry = registry
        self.selection = selection or SelectedContexts()
        self._context = context
        self.max_parallel = max_parallel
        self.timeouts = timeouts or TimeoutPolicy()
        self.default_resource = default_resource

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        context: str | None = None,
        selection: SelectedContexts | None = None,
        registry: ConnectionRegistry | None = None,
    ) -> MultiContextController:
        """Build a controller and its registry from application settings."""
        if registry is None:
            registry = ConnectionRegistry(
                settings.kubeconfig or None,
                tuning=ClientTuning(qps=settings.fanout_qps, burst=settings.fanout_burst),
                kubectl_binary=settings.kubectl_binary,
            )
        return cls(
            registry,
            selection=selection,
            context=context,
            max_parallel=settings.max_parallel,
            timeouts=TimeoutPolicy(
                list_seconds=settings.list_timeout_seconds,
                version_seconds=settings.version_timeout_seconds,
                command_seconds=settings.command_timeout_seconds,
            ),
            default_resource=settings.default_resource,
        )

    # =========================================================================
    # Context targeting
    # =========================================================================

    @property
    def active_context(self) -> str | None:
        """Explicit context, else the kubeconfig current-context."""
        if self._context:
            return self._context
        try:
            return self.registry.current_context()
        except ConfigResolutionError as exc:
            logger.warning("Cannot read current context: %s", exc)
            return None

    def target_contexts(self) -> list[str]:
        """Contexts a batch should run against, from the persisted selection."""
        return resolve_targets(self.selection.load(), self.active_context)

    def reset(self) -> None:
        """Forget cached clients after the kubeconfig changed."""
        self.registry.reset()

    # =========================================================================
    # Fan-out operations
    # =========================================================================

    async def list_across_contexts(
        self,
        contexts: Sequence[str],
        resource: str | GroupVersionResource,
        namespace: str = "",
        label_selector: str = "",
    ) -> list[ContextObject]:
        """List one resource kind across contexts.

        Unreachable contexts are logged and skipped; this never raises for a
        per-context failure.
        """
        gvr = _as_gvr(resource)

        async def _list(context: str) -> list[dict[str, Any]]:
            client = self.registry.get(context)
            return await client.list_resources(
                gvr, namespace, label_selector, timeout=self.timeouts.list_seconds
            )

        dispatcher: FanOutDispatcher[list[dict[str, Any]]] = FanOutDispatcher(
            self.max_parallel,
            self.timeouts.list_seconds,
            name=f"list {gvr.kubectl_name}",
        )
        results = await dispatcher.run(contexts, _list)
        return flatten_tagged(results)

    async def server_versions(self, contexts: Sequence[str]) -> dict[str, str]:
        """Map each context to its server version or ``N/A``."""
        timeout = self.timeouts.version_seconds

        async def _version(context: str) -> str:
            client = self.registry.get(context)
            return await client.server_version(timeout)

        dispatcher: FanOutDispatcher[str] = FanOutDispatcher(
            self.max_parallel,
            timeout,
            name="server version",
        )
        results = await dispatcher.run(contexts, _version)
        return versions_map(contexts, results)

    async def run_command_across_contexts(
        self,
        contexts: Sequence[str],
        args: Sequence[str],
        max_parallel: int | None = None,
    ) -> list[CommandResult]:
        """Run one kubectl command per context, results in input order."""
        kubeconfig = self.registry.kubeconfig
        binary = self.registry.kubectl_binary

        async def _run(context: str) -> str:
            local_args = inject_context_flag(args, context)
            if kubeconfig:
                local_args = insert_flags(local_args, ["--kubeconfig", kubeconfig])
            return await run_kubectl(local_args, binary=binary)

        dispatcher: FanOutDispatcher[str] = FanOutDispatcher(
            max_parallel if max_parallel is not None else self.max_parallel,
            self.timeouts.command_seconds,
            name="kubectl " + " ".join(args[:2]),
        )
        results = await dispatcher.run(contexts, _run)
        return fold_command_results(results)

    # =========================================================================
    # Row-scoped actions
    # =========================================================================

    def context_for_row(self, row_id: str) -> tuple[str, str]:
        """Resolve a row id to ``(context, path)``.

        Single-cluster rows route to the active context.
        """
        context, path = split_multi_context_id(row_id)
        if not context:
            context = self.active_context or ""
        if not context:
            raise ConfigResolutionError(f"no context for row {row_id!r}")
        return context, path

    async def describe(self, row_id: str, resource: str | GroupVersionResource) -> str:
        """Describe the object behind a table row using its owning client."""
        gvr = _as_gvr(resource)
        context, path = self.context_for_row(row_id)
        client = self.registry.get(context)
        return await client.describe(gvr, path)

    # =========================================================================
    # BaseController
    # =========================================================================

    async def check_connection(self) -> bool:
        """Probe the active context; used by the connectivity supervisor."""
        context = self.active_context
        if not context:
            return False
        try:
            client = self.registry.get(context)
        except ConfigResolutionError as exc:
            logger.warning("Connectivity check cannot resolve %s: %s", context, exc)
            return False
        except ConnectionError as exc:
            logger.warning("Connectivity check cannot build client for %s: %s", context, exc)
            return False
        return await client.check_connectivity()

    async def fetch_all(self) -> dict[str, Any]:
        """Fetch the default resource and server versions for the targets."""
        contexts = self.target_contexts()
        objects = await self.list_across_contexts(contexts, self.default_resource)
        versions = await self.server_versions(contexts)
        return {
            "contexts": contexts,
            "objects": objects,
            "versions": versions,
        }


__all__ = [
    "MultiContextController",
    "TimeoutPolicy",
]
