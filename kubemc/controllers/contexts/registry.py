"""Connection registry: one cached kubectl client per context name.

The registry is owned by the session and passed by reference to every
fan-out call site. It is the only structure mutated by concurrent tasks.

Usage:
    registry = ConnectionRegistry(kubeconfig_path)
    client = registry.get("prod-eu")
    ...
    registry.reset()  # after the kubeconfig changed on disk
"""

from __future__ import annotations

import logging
import shutil
import threading
from collections.abc import Callable

from kubemc.constants.defaults import FANOUT_BURST, FANOUT_QPS
from kubemc.constants.values import KUBECTL_BINARY
from kubemc.controllers.contexts.client import ClientTuning, KubectlClient
from kubemc.controllers.contexts.kubeconfig import KubeConfig
from kubemc.controllers.errors import ClientConnectionError

logger = logging.getLogger(__name__)

FANOUT_TUNING = ClientTuning(qps=FANOUT_QPS, burst=FANOUT_BURST)


class ConnectionRegistry:
    """Lazily builds and caches one client per context.

    Cached clients are immutable and published once. Two concurrent first
    requests for the same name may both build a client; the first one stored
    wins and the other is discarded. Pass ``single_flight=True`` to serialise
    construction per name instead.
    """

    def __init__(
        self,
        kubeconfig: str | None = None,
        *,
        tuning: ClientTuning = FANOUT_TUNING,
        kubectl_binary: str = KUBECTL_BINARY,
        single_flight: bool = False,
        loader: Callable[[str | None], KubeConfig] = KubeConfig.load,
    ) -> None:
        self.kubeconfig = kubeconfig
        self.tuning = tuning
        self.kubectl_binary = kubectl_binary
        self.single_flight = single_flight
        self._loader = loader
        self._config: KubeConfig | None = None
        self._clients: dict[str, KubectlClient] = {}
        self._key_locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @property
    def config(self) -> KubeConfig:
        """Parsed kubeconfig, loaded on first use."""
        config = self._config
        if config is None:
            config = self._loader(self.kubeconfig)
            self._config = config
        return config

    def list_context_names(self) -> list[str]:
        return self.config.list_context_names()

    def current_context(self) -> str | None:
        return self.config.current_context()

    def get(self, context: str) -> KubectlClient:
        """Return the cached client for ``context``, building it if needed.

        Raises:
            ConfigResolutionError: the context profile is missing or malformed.
            ClientConnectionError: the client could not be constructed.
        """
        client = self._clients.get(context)
        if client is not None:
            return client

        if not self.single_flight:
            return self._clients.setdefault(context, self._build(context))

        with self._key_lock(context):
            client = self._clients.get(context)
            if client is None:
                client = self._build(context)
                self._clients[context] = client
            return client

    def reset(self) -> None:
        """Drop every cached client; the next get rebuilds lazily."""
        dropped = len(self.cached_contexts())
        self._clients = {}
        self._config = None
        with self._locks_guard:
            self._key_locks = {}
        logger.info("Connection registry reset, %d client(s) dropped", dropped)

    def cached_contexts(self) -> list[str]:
        return list(self._clients)

    def _key_lock(self, context: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._key_locks.get(context)
            if lock is None:
                lock = threading.Lock()
                self._key_locks[context] = lock
            return lock

    def _build(self, context: str) -> KubectlClient:
        profile = self.config.resolve(context)
        if not profile.server:
            raise ClientConnectionError(
                f"cluster {profile.cluster!r} for context {context!r} has no server",
                context,
            )
        if shutil.which(self.kubectl_binary) is None:
            raise ClientConnectionError(
                f"{self.kubectl_binary} executable not found", context
            )
        logger.debug(
            "Built client for context %s (server=%s, qps=%s, burst=%s)",
            context,
            profile.server,
            self.tuning.qps,
            self.tuning.burst,
        )
        return KubectlClient(
            profile=profile,
            tuning=self.tuning,
            binary=self.kubectl_binary,
            kubeconfig=self.kubeconfig,
        )


__all__ = [
    "FANOUT_TUNING",
    "ConnectionRegistry",
]
