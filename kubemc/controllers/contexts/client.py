"""Context-scoped kubectl client.

Every call runs ``kubectl --context <name>`` in a worker thread, the same way
the cluster fetchers shell out to kubectl, and is admitted through the
client's token bucket first.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field

from kubemc.constants.defaults import DEFAULT_BURST, DEFAULT_QPS
from kubemc.constants.timeouts import (
    CONNECTIVITY_CHECK_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
    VERSION_PROBE_TIMEOUT,
)
from kubemc.constants.values import (
    CLUSTER_SCOPE,
    CONTEXT_FLAG,
    KUBECTL_BINARY,
    NAMESPACE_ALL,
)
from kubemc.controllers.contexts.kubeconfig import ContextProfile
from kubemc.controllers.errors import (
    ListError,
    ProbeTimeoutError,
    ProcessExecutionError,
)
from kubemc.utils.rate_limiter import TokenBucket

logger = logging.getLogger(__name__)

_VERSION_PATTERN = re.compile(r"v\d+(?:(?:alpha|beta)\d+)?")


@dataclass(frozen=True, slots=True)
class ClientTuning:
    """Client-side throttling parameters."""

    qps: float = DEFAULT_QPS
    burst: int = DEFAULT_BURST


@dataclass(frozen=True, slots=True)
class GroupVersionResource:
    """API group, version and plural resource name."""

    group: str
    version: str
    resource: str

    @classmethod
    def parse(cls, value: str) -> GroupVersionResource:
        """Parse ``pods``, ``v1/pods``, ``apps/v1/deployments`` or ``deployments.v1.apps``."""
        text = value.strip()
        if not text:
            raise ValueError("resource must not be empty")
        if "/" in text:
            parts = text.split("/")
            if len(parts) == 2:
                return cls("", parts[0], parts[1])
            if len(parts) == 3:
                return cls(parts[0], parts[1], parts[2])
            raise ValueError(f"invalid resource {value!r}")
        resource, _, rest = text.partition(".")
        if not rest:
            return cls("", "", resource)
        version, _, group = rest.partition(".")
        if group and _VERSION_PATTERN.fullmatch(version):
            return cls(group, version, resource)
        # "volumes.longhorn.io": kubectl resolves the preferred version
        return cls(rest, "", resource)

    @property
    def kubectl_name(self) -> str:
        if not self.group:
            return self.resource
        if not self.version:
            return f"{self.resource}.{self.group}"
        return f"{self.resource}.{self.version}.{self.group}"

    def __str__(self) -> str:
        return self.kubectl_name


def _run_kubectl_sync(cmd: list[str], timeout: float | None) -> str:
    """Run kubectl synchronously (thread-safe wrapper target)."""
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise ProcessExecutionError(f"{cmd[0]}: executable not found") from exc
    except OSError as exc:
        raise ProcessExecutionError(f"{cmd[0]}: {exc}") from exc
    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise ProcessExecutionError(
            stderr or f"exit status {result.returncode}",
            returncode=result.returncode,
            stderr=stderr,
        )
    return result.stdout


async def run_kubectl(
    args: Sequence[str],
    *,
    binary: str = KUBECTL_BINARY,
    timeout: float | None = None,
) -> str:
    """Run kubectl with ``args`` and return stdout.

    Raises:
        ProcessExecutionError: kubectl could not be spawned or exited non-zero.
        ProbeTimeoutError: the process outlived ``timeout``.
    """
    cmd = [binary, *args]
    try:
        return await asyncio.to_thread(_run_kubectl_sync, cmd, timeout)
    except subprocess.TimeoutExpired as exc:
        raise ProbeTimeoutError(f"kubectl timed out after {timeout}s") from exc


@dataclass(frozen=True)
class KubectlClient:
    """Client bound to one context. Immutable once published."""

    profile: ContextProfile
    tuning: ClientTuning = ClientTuning()
    binary: str = KUBECTL_BINARY
    kubeconfig: str | None = None
    _limiter: TokenBucket = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_limiter", TokenBucket(self.tuning.qps, self.tuning.burst))

    @property
    def context(self) -> str:
        return self.profile.name

    def base_args(self) -> list[str]:
        args = [CONTEXT_FLAG, self.context]
        if self.kubeconfig:
            args.extend(["--kubeconfig", self.kubeconfig])
        return args

    async def _kubectl(self, args: Sequence[str], timeout: float | None) -> str:
        await self._limiter.acquire()
        try:
            return await run_kubectl(
                [*self.base_args(), *args],
                binary=self.binary,
                timeout=timeout,
            )
        except (ProcessExecutionError, ProbeTimeoutError) as exc:
            exc.context = self.context
            raise

    async def list_resources(
        self,
        gvr: GroupVersionResource,
        namespace: str = "",
        label_selector: str = "",
        timeout: float | None = None,
    ) -> list[dict]:
        """List objects of one resource kind.

        ``timeout`` bounds the kubectl subprocess; None waits for it to finish.

        Raises:
            ListError: the API call failed or returned unparsable output.
        """
        args = ["get", gvr.kubectl_name]
        if namespace in ("", CLUSTER_SCOPE, NAMESPACE_ALL):
            args.append("--all-namespaces")
        else:
            args.extend(["-n", namespace])
        if label_selector:
            args.extend(["-l", label_selector])
        args.extend(["-o", "json"])

        try:
            output = await self._kubectl(args, timeout)
        except (ProcessExecutionError, ProbeTimeoutError) as exc:
            raise ListError(
                f"list {gvr.kubectl_name} failed: {exc}", self.context
            ) from exc

        try:
            data = json.loads(output or "{}")
        except json.JSONDecodeError as exc:
            raise ListError(
                f"list {gvr.kubectl_name} returned invalid JSON", self.context
            ) from exc
        items = data.get("items", [])
        return items if isinstance(items, list) else []

    async def server_version(self, timeout: float | None = VERSION_PROBE_TIMEOUT) -> str:
        """Return the API server ``gitVersion``."""
        args = ["version", "-o", "json"]
        if timeout:
            args.append(f"--request-timeout={int(max(1, timeout))}s")
        output = await self._kubectl(args, timeout)
        try:
            data = json.loads(output or "{}")
        except json.JSONDecodeError as exc:
            raise ProcessExecutionError(
                "kubectl version returned invalid JSON", self.context
            ) from exc
        version = str(data.get("serverVersion", {}).get("gitVersion", "")).strip()
        if not version:
            raise ProcessExecutionError("server version unavailable", self.context)
        return version

    async def check_connectivity(
        self, timeout: float = CONNECTIVITY_CHECK_TIMEOUT
    ) -> bool:
        """Return True when the API server answers within ``timeout``."""
        try:
            await self.server_version(timeout)
        except (ProcessExecutionError, ProbeTimeoutError) as exc:
            logger.debug("Connectivity check failed for %s: %s", self.context, exc)
            return False
        return True

    async def describe(self, gvr: GroupVersionResource, path: str) -> str:
        """Describe one object addressed by ``namespace/name`` or ``name``."""
        namespace, _, name = path.rpartition("/")
        args = ["describe", gvr.kubectl_name, name]
        if namespace:
            args.extend(["-n", namespace])
        return await self._kubectl(args, KUBECTL_COMMAND_TIMEOUT)


__all__ = [
    "ClientTuning",
    "GroupVersionResource",
    "KubectlClient",
    "run_kubectl",
]
