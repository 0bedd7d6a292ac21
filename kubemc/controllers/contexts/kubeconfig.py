"""Named-context configuration source backed by kubeconfig files.

Files are merged the way kubectl merges ``$KUBECONFIG``: the first file that
defines a context, cluster or user wins.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from kubemc.controllers.errors import ConfigResolutionError

logger = logging.getLogger(__name__)

DEFAULT_KUBECONFIG = Path.home() / ".kube" / "config"


@dataclass(frozen=True, slots=True)
class ContextProfile:
    """Connection parameters resolved for one context."""

    name: str
    cluster: str
    user: str
    server: str
    namespace: str = ""
    source: str = ""


def kubeconfig_paths(explicit: str | os.PathLike[str] | None = None) -> list[Path]:
    """Return the kubeconfig files to merge, in precedence order."""
    if explicit:
        return [Path(explicit).expanduser()]
    env_value = os.environ.get("KUBECONFIG", "")
    paths = [Path(part).expanduser() for part in env_value.split(os.pathsep) if part.strip()]
    return paths or [DEFAULT_KUBECONFIG]


class KubeConfig:
    """Parsed view over one or more kubeconfig files."""

    def __init__(
        self,
        contexts: dict[str, dict[str, Any]],
        clusters: dict[str, dict[str, Any]],
        users: dict[str, dict[str, Any]],
        current_context: str | None = None,
        sources: dict[str, str] | None = None,
    ) -> None:
        self._contexts = contexts
        self._clusters = clusters
        self._users = users
        self._current_context = current_context
        self._sources = sources or {}

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> KubeConfig:
        """Load and merge kubeconfig files.

        Missing files are skipped like kubectl does; an unparsable file raises
        ConfigResolutionError.
        """
        contexts: dict[str, dict[str, Any]] = {}
        clusters: dict[str, dict[str, Any]] = {}
        users: dict[str, dict[str, Any]] = {}
        sources: dict[str, str] = {}
        current_context: str | None = None

        for config_path in kubeconfig_paths(path):
            if not config_path.exists():
                logger.debug("Kubeconfig %s not found, skipping", config_path)
                continue
            try:
                with open(config_path, encoding="utf-8") as handle:
                    document = yaml.safe_load(handle) or {}
            except (OSError, yaml.YAMLError) as exc:
                raise ConfigResolutionError(
                    f"Cannot parse kubeconfig {config_path}: {exc}"
                ) from exc
            if not isinstance(document, dict):
                raise ConfigResolutionError(f"Kubeconfig {config_path} is not a mapping")

            for entry in document.get("contexts") or []:
                name = _entry_name(entry)
                if name and name not in contexts:
                    contexts[name] = entry.get("context") or {}
                    sources[name] = str(config_path)
            for entry in document.get("clusters") or []:
                name = _entry_name(entry)
                if name and name not in clusters:
                    clusters[name] = entry.get("cluster") or {}
            for entry in document.get("users") or []:
                name = _entry_name(entry)
                if name and name not in users:
                    users[name] = entry.get("user") or {}
            if current_context is None and document.get("current-context"):
                current_context = str(document["current-context"])

        return cls(
            contexts,
            clusters,
            users,
            current_context=current_context,
            sources=sources,
        )

    def list_context_names(self) -> list[str]:
        return list(self._contexts)

    def current_context(self) -> str | None:
        return self._current_context

    def resolve(self, name: str) -> ContextProfile:
        """Select one named profile out of the merged configuration."""
        context = self._contexts.get(name)
        if context is None:
            raise ConfigResolutionError(f"context {name!r} not found in kubeconfig", name)

        cluster_name = str(context.get("cluster") or "")
        if not cluster_name:
            raise ConfigResolutionError(f"context {name!r} has no cluster", name)
        cluster = self._clusters.get(cluster_name)
        if cluster is None:
            raise ConfigResolutionError(
                f"context {name!r} references unknown cluster {cluster_name!r}", name
            )

        user_name = str(context.get("user") or "")
        if user_name and user_name not in self._users:
            raise ConfigResolutionError(
                f"context {name!r} references unknown user {user_name!r}", name
            )

        return ContextProfile(
            name=name,
            cluster=cluster_name,
            user=user_name,
            server=str(cluster.get("server") or ""),
            namespace=str(context.get("namespace") or ""),
            source=self._sources.get(name, ""),
        )


def _entry_name(entry: Any) -> str:
    if not isinstance(entry, dict):
        return ""
    return str(entry.get("name") or "").strip()


__all__ = [
    "ContextProfile",
    "KubeConfig",
    "kubeconfig_paths",
]
