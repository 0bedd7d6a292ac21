"""Objects tagged with the context they were fetched from."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from kubemc.utils.row_id import join_multi_context_id


@dataclass(frozen=True, slots=True)
class ContextObject:
    """A raw Kubernetes object paired with its origin context.

    Produced per fan-out call and not retained past one table refresh.
    """

    context: str
    object: dict[str, Any]

    @property
    def name(self) -> str:
        return str(self.object.get("metadata", {}).get("name", ""))

    @property
    def namespace(self) -> str:
        return str(self.object.get("metadata", {}).get("namespace", "") or "")

    @property
    def kind(self) -> str:
        return str(self.object.get("kind", ""))

    @property
    def path(self) -> str:
        """Resource path: ``namespace/name`` or ``name`` for cluster scope."""
        if self.namespace:
            return f"{self.namespace}/{self.name}"
        return self.name

    @property
    def row_id(self) -> str:
        return join_multi_context_id(self.context, self.path)

    @property
    def created_at(self) -> datetime | None:
        raw = self.object.get("metadata", {}).get("creationTimestamp")
        if not isinstance(raw, str) or not raw:
            return None
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            return None

    def age(self, now: datetime | None = None) -> str:
        """Human-readable age in the kubectl style (``3d``, ``5h``, ``12m``)."""
        created = self.created_at
        if created is None:
            return "<unknown>"
        now = now or datetime.now(timezone.utc)
        seconds = max(0, int((now - created).total_seconds()))
        if seconds >= 86400:
            return f"{seconds // 86400}d"
        if seconds >= 3600:
            return f"{seconds // 3600}h"
        if seconds >= 60:
            return f"{seconds // 60}m"
        return f"{seconds}s"


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Output of one kubectl invocation against one context.

    On failure ``output`` holds the error message so a uniform renderer can
    print it.
    """

    context: str
    output: str
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
