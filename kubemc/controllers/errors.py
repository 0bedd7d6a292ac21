"""Per-context error taxonomy.

Every error raised while serving one context carries that context's name so
the dispatcher can contain it and the aggregator can report it.
"""

from __future__ import annotations


class MultiContextError(Exception):
    """Base exception for failures scoped to a single context."""

    def __init__(self, message: str, context: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        return self.message


class ConfigResolutionError(MultiContextError):
    """Raised when a context profile is missing or malformed."""


class ClientConnectionError(MultiContextError, ConnectionError):
    """Raised when a client for a resolved context cannot be constructed."""


class ListError(MultiContextError):
    """Raised when a resource list call fails (network, auth, not found)."""


class ProbeTimeoutError(MultiContextError, TimeoutError):
    """Raised when a bounded task exceeds its deadline."""


class ProcessExecutionError(MultiContextError):
    """Raised when kubectl cannot be spawned or exits non-zero."""

    def __init__(
        self,
        message: str,
        context: str | None = None,
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message, context)
        self.returncode = returncode
        self.stderr = stderr


__all__ = [
    "ClientConnectionError",
    "ConfigResolutionError",
    "ListError",
    "MultiContextError",
    "ProbeTimeoutError",
    "ProcessExecutionError",
]
