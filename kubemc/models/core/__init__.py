"""Core data models."""

from kubemc.models.core.batch_result import BatchResult
from kubemc.models.core.context_object import CommandResult, ContextObject

__all__ = [
    "BatchResult",
    "CommandResult",
    "ContextObject",
]
