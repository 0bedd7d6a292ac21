"""Utility functions and classes for kubemc."""

from kubemc.utils.backoff import ExponentialBackoff
from kubemc.utils.rate_limiter import TokenBucket
from kubemc.utils.row_id import (
    is_multi_context_id,
    join_multi_context_id,
    split_multi_context_id,
)

__all__ = [
    "ExponentialBackoff",
    "TokenBucket",
    "is_multi_context_id",
    "join_multi_context_id",
    "split_multi_context_id",
]
