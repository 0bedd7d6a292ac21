"""Composite row identities for merged multi-context tables.

A row id is ``<context>@@<resource path>``. Single-cluster rows carry the bare
path, so one id type serves both modes.
"""

from __future__ import annotations

from kubemc.constants.values import MULTI_CONTEXT_SEPARATOR


def join_multi_context_id(context: str, path: str) -> str:
    """Create a multi-context row id."""
    return f"{context}{MULTI_CONTEXT_SEPARATOR}{path}"


def split_multi_context_id(row_id: str) -> tuple[str, str]:
    """Split a row id into ``(context, path)``.

    Returns ``("", row_id)`` when the id carries no context.
    """
    context, sep, path = row_id.partition(MULTI_CONTEXT_SEPARATOR)
    if not sep:
        return "", row_id
    return context, path


def is_multi_context_id(row_id: str) -> bool:
    """Return True when the row id encodes an origin context."""
    return MULTI_CONTEXT_SEPARATOR in row_id


__all__ = [
    "is_multi_context_id",
    "join_multi_context_id",
    "split_multi_context_id",
]
