"""Helpers for running one kubectl command across contexts."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from kubemc.constants.values import ARGS_SEPARATOR, CONTEXT_FLAG, ERROR_OUTPUT_PREFIX
from kubemc.models.core.context_object import CommandResult


def inject_context_flag(args: Sequence[str], context: str) -> list[str]:
    """Return a copy of ``args`` carrying ``--context <context>``.

    The flag goes right before the first ``--`` so it is parsed by kubectl
    rather than passed to the remote command; otherwise it is appended.
    """
    return insert_flags(args, [CONTEXT_FLAG, context])


def insert_flags(args: Sequence[str], flags: Sequence[str]) -> list[str]:
    """Insert kubectl ``flags`` before the first ``--`` or at the end."""
    out = list(args)
    try:
        index = out.index(ARGS_SEPARATOR)
    except ValueError:
        index = len(out)
    out[index:index] = list(flags)
    return out


def format_results(results: Iterable[CommandResult]) -> str:
    """Render one section per context, errors marked with ``(error)``."""
    parts: list[str] = []
    for result in results:
        header = result.context
        parts.append(f"\n{header}\n{'-' * len(header)}\n")
        if result.error is not None:
            parts.append(f"  {ERROR_OUTPUT_PREFIX} {result.output}\n")
        else:
            parts.append(result.output)
    return "".join(parts)


__all__ = [
    "format_results",
    "inject_context_flag",
    "insert_flags",
]
