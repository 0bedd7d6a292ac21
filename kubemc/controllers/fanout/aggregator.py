"""Shape per-context batch results for each call site.

- Listing: flat list of tagged objects, failed contexts logged and omitted.
- Version probing: one entry per requested context, ``N/A`` on failure.
- Command execution: positional results with errors folded into the output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from kubemc.constants.values import NOT_AVAILABLE
from kubemc.models.core.batch_result import BatchResult
from kubemc.models.core.context_object import CommandResult, ContextObject

logger = logging.getLogger(__name__)


def flatten_tagged(
    results: Iterable[BatchResult[list[dict[str, Any]]]],
) -> list[ContextObject]:
    """Concatenate successful listings, tagging each object with its context."""
    out: list[ContextObject] = []
    for result in results:
        if not result.ok:
            logger.warning(
                "Multi-context list skipped context %s: %s",
                result.context,
                result.error,
            )
            continue
        out.extend(ContextObject(result.context, obj) for obj in result.value or [])
    return out


def versions_map(
    contexts: Sequence[str],
    results: Iterable[BatchResult[str]],
) -> dict[str, str]:
    """Map every requested context to its version or the ``N/A`` sentinel."""
    out = {context: NOT_AVAILABLE for context in contexts}
    for result in results:
        if result.ok and result.value:
            out[result.context] = result.value
        else:
            logger.debug("Version probe failed for %s: %s", result.context, result.error)
    return out


def fold_command_results(results: Sequence[BatchResult[str]]) -> list[CommandResult]:
    """Convert batch results into positional command results."""
    folded: list[CommandResult] = []
    for result in results:
        if result.ok:
            folded.append(CommandResult(result.context, result.value or ""))
            continue
        message = str(result.error).strip() or type(result.error).__name__
        folded.append(CommandResult(result.context, message, result.error))
    return folded


__all__ = [
    "flatten_tagged",
    "fold_command_results",
    "versions_map",
]
