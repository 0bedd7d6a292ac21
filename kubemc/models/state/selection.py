"""Persisted multi-context selection.

The selection is a newline-delimited list of context names. It is read on
demand and rewritten atomically whenever it changes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from kubemc.models.state.paths import config_dir, write_atomic

logger = logging.getLogger(__name__)

SELECTED_CONTEXTS_FILE_NAME = "selected_contexts"


def selected_contexts_path() -> Path:
    return config_dir() / SELECTED_CONTEXTS_FILE_NAME


def resolve_targets(selected: list[str], active: str | None) -> list[str]:
    """Pick the contexts a batch should target.

    Fewer than two selected contexts means single-cluster mode against the
    active context.
    """
    if len(selected) >= 2 or not active:
        return list(selected)
    return [active]


class SelectedContexts:
    """Store for the selected context names."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or selected_contexts_path()

    def load(self) -> list[str]:
        """Read the selection; a missing file means nothing is selected."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        names: list[str] = []
        for line in raw.splitlines():
            name = line.strip()
            if name and name not in names:
                names.append(name)
        return names

    def save(self, contexts: Iterable[str]) -> list[str]:
        names: list[str] = []
        for context in contexts:
            name = context.strip()
            if name and name not in names:
                names.append(name)
        write_atomic(self.path, "\n".join(names))
        logger.debug("Saved %d selected context(s) to %s", len(names), self.path)
        return names

    def toggle(self, context: str) -> bool:
        """Flip selection of one context. Returns True if now selected."""
        names = self.load()
        if context in names:
            names.remove(context)
            self.save(names)
            return False
        names.append(context)
        self.save(names)
        return True

    def select_all(self, contexts: Iterable[str]) -> list[str]:
        return self.save(contexts)

    def clear(self) -> None:
        self.save([])


__all__ = [
    "SelectedContexts",
    "resolve_targets",
    "selected_contexts_path",
]
