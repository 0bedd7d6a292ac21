"""Filesystem locations for persisted state."""

from __future__ import annotations

import os
from pathlib import Path

from kubemc.constants.values import APP_NAME


def config_dir() -> Path:
    """Return the kubemc config directory, honoring ``XDG_CONFIG_HOME``."""
    base = os.environ.get("XDG_CONFIG_HOME", "").strip()
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_NAME


def state_dir() -> Path:
    """Return the kubemc state directory, honoring ``XDG_STATE_HOME``."""
    base = os.environ.get("XDG_STATE_HOME", "").strip()
    root = Path(base) if base else Path.home() / ".local" / "state"
    return root / APP_NAME


def write_atomic(path: Path, content: str, mode: int = 0o600) -> None:
    """Replace ``path`` with ``content`` in one rename.

    Readers see either the previous file or the new one, never a partial
    write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


__all__ = [
    "config_dir",
    "state_dir",
    "write_atomic",
]
