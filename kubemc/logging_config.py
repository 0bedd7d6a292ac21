"""Logging setup.

The TUI owns the terminal, so it logs to a file; one-shot CLI commands log
to stderr.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from kubemc.models.state.paths import state_dir

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "kubemc.log"


def default_log_file() -> Path:
    return state_dir() / LOG_FILE_NAME


def setup_logging(level: str = "INFO", log_file: str | Path | None = None) -> None:
    """Configure root logging for kubemc.

    Args:
        level: Logging level name.
        log_file: Write to this file instead of stderr.
    """
    handler: logging.Handler
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )


__all__ = [
    "default_log_file",
    "setup_logging",
]
