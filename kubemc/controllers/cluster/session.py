"""Headless supervised session for the command line."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LoggingSession:
    """Session that reports supervisor transitions through logging only.

    There is no live view to pause, so the refresh hooks only track state.
    A terminated session keeps the final message for the exit code.
    """

    def __init__(self) -> None:
        self.refresh_paused = False
        self.warning: str | None = None
        self.exit_message: str | None = None

    @property
    def terminated(self) -> bool:
        return self.exit_message is not None

    @property
    def exit_code(self) -> int:
        return 1 if self.terminated else 0

    def pause_refresh(self) -> None:
        if not self.refresh_paused:
            logger.debug("Refresh paused")
        self.refresh_paused = True

    def resume_refresh(self) -> None:
        if self.refresh_paused:
            logger.debug("Refresh resumed")
        self.refresh_paused = False

    def show_info(self, message: str) -> None:
        logger.info(message)

    def show_warning(self, message: str) -> None:
        self.warning = message
        logger.warning(message)

    def clear_warning(self) -> None:
        self.warning = None

    def terminate(self, message: str) -> None:
        self.exit_message = message
        logger.error(message)


__all__ = ["LoggingSession"]
