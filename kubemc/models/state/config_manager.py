"""Load and persist AppSettings as JSON."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from kubemc.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)
from kubemc.models.state.paths import config_dir, write_atomic

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "settings.json"


class ConfigManager:
    """Reads and writes the settings file."""

    @staticmethod
    def settings_path() -> Path:
        return config_dir() / SETTINGS_FILE_NAME

    @classmethod
    def load(cls, path: Path | None = None) -> AppSettings:
        """Load settings, returning defaults when no file exists.

        Raises:
            ConfigLoadError: The file exists but cannot be read or validated.
        """
        settings_path = path or cls.settings_path()
        if not settings_path.exists():
            return AppSettings()
        try:
            raw = settings_path.read_text(encoding="utf-8")
            return AppSettings.model_validate_json(raw)
        except (OSError, ValidationError) as exc:
            raise ConfigLoadError(f"Cannot load settings from {settings_path}: {exc}") from exc

    @classmethod
    def save(cls, settings: AppSettings, path: Path | None = None) -> Path:
        """Persist settings atomically.

        Raises:
            ConfigSaveError: The file cannot be written.
        """
        settings_path = path or cls.settings_path()
        try:
            write_atomic(settings_path, settings.model_dump_json(indent=2))
        except OSError as exc:
            raise ConfigSaveError(f"Cannot save settings to {settings_path}: {exc}") from exc
        logger.debug("Saved settings to %s", settings_path)
        return settings_path


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
]
