"""Application settings and environment-driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_BASE_FRAGMENT_FILENAME = "contracts-config.toml"


def _as_bool(value: str | None, default: bool) -> bool:
    """Convert a string value to a boolean, returning default on failure.

    Recognizes truthy values: "1", "true", "yes", "on" (case-insensitive).
    Recognizes falsy values: "0", "false", "no", "off" (case-insensitive).

    Args:
        value: String value to convert, or None.
        default: Default value to return if conversion fails.

    Returns:
        Converted boolean value, or default if conversion fails.
    """
    if value is None:
        return default

    normalized = value.strip().lower()

    if normalized in {"1", "true", "yes", "on"}:
        return True

    if normalized in {"0", "false", "no", "off"}:
        return False

    return default


@dataclass(slots=True)
class LoggingSettings:
    level: str
    format: str
    color_enabled: bool


@dataclass(slots=True)
class ConfigSettings:
    base_path_env: str | None
    default_base_filename: str

    def resolve_base_path(self) -> Path:
        if self.base_path_env:
            configured_path = Path(self.base_path_env).expanduser().resolve()

            if configured_path.is_dir():
                return configured_path.joinpath(self.default_base_filename)

            return configured_path

        return Path.cwd().joinpath(self.default_base_filename).resolve()


@dataclass(slots=True)
class AppSettings:
    logging: LoggingSettings
    config: ConfigSettings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    logging_settings = LoggingSettings(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format=os.getenv("LOG_FORMAT", "text").lower(),
        color_enabled=_as_bool(os.getenv("LOG_COLOR_ENABLED"), True),
    )

    config_settings = ConfigSettings(
        base_path_env=os.getenv("CONTRACTS_CONFIG_BASE_PATH"),
        default_base_filename=DEFAULT_BASE_FRAGMENT_FILENAME,
    )

    return AppSettings(
        logging=logging_settings,
        config=config_settings,
    )


__all__ = ["AppSettings", "DEFAULT_BASE_FRAGMENT_FILENAME", "get_settings"]
