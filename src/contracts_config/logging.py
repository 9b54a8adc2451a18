"""Logging helpers for consistent structured context."""

from __future__ import annotations

import json
import logging
import logging.config
from contextlib import contextmanager
from time import monotonic
from typing import Any, Dict, Iterator

from .settings import AppSettings

_DEFAULT_LOG_KEYS = set(logging.makeLogRecord({}).__dict__.keys())
_EXCLUDED_EXTRA_KEYS = {"message", "asctime"}
LEVEL_COLORS = {
    "DEBUG": "\033[90m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
TIMESTAMP_COLOR = "\033[36m"
RESET = "\033[0m"


def get_logger(name: str) -> logging.Logger:
    """Return a module-scoped logger."""

    return logging.getLogger(name)


def configure_logging(settings: AppSettings) -> None:
    """Configure logging based on application settings."""
    log_level = settings.logging.level
    log_format = settings.logging.format

    if log_level not in logging.getLevelNamesMapping():
        log_level = "INFO"

    if log_format == "json":
        formatter_config = {
            "()": JsonFormatter,
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        }
    else:
        formatter_config = {
            "()": StructuredTextFormatter,
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
            "color_enabled": settings.logging.color_enabled,
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"standard": formatter_config},
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                }
            },
            "root": {"level": log_level, "handlers": ["default"]},
        }
    )


def extract_log_context(record: logging.LogRecord) -> Dict[str, Any]:
    """Return a dictionary of non-default attributes attached via `extra`."""

    context: Dict[str, Any] = {}

    for key, value in record.__dict__.items():
        if key in _DEFAULT_LOG_KEYS or key in _EXCLUDED_EXTRA_KEYS or key.startswith("_"):
            continue

        context[key] = value

    return context


def build_log_extra(
    *,
    network: str | None = None,
    chain_id: int | None = None,
    variable: str | None = None,
    config_path: str | None = None,
    additional: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    """Construct an `extra` dict for structured logging.

    Only variable names are ever recorded, never their values.
    """
    extra: Dict[str, Any] = {}

    if network is not None:
        extra["network"] = network

    if chain_id is not None:
        extra["chain_id"] = chain_id

    if variable is not None:
        extra["env_var"] = variable

    if config_path is not None:
        extra["config_path"] = config_path

    if additional:
        extra.update(additional)

    return extra


@contextmanager
def log_duration(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
    extra: Dict[str, Any] | None = None,
) -> Iterator[None]:
    """Context manager to log start and elapsed time for an operation."""

    start = monotonic()
    try:
        yield
    finally:
        elapsed = monotonic() - start
        log_extra = dict(extra or {})
        log_extra["elapsed_seconds"] = round(elapsed, 3)
        logger.log(level, message, extra=log_extra)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_record["stack_info"] = record.stack_info

        context = extract_log_context(record)
        if context:
            log_record.update(context)

        return json.dumps(log_record, default=str)


class StructuredTextFormatter(logging.Formatter):
    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        *,
        color_enabled: bool = True,
    ) -> None:
        super().__init__(fmt, datefmt, style)
        self.color_enabled = color_enabled

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        timestamp = self.formatTime(record, self.datefmt)
        levelname = record.levelname
        logcolor = LEVEL_COLORS.get(levelname, "")

        if self.color_enabled:
            base = base.replace(
                timestamp,
                f"{TIMESTAMP_COLOR}{timestamp}{RESET}",
                1,
            )

        if self.color_enabled and logcolor:
            base = base.replace(
                levelname,
                f"{logcolor}{levelname}{RESET}",
                1,
            )

        context = extract_log_context(record)

        if not context:
            return base

        context_str = " ".join(f"{key}={context[key]}" for key in sorted(context))
        return f"{base} | {context_str}"


__all__ = [
    "JsonFormatter",
    "StructuredTextFormatter",
    "build_log_extra",
    "configure_logging",
    "extract_log_context",
    "get_logger",
    "log_duration",
]
