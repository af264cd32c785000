"""Structured logging configuration for the NoCloud client."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from nocloud.settings import get_settings

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class JSONFormatter:
    """JSON formatter for structured logging.

    loguru treats the return value of a format callable as a template, so
    the serialized record is stashed in ``extra`` and referenced from there.
    """

    def serialize(self, record: dict[str, Any]) -> str:
        log_data: dict[str, Any] = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "message": record["message"],
            "module": record.get("module", ""),
            "function": record.get("function", ""),
            "line": record.get("line", 0),
        }

        exception = record.get("exception")
        if exception:
            log_data["exception"] = {
                "type": exception.type.__name__ if exception.type else None,
                "value": str(exception.value) if exception.value else None,
            }

        extra = {key: value for key, value in record.get("extra", {}).items() if key != "serialized"}
        log_data.update(extra)

        return json.dumps(log_data, ensure_ascii=False, default=str)

    def __call__(self, record: dict[str, Any]) -> str:
        record["extra"]["serialized"] = self.serialize(record)
        return "{extra[serialized]}\n"


def setup_logging(
    *,
    level: str | None = None,
    json_format: bool | None = None,
    log_file: Path | None = None,
) -> None:
    """Configure logging for an application embedding the client.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to
            the configured ``logging.level``.
        json_format: Whether to use JSON formatting (useful for production).
            Defaults to the configured ``logging.json_format``.
        log_file: Optional path to log file. If None, logs only to stderr.
    """
    configured = get_settings().logging
    if level is None:
        level = configured.level
    if json_format is None:
        json_format = configured.json_format

    # Remove default handler
    logger.remove()
    logger.enable("nocloud")

    formatter: Any = JSONFormatter() if json_format else TEXT_FORMAT

    logger.add(
        sys.stderr,
        format=formatter,
        level=level,
        colorize=not json_format,
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=formatter,
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )


def get_logger(name: str | None = None) -> Any:
    """Get a logger instance, bound to ``name`` when given."""
    if name:
        return logger.bind(name=name)
    return logger


__all__ = ["JSONFormatter", "setup_logging", "get_logger"]
