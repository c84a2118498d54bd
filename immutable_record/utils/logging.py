"""
Logging setup for immutable-record.

The library only emits through `get_logger(__name__)` and never installs
handlers; the CLI (or an embedding application) calls `configure_logging` once.
Context passed with ``extra=`` (record type name, strategy, field counts) is
rendered by both formatters: appended as ``key=value`` on console lines, and as
top-level keys in JSON lines.

Usage:
    from immutable_record.utils.logging import configure_logging, get_logger

    configure_logging(level="INFO", json_logs=False)
    log = get_logger(__name__)
    log.info("Built record type", extra={"record_type": "Person"})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Fields attached to ``record`` through ``extra=``, in insertion order."""
    return {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS}


class ConsoleFormatter(logging.Formatter):
    """Human-readable lines with the record's extra context appended."""

    def __init__(self) -> None:
        super().__init__(CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = extra_fields(record)
        if not context:
            return line
        return line + " | " + " ".join(f"{k}={v}" for k, v in context.items())


class JsonFormatter(logging.Formatter):
    """One JSON object per line; values that JSON cannot encode are stringified."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, CONSOLE_DATEFMT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(extra_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    force: bool = True,
) -> None:
    """
    Configure root logging.

    Parameters
    ----------
    level : str
        Level name, case-insensitive ("debug", "INFO", ...).
    json_logs : bool
        Emit JSON lines instead of console lines.
    force : bool
        Replace existing root handlers. When False and the root logger already
        has handlers, only the level is changed.
    """
    level = level.upper()
    root = logging.getLogger()
    if not force and root.handlers:
        root.setLevel(level)
        return

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {"()": ConsoleFormatter},
                "json": {"()": JsonFormatter},
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if json_logs else "console",
                    "level": level,
                }
            },
            "root": {"handlers": ["default"], "level": level},
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Named logger; the root logger when ``name`` is None."""
    return logging.getLogger(name)


__all__ = ["ConsoleFormatter", "JsonFormatter", "configure_logging", "extra_fields", "get_logger"]
