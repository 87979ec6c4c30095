"""Structured logging for expense commands.

Every record carries the command being run, bound once per invocation with
``bind_command``. Amounts and dates are rendered the way listings show them.
"""

import logging
import sys
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

import structlog

from .config import Config


def _plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    if isinstance(value, date):
        return value.isoformat()
    return value


def plain_values(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Render Decimal amounts with two places and dates as YYYY-MM-DD."""
    return {key: _plain(value) for key, value in event_dict.items()}


def keyvalue_renderer(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> str:
    """Render ``TIMESTAMP LEVEL event command=... key=value ...``.

    The command comes first, remaining keys are sorted, and empty strings or
    strings with spaces are quoted.
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    level = event_dict.pop("level", "info").upper()
    parts = [timestamp, f"{level:5}", event_dict.pop("event", "")]

    command = event_dict.pop("command", None)
    if command:
        parts.append(f"command={command}")

    for key in sorted(event_dict):
        if key.startswith("_"):
            continue
        value = event_dict[key]
        if isinstance(value, str) and (not value or " " in value):
            value = f'"{value}"'
        parts.append(f"{key}={value}")

    return " ".join(parts)


def bind_command(name: str) -> None:
    """Attach the running command to every following log record."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=name)


def configure_logging(config: Config) -> None:
    """Route structlog through stdlib logging to stderr and the optional file."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.logging.file:
        config.logging.file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.logging.file))

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, config.logging.level),
        handlers=handlers,
        force=True,
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        plain_values,
    ]
    if config.logging.format == "json":
        processors += [
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(keyvalue_renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)
