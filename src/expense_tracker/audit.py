"""Audit logging for expense mutations.

Emits one structured log event per mutation, rendered as key=value or JSON.

Configure via config.yaml:
    logging:
      enabled: true  # set to false to disable audit logging
      level: INFO    # audit events are emitted at INFO
      format: json   # or keyvalue
      file: ~/.local/state/expense/audit.log  # optional
"""

from datetime import date
from decimal import Decimal
from typing import Any

import structlog

# Module state
_logger: structlog.BoundLogger | None = None
_enabled: bool = True


def configure(enabled: bool = True) -> None:
    """Enable or disable audit events."""
    global _enabled
    _enabled = enabled


def _get_logger() -> structlog.BoundLogger:
    """Get or create the audit logger."""
    global _logger
    if _logger is None:
        _logger = structlog.get_logger("audit")
    return _logger


def _emit(
    event_type: str,
    action: str,
    **kwargs: Any,
) -> None:
    """Emit an audit log event.

    Args:
        event_type: Category of event (schema, expense)
        action: Specific action (created, added, deleted, cleared)
        **kwargs: Additional event-specific fields
    """
    if not _enabled:
        return

    logger = _get_logger()
    logger.info(
        f"{event_type}.{action}",
        event_type=event_type,
        action=action,
        **kwargs,
    )


def log_schema_created(table: str) -> None:
    """Log creation of a missing table."""
    _emit("schema", "created", table=table)


def log_expense_added(
    expense_id: int,
    amount: Decimal,
    memo: str,
    created_on: date,
) -> None:
    """Log a newly recorded expense."""
    _emit(
        "expense",
        "added",
        expense_id=expense_id,
        amount=amount,
        memo=memo,
        created_on=created_on,
    )


def log_expense_deleted(expense_id: int, amount: Decimal) -> None:
    """Log removal of a single expense."""
    _emit("expense", "deleted", expense_id=expense_id, amount=amount)


def log_expenses_cleared(count: int) -> None:
    """Log removal of every expense."""
    _emit("expense", "cleared", count=count)
