"""Tests for audit events."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from expense_tracker import audit


@pytest.fixture
def audit_logger(monkeypatch):
    """Replace the audit logger with a mock and re-enable events."""
    logger = MagicMock()
    monkeypatch.setattr(audit, "_logger", logger)
    monkeypatch.setattr(audit, "_enabled", True)
    return logger


class TestAuditEvents:
    """Tests for audit event emission."""

    def test_expense_added(self, audit_logger):
        """Added expenses carry id, amount, memo and date."""
        audit.log_expense_added(7, Decimal("5.00"), "train ticket", date(2026, 10, 18))

        audit_logger.info.assert_called_once_with(
            "expense.added",
            event_type="expense",
            action="added",
            expense_id=7,
            amount=Decimal("5.00"),
            memo="train ticket",
            created_on=date(2026, 10, 18),
        )

    def test_expense_deleted(self, audit_logger):
        """Deleted expenses carry id and amount."""
        audit.log_expense_deleted(3, Decimal("12.50"))

        args, kwargs = audit_logger.info.call_args
        assert args == ("expense.deleted",)
        assert kwargs["expense_id"] == 3
        assert kwargs["amount"] == Decimal("12.50")

    def test_expenses_cleared(self, audit_logger):
        """Clearing logs the number of removed rows."""
        audit.log_expenses_cleared(4)

        args, kwargs = audit_logger.info.call_args
        assert args == ("expense.cleared",)
        assert kwargs["count"] == 4

    def test_schema_created(self, audit_logger):
        """Table creation is logged."""
        audit.log_schema_created("expenses")

        args, kwargs = audit_logger.info.call_args
        assert args == ("schema.created",)
        assert kwargs["table"] == "expenses"

    def test_disabled(self, audit_logger):
        """No events are emitted when disabled."""
        audit.configure(enabled=False)

        audit.log_expenses_cleared(1)

        audit_logger.info.assert_not_called()
