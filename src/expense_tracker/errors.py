"""Exceptions raised by the expense store."""


class ExpenseError(Exception):
    """Base class for expense store failures that are not database errors."""


class InvalidAmountError(ExpenseError, ValueError):
    """Raised when an amount cannot be stored as numeric(6,2)."""


class InvalidDateError(ExpenseError, ValueError):
    """Raised when a supplied creation date cannot be parsed."""


class DatabaseConfigError(ExpenseError, ValueError):
    """Raised when the configured database URL cannot be used."""
