"""Database layer with SQLAlchemy Core abstraction.

Supports SQLite (default) and PostgreSQL.
"""

from .engine import create_db_engine, ensure_schema
from .repository import Expense, ExpenseStore
from .tables import expenses, metadata

__all__ = [
    "Expense",
    "ExpenseStore",
    "create_db_engine",
    "ensure_schema",
    "expenses",
    "metadata",
]
