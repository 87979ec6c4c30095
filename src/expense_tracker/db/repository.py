"""Data access layer using SQLAlchemy Core."""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine

from ..errors import InvalidAmountError, InvalidDateError
from .engine import create_db_engine, ensure_schema
from .tables import expenses

CENT = Decimal("0.01")

# numeric(6,2) holds at most four integer digits
AMOUNT_LIMIT = Decimal("10000")


@dataclass
class Expense:
    """Expense record."""

    id: int
    amount: Decimal
    memo: str
    created_on: date | None


def _row_to_dict(row: Any) -> dict:
    """Convert SQLAlchemy row to dict."""
    return dict(row._mapping)


def to_amount(value: Decimal | str | int | float) -> Decimal:
    """Coerce a user-supplied amount the way a numeric(6,2) column would.

    Raises:
        InvalidAmountError: If the value is not a finite number or overflows
            the column.
    """
    try:
        amount = Decimal(str(value).strip())
        if not amount.is_finite():
            raise InvalidOperation
        amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidAmountError(
            f'invalid input syntax for type numeric: "{value}"'
        ) from None

    if abs(amount) >= AMOUNT_LIMIT:
        raise InvalidAmountError("numeric field overflow")
    return amount


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD creation date.

    Raises:
        InvalidDateError: If the value is not an ISO calendar date.
    """
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise InvalidDateError(
            f'invalid input syntax for type date: "{value}"'
        ) from None


class ExpenseStore:
    """Expense table operations using SQLAlchemy Core.

    Every operation runs on its own connection checked out from a lazily
    created engine; call close() to dispose of the engine.
    """

    def __init__(self, database_url: Path | str):
        """Initialize the store.

        Args:
            database_url: Path to SQLite database file, or full connection string.
        """
        self._engine: Engine | None = None
        self._database_url = database_url

    @property
    def engine(self) -> Engine:
        """Get or create database engine."""
        if self._engine is None:
            self._engine = create_db_engine(self._database_url)
        return self._engine

    def close(self) -> None:
        """Dispose of the engine and its connections."""
        if self._engine:
            self._engine.dispose()
            self._engine = None

    def ensure_schema(self) -> bool:
        """Create the expenses table when missing. Returns True if created."""
        return ensure_schema(self.engine)

    def _expense_from_row(self, row) -> Expense:
        return Expense(**_row_to_dict(row))

    def add(
        self,
        amount: Decimal | str | int | float,
        memo: str,
        created_on: date | None = None,
    ) -> Expense:
        """Insert a new expense dated today unless created_on is given."""
        values = {
            "amount": to_amount(amount),
            "memo": memo,
            "created_on": created_on or date.today(),
        }
        with self.engine.begin() as conn:
            result = conn.execute(expenses.insert().values(**values))
            expense_id = result.inserted_primary_key[0]
        return Expense(id=expense_id, **values)

    def list_expenses(self) -> list[Expense]:
        """List all expenses, oldest first."""
        stmt = select(expenses).order_by(expenses.c.created_on, expenses.c.id)
        with self.engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
            return [self._expense_from_row(row) for row in rows]

    def search(self, term: str) -> list[Expense]:
        """List expenses whose memo contains term, ignoring case."""
        stmt = (
            select(expenses)
            .where(expenses.c.memo.icontains(term, autoescape=True))
            .order_by(expenses.c.created_on, expenses.c.id)
        )
        with self.engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
            return [self._expense_from_row(row) for row in rows]

    def get(self, expense_id: int | str) -> Expense | None:
        """Get an expense by ID."""
        with self.engine.connect() as conn:
            row = conn.execute(
                select(expenses).where(expenses.c.id == expense_id)
            ).fetchone()
            return self._expense_from_row(row) if row else None

    def delete(self, expense_id: int | str) -> Expense | None:
        """Delete an expense by ID.

        Returns:
            The deleted expense, or None if no expense has that ID.
        """
        with self.engine.begin() as conn:
            row = conn.execute(
                select(expenses).where(expenses.c.id == expense_id)
            ).fetchone()
            if row is None:
                return None
            expense = self._expense_from_row(row)
            conn.execute(delete(expenses).where(expenses.c.id == expense.id))
            return expense

    def delete_all(self) -> int:
        """Delete every expense. Returns the number of rows removed."""
        with self.engine.begin() as conn:
            result = conn.execute(delete(expenses))
            return result.rowcount
