"""Plain-text rendering of expense listings."""

from datetime import date
from decimal import Decimal

from .db.repository import Expense

SEPARATOR = "-" * 50


def format_count(count: int) -> str:
    """Describe how many expenses matched."""
    if count == 0:
        return "There are no expenses."
    if count == 1:
        return "There is 1 expense."
    return f"There are {count} expenses."


def format_date(value: date | None) -> str:
    """Weekday-inclusive date, e.g. 'Sun Oct 18 2026'."""
    if value is None:
        return ""
    return value.strftime("%a %b %d %Y")


def format_number(value: Decimal) -> str:
    """Render a decimal without trailing zeros or currency formatting."""
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_expense(expense: Expense) -> str:
    """One listing line: ID | DATE | AMOUNT | MEMO."""
    columns = [
        str(expense.id).rjust(3),
        format_date(expense.created_on).rjust(10),
        f"{expense.amount:.2f}".rjust(12),
        expense.memo,
    ]
    return " | ".join(columns)


def format_total(total: Decimal) -> str:
    return f"Total {format_number(total).rjust(30)}"


def render_expenses(expenses: list[Expense]) -> list[str]:
    """Count line, one line per expense, and a total when more than one.

    Args:
        expenses: Expenses in display order.

    Returns:
        Output lines without trailing newlines.
    """
    lines = [format_count(len(expenses))]
    lines.extend(format_expense(expense) for expense in expenses)

    if len(expenses) > 1:
        total = sum((expense.amount for expense in expenses), Decimal("0"))
        lines.append(SEPARATOR)
        lines.append(format_total(total))

    return lines
