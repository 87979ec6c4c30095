"""SQLAlchemy table definitions for the expense tracker."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    Integer,
    MetaData,
    Numeric,
    Table,
    Text,
)

# Use naming convention for constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Smallest amount the table accepts
MINIMUM_AMOUNT = "0.01"

expenses = Table(
    "expenses",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("amount", Numeric(6, 2), nullable=False),
    Column("memo", Text, nullable=False),
    Column("created_on", Date),
    CheckConstraint(f"amount >= {MINIMUM_AMOUNT}", name="amount_minimum"),
)
