"""Pytest configuration and fixtures."""

import os
import tempfile
from pathlib import Path

import pytest

from expense_tracker.db.repository import ExpenseStore


@pytest.fixture
def temp_db():
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        yield Path(f.name)
    os.unlink(f.name)


@pytest.fixture
def store(temp_db):
    """Create an expense store with the schema in place."""
    expense_store = ExpenseStore(temp_db)
    expense_store.ensure_schema()
    yield expense_store
    expense_store.close()


@pytest.fixture
def config_file(tmp_path: Path, temp_db: Path) -> Path:
    """Write a config file pointing at the temporary database."""
    config_content = f"""
database:
  url: {temp_db}
logging:
  level: WARNING
"""
    path = tmp_path / "config.yaml"
    path.write_text(config_content)
    return path
