"""Command-line expense tracker backed by a single SQL table."""

__version__ = "0.1.0"
