"""
Application-level exceptions.

The storage layer raises only YwkvError subclasses; the operation layer turns
them into Failure results, so str(exc) is what clients see in the value field.
"""

from __future__ import annotations


class YwkvError(Exception):
    """Base class for ywkv errors."""


class StorageError(YwkvError):
    """Engine-level failure: connect, begin, query, insert or commit."""


class TableDoesNotExist(YwkvError):
    """Read against a table that no write has created yet."""

    def __init__(self, table_name: str) -> None:
        self.table_name = table_name
        super().__init__(f"Table '{table_name}' does not exist")


class ConfigError(YwkvError):
    """Missing or invalid process configuration."""
