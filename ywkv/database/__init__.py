"""
Persistence layer: a single durable table of byte-string keys and values.

SQLite via Database and get_database(); reads and writes happen inside
explicit transactions obtained from begin_read() / begin_write().
"""

from ywkv.database.database import (
    Database,
    DatabaseBackend,
    ReadOnlyTable,
    ReadTransaction,
    SQLiteBackend,
    Table,
    WriteTransaction,
    get_database,
)
from ywkv.database.models import Result, Status

__all__ = [
    "Database",
    "DatabaseBackend",
    "ReadOnlyTable",
    "ReadTransaction",
    "SQLiteBackend",
    "Table",
    "WriteTransaction",
    "get_database",
    "Result",
    "Status",
]
