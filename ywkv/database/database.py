"""
Database abstraction for the key-value table.

SQLite in WAL mode: writers are serialized by the engine (BEGIN IMMEDIATE plus
busy timeout) and readers see a consistent snapshot. One connection per
transaction; a transaction never outlives the `with` block that opened it.

Write transactions must call commit() explicitly. Leaving the block without
committing (early return or exception) rolls back, so nothing is persisted.

All engine errors surface as StorageError; a read of a table that was never
created raises TableDoesNotExist.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ywkv.core.exceptions import StorageError, TableDoesNotExist
from ywkv.ywkv_logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SEC = 5.0


@contextmanager
def _engine_errors() -> Iterator[None]:
    """Translate sqlite3/OS errors into StorageError, keeping the original text."""
    try:
        yield
    except (sqlite3.Error, OSError) as e:
        raise StorageError(str(e)) from e


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


# -----------------------------------------------------------------------------
# Tables
# -----------------------------------------------------------------------------


class ReadOnlyTable:
    """Point lookups against one table inside an open transaction."""

    def __init__(self, conn: sqlite3.Connection, name: str) -> None:
        self._conn = conn
        self.name = name
        self._ident = _quote_identifier(name)

    def get(self, key: bytes) -> bytes | None:
        with _engine_errors():
            row = self._conn.execute(
                f"SELECT value FROM {self._ident} WHERE key = ?", (key,)
            ).fetchone()
        if row is None:
            return None
        return bytes(row[0])


class Table(ReadOnlyTable):
    """Writable table; only handed out by WriteTransaction."""

    def insert(self, key: bytes, value: bytes) -> bytes | None:
        """Store value under key and return the previous value, or None if the key is new."""
        previous = self.get(key)
        with _engine_errors():
            self._conn.execute(
                f"""
                INSERT INTO {self._ident} (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )
        return previous


# -----------------------------------------------------------------------------
# Transactions
# -----------------------------------------------------------------------------


class _Transaction:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def _table_exists(self, name: str) -> bool:
        with _engine_errors():
            row = self._conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
                (name,),
            ).fetchone()
        return row is not None

    def close(self) -> None:
        """Roll back anything uncommitted and close the connection."""
        try:
            if self._conn.in_transaction:
                self._conn.execute("ROLLBACK")
        except sqlite3.Error as e:
            logger.warning("transaction_rollback_failed", error=str(e))
        finally:
            self._conn.close()


class ReadTransaction(_Transaction):
    """Read-only snapshot of the database."""

    def open_table(self, name: str) -> ReadOnlyTable:
        if not self._table_exists(name):
            raise TableDoesNotExist(name)
        return ReadOnlyTable(self._conn, name)


class WriteTransaction(_Transaction):
    """Single writer; mutations become durable only on commit()."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        super().__init__(conn)
        self.committed = False

    def open_or_create_table(self, name: str) -> Table:
        with _engine_errors():
            self._conn.execute(
                f"CREATE TABLE IF NOT EXISTS {_quote_identifier(name)} "
                "(key BLOB PRIMARY KEY, value BLOB NOT NULL)"
            )
        return Table(self._conn, name)

    def commit(self) -> None:
        with _engine_errors():
            self._conn.execute("COMMIT")
        self.committed = True


# -----------------------------------------------------------------------------
# Abstract backend
# -----------------------------------------------------------------------------


class DatabaseBackend(ABC):
    """Transactional engine behind Database."""

    @abstractmethod
    def ensure_file(self) -> None:
        """Open the database file, creating it if absent. Does not create any table."""
        ...

    @abstractmethod
    def begin_read(self) -> Iterator[ReadTransaction]:
        """Context manager yielding a read transaction; always released on exit."""
        ...

    @abstractmethod
    def begin_write(self) -> Iterator[WriteTransaction]:
        """Context manager yielding a write transaction; rolled back unless committed."""
        ...


# -----------------------------------------------------------------------------
# SQLite backend
# -----------------------------------------------------------------------------


class SQLiteBackend(DatabaseBackend):
    """SQLite implementation; single file, one connection per transaction."""

    def __init__(self, path: str | Path, *, timeout_sec: float = DEFAULT_TIMEOUT_SEC) -> None:
        self._path = Path(path)
        self._timeout_sec = timeout_sec

    def _connect(self) -> sqlite3.Connection:
        with _engine_errors():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # isolation_level=None: transactions are begun and ended explicitly below
            return sqlite3.connect(
                str(self._path),
                timeout=self._timeout_sec,
                isolation_level=None,
                check_same_thread=False,
            )

    def ensure_file(self) -> None:
        conn = self._connect()
        try:
            with _engine_errors():
                conn.execute("PRAGMA journal_mode = WAL")
        finally:
            conn.close()

    @contextmanager
    def begin_read(self) -> Iterator[ReadTransaction]:
        conn = self._connect()
        txn = ReadTransaction(conn)
        try:
            with _engine_errors():
                conn.execute("BEGIN")
            yield txn
        finally:
            txn.close()

    @contextmanager
    def begin_write(self) -> Iterator[WriteTransaction]:
        conn = self._connect()
        txn = WriteTransaction(conn)
        try:
            with _engine_errors():
                conn.execute("BEGIN IMMEDIATE")
            yield txn
        finally:
            if not txn.committed:
                logger.debug("write_transaction_aborted", path=str(self._path))
            txn.close()


# -----------------------------------------------------------------------------
# Facade
# -----------------------------------------------------------------------------


class Database:
    """Entry point for transactions; holds no per-request state."""

    def __init__(self, backend: DatabaseBackend) -> None:
        self._backend = backend

    def begin_read(self):
        return self._backend.begin_read()

    def begin_write(self):
        return self._backend.begin_write()


def get_database(path: str | Path, *, timeout_sec: float = DEFAULT_TIMEOUT_SEC) -> Database:
    """
    Open the database file at path, creating it if it does not exist.

    No table is created here; the first write creates it. Raises StorageError
    when the file cannot be opened or created.
    """
    backend = SQLiteBackend(path, timeout_sec=timeout_sec)
    backend.ensure_file()
    logger.info("database_opened", path=str(path))
    return Database(backend)
