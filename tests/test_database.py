"""
Tests for the SQLite table: lazy creation, transaction scope, commit/rollback, snapshots.
"""

from __future__ import annotations

import pytest

from ywkv.core.exceptions import StorageError, TableDoesNotExist
from ywkv.database import get_database


def test_get_database_creates_file_without_table(db_path):
    """Opening a new path creates the file; no table exists until a write."""
    assert not db_path.exists()
    db = get_database(db_path)
    assert db_path.exists()
    with db.begin_read() as txn:
        with pytest.raises(TableDoesNotExist, match="Table 'main' does not exist"):
            txn.open_table("main")


def test_get_database_unopenable_path(tmp_path):
    """A path under a regular file cannot be created; StorageError, not OSError."""
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(StorageError):
        get_database(blocker / "ywkv.redb")


def test_insert_returns_previous_value(db):
    with db.begin_write() as txn:
        table = txn.open_or_create_table("main")
        assert table.insert(b"k", b"v1") is None
        assert table.insert(b"k", b"v2") == b"v1"
        txn.commit()
    with db.begin_read() as txn:
        assert txn.open_table("main").get(b"k") == b"v2"


def test_uncommitted_write_is_discarded(db):
    """Leaving the block without commit() rolls back, including table creation."""
    with db.begin_write() as txn:
        txn.open_or_create_table("main").insert(b"k", b"v")
    with db.begin_read() as txn:
        with pytest.raises(TableDoesNotExist):
            txn.open_table("main")


def test_exception_inside_write_rolls_back(db):
    with db.begin_write() as txn:
        txn.open_or_create_table("main").insert(b"k", b"original")
        txn.commit()

    with pytest.raises(RuntimeError):
        with db.begin_write() as txn:
            txn.open_or_create_table("main").insert(b"k", b"changed")
            raise RuntimeError("boom")

    with db.begin_read() as txn:
        assert txn.open_table("main").get(b"k") == b"original"


def test_read_snapshot_ignores_later_commit(db):
    """A read transaction keeps its snapshot while another writer commits."""
    with db.begin_write() as txn:
        txn.open_or_create_table("main").insert(b"k", b"before")
        txn.commit()

    with db.begin_read() as reader:
        table = reader.open_table("main")
        assert table.get(b"k") == b"before"
        with db.begin_write() as writer:
            writer.open_or_create_table("main").insert(b"k", b"after")
            writer.commit()
        assert table.get(b"k") == b"before"

    with db.begin_read() as txn:
        assert txn.open_table("main").get(b"k") == b"after"


def test_binary_keys_and_values(db):
    key = b"\x00\xffkey"
    value = bytes(range(256))
    with db.begin_write() as txn:
        txn.open_or_create_table("main").insert(key, value)
        txn.commit()
    with db.begin_read() as txn:
        table = txn.open_table("main")
        assert table.get(key) == value
        assert table.get(b"other") is None


def test_table_name_is_quoted(db):
    """Table names are identifiers, not SQL; odd names still work."""
    name = 'we"ird; DROP TABLE x'
    with db.begin_write() as txn:
        txn.open_or_create_table(name).insert(b"k", b"v")
        txn.commit()
    with db.begin_read() as txn:
        assert txn.open_table(name).get(b"k") == b"v"


def test_tables_are_independent(db):
    with db.begin_write() as txn:
        txn.open_or_create_table("a").insert(b"k", b"in-a")
        txn.commit()
    with db.begin_read() as txn:
        with pytest.raises(TableDoesNotExist, match="Table 'b' does not exist"):
            txn.open_table("b")
