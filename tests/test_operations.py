"""
Tests for the operation layer: status classification and storage-error handling.
"""

from __future__ import annotations

from ywkv.core.exceptions import StorageError
from ywkv.database import Result, SQLiteBackend, Status, Table, WriteTransaction
from ywkv.operations import KeyValueService


def test_read_before_any_write_is_failure(service):
    result = service.read(b"anything")
    assert result.status is Status.FAILURE
    assert result.value == b"Table 'main' does not exist"
    assert result.http_status == 500


def test_failure_message_names_configured_table(db):
    service = KeyValueService(db, "custom")
    result = service.read(b"k")
    assert result == Result.failure("Table 'custom' does not exist")


def test_write_then_read(service):
    assert service.write(b"hello", b"world") == Result(b"", Status.SUCCESS_NEW)
    assert service.read(b"hello") == Result(b"world", Status.FOUND)


def test_overwrite_returns_previous_value(service):
    service.write(b"k", b"v1")
    result = service.write(b"k", b"v2")
    assert result.status is Status.SUCCESS_OVERWRITE
    assert result.value == b"v1"
    assert service.read(b"k").value == b"v2"


def test_missing_key_in_existing_table(service):
    service.write(b"present", b"x")
    result = service.read(b"absent")
    assert result == Result(b"", Status.MISSING)
    assert result.http_status == 404


def test_repeated_reads_are_identical(service):
    service.write(b"k", b"v")
    first = service.read(b"k")
    assert all(service.read(b"k") == first for _ in range(5))
    missing = service.read(b"nope")
    assert service.read(b"nope") == missing


def test_insert_error_becomes_failure(service, monkeypatch):
    def broken_insert(self, key, value):
        raise StorageError("disk I/O error")

    monkeypatch.setattr(Table, "insert", broken_insert)
    result = service.write(b"k", b"v")
    assert result == Result.failure("disk I/O error")


def test_commit_failure_is_not_success(service, monkeypatch):
    """A failed commit reports Failure and leaves nothing behind."""
    service.write(b"k", b"old")

    def broken_commit(self):
        raise StorageError("database is locked")

    with monkeypatch.context() as m:
        m.setattr(WriteTransaction, "commit", broken_commit)
        result = service.write(b"k", b"new")
    assert result.status is Status.FAILURE
    assert result.value == b"database is locked"
    assert service.read(b"k").value == b"old"


def test_commit_failure_on_first_write_leaves_no_table(service, monkeypatch):
    def broken_commit(self):
        raise StorageError("database is locked")

    with monkeypatch.context() as m:
        m.setattr(WriteTransaction, "commit", broken_commit)
        assert service.write(b"k", b"v").status is Status.FAILURE
    assert service.read(b"k") == Result.failure("Table 'main' does not exist")


def test_connect_error_becomes_failure(service, monkeypatch):
    def broken_connect(self):
        raise StorageError("unable to open database file")

    monkeypatch.setattr(SQLiteBackend, "_connect", broken_connect)
    assert service.read(b"k") == Result.failure("unable to open database file")
    assert service.write(b"k", b"v") == Result.failure("unable to open database file")



def test_status_http_codes():
    assert {s.value: s.http_status for s in Status} == {
        "Found": 200,
        "Missing": 404,
        "SuccessNew": 200,
        "SuccessOverwrite": 200,
        "Failure": 500,
    }
