"""
Key-value operation layer.

Maps one read or write onto exactly one transaction against the configured
table and classifies the outcome into a Result. Storage errors never escape:
every YwkvError becomes Result.failure(str(exc)).

Reads never create the table, so reading before the first write is a Failure
("Table '<name>' does not exist"), not Missing.
"""

from __future__ import annotations

from ywkv.config import Settings
from ywkv.core.exceptions import YwkvError
from ywkv.database import Database, Result
from ywkv.ywkv_logging import get_logger

logger = get_logger(__name__)

# Keys are opaque bytes; only a prefix goes into logs
_LOG_KEY_PREFIX = 32


def _key_for_log(key: bytes) -> str:
    text = key[:_LOG_KEY_PREFIX].decode("utf-8", errors="replace")
    return text + "..." if len(key) > _LOG_KEY_PREFIX else text


class KeyValueService:
    """read()/write() against a single named table."""

    def __init__(self, db: Database, table_name: str) -> None:
        self._db = db
        self.table_name = table_name

    @classmethod
    def from_settings(cls, db: Database, settings: Settings) -> KeyValueService:
        return cls(db, settings.table_name)

    def read(self, key: bytes) -> Result:
        try:
            with self._db.begin_read() as txn:
                table = txn.open_table(self.table_name)
                value = table.get(key)
        except YwkvError as e:
            logger.warning("kv_operation_failed", op="read", key=_key_for_log(key), error=str(e))
            return Result.failure(str(e))

        result = Result.missing() if value is None else Result.found(value)
        logger.debug("kv_read", key=_key_for_log(key), status=result.status.value)
        return result

    def write(self, key: bytes, value: bytes) -> Result:
        try:
            with self._db.begin_write() as txn:
                table = txn.open_or_create_table(self.table_name)
                previous = table.insert(key, value)
                txn.commit()
        except YwkvError as e:
            logger.warning("kv_operation_failed", op="write", key=_key_for_log(key), error=str(e))
            return Result.failure(str(e))

        result = Result.success_new() if previous is None else Result.success_overwrite(previous)
        logger.debug(
            "kv_write",
            key=_key_for_log(key),
            status=result.status.value,
            value_bytes=len(value),
        )
        return result
