"""
Pytest fixtures for ywkv tests. Every test gets a fresh database file under tmp_path.
"""

from __future__ import annotations

import pytest

TEST_TOKEN = "test-secret-token"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop YWKV_* env vars so settings come only from the test."""
    for name in ("YWKV_TOKEN", "YWKV_PORT", "YWKV_TABLE_NAME", "YWKV_DB_PATH", "YWKV_HOST", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_log_level():
    """main() sets the process-wide log threshold; put it back after each test."""
    from ywkv.ywkv_logging import logger as logger_module

    saved = logger_module._min_level
    yield
    logger_module._min_level = saved


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "ywkv.redb"


@pytest.fixture
def db(db_path):
    from ywkv.database import get_database

    return get_database(db_path)


@pytest.fixture
def settings(db_path):
    from ywkv.config import get_settings

    return get_settings(token=TEST_TOKEN, db_path=db_path)


@pytest.fixture
def service(db, settings):
    from ywkv.operations import KeyValueService

    return KeyValueService.from_settings(db, settings)


@pytest.fixture
def client(settings, db):
    """FastAPI TestClient over a fresh database; runs the app lifespan."""
    from fastapi.testclient import TestClient

    from ywkv.api_server import create_app

    with TestClient(create_app(settings, db=db)) as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {TEST_TOKEN}"}
