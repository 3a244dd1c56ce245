"""
Environment variable loading for ywkv.

- YWKV_HOST: bind address (default: 0.0.0.0)
- YWKV_PORT: listen port (default: 9958)
- YWKV_TABLE_NAME: table holding all entries (default: main)
- YWKV_DB_PATH: database file (default: ywkv.redb)
- YWKV_TOKEN: bearer token, required
- LOG_LEVEL: structlog level filter (default: INFO)
- Loads .env from the current directory when available.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9958
DEFAULT_TABLE_NAME = "main"
DEFAULT_DB_PATH = "ywkv.redb"
DEFAULT_LOG_LEVEL = "INFO"


def load_ywkv_env() -> None:
    """Load .env without overriding variables already set. Safe to call multiple times."""
    load_dotenv(override=False)


def _env(name: str) -> str:
    return (os.getenv(name) or "").strip()


def get_host() -> str:
    return _env("YWKV_HOST") or DEFAULT_HOST


def get_port() -> str:
    """Raw port string; validated in settings."""
    return _env("YWKV_PORT") or str(DEFAULT_PORT)


def get_table_name() -> str:
    return _env("YWKV_TABLE_NAME") or DEFAULT_TABLE_NAME


def get_db_path() -> str:
    return _env("YWKV_DB_PATH") or DEFAULT_DB_PATH


def get_token() -> str:
    """Bearer token from env; empty string when unset."""
    return _env("YWKV_TOKEN")


def get_log_level() -> str:
    return (_env("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
