"""
Application settings.

Settings is immutable and built once by get_settings(); callers pass it by
reference instead of reading globals.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ywkv.config import env
from ywkv.core.exceptions import ConfigError


@dataclass(frozen=True)
class Settings:
    """Process configuration for the server."""

    token: str
    """Single shared bearer secret; every request must present it."""
    host: str = env.DEFAULT_HOST
    port: int = env.DEFAULT_PORT
    table_name: str = env.DEFAULT_TABLE_NAME
    db_path: Path = Path(env.DEFAULT_DB_PATH)
    log_level: str = env.DEFAULT_LOG_LEVEL

    def __repr__(self) -> str:
        # keep the token out of logs and tracebacks
        return (
            f"Settings(host={self.host!r}, port={self.port}, table_name={self.table_name!r}, "
            f"db_path={str(self.db_path)!r}, log_level={self.log_level!r}, token='***')"
        )


# Names both set_log_level() and uvicorn accept; WARN is an alias
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    level = _LOG_LEVEL_ALIASES.get(level, level)
    if level not in LOG_LEVELS:
        raise ConfigError(f"Invalid log level {raw!r}; expected one of {', '.join(LOG_LEVELS)}")
    return level


def _parse_port(raw: Any) -> int:
    try:
        port = int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid port {raw!r}") from e
    if not 1 <= port <= 65535:
        raise ConfigError(f"Port out of range: {port}")
    return port


def get_settings(
    *,
    token: str | None = None,
    host: str | None = None,
    port: int | str | None = None,
    table_name: str | None = None,
    db_path: str | Path | None = None,
    log_level: str | None = None,
) -> Settings:
    """
    Build Settings from env (and .env), with explicit arguments taking precedence.

    Raises ConfigError if the token or table name is empty, or the port or log level is invalid.
    """
    env.load_ywkv_env()

    token = (token if token is not None else env.get_token()).strip()
    if not token:
        raise ConfigError("A bearer token is required (pass it as an argument or set YWKV_TOKEN)")

    table_name = (table_name if table_name is not None else env.get_table_name()).strip()
    if not table_name:
        raise ConfigError("Table name must be non-empty")

    return Settings(
        token=token,
        host=(host or env.get_host()).strip(),
        port=_parse_port(port if port is not None else env.get_port()),
        table_name=table_name,
        db_path=Path(db_path if db_path is not None else env.get_db_path()),
        log_level=_parse_log_level(log_level or env.get_log_level()),
    )
