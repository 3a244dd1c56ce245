"""
Main entrypoint: parse CLI/env configuration, open the database, serve the API.

    ywkv <token> [--port 9958] [--table-name main] [--db-file-name ywkv.redb] [--host 0.0.0.0]

Each option falls back to its env var (YWKV_TOKEN, YWKV_PORT, YWKV_TABLE_NAME,
YWKV_DB_PATH, YWKV_HOST) and then to the default. The server binds 0.0.0.0 by
default; TLS, if needed, is terminated in front of it.
"""

from __future__ import annotations

import argparse
import sys

from ywkv import __version__
from ywkv.core.exceptions import ConfigError, StorageError
from ywkv.ywkv_logging import get_logger
from ywkv.ywkv_logging.logger import set_log_level

logger = get_logger("ywkv.main")

EXIT_CONFIG_ERROR = 2
EXIT_STORAGE_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ywkv",
        description="Single-table key-value server with bearer-token auth.",
    )
    parser.add_argument("token", nargs="?", default=None, help="Bearer token clients must present (or set YWKV_TOKEN)")
    parser.add_argument("--port", default=None, help="Listen port (default 9958, env YWKV_PORT)")
    parser.add_argument("--table-name", default=None, help="Table name (default main, env YWKV_TABLE_NAME)")
    parser.add_argument("--db-file-name", default=None, help="Database file (default ywkv.redb, env YWKV_DB_PATH)")
    parser.add_argument("--host", default=None, help="Bind address (default 0.0.0.0, env YWKV_HOST)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Build settings, open the database and run uvicorn in the main thread."""
    from ywkv.config import get_settings

    args = build_parser().parse_args(argv)
    try:
        settings = get_settings(
            token=args.token,
            host=args.host,
            port=args.port,
            table_name=args.table_name,
            db_path=args.db_file_name,
        )
    except ConfigError as e:
        logger.error("main_config_error", message=str(e))
        return EXIT_CONFIG_ERROR

    set_log_level(settings.log_level)

    from ywkv.api_server import create_app

    try:
        app = create_app(settings)
    except StorageError as e:
        logger.error("main_database_error", db_path=str(settings.db_path), error=str(e))
        return EXIT_STORAGE_ERROR

    import uvicorn

    logger.info("server_starting", host=settings.host, port=settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
