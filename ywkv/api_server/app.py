"""
ASGI entrypoint for running under an external uvicorn.

Configuration comes from env (YWKV_TOKEN required):
    uvicorn ywkv.api_server.app:build_app --factory --host 0.0.0.0 --port 9958
"""

from __future__ import annotations

from fastapi import FastAPI

from ywkv.api_server.server import create_app
from ywkv.config import get_settings


def build_app() -> FastAPI:
    return create_app(get_settings())


__all__ = ["build_app"]
