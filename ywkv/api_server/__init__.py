"""
HTTP API: bearer-gated GET/POST on /{key}.

Build the app with create_app(settings); see app.py for the uvicorn entrypoint.
"""

from ywkv.api_server.server import create_app

__all__ = ["create_app"]
