"""
Configuration for the ywkv server.

Settings are loaded once at startup from environment variables (and an
optional .env file), overridden by CLI arguments, and passed explicitly to the
app factory and the operation layer.
"""

from ywkv.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
