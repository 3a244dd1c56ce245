"""
Structured logging for ywkv.

JSON logs with timestamp, level, event_type and request context.
Use get_logger() in every module.
"""

from ywkv.ywkv_logging.logger import get_logger

__all__ = ["get_logger"]
