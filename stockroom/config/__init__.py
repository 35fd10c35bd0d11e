"""Configuration module."""

from stockroom.config.logging import bind_request_context, configure_logging, get_logger
from stockroom.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "bind_request_context",
    "configure_logging",
    "get_logger",
]
