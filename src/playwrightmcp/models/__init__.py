"""Configuration models."""

from .config_models import SUPPORTED_BROWSERS, SUPPORTED_TRANSPORTS, ServerConfig

__all__ = ["SUPPORTED_BROWSERS", "SUPPORTED_TRANSPORTS", "ServerConfig"]
