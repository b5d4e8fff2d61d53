"""Configuration data models."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "PLAYWRIGHTMCP_"

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")
SUPPORTED_TRANSPORTS = ("stdio", "http", "sse")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ServerConfig:
    """Runtime settings for the MCP server and its browser session."""

    # Browser settings
    browser_type: str = "chromium"
    headless: bool = False

    # Screenshot viewport used when a command omits width/height
    default_width: int = 800
    default_height: int = 600

    # Transport settings (host/port/path only apply to http and sse)
    transport: str = "stdio"
    host: Optional[str] = None
    port: Optional[int] = None
    path: Optional[str] = None

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """Build a configuration from ``PLAYWRIGHTMCP_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            ServerConfig with environment values applied over the defaults.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def _get(name: str) -> Optional[str]:
            value = env.get(f"{ENV_PREFIX}{name}")
            if value is None:
                return None
            value = value.strip()
            return value or None

        port = _get("PORT")
        return cls(
            browser_type=(_get("BROWSER") or defaults.browser_type).lower(),
            headless=_parse_bool(_get("HEADLESS"), defaults.headless, "HEADLESS"),
            default_width=_parse_int(_get("DEFAULT_WIDTH"), defaults.default_width, "DEFAULT_WIDTH"),
            default_height=_parse_int(
                _get("DEFAULT_HEIGHT"), defaults.default_height, "DEFAULT_HEIGHT"
            ),
            transport=(_get("TRANSPORT") or defaults.transport).lower(),
            host=_get("HOST"),
            port=_parse_int(port, None, "PORT") if port else None,
            path=_get("PATH"),
            log_level=(_get("LOG_LEVEL") or defaults.log_level).upper(),
        )

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "ServerConfig":
        """Create configuration from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in config.items() if key in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def with_overrides(self, **overrides: Any) -> "ServerConfig":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        for key in overrides:
            if key not in known:
                raise ValueError(f"Unknown configuration key: {key}")
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self

    def validate(self) -> List[str]:
        """Validate configuration values and return any errors."""
        errors = []

        if self.browser_type not in SUPPORTED_BROWSERS:
            errors.append(
                f"browser_type must be one of {', '.join(SUPPORTED_BROWSERS)}"
            )

        if self.transport not in SUPPORTED_TRANSPORTS:
            errors.append(
                f"transport must be one of {', '.join(SUPPORTED_TRANSPORTS)}"
            )

        if self.default_width <= 0:
            errors.append("default_width must be positive")

        if self.default_height <= 0:
            errors.append("default_height must be positive")

        if self.port is not None and not 0 < self.port < 65536:
            errors.append("port must be between 1 and 65535")

        return errors


def _parse_bool(raw: Optional[str], default: bool, name: str) -> bool:
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    logger.warning("Invalid %s%s=%r, using %s", ENV_PREFIX, name, raw, default)
    return default


def _parse_int(raw: Optional[str], default: Optional[int], name: str) -> Optional[int]:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid %s%s=%r, using %s", ENV_PREFIX, name, raw, default)
        return default
