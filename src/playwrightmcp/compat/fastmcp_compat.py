"""FastMCP version compatibility layer.

Resources are registered at runtime (one per stored artifact), after the
server has started. This module hides the small differences between fastmcp
releases in how such late registration is done.

Usage in server.py::

    from playwrightmcp.compat.fastmcp_compat import add_function_resource

    add_function_resource(mcp, "artifact://home", reader, name="Screenshot: home",
                          mime_type="image/png")
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

# ── Version detection ─────────────────────────────────────────────

try:
    _version_str = importlib.metadata.version("fastmcp")
except importlib.metadata.PackageNotFoundError:
    _version_str = "0.0.0"

FASTMCP_VERSION: str = _version_str
"""Installed fastmcp version string, e.g. '2.14.7'."""


# ── Runtime resource registration ─────────────────────────────────

def add_function_resource(
    mcp_server: Any,
    uri: str,
    fn: Callable[[], Any],
    *,
    name: str,
    mime_type: str,
) -> None:
    """Register ``fn`` as the reader of a concrete resource ``uri``.

    Uses the public ``@mcp.resource`` decorator, which is available on both
    v2 and v3. ``fn`` must take no parameters.

    Args:
        mcp_server: The FastMCP server instance.
        uri: Concrete resource URI (no template parameters).
        fn: Zero-argument reader returning ``str`` or ``bytes``.
        name: Display name shown in resources/list.
        mime_type: MIME type of the contents.
    """
    mcp_server.resource(uri, name=name, mime_type=mime_type)(fn)
    logger.debug("Registered resource %s (fastmcp %s)", uri, FASTMCP_VERSION)
