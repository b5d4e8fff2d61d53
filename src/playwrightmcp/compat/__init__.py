"""Compatibility helpers for third-party APIs."""

from .fastmcp_compat import FASTMCP_VERSION, add_function_resource

__all__ = ["FASTMCP_VERSION", "add_function_resource"]
