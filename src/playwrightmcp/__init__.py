"""Playwright MCP Server - browser automation commands and resources over MCP."""

__version__ = "0.1.0"
