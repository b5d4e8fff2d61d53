"""Domain-Driven Design bounded contexts for playwright-mcp.

This package contains:
- Command Context (``domains.commands``): catalog, handlers and dispatcher
- Resource Context (``domains.resources``): log buffer, artifact store and
  change notifications
"""
