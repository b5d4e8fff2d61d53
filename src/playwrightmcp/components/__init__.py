"""Stateful components shared by the command handlers."""

from .session_manager import (
    BrowserSession,
    BrowserSessionManager,
    SessionClosedError,
    SessionError,
    SessionState,
)

__all__ = [
    "BrowserSession",
    "BrowserSessionManager",
    "SessionClosedError",
    "SessionError",
    "SessionState",
]
