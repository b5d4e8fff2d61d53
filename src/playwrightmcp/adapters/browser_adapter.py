"""Browser Driver Protocol - Anti-Corruption Layer.

This module defines the protocol (interface) for the automation engine that
performs the actual browser work. The rest of playwright-mcp only talks to
these protocols, never to Playwright directly.

The Anti-Corruption Layer pattern ensures that:
1. Command handlers don't depend on engine-specific types or error classes
2. Every engine failure is reduced to a single opaque ``DriverError``
3. Testing can use in-memory fake drivers for isolation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class DriverError(Exception):
    """Raised when the automation engine rejects an operation.

    The message is human readable and is passed through to clients as-is.
    Callers must not inspect anything beyond the message.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class ConsoleMessage:
    """A console event emitted by the page."""

    level: str
    text: str


ConsoleCallback = Callable[[ConsoleMessage], None]


@runtime_checkable
class BrowserPage(Protocol):
    """Operations available on the single active page."""

    async def goto(self, url: str) -> None:
        """Navigate the page to ``url``."""
        ...

    async def set_viewport(self, width: int, height: int) -> None:
        """Resize the viewport."""
        ...

    async def screenshot(self, selector: Optional[str] = None) -> bytes:
        """Capture a PNG of the element matching ``selector`` or the full page."""
        ...

    async def click(self, selector: str) -> None:
        ...

    async def fill(self, selector: str, value: str) -> None:
        ...

    async def select_option(self, selector: str, value: str) -> None:
        ...

    async def hover(self, selector: str) -> None:
        ...

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        """Evaluate a JavaScript function expression in the page with ``arg``."""
        ...

    def on_console_message(self, callback: ConsoleCallback) -> None:
        """Register ``callback`` for every console event of the page."""
        ...


@runtime_checkable
class BrowserDriver(Protocol):
    """Engine handle: owns the browser process and its context."""

    async def launch(self) -> None:
        """Start the browser process."""
        ...

    async def new_page(self) -> BrowserPage:
        """Create a browser context and a page inside it."""
        ...

    async def close(self) -> None:
        """Close the browser and release the engine. Safe to call twice."""
        ...


DriverFactory = Callable[[], BrowserDriver]
