"""Browser session lifecycle management.

The process owns at most one browser session. It is created lazily by the
first command that needs it, shared by every later command, and closed once
on shutdown. Lifecycle: ``IDLE -> LIVE -> CLOSED``. A failed launch returns
to ``IDLE`` so a later command can retry.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from playwrightmcp.adapters.browser_adapter import (
    BrowserDriver,
    BrowserPage,
    ConsoleMessage,
    DriverFactory,
)
from playwrightmcp.domains.resources import LogEntry, ResourceService

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Raised when the browser session cannot be created."""


class SessionClosedError(SessionError):
    """Raised when a session is requested after teardown."""


class SessionState(Enum):
    IDLE = "idle"
    LIVE = "live"
    CLOSED = "closed"


@dataclass
class BrowserSession:
    """The live automation session handed to command handlers."""

    driver: BrowserDriver
    page: BrowserPage


class BrowserSessionManager:
    """Owns the single browser session.

    Args:
        driver_factory: Builds a fresh, unlaunched driver.
        resources: Receives console lines and emits the logs notification.
    """

    def __init__(self, driver_factory: DriverFactory, resources: ResourceService) -> None:
        self._driver_factory = driver_factory
        self._resources = resources
        self._session: Optional[BrowserSession] = None
        self._state = SessionState.IDLE
        self._lock = asyncio.Lock()
        self.launch_count = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> Optional[BrowserSession]:
        return self._session

    async def ensure_session(self) -> BrowserSession:
        """Return the live session, creating it on first use.

        Concurrent first callers wait on the same creation; exactly one
        launch happens.

        Raises:
            SessionClosedError: The manager was torn down.
            SessionError: Launching the browser failed.
        """
        if self._session is not None:
            return self._session

        async with self._lock:
            if self._session is not None:
                return self._session
            if self._state is SessionState.CLOSED:
                raise SessionClosedError("Browser session has been closed")

            self._session = await self._create_session()
            self._state = SessionState.LIVE
            return self._session

    async def teardown(self) -> None:
        """Close the session if one is live. Safe to call at any time."""
        async with self._lock:
            session = self._session
            self._session = None
            self._state = SessionState.CLOSED
            if session is None:
                return
            try:
                await session.driver.close()
                logger.info("Browser session closed")
            except Exception as e:
                logger.warning(f"Error while closing browser session: {e}")

    async def _create_session(self) -> BrowserSession:
        driver = self._driver_factory()
        self.launch_count += 1
        logger.info("Launching browser session")
        try:
            await driver.launch()
            page = await driver.new_page()
            page.on_console_message(self._on_console_message)
        except Exception as e:
            try:
                await driver.close()
            except Exception:
                logger.debug("Failed to close partially started driver", exc_info=True)
            raise SessionError(str(e)) from e

        logger.info("Browser session ready")
        return BrowserSession(driver=driver, page=page)

    def _on_console_message(self, message: ConsoleMessage) -> None:
        self._resources.append_log(LogEntry(level=message.level, text=message.text))
