"""Dependency Injection Container for playwright-mcp.

This container wires the bounded contexts together for one server:
- Resource Context: log buffer, artifact store, notifications
- Session management: the single lazily created browser session
- Command Context: the dispatcher and its handler context

Usage:
    from playwrightmcp.container import ServiceContainer

    container = ServiceContainer(config=ServerConfig.from_env())
    envelope = await container.dispatcher.dispatch("navigate", {"url": url})
    await container.shutdown()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from playwrightmcp.adapters.browser_adapter import BrowserDriver, DriverFactory
from playwrightmcp.components.session_manager import BrowserSessionManager
from playwrightmcp.domains.commands import CommandContext, CommandDispatcher
from playwrightmcp.domains.resources import ResourceService
from playwrightmcp.models.config_models import ServerConfig

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Owns every stateful service of one server instance.

    Attributes:
        config: Server configuration.
        driver_factory: Builds the browser driver; defaults to Playwright.
    """

    config: ServerConfig = field(default_factory=ServerConfig)
    driver_factory: Optional[DriverFactory] = None

    _resources: Optional[ResourceService] = field(default=None, repr=False)
    _session_manager: Optional[BrowserSessionManager] = field(default=None, repr=False)
    _dispatcher: Optional[CommandDispatcher] = field(default=None, repr=False)

    @property
    def resources(self) -> ResourceService:
        """Get the resource service (log buffer and artifact store)."""
        if self._resources is None:
            self._resources = ResourceService()
        return self._resources

    @property
    def session_manager(self) -> BrowserSessionManager:
        """Get the browser session manager."""
        if self._session_manager is None:
            factory = self.driver_factory or self._default_driver_factory
            self._session_manager = BrowserSessionManager(factory, self.resources)
        return self._session_manager

    @property
    def dispatcher(self) -> CommandDispatcher:
        """Get the command dispatcher."""
        if self._dispatcher is None:
            context = CommandContext(
                resources=self.resources,
                default_width=self.config.default_width,
                default_height=self.config.default_height,
            )
            self._dispatcher = CommandDispatcher(self.session_manager, context)
        return self._dispatcher

    async def shutdown(self) -> None:
        """Close the browser session and flush pending notifications."""
        if self._session_manager is not None:
            await self._session_manager.teardown()
        if self._resources is not None:
            await self._resources.wait_for_deliveries()
        logger.debug("Service container shut down")

    def _default_driver_factory(self) -> BrowserDriver:
        from playwrightmcp.adapters.playwright_adapter import PlaywrightDriver

        return PlaywrightDriver(
            browser_type=self.config.browser_type, headless=self.config.headless
        )
