"""Playwright Driver Adapter.

This module implements the BrowserDriver/BrowserPage protocols on top of
Playwright's async API. It is the only module that imports Playwright.

Every ``playwright.async_api.Error`` (selector timeouts, navigation failures,
exceptions thrown by evaluated scripts) is translated into ``DriverError`` so
command handlers see a single opaque failure type.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from playwrightmcp.models.config_models import SUPPORTED_BROWSERS

from .browser_adapter import ConsoleCallback, ConsoleMessage, DriverError

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors() -> Iterator[None]:
    """Re-raise engine errors as DriverError."""
    try:
        yield
    except PlaywrightError as e:
        raise DriverError(e.message or str(e)) from e


class PlaywrightPage:
    """BrowserPage backed by a Playwright ``Page``."""

    def __init__(self, page: Page) -> None:
        self._page = page

    async def goto(self, url: str) -> None:
        with _translate_errors():
            await self._page.goto(url)

    async def set_viewport(self, width: int, height: int) -> None:
        with _translate_errors():
            await self._page.set_viewport_size({"width": width, "height": height})

    async def screenshot(self, selector: Optional[str] = None) -> bytes:
        with _translate_errors():
            if selector:
                return await self._page.locator(selector).screenshot()
            return await self._page.screenshot()

    async def click(self, selector: str) -> None:
        with _translate_errors():
            await self._page.click(selector)

    async def fill(self, selector: str, value: str) -> None:
        with _translate_errors():
            await self._page.fill(selector, value)

    async def select_option(self, selector: str, value: str) -> None:
        with _translate_errors():
            await self._page.select_option(selector, value)

    async def hover(self, selector: str) -> None:
        with _translate_errors():
            await self._page.hover(selector)

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        with _translate_errors():
            return await self._page.evaluate(expression, arg)

    def on_console_message(self, callback: ConsoleCallback) -> None:
        def _on_console(msg: Any) -> None:
            callback(ConsoleMessage(level=msg.type, text=msg.text))

        self._page.on("console", _on_console)


class PlaywrightDriver:
    """BrowserDriver that launches a local Playwright browser.

    Args:
        browser_type: One of ``chromium``, ``firefox`` or ``webkit``.
        headless: Launch without a visible window.
    """

    def __init__(self, browser_type: str = "chromium", headless: bool = False) -> None:
        if browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(f"Unsupported browser type: {browser_type}")
        self.browser_type = browser_type
        self.headless = headless
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    async def launch(self) -> None:
        with _translate_errors():
            self._playwright = await async_playwright().start()
            launcher = getattr(self._playwright, self.browser_type)
            self._browser = await launcher.launch(headless=self.headless)
        logger.info(
            "Browser launched type=%s headless=%s", self.browser_type, self.headless
        )

    async def new_page(self) -> PlaywrightPage:
        if self._browser is None:
            raise DriverError("Browser is not launched")
        with _translate_errors():
            self._context = await self._browser.new_context()
            page = await self._context.new_page()
        return PlaywrightPage(page)

    async def close(self) -> None:
        context, browser, playwright = self._context, self._browser, self._playwright
        self._context = None
        self._browser = None
        self._playwright = None

        with _translate_errors():
            try:
                if context is not None:
                    await context.close()
            finally:
                try:
                    if browser is not None:
                        await browser.close()
                finally:
                    if playwright is not None:
                        await playwright.stop()
