"""Browser Driver Adapters - Anti-Corruption Layer.

This package isolates the automation engine behind a small protocol so the
command handlers and the session manager never touch Playwright types.

Key Components:
    BrowserDriver: Protocol for the engine handle (launch, new_page, close)
    BrowserPage: Protocol for page operations (goto, click, evaluate, ...)
    DriverError: The single opaque failure type raised by any driver
    PlaywrightDriver: Playwright-backed implementation

Usage:
    from playwrightmcp.adapters import PlaywrightDriver

    driver = PlaywrightDriver(browser_type="chromium", headless=True)
    await driver.launch()
    page = await driver.new_page()
    await page.goto("https://example.com")
"""

from .browser_adapter import (
    BrowserDriver,
    BrowserPage,
    ConsoleCallback,
    ConsoleMessage,
    DriverError,
    DriverFactory,
)
from .playwright_adapter import PlaywrightDriver, PlaywrightPage

__all__ = [
    "BrowserDriver",
    "BrowserPage",
    "ConsoleCallback",
    "ConsoleMessage",
    "DriverError",
    "DriverFactory",
    "PlaywrightDriver",
    "PlaywrightPage",
]
