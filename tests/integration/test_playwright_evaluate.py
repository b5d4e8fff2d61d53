"""Integration tests for the evaluate command against a real headless browser.

These run the console-capturing wrapper inside Chromium through
PlaywrightDriver, so the in-page behavior (result value, scoped console
capture, console restore after a throw, page-level console events reaching
the log buffer) is checked end to end.

Prerequisites:
    - Playwright browsers installed (``invoke install-browsers``)

Run with:
    uv run pytest tests/integration/test_playwright_evaluate.py -v
"""

__test__ = True

import asyncio

import pytest
import pytest_asyncio

from playwrightmcp.components.session_manager import SessionError
from playwrightmcp.container import ServiceContainer
from playwrightmcp.domains.resources import LOGS_URI
from playwrightmcp.models.config_models import ServerConfig

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def browser_container():
    container = ServiceContainer(config=ServerConfig(browser_type="chromium", headless=True))
    try:
        await container.session_manager.ensure_session()
    except SessionError as e:
        pytest.skip(f"Chromium not available: {e}")
    try:
        yield container
    finally:
        await container.shutdown()


async def _eventually(predicate, timeout: float = 5.0) -> bool:
    deadline = asyncio.get_running_loop().time() + timeout
    while asyncio.get_running_loop().time() < deadline:
        if predicate():
            return True
        await asyncio.sleep(0.02)
    return predicate()


def _logs(container: ServiceContainer) -> str:
    return container.resources.read(LOGS_URI).text or ""


@pytest.mark.asyncio
async def test_result_and_captured_console_line(browser_container):
    envelope = await browser_container.dispatcher.dispatch(
        "evaluate", {"script": "console.log('hi'); 1+1"}
    )

    assert not envelope.is_error
    assert envelope.text == "Execution result:\n2\n\nConsole output:\n[log] hi"

    # The patched method forwards to the original, so the page event is emitted too
    assert await _eventually(lambda: "[log] hi" in _logs(browser_container))


@pytest.mark.asyncio
async def test_console_restored_after_throw(browser_container):
    failed = await browser_container.dispatcher.dispatch(
        "evaluate", {"script": "throw new Error('bad')"}
    )
    assert failed.is_error
    assert failed.text.startswith("Script execution failed: ")
    assert "bad" in failed.text

    check = await browser_container.dispatcher.dispatch(
        "evaluate",
        {
            "script": "['log', 'info', 'warn', 'error']"
            ".every((m) => console[m].toString().includes('[native code]'))"
        },
    )
    assert not check.is_error
    assert check.text.startswith("Execution result:\ntrue\n")


@pytest.mark.asyncio
async def test_later_page_console_events_reach_log_buffer(browser_container):
    envelope = await browser_container.dispatcher.dispatch(
        "evaluate", {"script": "setTimeout(() => console.warn('later'), 20); 'scheduled'"}
    )

    assert envelope.text == 'Execution result:\n"scheduled"\n\nConsole output:\n'
    assert await _eventually(lambda: "[warning] later" in _logs(browser_container))


@pytest.mark.asyncio
async def test_undefined_and_non_ascii_results(browser_container):
    undefined = await browser_container.dispatcher.dispatch("evaluate", {"script": "void 0"})
    text = await browser_container.dispatcher.dispatch("evaluate", {"script": "'héllo ✓'"})

    assert undefined.text.startswith("Execution result:\nundefined\n")
    assert text.text.startswith('Execution result:\n"héllo ✓"\n')
