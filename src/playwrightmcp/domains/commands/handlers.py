"""Command handlers.

Each handler receives the live browser session, the argument bag and the
shared CommandContext, and returns the content items of a successful result.
Handlers simply raise on failure; the dispatcher turns any exception into an
error envelope using the handler's failure prefix.
"""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, List, Mapping, Optional

from playwrightmcp.adapters.browser_adapter import DriverError
from playwrightmcp.domains.resources import ARTIFACT_MIME_TYPE, ResourceService

from .catalog import (
    CLICK,
    DEFAULT_SCREENSHOT_HEIGHT,
    DEFAULT_SCREENSHOT_WIDTH,
    EVALUATE,
    FILL,
    HOVER,
    NAVIGATE,
    SCREENSHOT,
    SELECT,
)
from .value_objects import (
    Arguments,
    CommandArgumentError,
    ContentItem,
    ImageItem,
    TextItem,
)

if TYPE_CHECKING:
    from playwrightmcp.components.session_manager import BrowserSession

logger = logging.getLogger(__name__)

# Console methods are patched only for the duration of one evaluation and
# forwarded to the originals, so page-level console events are still emitted.
EVALUATE_WRAPPER = """
(script) => {
  const logs = [];
  const methods = ["log", "info", "warn", "error"];
  const original = {};
  for (const method of methods) {
    original[method] = console[method];
    console[method] = (...args) => {
      logs.push(`[${method}] ${args.join(" ")}`);
      original[method].apply(console, args);
    };
  }
  try {
    const result = eval(script);
    return { result, logs, isUndefined: result === undefined };
  } finally {
    for (const method of methods) {
      console[method] = original[method];
    }
  }
}
"""


@dataclass
class CommandContext:
    """Collaborators and defaults shared by all handlers."""

    resources: ResourceService
    default_width: int = DEFAULT_SCREENSHOT_WIDTH
    default_height: int = DEFAULT_SCREENSHOT_HEIGHT


HandlerFn = Callable[["BrowserSession", Arguments, CommandContext], Awaitable[List[ContentItem]]]


class _MissingAsEmpty(dict):
    def __missing__(self, key: str) -> str:
        return ""


@dataclass(frozen=True)
class CommandHandler:
    """A handler function bound to its failure message prefix."""

    name: str
    fn: HandlerFn
    failure_prefix: str

    async def run(
        self, session: BrowserSession, args: Arguments, context: CommandContext
    ) -> List[ContentItem]:
        return await self.fn(session, args, context)

    def describe_failure(self, args: Arguments, error: BaseException) -> str:
        """Render the failure text for ``error`` raised with ``args``."""
        prefix = self.failure_prefix.format_map(_MissingAsEmpty(args))
        message = error.message if isinstance(error, DriverError) else str(error)
        return f"{prefix}: {message}"


COMMAND_HANDLERS: Dict[str, CommandHandler] = {}


def command_handler(name: str, failure: str) -> Callable[[HandlerFn], HandlerFn]:
    """Register the decorated coroutine as the handler for ``name``."""

    def decorator(fn: HandlerFn) -> HandlerFn:
        COMMAND_HANDLERS[name] = CommandHandler(name=name, fn=fn, failure_prefix=failure)
        return fn

    return decorator


# ----------------------------------------------------------------------
# Argument helpers
# ----------------------------------------------------------------------


def _require_str(args: Arguments, key: str) -> str:
    value = args.get(key)
    if value is None:
        raise CommandArgumentError(f"Missing required argument: {key}")
    return value if isinstance(value, str) else str(value)


def _optional_str(args: Arguments, key: str) -> Optional[str]:
    value = args.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _dimension(args: Mapping[str, Any], key: str, default: int) -> int:
    """Read a pixel dimension; absent or malformed values use ``default``.

    A present zero is kept as given.
    """
    value = args.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.debug(f"Ignoring malformed {key}={value!r}, using {default}")
        return default
    return int(value)


# ----------------------------------------------------------------------
# Handlers
# ----------------------------------------------------------------------


@command_handler(NAVIGATE, failure="Failed to navigate to {url}")
async def navigate(
    session: BrowserSession, args: Arguments, context: CommandContext
) -> List[ContentItem]:
    url = _require_str(args, "url")
    await session.page.goto(url)
    return [TextItem(f"Navigated to {url}")]


@command_handler(SCREENSHOT, failure="Failed to take screenshot '{name}'")
async def screenshot(
    session: BrowserSession, args: Arguments, context: CommandContext
) -> List[ContentItem]:
    name = _require_str(args, "name")
    selector = _optional_str(args, "selector")
    width = _dimension(args, "width", context.default_width)
    height = _dimension(args, "height", context.default_height)

    await session.page.set_viewport(width, height)
    image = await session.page.screenshot(selector)
    payload = base64.b64encode(image).decode("ascii")
    context.resources.store_artifact(name, payload)

    return [
        TextItem(f"Screenshot '{name}' taken at {width}x{height}"),
        ImageItem(data=payload, mime_type=ARTIFACT_MIME_TYPE),
    ]


@command_handler(CLICK, failure="Failed to click {selector}")
async def click(
    session: BrowserSession, args: Arguments, context: CommandContext
) -> List[ContentItem]:
    selector = _require_str(args, "selector")
    await session.page.click(selector)
    return [TextItem(f"Clicked: {selector}")]


@command_handler(FILL, failure="Failed to fill {selector}")
async def fill(
    session: BrowserSession, args: Arguments, context: CommandContext
) -> List[ContentItem]:
    selector = _require_str(args, "selector")
    value = _require_str(args, "value")
    await session.page.fill(selector, value)
    return [TextItem(f"Filled {selector} with: {value}")]


@command_handler(SELECT, failure="Failed to select {selector}")
async def select(
    session: BrowserSession, args: Arguments, context: CommandContext
) -> List[ContentItem]:
    selector = _require_str(args, "selector")
    value = _require_str(args, "value")
    await session.page.select_option(selector, value)
    return [TextItem(f"Selected {selector} with: {value}")]


@command_handler(HOVER, failure="Failed to hover {selector}")
async def hover(
    session: BrowserSession, args: Arguments, context: CommandContext
) -> List[ContentItem]:
    selector = _require_str(args, "selector")
    await session.page.hover(selector)
    return [TextItem(f"Hovered {selector}")]


@command_handler(EVALUATE, failure="Script execution failed")
async def evaluate(
    session: BrowserSession, args: Arguments, context: CommandContext
) -> List[ContentItem]:
    script = _require_str(args, "script")
    outcome = await session.page.evaluate(EVALUATE_WRAPPER, script)
    if not isinstance(outcome, dict):
        outcome = {"result": outcome, "logs": []}

    if outcome.get("isUndefined"):
        result_text = "undefined"
    else:
        result_text = json.dumps(
            outcome.get("result"), indent=2, ensure_ascii=False, default=str
        )
    logs = "\n".join(str(line) for line in outcome.get("logs") or [])
    return [TextItem(f"Execution result:\n{result_text}\n\nConsole output:\n{logs}")]
