"""The command catalog advertised to clients.

The catalog is fixed at import time and never grows afterwards.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from .value_objects import ArgumentSpec, CommandDescriptor

NAVIGATE = "navigate"
SCREENSHOT = "screenshot"
CLICK = "click"
FILL = "fill"
SELECT = "select"
HOVER = "hover"
EVALUATE = "evaluate"

DEFAULT_SCREENSHOT_WIDTH = 800
DEFAULT_SCREENSHOT_HEIGHT = 600

COMMAND_CATALOG: Tuple[CommandDescriptor, ...] = (
    CommandDescriptor(
        name=NAVIGATE,
        description="Navigate to a URL",
        arguments=(ArgumentSpec("url", "URL to open", required=True),),
    ),
    CommandDescriptor(
        name=SCREENSHOT,
        description="Take a screenshot of the current page or a specific element",
        arguments=(
            ArgumentSpec("name", "Name for the screenshot", required=True),
            ArgumentSpec("selector", "CSS selector for element to screenshot"),
            ArgumentSpec(
                "width", f"Width in pixels (default: {DEFAULT_SCREENSHOT_WIDTH})"
            ),
            ArgumentSpec(
                "height", f"Height in pixels (default: {DEFAULT_SCREENSHOT_HEIGHT})"
            ),
        ),
    ),
    CommandDescriptor(
        name=CLICK,
        description="Click an element on the page",
        arguments=(
            ArgumentSpec("selector", "CSS selector for element to click", required=True),
        ),
    ),
    CommandDescriptor(
        name=FILL,
        description="Fill out an input field",
        arguments=(
            ArgumentSpec("selector", "CSS selector for input field", required=True),
            ArgumentSpec("value", "Value to fill", required=True),
        ),
    ),
    CommandDescriptor(
        name=SELECT,
        description="Select an element on the page with Select tag",
        arguments=(
            ArgumentSpec("selector", "CSS selector for element to select", required=True),
            ArgumentSpec("value", "Value to select", required=True),
        ),
    ),
    CommandDescriptor(
        name=HOVER,
        description="Hover an element on the page",
        arguments=(
            ArgumentSpec("selector", "CSS selector for element to hover", required=True),
        ),
    ),
    CommandDescriptor(
        name=EVALUATE,
        description="Execute JavaScript in the browser console",
        arguments=(
            ArgumentSpec("script", "JavaScript code to execute", required=True),
        ),
    ),
)

_BY_NAME: Dict[str, CommandDescriptor] = {d.name: d for d in COMMAND_CATALOG}


def get_descriptor(name: str) -> Optional[CommandDescriptor]:
    """Look up a catalog entry by command name."""
    return _BY_NAME.get(name)


def command_names() -> Tuple[str, ...]:
    return tuple(d.name for d in COMMAND_CATALOG)
