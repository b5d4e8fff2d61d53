"""Command Bounded Context.

The fixed catalog of browser commands, their handlers, and the dispatcher
that turns every invocation into a uniform Envelope.
"""

from .catalog import (
    CLICK,
    COMMAND_CATALOG,
    DEFAULT_SCREENSHOT_HEIGHT,
    DEFAULT_SCREENSHOT_WIDTH,
    EVALUATE,
    FILL,
    HOVER,
    NAVIGATE,
    SCREENSHOT,
    SELECT,
    command_names,
    get_descriptor,
)
from .handlers import (
    COMMAND_HANDLERS,
    EVALUATE_WRAPPER,
    CommandContext,
    CommandHandler,
    command_handler,
)
from .services import CommandDispatcher
from .value_objects import (
    ArgumentSpec,
    CommandArgumentError,
    CommandDescriptor,
    ContentItem,
    Envelope,
    ImageItem,
    TextItem,
)

__all__ = [
    "ArgumentSpec",
    "CLICK",
    "COMMAND_CATALOG",
    "COMMAND_HANDLERS",
    "CommandArgumentError",
    "CommandContext",
    "CommandDescriptor",
    "CommandDispatcher",
    "CommandHandler",
    "ContentItem",
    "DEFAULT_SCREENSHOT_HEIGHT",
    "DEFAULT_SCREENSHOT_WIDTH",
    "EVALUATE",
    "EVALUATE_WRAPPER",
    "Envelope",
    "FILL",
    "HOVER",
    "ImageItem",
    "NAVIGATE",
    "SCREENSHOT",
    "SELECT",
    "TextItem",
    "command_handler",
    "command_names",
    "get_descriptor",
]
