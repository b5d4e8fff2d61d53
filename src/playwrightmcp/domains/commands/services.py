"""Command Dispatcher.

Routes a command name plus argument bag to its handler against the shared
browser session and normalizes the outcome into an Envelope.

This is the single error-normalization boundary: nothing raised by session
creation or by a handler escapes ``dispatch``. The dispatcher takes no lock
and performs no retries; the session manager's idempotent creation is the
only synchronized path.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional

from playwrightmcp.adapters.browser_adapter import DriverError

from .catalog import COMMAND_CATALOG
from .handlers import COMMAND_HANDLERS, CommandContext, CommandHandler
from .value_objects import (
    Arguments,
    CommandArgumentError,
    CommandDescriptor,
    Envelope,
)

if TYPE_CHECKING:
    from playwrightmcp.components.session_manager import BrowserSessionManager

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Validates, routes and normalizes command invocations.

    Args:
        session_manager: Provides the lazily created browser session.
        context: Collaborators and defaults handed to every handler.
        catalog: Advertised command descriptors.
        handlers: Handler registry keyed by command name.
    """

    def __init__(
        self,
        session_manager: BrowserSessionManager,
        context: CommandContext,
        catalog: Iterable[CommandDescriptor] = COMMAND_CATALOG,
        handlers: Optional[Mapping[str, CommandHandler]] = None,
    ) -> None:
        self._sessions = session_manager
        self._context = context
        self._catalog: Dict[str, CommandDescriptor] = {d.name: d for d in catalog}
        self._handlers: Mapping[str, CommandHandler] = (
            handlers if handlers is not None else COMMAND_HANDLERS
        )

    @property
    def catalog(self) -> List[CommandDescriptor]:
        return list(self._catalog.values())

    async def dispatch(self, name: str, args: Optional[Arguments] = None) -> Envelope:
        """Run command ``name`` and return its envelope. Never raises."""
        descriptor = self._catalog.get(name)
        handler = self._handlers.get(name)
        if descriptor is None or handler is None:
            logger.debug(f"Rejected unknown command '{name}'")
            return Envelope.failure(f"Unknown tool: {name}")

        arguments = dict(args or {})
        logger.debug("Dispatching %s args=%s", name, sorted(arguments))

        try:
            session = await self._sessions.ensure_session()
        except Exception as e:
            logger.error(f"Browser session unavailable for '{name}': {e}")
            return Envelope.failure(f"Failed to start browser session: {e}")

        try:
            content = await handler.run(session, arguments, self._context)
        except (DriverError, CommandArgumentError) as e:
            logger.warning(f"Command '{name}' failed: {e}")
            return Envelope.failure(handler.describe_failure(arguments, e))
        except Exception as e:
            logger.error(f"Command '{name}' raised unexpectedly", exc_info=True)
            return Envelope.failure(handler.describe_failure(arguments, e))

        return Envelope.success(content)
