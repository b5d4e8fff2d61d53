"""Main MCP Server implementation for Playwright browser automation."""

import argparse
import asyncio
import base64
import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any, Dict, List, Optional, Set, Union

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ResourceError, ToolError
from mcp.types import ImageContent, TextContent
from pydantic import AnyUrl, Field

from playwrightmcp import __version__
from playwrightmcp.compat.fastmcp_compat import FASTMCP_VERSION, add_function_resource
from playwrightmcp.components.session_manager import SessionState
from playwrightmcp.container import ServiceContainer
from playwrightmcp.domains.commands import (
    CLICK,
    EVALUATE,
    FILL,
    HOVER,
    NAVIGATE,
    SCREENSHOT,
    SELECT,
    Envelope,
    ImageItem,
    get_descriptor,
)
from playwrightmcp.domains.resources import (
    ARTIFACT_MIME_TYPE,
    ARTIFACT_SCHEME,
    LOGS_DISPLAY_NAME,
    LOGS_MIME_TYPE,
    LOGS_URI,
    NotificationKind,
    ResourceNotFoundError,
    ResourceNotification,
    artifact_uri,
)
from playwrightmcp.models.config_models import (
    SUPPORTED_BROWSERS,
    SUPPORTED_TRANSPORTS,
    ServerConfig,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "Playwright MCP Server"

McpContent = Union[TextContent, ImageContent]


class McpSessionNotifier:
    """Forwards resource notifications to the connected MCP client session.

    The session is bound on every tool call, so console events raised by the
    page between calls still reach the client that drives the browser.
    """

    def __init__(self) -> None:
        self._session: Any = None

    def bind(self, session: Any) -> None:
        self._session = session

    async def __call__(self, notification: ResourceNotification) -> None:
        session = self._session
        if session is None:
            logger.debug(
                "No client session bound, dropping %s notification",
                notification.kind.value,
            )
            return
        if notification.kind is NotificationKind.UPDATED and notification.uri:
            await session.send_resource_updated(AnyUrl(notification.uri))
        else:
            await session.send_resource_list_changed()


def _to_mcp_content(envelope: Envelope) -> List[McpContent]:
    """Convert envelope items to MCP content blocks."""
    content: List[McpContent] = []
    for item in envelope.content:
        if isinstance(item, ImageItem):
            content.append(
                ImageContent(type="image", data=item.data, mimeType=item.mime_type)
            )
        else:
            content.append(TextContent(type="text", text=item.text))
    return content


def _describe(command: str) -> str:
    descriptor = get_descriptor(command)
    return descriptor.description if descriptor else ""


def _arg_doc(command: str, argument: str) -> str:
    descriptor = get_descriptor(command)
    if descriptor is None:
        return ""
    for spec in descriptor.arguments:
        if spec.name == argument:
            return spec.description
    return ""


def create_server(container: ServiceContainer) -> FastMCP:
    """Create a FastMCP server bound to ``container``.

    Every server owns its container: its own browser session, log buffer and
    artifact store. The browser is closed when the server lifespan ends.
    """
    notifier = McpSessionNotifier()
    container.resources.subscribe(notifier)
    registered_artifacts: Set[str] = set()

    @asynccontextmanager
    async def browser_lifespan(server: Any):
        try:
            yield {}
        finally:
            await container.shutdown()

    mcp = FastMCP(SERVER_NAME, version=__version__, lifespan=browser_lifespan)

    def _read_artifact(uri: str) -> bytes:
        try:
            contents = container.resources.read(uri)
        except ResourceNotFoundError as e:
            raise ResourceError(str(e)) from e
        return base64.b64decode(contents.blob or "")

    def _artifact_reader(uri: str):
        def read_artifact() -> bytes:
            return _read_artifact(uri)

        return read_artifact

    def _sync_artifact_resources() -> None:
        for entry in container.resources.list_resources():
            if not entry.uri.startswith(ARTIFACT_SCHEME) or entry.uri in registered_artifacts:
                continue
            # Each name is attempted once; a failed registration is logged, not retried
            registered_artifacts.add(entry.uri)
            try:
                add_function_resource(
                    mcp,
                    entry.uri,
                    _artifact_reader(entry.uri),
                    name=entry.name,
                    mime_type=entry.mime_type,
                )
            except Exception as e:
                logger.warning(f"Could not register resource {entry.uri}: {e}")

    async def _run(ctx: Context, command: str, arguments: Dict[str, Any]) -> List[McpContent]:
        notifier.bind(ctx.session)
        supplied = {key: value for key, value in arguments.items() if value is not None}
        envelope = await container.dispatcher.dispatch(command, supplied)
        if command == SCREENSHOT:
            _sync_artifact_resources()
        if envelope.is_error:
            raise ToolError(envelope.text)
        return _to_mcp_content(envelope)

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    @mcp.resource(LOGS_URI, name=LOGS_DISPLAY_NAME, mime_type=LOGS_MIME_TYPE)
    def console_logs() -> str:
        return container.resources.read(LOGS_URI).text or ""

    @mcp.resource(
        f"{ARTIFACT_SCHEME}{{name}}", name="Screenshot", mime_type=ARTIFACT_MIME_TYPE
    )
    def artifact(name: str) -> bytes:
        return _read_artifact(artifact_uri(name))

    # ------------------------------------------------------------------
    # Tools
    # ------------------------------------------------------------------

    @mcp.tool(name=NAVIGATE, description=_describe(NAVIGATE))
    async def navigate(
        url: Annotated[str, Field(description=_arg_doc(NAVIGATE, "url"))],
        ctx: Context,
    ):
        return await _run(ctx, NAVIGATE, {"url": url})

    @mcp.tool(name=SCREENSHOT, description=_describe(SCREENSHOT))
    async def screenshot(
        name: Annotated[str, Field(description=_arg_doc(SCREENSHOT, "name"))],
        ctx: Context,
        selector: Annotated[
            Optional[str], Field(description=_arg_doc(SCREENSHOT, "selector"))
        ] = None,
        width: Annotated[
            Optional[float], Field(description=_arg_doc(SCREENSHOT, "width"))
        ] = None,
        height: Annotated[
            Optional[float], Field(description=_arg_doc(SCREENSHOT, "height"))
        ] = None,
    ):
        return await _run(
            ctx,
            SCREENSHOT,
            {"name": name, "selector": selector, "width": width, "height": height},
        )

    @mcp.tool(name=CLICK, description=_describe(CLICK))
    async def click(
        selector: Annotated[str, Field(description=_arg_doc(CLICK, "selector"))],
        ctx: Context,
    ):
        return await _run(ctx, CLICK, {"selector": selector})

    @mcp.tool(name=FILL, description=_describe(FILL))
    async def fill(
        selector: Annotated[str, Field(description=_arg_doc(FILL, "selector"))],
        value: Annotated[str, Field(description=_arg_doc(FILL, "value"))],
        ctx: Context,
    ):
        return await _run(ctx, FILL, {"selector": selector, "value": value})

    @mcp.tool(name=SELECT, description=_describe(SELECT))
    async def select(
        selector: Annotated[str, Field(description=_arg_doc(SELECT, "selector"))],
        value: Annotated[str, Field(description=_arg_doc(SELECT, "value"))],
        ctx: Context,
    ):
        return await _run(ctx, SELECT, {"selector": selector, "value": value})

    @mcp.tool(name=HOVER, description=_describe(HOVER))
    async def hover(
        selector: Annotated[str, Field(description=_arg_doc(HOVER, "selector"))],
        ctx: Context,
    ):
        return await _run(ctx, HOVER, {"selector": selector})

    @mcp.tool(name=EVALUATE, description=_describe(EVALUATE))
    async def evaluate(
        script: Annotated[str, Field(description=_arg_doc(EVALUATE, "script"))],
        ctx: Context,
    ):
        return await _run(ctx, EVALUATE, {"script": script})

    return mcp


# Default server, configured from the environment (used by ``fastmcp run``)
container = ServiceContainer(config=ServerConfig.from_env())
mcp = create_server(container)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Playwright MCP server: browser automation over the Model Context Protocol."
    )
    parser.add_argument(
        "--transport",
        dest="transport",
        choices=list(SUPPORTED_TRANSPORTS),
        help="Transport to use for the MCP server (default: stdio).",
    )
    parser.add_argument(
        "--host",
        dest="host",
        help="Host/interface for HTTP transport (default 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        dest="port",
        type=int,
        help="Port for HTTP transport (default 8000).",
    )
    parser.add_argument(
        "--path",
        dest="path",
        help="Path for HTTP/streamable endpoints (default '/').",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Log level for the MCP server (e.g., INFO, DEBUG).",
    )
    parser.add_argument(
        "--browser",
        dest="browser_type",
        choices=list(SUPPORTED_BROWSERS),
        help="Browser engine to launch (default: chromium).",
    )
    parser.add_argument(
        "--headless",
        dest="headless",
        action="store_const",
        const=True,
        help="Launch the browser without a visible window.",
    )
    parser.add_argument(
        "--headed",
        dest="headless",
        action="store_const",
        const=False,
        help="Launch the browser with a visible window (default).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Start the Playwright MCP server."""

    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    config = ServerConfig.from_env().with_overrides(
        transport=args.transport,
        host=args.host,
        port=args.port,
        path=args.path,
        log_level=args.log_level.upper() if args.log_level else None,
        browser_type=args.browser_type,
        headless=args.headless,
    )

    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))
    logger.debug("Effective configuration: %s", config.to_dict())

    errors = config.validate()
    if errors:
        parser.error("; ".join(errors))

    server_container = ServiceContainer(config=config)
    server = create_server(server_container)

    logger.info(
        "Starting %s (transport=%s, browser=%s, headless=%s, fastmcp %s)",
        SERVER_NAME,
        config.transport,
        config.browser_type,
        config.headless,
        FASTMCP_VERSION,
    )

    try:
        run_kwargs: Dict[str, Any] = {"transport": config.transport}

        # log_level is accepted by both stdio and http
        if args.log_level:
            run_kwargs["log_level"] = config.log_level

        # Only pass host/port/path when using HTTP/SSE transports
        if config.transport != "stdio":
            if config.host:
                run_kwargs["host"] = config.host
            if config.port:
                run_kwargs["port"] = config.port
            if config.path:
                run_kwargs["path"] = config.path

        server.run(**run_kwargs)
    except KeyboardInterrupt:
        logger.info("Playwright MCP server interrupted by user")
    finally:
        if server_container.session_manager.state is SessionState.LIVE:
            try:
                asyncio.run(server_container.shutdown())
            except Exception:
                logger.debug("Failed to close browser session on shutdown", exc_info=True)


if __name__ == "__main__":
    main()
