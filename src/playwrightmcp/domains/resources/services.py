"""Resource Protocol Adapter.

Answers "list resources" and "read resource" queries against the log buffer
and the artifact store, and fans change notifications out to subscribers.

Listing and reading are pure functions of the registries at call time; no
resolved content is cached here. Notification delivery is fire-and-forget:
each subscriber call runs as its own asyncio task, failures are logged and
never retried.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Set

from .events import ResourceNotification
from .repository import ArtifactStore, LogBuffer
from .value_objects import (
    ARTIFACT_MIME_TYPE,
    LOGS_MIME_TYPE,
    LOGS_URI,
    LogEntry,
    NotificationKind,
    ResourceContents,
    ResourceDescriptor,
    ResourceNotFoundError,
    artifact_uri,
    parse_artifact_name,
)

logger = logging.getLogger(__name__)

NotificationSubscriber = Callable[[ResourceNotification], Awaitable[None]]

LOGS_DISPLAY_NAME = "Browser console logs"


class ResourceService:
    """Read access and change notifications for the resource registries.

    Args:
        log_buffer: The console log registry.
        artifact_store: The named artifact registry.
    """

    def __init__(
        self,
        log_buffer: Optional[LogBuffer] = None,
        artifact_store: Optional[ArtifactStore] = None,
    ) -> None:
        self.log_buffer = log_buffer if log_buffer is not None else LogBuffer()
        self.artifact_store = (
            artifact_store if artifact_store is not None else ArtifactStore()
        )
        self._subscribers: List[NotificationSubscriber] = []
        self._pending: Set["asyncio.Task[None]"] = set()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_resources(self) -> List[ResourceDescriptor]:
        """List the logs resource first, then one entry per stored artifact."""
        resources = [
            ResourceDescriptor(
                uri=LOGS_URI, mime_type=LOGS_MIME_TYPE, name=LOGS_DISPLAY_NAME
            )
        ]
        for name in self.artifact_store.names():
            resources.append(
                ResourceDescriptor(
                    uri=artifact_uri(name),
                    mime_type=ARTIFACT_MIME_TYPE,
                    name=f"Screenshot: {name}",
                )
            )
        return resources

    def read(self, uri: str) -> ResourceContents:
        """Resolve ``uri`` against the current registry state.

        Raises:
            ResourceNotFoundError: Unknown scheme or missing artifact name.
        """
        if uri == LOGS_URI:
            return ResourceContents(
                uri=uri, mime_type=LOGS_MIME_TYPE, text=self.log_buffer.render()
            )

        name = parse_artifact_name(uri)
        if name is not None:
            artifact = self.artifact_store.get(name)
            if artifact is not None:
                return ResourceContents(
                    uri=uri, mime_type=ARTIFACT_MIME_TYPE, blob=artifact.payload
                )

        raise ResourceNotFoundError(uri)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def append_log(self, entry: LogEntry) -> None:
        """Record a console line and announce the logs resource changed."""
        self.log_buffer.append(entry)
        self.notify(NotificationKind.UPDATED, LOGS_URI)

    def store_artifact(self, name: str, payload: str) -> bool:
        """Store an artifact and announce the resource list changed.

        Returns:
            True if the artifact name is new.
        """
        is_new = self.artifact_store.put(name, payload)
        self.notify(NotificationKind.LIST_CHANGED)
        return is_new

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, subscriber: NotificationSubscriber) -> Callable[[], None]:
        """Register ``subscriber``; returns a callable that unsubscribes it."""
        self._subscribers.append(subscriber)

        def _unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return _unsubscribe

    def notify(self, kind: NotificationKind, uri: Optional[str] = None) -> None:
        """Send a notification to every subscriber without waiting."""
        notification = ResourceNotification(kind=kind, uri=uri)
        logger.debug("Resource notification %s", notification.to_dict())
        for subscriber in list(self._subscribers):
            self._deliver(subscriber, notification)

    async def wait_for_deliveries(self) -> None:
        """Wait until every in-flight notification delivery has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _deliver(
        self, subscriber: NotificationSubscriber, notification: ResourceNotification
    ) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(
                "No running event loop, dropping %s notification",
                notification.kind.value,
            )
            return

        task = loop.create_task(subscriber(notification))
        self._pending.add(task)
        task.add_done_callback(self._on_delivered)

    def _on_delivered(self, task: "asyncio.Task[None]") -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(f"Resource notification delivery failed: {error}")
