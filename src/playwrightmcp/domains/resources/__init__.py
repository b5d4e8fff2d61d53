"""Resource Bounded Context.

Pull-readable session state with change notifications:
- ``logs://logs``: every console line seen on the page, in arrival order
- ``artifact://<name>``: screenshots stored by name (last write wins)
"""

from .events import ResourceNotification
from .repository import ArtifactStore, LogBuffer
from .services import LOGS_DISPLAY_NAME, NotificationSubscriber, ResourceService
from .value_objects import (
    ARTIFACT_MIME_TYPE,
    ARTIFACT_SCHEME,
    LOGS_MIME_TYPE,
    LOGS_URI,
    Artifact,
    LogEntry,
    NotificationKind,
    ResourceContents,
    ResourceDescriptor,
    ResourceNotFoundError,
    artifact_uri,
    parse_artifact_name,
)

__all__ = [
    "ARTIFACT_MIME_TYPE",
    "ARTIFACT_SCHEME",
    "Artifact",
    "ArtifactStore",
    "LOGS_DISPLAY_NAME",
    "LOGS_MIME_TYPE",
    "LOGS_URI",
    "LogBuffer",
    "LogEntry",
    "NotificationKind",
    "NotificationSubscriber",
    "ResourceContents",
    "ResourceDescriptor",
    "ResourceNotFoundError",
    "ResourceNotification",
    "ResourceService",
    "artifact_uri",
    "parse_artifact_name",
]
