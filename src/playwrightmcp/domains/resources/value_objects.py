"""Value objects for the Resource bounded context.

Resources are the two pull-readable pieces of session state exposed to
clients: the console log buffer (``logs://logs``) and the stored artifacts
(``artifact://<name>``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import quote, unquote

LOGS_URI = "logs://logs"
ARTIFACT_SCHEME = "artifact://"

LOGS_MIME_TYPE = "text/plain"
ARTIFACT_MIME_TYPE = "image/png"


class ResourceNotFoundError(LookupError):
    """Raised when a resource identifier does not resolve to current state."""

    def __init__(self, uri: str) -> None:
        super().__init__(f"Resource not found: {uri}")
        self.uri = uri


class NotificationKind(Enum):
    """Kinds of change notifications sent to subscribers."""

    UPDATED = "updated"
    LIST_CHANGED = "list_changed"


@dataclass(frozen=True)
class LogEntry:
    """A single console line, immutable once appended."""

    level: str
    text: str

    def render(self) -> str:
        return f"[{self.level}] {self.text}"


@dataclass(frozen=True)
class Artifact:
    """A named binary payload stored as base64 text."""

    name: str
    payload: str


@dataclass(frozen=True)
class ResourceDescriptor:
    """One entry of the resource listing."""

    uri: str
    mime_type: str
    name: str


@dataclass(frozen=True)
class ResourceContents:
    """Resolved contents of a resource.

    Exactly one of ``text`` or ``blob`` is set. ``blob`` holds base64 text.
    """

    uri: str
    mime_type: str
    text: Optional[str] = None
    blob: Optional[str] = None


def artifact_uri(name: str) -> str:
    """Build the resource identifier for an artifact name.

    The name is percent-encoded so any string yields a valid URI with no
    template braces, e.g. ``"my shot"`` becomes ``artifact://my%20shot``.
    """
    return f"{ARTIFACT_SCHEME}{quote(name, safe='')}"


def parse_artifact_name(uri: str) -> Optional[str]:
    """Return the artifact name encoded in ``uri``, or None for other schemes."""
    if not uri.startswith(ARTIFACT_SCHEME):
        return None
    return unquote(uri[len(ARTIFACT_SCHEME):])
