"""Resource Domain Events.

A ResourceNotification is emitted whenever the content of a resource or the
membership of the resource list changes. Subscribers receive it on a
fire-and-forget basis.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from .value_objects import NotificationKind


@dataclass(frozen=True)
class ResourceNotification:
    """Something changed in the resource registries.

    Attributes:
        kind: ``UPDATED`` for a content change of one resource,
            ``LIST_CHANGED`` for a change of the resource set.
        uri: The changed resource for ``UPDATED``; None for ``LIST_CHANGED``.
        timestamp: When the change was recorded.
    """

    kind: NotificationKind
    uri: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "event_type": "ResourceNotification",
            "kind": self.kind.value,
            "uri": self.uri,
            "timestamp": self.timestamp.isoformat(),
        }
