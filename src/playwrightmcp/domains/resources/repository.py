"""In-memory registries for the Resource bounded context.

Both registries are mutated only from the event loop thread, so they use
plain containers without locks.

Neither registry is bounded: the log buffer keeps every line for the life
of the process and the artifact store never evicts.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .value_objects import Artifact, LogEntry

logger = logging.getLogger(__name__)


class LogBuffer:
    """Append-only, ordered sequence of console log entries."""

    def __init__(self) -> None:
        self._entries: List[LogEntry] = []

    def append(self, entry: LogEntry) -> None:
        self._entries.append(entry)

    def render(self) -> str:
        """Join all entries into one text blob, one line per entry."""
        return "\n".join(entry.render() for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class ArtifactStore:
    """Mapping from artifact name to payload with last-write-wins semantics."""

    def __init__(self) -> None:
        self._artifacts: Dict[str, Artifact] = {}

    def put(self, name: str, payload: str) -> bool:
        """Store ``payload`` under ``name``.

        Args:
            name: Unique artifact key.
            payload: Base64-encoded binary data.

        Returns:
            True if ``name`` was not stored before, False on overwrite.
        """
        is_new = name not in self._artifacts
        self._artifacts[name] = Artifact(name=name, payload=payload)
        if not is_new:
            logger.debug(f"Artifact '{name}' overwritten")
        return is_new

    def get(self, name: str) -> Optional[Artifact]:
        return self._artifacts.get(name)

    def names(self) -> List[str]:
        return list(self._artifacts)

    def __contains__(self, name: object) -> bool:
        return name in self._artifacts

    def __len__(self) -> int:
        return len(self._artifacts)
