"""Value objects for the Command bounded context.

A command is advertised to clients through its CommandDescriptor and always
answers with an Envelope, whether the handler succeeded or failed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence, Tuple, Union


class CommandArgumentError(Exception):
    """Raised by a handler when a required argument is missing or unusable."""


@dataclass(frozen=True)
class ArgumentSpec:
    """Schema of a single command argument."""

    name: str
    description: str = ""
    required: bool = False


@dataclass(frozen=True)
class CommandDescriptor:
    """An immutable entry of the command catalog."""

    name: str
    description: str
    arguments: Tuple[ArgumentSpec, ...] = ()

    @property
    def required(self) -> List[str]:
        return [arg.name for arg in self.arguments if arg.required]


@dataclass(frozen=True)
class TextItem:
    text: str


@dataclass(frozen=True)
class ImageItem:
    """Inline image; ``data`` is base64 text."""

    data: str
    mime_type: str = "image/png"


ContentItem = Union[TextItem, ImageItem]


@dataclass(frozen=True)
class Envelope:
    """Uniform result of every dispatched command.

    ``is_error`` is the only signal separating a handled failure from success.
    """

    content: Tuple[ContentItem, ...] = field(default_factory=tuple)
    is_error: bool = False

    @classmethod
    def success(cls, content: Sequence[ContentItem]) -> "Envelope":
        return cls(content=tuple(content), is_error=False)

    @classmethod
    def failure(cls, text: str) -> "Envelope":
        return cls(content=(TextItem(text),), is_error=True)

    @property
    def text(self) -> str:
        """All text items joined by newlines."""
        return "\n".join(item.text for item in self.content if isinstance(item, TextItem))


Arguments = Mapping[str, Any]
