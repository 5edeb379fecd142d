"""Result and kind types for content conversion."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar


T = TypeVar("T")


class ConverterKind(str, Enum):
    """Kinds of content converters.

    - FUNCTION: Caller-supplied transform
    - JSON: JSON document, optionally validated into a model
    - XML: XML document parsed into an element tree
    - UPDATE_MESSAGE: Update/announcement text protocol
    - FEED: RSS 1.0, RSS 2.0 or Atom feed
    """

    FUNCTION = "FUNCTION"
    JSON = "JSON"
    XML = "XML"
    UPDATE_MESSAGE = "UPDATE_MESSAGE"
    FEED = "FEED"


@dataclass(frozen=True)
class ConversionResult(Generic[T]):
    """Outcome of one conversion attempt.

    Exactly one of value (on success) or error (on failure) is meaningful.
    """

    kind: ConverterKind
    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """Check if the transform completed without raising."""
        return self.error is None
