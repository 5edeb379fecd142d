"""Update/announcement message protocol."""

from feedcore.update.models import (
    SectionError,
    SectionErrorReason,
    SectionResult,
    UpdateMessage,
)
from feedcore.update.parser import UpdateMessageParser, parse_update_messages


__all__ = [
    "UpdateMessage",
    "UpdateMessageParser",
    "parse_update_messages",
    "SectionError",
    "SectionErrorReason",
    "SectionResult",
]
