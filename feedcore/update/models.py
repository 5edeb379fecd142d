"""Data models for update/announcement messages."""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from pydantic import AnyUrl, BaseModel, ConfigDict, Field


class UpdateMessage(BaseModel):
    """Announcement published for one application version.

    Attributes:
        version: Version string taken from the section header.
        notify: True when the section asks clients to notify the user.
        text: Message shown to the user (may be empty).
        uri: Link to the announcement or download page.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: Annotated[str, Field(min_length=1)]
    notify: bool
    text: str
    uri: AnyUrl


class SectionErrorReason(str, Enum):
    """Why an update-message section was dropped.

    - MISSING_VERSION: Key/value lines appeared before any section header
      or under an empty header
    - EMPTY_SECTION: Header without any key/value lines
    - MISSING_KEY: One of UPDATE, MESSAGE, URL is absent
    - INVALID_UPDATE: UPDATE is not an integer
    - INVALID_URL: URL is not an absolute URI
    """

    MISSING_VERSION = "MISSING_VERSION"
    EMPTY_SECTION = "EMPTY_SECTION"
    MISSING_KEY = "MISSING_KEY"
    INVALID_UPDATE = "INVALID_UPDATE"
    INVALID_URL = "INVALID_URL"


@dataclass(frozen=True)
class SectionError:
    """Reason a section could not be turned into an UpdateMessage."""

    reason: SectionErrorReason
    message: str
    line: int | None = None


@dataclass(frozen=True)
class SectionResult:
    """Outcome of finalizing one section, in document order."""

    version: str
    message: UpdateMessage | None = None
    error: SectionError | None = None

    @property
    def ok(self) -> bool:
        return self.message is not None
