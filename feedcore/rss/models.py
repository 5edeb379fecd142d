"""Normalized feed and item models shared by all wire formats."""

from datetime import datetime
from enum import Enum

from pydantic import AnyUrl, BaseModel, ConfigDict, Field


class ItemStatus(str, Enum):
    """Read state of an item. Parsing always yields UNREAD."""

    UNREAD = "Unread"
    READ = "Read"


class Item(BaseModel):
    """Single entry of a feed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = ""
    summary: str = ""
    content: str = ""
    link: AnyUrl | None = None
    publish_time: datetime | None = None
    status: ItemStatus = ItemStatus.UNREAD


class Feed(BaseModel):
    """Channel metadata plus items ordered newest first.

    Items without a publish time come last, in document order.
    last_published mirrors the publish time of the first item.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = ""
    description: str = ""
    link: AnyUrl | None = None
    last_checked: datetime
    last_published: datetime | None = None
    items: list[Item] = Field(default_factory=list)
