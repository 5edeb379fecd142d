"""RSS 1.0, RSS 2.0 and Atom parsing into a normalized feed model."""

from feedcore.rss.discovery import discover_feed_uris
from feedcore.rss.models import Feed, Item, ItemStatus
from feedcore.rss.parser import VARIANT_PARSERS, parse_document, parse_feed
from feedcore.rss.variants import sort_items
from feedcore.rss.version import RssVersion, classify
from feedcore.rss.xml import FeedDocument, load_document


__all__ = [
    # Models
    "Feed",
    "Item",
    "ItemStatus",
    # Parsing
    "FeedDocument",
    "RssVersion",
    "VARIANT_PARSERS",
    "classify",
    "load_document",
    "parse_document",
    "parse_feed",
    "sort_items",
    # Discovery
    "discover_feed_uris",
]
