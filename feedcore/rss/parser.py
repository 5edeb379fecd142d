"""Version-dispatched feed parsing."""

from collections.abc import Callable
from datetime import UTC, datetime

import structlog

from feedcore.rss.models import Feed
from feedcore.rss.variants import parse_atom, parse_rss10, parse_rss20
from feedcore.rss.version import RssVersion, classify
from feedcore.rss.xml import FeedDocument, load_document


logger = structlog.get_logger()

FeedVariantParser = Callable[[FeedDocument, datetime], Feed | None]

VARIANT_PARSERS: dict[RssVersion, FeedVariantParser] = {
    RssVersion.RSS091: parse_rss20,
    RssVersion.RSS092: parse_rss20,
    RssVersion.RSS10: parse_rss10,
    RssVersion.RSS20: parse_rss20,
    RssVersion.ATOM: parse_atom,
}


def parse_document(
    document: FeedDocument,
    version: RssVersion | None = None,
    now: datetime | None = None,
) -> Feed | None:
    """Parse an already loaded document.

    Args:
        document: Loaded feed document.
        version: Force a variant instead of classifying the document.
        now: Timestamp stored as last_checked; defaults to the current time.

    Returns:
        Feed, or None when the format is unknown or the channel is missing.
    """
    version = version or classify(document)
    parser = VARIANT_PARSERS.get(version)
    if parser is None:
        logger.info(
            "feed_version_unknown",
            component="rss",
            root=document.root.tag,
            default_namespace=document.default_namespace,
        )
        return None
    return parser(document, now or datetime.now(UTC))


def parse_feed(data: bytes | str, now: datetime | None = None) -> Feed | None:
    """Parse a raw RSS 1.0, RSS 2.0 (0.91/0.92) or Atom document.

    Args:
        data: Raw XML document.
        now: Timestamp stored as last_checked; defaults to the current time.

    Returns:
        Feed, or None when the document is not a recognizable feed.

    Raises:
        xml.etree.ElementTree.ParseError: If the XML is not well formed.
    """
    return parse_document(load_document(data), now=now)
