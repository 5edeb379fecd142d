"""Classification of feed documents by wire format."""

from enum import Enum

from feedcore.rss.xml import FeedDocument


class RssVersion(str, Enum):
    """Wire formats recognized by the feed parser."""

    RSS091 = "RSS091"
    RSS092 = "RSS092"
    RSS10 = "RSS10"
    RSS20 = "RSS20"
    ATOM = "ATOM"
    UNKNOWN = "UNKNOWN"


_VERSION_ATTRIBUTES = {
    "0.91": RssVersion.RSS091,
    "0.92": RssVersion.RSS092,
    "2.0": RssVersion.RSS20,
}


def classify(document: FeedDocument) -> RssVersion:
    """Determine the wire format from the shape of the root element.

    A recognized ``version`` attribute wins. Otherwise the default namespace
    decides: Atom namespaces (including Atom 0.3 under purl.org) map to ATOM,
    other purl.org namespaces to RSS 1.0.

    Args:
        document: Parsed feed document.

    Returns:
        The detected version, UNKNOWN when nothing matches.
    """
    attr = document.root.get("version")
    if attr is not None and attr.strip() in _VERSION_ATTRIBUTES:
        return _VERSION_ATTRIBUTES[attr.strip()]

    ns = document.default_namespace.lower()
    if "atom" in ns:
        return RssVersion.ATOM
    if "purl.org" in ns:
        return RssVersion.RSS10
    return RssVersion.UNKNOWN
