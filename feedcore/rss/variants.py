"""Per-format feed parsers producing the normalized Feed model."""

from collections.abc import Iterable
from datetime import datetime
from xml.etree.ElementTree import Element

import structlog
from pydantic import AnyUrl

from feedcore.rss.models import Feed, Item, ItemStatus
from feedcore.rss.xml import (
    NS_CONTENT,
    NS_DC_ELEMENTS,
    FeedDocument,
    find_child_by_local_name,
    get_datetime,
    get_title,
    get_uri,
    get_value,
    parse_uri,
    qualify,
    strip_markup,
)


logger = structlog.get_logger()

# Atom 1.0 uses updated/published, Atom 0.3 modified/issued/created
ATOM_DATE_ELEMENTS = ("updated", "modified", "issued", "published", "created")
ATOM_DESCRIPTION_ELEMENTS = ("subtitle", "tagline")


def sort_items(items: Iterable[Item]) -> list[Item]:
    """Order items newest first; undated items follow in document order."""
    items = list(items)
    dated = [item for item in items if item.publish_time is not None]
    undated = [item for item in items if item.publish_time is None]
    # list.sort stays stable with reverse=True
    dated.sort(key=lambda item: item.publish_time, reverse=True)  # type: ignore[arg-type, return-value]
    return dated + undated


def build_feed(
    title: str,
    description: str,
    link: AnyUrl | None,
    items: list[Item],
    now: datetime,
) -> Feed:
    """Assemble a Feed with sorted items and last_published set."""
    ordered = sort_items(items)
    return Feed(
        title=title,
        description=description,
        link=link,
        last_checked=now,
        last_published=ordered[0].publish_time if ordered else None,
        items=ordered,
    )


def parse_rss10(document: FeedDocument, now: datetime) -> Feed | None:
    """Parse an RSS 1.0 (RDF) document.

    The channel is any direct child named ``channel``; items are all
    descendants named ``item`` in the default namespace and carry their
    publish time in ``dc:date``.
    """
    root = document.root
    ns = document.default_namespace

    channel = find_child_by_local_name(root, "channel")
    if channel is None:
        logger.info("feed_channel_missing", component="rss", version="RSS10")
        return None

    items = [
        _parse_rss_item(
            e,
            ns=ns,
            publish_time=get_datetime(e, "date", NS_DC_ELEMENTS),
        )
        for e in root.iter(qualify("item", ns))
    ]
    return build_feed(
        title=get_title(channel, ns),
        description=get_value(channel, "description", ns),
        link=get_uri(channel, "link", ns),
        items=items,
        now=now,
    )


def parse_rss20(document: FeedDocument, now: datetime) -> Feed | None:
    """Parse an RSS 2.0 (or 0.91/0.92) document.

    The channel is the direct ``channel`` child of the root; items are its
    descendants named ``item`` and carry their publish time in ``pubDate``.
    """
    channel = document.root.find("channel")
    if channel is None:
        logger.info("feed_channel_missing", component="rss", version="RSS20")
        return None

    items = [
        _parse_rss_item(e, ns="", publish_time=get_datetime(e, "pubDate"))
        for e in channel.iter("item")
    ]
    return build_feed(
        title=get_title(channel),
        description=get_value(channel, "description"),
        link=get_uri(channel, "link"),
        items=items,
        now=now,
    )


def parse_atom(document: FeedDocument, now: datetime) -> Feed:
    """Parse an Atom 1.0 or 0.3 document rooted at ``feed``."""
    root = document.root
    ns = document.default_namespace

    items = [_parse_atom_entry(e, ns) for e in root.iter(qualify("entry", ns))]

    description = ""
    for name in ATOM_DESCRIPTION_ELEMENTS:
        description = get_value(root, name, ns).strip()
        if description:
            break

    return build_feed(
        title=get_title(root, ns),
        description=description,
        link=_get_atom_link(root, ns),
        items=items,
        now=now,
    )


def _parse_rss_item(e: Element, ns: str, publish_time: datetime | None) -> Item:
    description = get_value(e, "description", ns)
    encoded = get_value(e, "encoded", NS_CONTENT)
    return Item(
        title=get_title(e, ns),
        summary=strip_markup(description),
        content=(encoded or description).strip(),
        link=get_uri(e, "link", ns),
        publish_time=publish_time,
        status=ItemStatus.UNREAD,
    )


def _parse_atom_entry(e: Element, ns: str) -> Item:
    summary = strip_markup(get_value(e, "summary", ns))
    if not summary:
        summary = strip_markup(get_value(e, "content", ns))

    content = get_value(e, "content", ns) or get_value(e, "summary", ns)

    publish_time = None
    for name in ATOM_DATE_ELEMENTS:
        publish_time = get_datetime(e, name, ns)
        if publish_time is not None:
            break

    link = _get_atom_link(e, ns)
    title = get_value(e, "title", ns).strip()
    if not title and link is not None:
        title = str(link)

    return Item(
        title=title,
        summary=summary,
        content=content.strip(),
        link=link,
        publish_time=publish_time,
        status=ItemStatus.UNREAD,
    )


def _get_atom_link(e: Element, ns: str) -> AnyUrl | None:
    """Pick the alternate link, falling back to the first link element."""
    links = e.findall(qualify("link", ns))
    if not links:
        return None
    preferred = next(
        (link for link in links if link.get("rel", "alternate") == "alternate"),
        links[0],
    )
    text = "".join(preferred.itertext()).strip()
    return parse_uri(text or preferred.get("href", ""))
