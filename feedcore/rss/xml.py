"""Element helpers for reading feed documents.

Lookups never raise for missing or malformed fields: absent text becomes an
empty string, unparseable links and dates become None.
"""

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from io import BytesIO
from xml.etree.ElementTree import Element

import defusedxml.ElementTree as DefusedET
from pydantic import AnyUrl, TypeAdapter, ValidationError


NS_RSS10 = "http://purl.org/rss/1.0/"
NS_DC_ELEMENTS = "http://purl.org/dc/elements/1.1/"
NS_CONTENT = "http://purl.org/rss/1.0/modules/content/"

MAX_SUMMARY_LENGTH = 500

_MARKUP_PATTERN = re.compile(r"<[^>]*>")
_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class FeedDocument:
    """Parsed XML document plus the default namespace declared on its root.

    ElementTree drops namespace declarations, so the default namespace is
    captured while parsing.
    """

    root: Element
    default_namespace: str = ""


def load_document(data: bytes | str) -> FeedDocument:
    """Parse XML with defusedxml and capture the root's default namespace.

    Args:
        data: Raw document.

    Returns:
        FeedDocument for the document.

    Raises:
        xml.etree.ElementTree.ParseError: If the document is not well formed.
    """
    raw = data.encode("utf-8") if isinstance(data, str) else data

    root: Element | None = None
    default_namespace = ""
    for event, payload in DefusedET.iterparse(
        BytesIO(raw), events=("start-ns", "start")
    ):
        if root is None:
            if event == "start-ns" and payload[0] == "":
                default_namespace = payload[1]
            elif event == "start":
                root = payload

    if root is None:
        msg = "document has no root element"
        raise ValueError(msg)
    return FeedDocument(root=root, default_namespace=default_namespace)


def local_name(tag: str) -> str:
    """Return the tag without its namespace."""
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def namespace_of(tag: str) -> str:
    """Return the namespace URI of a tag, or ""."""
    return tag[1:].split("}", 1)[0] if tag.startswith("{") else ""


def qualify(name: str, ns: str = "") -> str:
    return f"{{{ns}}}{name}" if ns else name


def find_child(e: Element, name: str, ns: str = "") -> Element | None:
    return e.find(qualify(name, ns))


def find_child_by_local_name(e: Element, name: str) -> Element | None:
    """Find the first direct child with a local name, in any namespace."""
    for child in e:
        if isinstance(child.tag, str) and local_name(child.tag) == name:
            return child
    return None


def get_value(e: Element, name: str, ns: str = "") -> str:
    """Return the full text content of a child element, or ""."""
    node = find_child(e, name, ns)
    if node is None:
        return ""
    return "".join(node.itertext())


def parse_uri(value: str) -> AnyUrl | None:
    """Parse an absolute URI, returning None when it is not one."""
    value = value.strip()
    if not value:
        return None
    try:
        return _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return None


def get_uri(e: Element, name: str, ns: str = "") -> AnyUrl | None:
    """Read a link from element text, falling back to its href attribute."""
    node = find_child(e, name, ns)
    if node is None:
        return None
    text = "".join(node.itertext()).strip()
    if text:
        return parse_uri(text)
    return parse_uri(node.get("href", ""))


def parse_datetime(value: str) -> datetime | None:
    """Parse an RFC 822 or ISO 8601 timestamp into an aware UTC datetime.

    Naive values are taken as UTC. Unparseable values, and values whose
    UTC equivalent falls outside the datetime range, yield None.
    """
    value = value.strip()
    if not value:
        return None

    dt: datetime | None = None
    try:
        dt = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError):
        try:
            dt = datetime.fromisoformat(value)
        except ValueError:
            return None

    try:
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return dt.astimezone(UTC)
    except (OverflowError, ValueError):
        return None


def get_datetime(e: Element, name: str, ns: str = "") -> datetime | None:
    return parse_datetime(get_value(e, name, ns))


def get_title(e: Element, ns: str = "") -> str:
    """Return the trimmed title, or the link when the title is empty."""
    title = get_value(e, "title", ns).strip()
    if title:
        return title
    link = get_uri(e, "link", ns)
    return str(link).strip() if link is not None else ""


def strip_markup(text: str, limit: int = MAX_SUMMARY_LENGTH) -> str:
    """Remove markup tags, trim, and cut to at most limit characters."""
    if not text:
        return ""
    dest = _MARKUP_PATTERN.sub("", text).strip()
    return dest[:limit]
