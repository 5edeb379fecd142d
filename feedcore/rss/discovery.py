"""Discovery of feed links advertised by HTML pages."""

from urllib.parse import urljoin

from bs4 import BeautifulSoup


FEED_TYPE_MARKERS = ("rss", "atom")


def discover_feed_uris(html: bytes | str, base_url: str | None = None) -> list[str]:
    """Find ``<link rel="alternate">`` elements that point to feeds.

    Args:
        html: HTML page content.
        base_url: URL of the page, used to resolve relative hrefs.

    Returns:
        Feed URLs ordered by their declared type.
    """
    soup = BeautifulSoup(html, "lxml")

    candidates: list[tuple[str, str]] = []
    for link in soup.find_all("link"):
        rel = link.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        if "alternate" not in [r.lower() for r in rel]:
            continue

        link_type = (link.get("type") or "").lower()
        if not any(marker in link_type for marker in FEED_TYPE_MARKERS):
            continue

        href = (link.get("href") or "").strip()
        if not href:
            continue
        candidates.append((link_type, urljoin(base_url, href) if base_url else href))

    candidates.sort(key=lambda candidate: candidate[0])
    return [uri for _, uri in candidates]
