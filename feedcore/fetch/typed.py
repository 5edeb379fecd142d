"""Fetch-and-convert operations built on ConditionalFetchClient.

A non-success status yields None rather than an attempt to convert the
error body. Transport failures still raise FetchError, so callers can tell
"nothing to show, try later" apart from "something is broken".
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar
from xml.etree.ElementTree import Element

import httpx
import structlog

from feedcore.convert.converter import (
    ContentConverter,
    feed_converter,
    json_converter,
    update_message_converter,
    xml_converter,
)
from feedcore.fetch.client import ConditionalFetchClient
from feedcore.rss.models import Feed
from feedcore.update.models import UpdateMessage


logger = structlog.get_logger()

T = TypeVar("T")

QUERY_VERSION_KEY = "ver"


@dataclass(frozen=True)
class TypedResponse(Generic[T]):
    """Converted value together with the status it came from.

    value is None for non-success statuses and for suppressed conversion
    failures.
    """

    status_code: int
    value: T | None = None
    etag: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


async def fetch_converted(
    client: ConditionalFetchClient,
    uri: str | httpx.URL,
    converter: ContentConverter[T],
    params: Mapping[str, str] | None = None,
    resource: str | None = None,
) -> TypedResponse[T]:
    """Fetch a URI and convert the body when the status is a success.

    Args:
        client: Client performing the request.
        uri: Target URI.
        converter: Converter applied to a successful body.
        params: Query parameters merged into the URI.
        resource: Entity-tag key, defaults to the request URL.

    Returns:
        TypedResponse carrying the status code and the converted value.
    """
    response = await client.fetch(uri, params=params, resource=resource)
    if not response.is_success:
        logger.info(
            "fetch_no_content",
            component="fetch",
            url=response.url,
            status_code=response.status_code,
        )
        return TypedResponse(status_code=response.status_code, etag=response.etag)

    return TypedResponse(
        status_code=response.status_code,
        value=converter.convert(response.body),
        etag=response.etag,
    )


async def fetch_typed(
    client: ConditionalFetchClient,
    uri: str | httpx.URL,
    converter: ContentConverter[T],
    params: Mapping[str, str] | None = None,
) -> T | None:
    """Fetch and convert, collapsing non-success statuses to None."""
    result = await fetch_converted(client, uri, converter, params=params)
    return result.value


async def get_json(
    client: ConditionalFetchClient,
    uri: str | httpx.URL,
    model: type[T] | Any | None = None,
    ignore_exception: bool = False,
) -> Any | None:
    """Fetch a JSON document, optionally validated into model."""
    return await fetch_typed(client, uri, json_converter(model, ignore_exception))


async def get_xml(
    client: ConditionalFetchClient,
    uri: str | httpx.URL,
    model: Callable[[Element], T] | None = None,
    ignore_exception: bool = False,
) -> Any | None:
    """Fetch an XML document, optionally mapping its root element."""
    return await fetch_typed(client, uri, xml_converter(model, ignore_exception))


async def get_feed(
    client: ConditionalFetchClient,
    uri: str | httpx.URL,
    ignore_exception: bool = False,
) -> Feed | None:
    """Fetch and parse an RSS or Atom feed."""
    return await fetch_typed(client, uri, feed_converter(ignore_exception))


async def get_update_message(
    client: ConditionalFetchClient,
    uri: str | httpx.URL,
    version: str,
    params: Mapping[str, str] | None = None,
) -> UpdateMessage | None:
    """Fetch update messages and pick the one for a version.

    The query string gets ``ver=<version>`` plus params; existing parameters
    are kept, duplicate keys are overwritten and ``ver`` always wins.

    Args:
        client: Client performing the request.
        uri: Update-message endpoint.
        version: Version string to look up.
        params: Additional query parameters.

    Returns:
        The first message whose version equals version, or None.
    """
    query = dict(params or {})
    query[QUERY_VERSION_KEY] = version

    messages = await fetch_typed(
        client, uri, update_message_converter(), params=query
    )
    if not messages:
        return None

    for message in messages:
        if message.version == version:
            return message

    logger.info(
        "update_version_not_found",
        component="update",
        version=version,
        available=[m.version for m in messages],
    )
    return None
