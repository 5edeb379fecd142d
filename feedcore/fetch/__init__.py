"""HTTP fetch layer with conditional revalidation.

This module provides HTTP fetch operations with:
- ETag conditional requests keyed by resource
- Transparent gzip/deflate decoding
- Maximum response size enforcement
- Fetch-and-convert operations for JSON, XML, feeds and update messages
- Metrics collection for observability
"""

from feedcore.fetch.cache import EntityTagBackend, EntityTagManager, EntityTagStore
from feedcore.fetch.client import ConditionalFetchClient
from feedcore.fetch.config import FetchConfig
from feedcore.fetch.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_MAX_RESPONSE_SIZE_BYTES,
    HTTP_STATUS_NOT_MODIFIED,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
)
from feedcore.fetch.metrics import FetchMetrics
from feedcore.fetch.models import (
    FetchError,
    FetchErrorClass,
    FetchResponse,
    FetchTimeoutError,
    FetchTransportError,
    ResponseSizeExceededError,
)
from feedcore.fetch.typed import (
    TypedResponse,
    fetch_converted,
    fetch_typed,
    get_feed,
    get_json,
    get_update_message,
    get_xml,
)


__all__ = [
    # Client
    "ConditionalFetchClient",
    # Entity tags
    "EntityTagBackend",
    "EntityTagManager",
    "EntityTagStore",
    # Config
    "FetchConfig",
    # Models
    "FetchResponse",
    "FetchError",
    "FetchErrorClass",
    "FetchTimeoutError",
    "FetchTransportError",
    "ResponseSizeExceededError",
    # Typed operations
    "TypedResponse",
    "fetch_converted",
    "fetch_typed",
    "get_feed",
    "get_json",
    "get_update_message",
    "get_xml",
    # Constants
    "HTTP_STATUS_OK_MIN",
    "HTTP_STATUS_OK_MAX",
    "HTTP_STATUS_NOT_MODIFIED",
    "DEFAULT_MAX_RESPONSE_SIZE_BYTES",
    "DEFAULT_CHUNK_SIZE",
    # Metrics
    "FetchMetrics",
]
