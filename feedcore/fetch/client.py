"""Conditional HTTP client with entity-tag revalidation and compression."""

import time
from collections.abc import Mapping
from io import BytesIO
from types import TracebackType

import httpx
import structlog

from feedcore.fetch.cache import EntityTagBackend, EntityTagManager, EntityTagStore
from feedcore.fetch.config import FetchConfig
from feedcore.fetch.constants import (
    ACCEPT_ENCODING_COMPRESSED,
    ACCEPT_ENCODING_IDENTITY,
    DEFAULT_CHUNK_SIZE,
    HEADER_ACCEPT_ENCODING,
    HEADER_ETAG,
    HEADER_USER_AGENT,
)
from feedcore.fetch.metrics import FetchMetrics
from feedcore.fetch.models import (
    FetchError,
    FetchResponse,
    FetchTimeoutError,
    FetchTransportError,
    ResponseSizeExceededError,
)
from feedcore.observability.logging import get_logger


class ConditionalFetchClient:
    """Asynchronous HTTP GET client with conditional revalidation.

    Each call performs exactly one request:
    - attaches If-None-Match from the stored entity tag of the resource
    - advertises gzip/deflate and lets httpx decode the body
    - sends User-Agent only when one is configured
    - records (or clears) the entity tag returned by the server

    No retries are attempted. Transport failures raise FetchError subclasses;
    non-success statuses are returned, not raised. httpx keeps no response
    cache, so revalidation only happens through the entity-tag logic here.

    The entity tags live in an EntityTagBackend keyed by resource, so one
    client may poll several resources sequentially. Overlapping requests for
    the same resource key on one client are not supported.
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        etags: EntityTagBackend | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Fetch configuration; defaults to FetchConfig().
            etags: Entity-tag storage, shareable between clients.
            transport: Optional httpx transport (used by tests).
        """
        self._config = config or FetchConfig()
        self._etag_backend: EntityTagBackend = (
            etags if etags is not None else EntityTagStore()
        )
        self._etags = EntityTagManager(
            self._etag_backend, enabled=self._config.enable_etag
        )
        self._last_etag = ""
        self._metrics = FetchMetrics.get_instance()
        self._client = httpx.AsyncClient(
            transport=transport,
            timeout=self._config.timeout_seconds,
            follow_redirects=self._config.follow_redirects,
        )
        self._log = get_logger("fetch")

    @property
    def config(self) -> FetchConfig:
        return self._config

    @property
    def last_etag(self) -> str:
        """Entity tag recorded by the most recent completed request."""
        return self._last_etag

    @property
    def etags(self) -> EntityTagBackend:
        """Entity-tag storage used by this client."""
        return self._etag_backend

    async def fetch(
        self,
        url: str | httpx.URL,
        params: Mapping[str, str] | None = None,
        resource: str | None = None,
        timeout: float | None = None,
    ) -> FetchResponse:
        """Fetch a URL once.

        Args:
            url: The URL to fetch.
            params: Query parameters merged into the URL (overwriting).
            resource: Key for the entity tag; defaults to the request URL.
            timeout: Per-call timeout in seconds, overriding the config.

        Returns:
            FetchResponse with status, headers and decoded body.

        Raises:
            FetchTimeoutError: If the timeout expired.
            FetchTransportError: If the exchange failed at the network level.
            ResponseSizeExceededError: If the body exceeds the size limit.
        """
        start_time_ns = time.perf_counter_ns()
        request_url = httpx.URL(str(url))
        if params:
            request_url = request_url.copy_merge_params(dict(params))
        key = resource or str(request_url)

        log = self._log.bind(url=str(request_url), resource=key)

        headers = self._build_headers()
        headers.update(self._etags.get_conditional_headers(key))

        request = self._client.build_request(
            "GET",
            request_url,
            headers=headers,
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )
        if not self._config.user_agent:
            request.headers.pop(HEADER_USER_AGENT, None)

        try:
            response = await self._client.send(request, stream=True)
            try:
                body = await self._read_body_with_limit(response)
            finally:
                await response.aclose()
        except FetchError as e:
            e.url = str(request_url)
            self._record_failure(e, log)
            raise
        except httpx.TimeoutException as exc:
            error = FetchTimeoutError(f"Request timed out: {exc}", str(request_url))
            self._record_failure(error, log)
            raise error from exc
        except httpx.RequestError as exc:
            error = FetchTransportError(f"Request failed: {exc}", str(request_url))
            self._record_failure(error, log)
            raise error from exc

        self._last_etag = self._etags.record(key, response.headers.get(HEADER_ETAG))

        duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
        self._metrics.record_request(response.status_code, len(body))
        self._metrics.record_duration(duration_ms)

        result = FetchResponse(
            status_code=response.status_code,
            url=str(response.url),
            headers=dict(response.headers),
            body=body,
            etag=self._last_etag,
        )
        if result.not_modified:
            self._metrics.record_not_modified()

        log.info(
            "fetch_complete",
            status_code=result.status_code,
            not_modified=result.not_modified,
            bytes=result.body_size,
            duration_ms=round(duration_ms, 2),
        )
        return result

    def _build_headers(self) -> dict[str, str]:
        """Build the unconditional request headers."""
        headers: dict[str, str] = {
            HEADER_ACCEPT_ENCODING: (
                ACCEPT_ENCODING_COMPRESSED
                if self._config.enable_compression
                else ACCEPT_ENCODING_IDENTITY
            ),
        }
        if self._config.user_agent:
            headers[HEADER_USER_AGENT] = self._config.user_agent
        return headers

    async def _read_body_with_limit(self, response: httpx.Response) -> bytes:
        """Read the decoded response body with a size limit.

        Raises:
            ResponseSizeExceededError: If the limit is exceeded.
        """
        buffer = BytesIO()
        total_read = 0
        max_size = self._config.max_response_size_bytes

        async for chunk in response.aiter_bytes(chunk_size=DEFAULT_CHUNK_SIZE):
            total_read += len(chunk)
            if total_read > max_size:
                msg = (
                    f"Response size exceeded limit of {max_size} bytes "
                    f"(read {total_read} bytes)"
                )
                raise ResponseSizeExceededError(msg)
            buffer.write(chunk)

        return buffer.getvalue()

    def _record_failure(
        self,
        error: FetchError,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        self._metrics.record_failure(error.error_class)
        log.warning(
            "fetch_failed",
            error_class=error.error_class.value,
            error=error.message,
        )

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "ConditionalFetchClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
