"""Data models for the HTTP fetch layer."""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from feedcore.fetch.constants import (
    HTTP_STATUS_NOT_MODIFIED,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
)


class FetchErrorClass(str, Enum):
    """Classification of fetch failures for metrics and logging.

    - NETWORK_TIMEOUT: Request timed out
    - CONNECTION_ERROR: Could not establish connection or the exchange broke
    - RESPONSE_SIZE_EXCEEDED: Response exceeded max size limit
    - UNKNOWN: Unclassified transport error
    """

    NETWORK_TIMEOUT = "NETWORK_TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    RESPONSE_SIZE_EXCEEDED = "RESPONSE_SIZE_EXCEEDED"
    UNKNOWN = "UNKNOWN"


class FetchError(Exception):
    """Base exception for failures that prevent a response from completing.

    Non-success HTTP statuses are not errors; they are reported through
    FetchResponse.status_code.

    Attributes:
        error_class: Classification of the failure.
        url: URL that was being fetched.
    """

    error_class: FetchErrorClass = FetchErrorClass.UNKNOWN

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.url = url


class FetchTransportError(FetchError):
    """DNS failure, refused connection, or a broken HTTP exchange."""

    error_class = FetchErrorClass.CONNECTION_ERROR


class FetchTimeoutError(FetchTransportError):
    """The request was abandoned because the timeout expired."""

    error_class = FetchErrorClass.NETWORK_TIMEOUT


class ResponseSizeExceededError(FetchError):
    """Raised when response size exceeds the configured limit."""

    error_class = FetchErrorClass.RESPONSE_SIZE_EXCEEDED


class FetchResponse(BaseModel):
    """Completed HTTP exchange.

    Carries the status, response headers and the fully read (and already
    decompressed) body.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status_code: int = Field(ge=100, le=599, description="HTTP status code")
    url: Annotated[str, Field(min_length=1, description="Final URL after redirects")]
    headers: dict[str, str] = Field(
        default_factory=dict, description="Response headers"
    )
    body: bytes = Field(default=b"", description="Response body")
    etag: str = Field(default="", description="Entity tag returned by the server")

    @property
    def is_success(self) -> bool:
        """Check if the server answered with a 2xx status."""
        return HTTP_STATUS_OK_MIN <= self.status_code < HTTP_STATUS_OK_MAX

    @property
    def not_modified(self) -> bool:
        """Check if the server confirmed the cached entity tag (304)."""
        return self.status_code == HTTP_STATUS_NOT_MODIFIED

    @property
    def body_size(self) -> int:
        """Get the size of the response body in bytes."""
        return len(self.body)
