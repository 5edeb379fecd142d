"""Configuration models for the HTTP fetch layer."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from feedcore.fetch.constants import (
    DEFAULT_MAX_RESPONSE_SIZE_BYTES,
    DEFAULT_TIMEOUT_SECONDS,
)


class FetchConfig(BaseModel):
    """Configuration for a conditional fetch client.

    Mirrors the per-client fetch state: the user agent to announce and the
    switches for entity-tag revalidation and compressed transfer.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_agent: Annotated[str, Field(max_length=500)] = ""
    enable_etag: bool = Field(
        default=True,
        description="Send If-None-Match and remember the returned ETag",
    )
    enable_compression: bool = Field(
        default=True,
        description="Advertise gzip/deflate and decode the body transparently",
    )
    timeout_seconds: Annotated[float, Field(gt=0.0, le=300.0)] = (
        DEFAULT_TIMEOUT_SECONDS
    )
    max_response_size_bytes: Annotated[int, Field(ge=1024, le=100 * 1024 * 1024)] = (
        DEFAULT_MAX_RESPONSE_SIZE_BYTES
    )
    follow_redirects: bool = True

    @field_validator("user_agent")
    @classmethod
    def validate_user_agent(cls, v: str) -> str:
        """Reject user agents that would break the header line."""
        if "\r" in v or "\n" in v:
            msg = "user_agent must not contain line breaks"
            raise ValueError(msg)
        return v.strip()
