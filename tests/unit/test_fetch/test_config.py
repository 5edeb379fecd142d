"""Unit tests for fetch configuration, response model and metrics."""

import pytest

from feedcore.fetch.config import FetchConfig
from feedcore.fetch.constants import DEFAULT_MAX_RESPONSE_SIZE_BYTES
from feedcore.fetch.metrics import FetchMetrics
from feedcore.fetch.models import (
    FetchErrorClass,
    FetchResponse,
    FetchTimeoutError,
    ResponseSizeExceededError,
)


class TestFetchConfig:
    """Tests for FetchConfig defaults and bounds."""

    def test_defaults(self) -> None:
        """Test defaults enable revalidation and compression."""
        config = FetchConfig()

        assert config.user_agent == ""
        assert config.enable_etag is True
        assert config.enable_compression is True
        assert config.follow_redirects is True
        assert config.max_response_size_bytes == DEFAULT_MAX_RESPONSE_SIZE_BYTES

    def test_min_max_size_validation(self) -> None:
        """Test that max size has minimum of 1KB."""
        assert FetchConfig(max_response_size_bytes=1024).max_response_size_bytes == 1024

        with pytest.raises(ValueError):
            FetchConfig(max_response_size_bytes=100)

    def test_max_max_size_validation(self) -> None:
        """Test that max size has maximum of 100 MB."""
        with pytest.raises(ValueError):
            FetchConfig(max_response_size_bytes=200 * 1024 * 1024)

    @pytest.mark.parametrize("timeout", [0, -1, 301])
    def test_timeout_bounds(self, timeout: float) -> None:
        """Test timeouts outside (0, 300] are rejected."""
        with pytest.raises(ValueError):
            FetchConfig(timeout_seconds=timeout)

    def test_unknown_field_rejected(self) -> None:
        """Test extra fields are forbidden."""
        with pytest.raises(ValueError):
            FetchConfig(retries=3)  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        """Test configs cannot be mutated after creation."""
        config = FetchConfig()

        with pytest.raises(ValueError):
            config.enable_etag = False  # type: ignore[misc]


class TestFetchResponse:
    """Tests for FetchResponse properties."""

    @pytest.mark.parametrize(
        ("status", "success", "not_modified"),
        [(200, True, False), (204, True, False), (304, False, True), (404, False, False)],
    )
    def test_status_properties(
        self, status: int, success: bool, not_modified: bool
    ) -> None:
        """Test success and revalidation flags follow the status code."""
        response = FetchResponse(status_code=status, url="https://example.com/")

        assert response.is_success is success
        assert response.not_modified is not_modified

    def test_body_size(self) -> None:
        """Test body_size counts decoded bytes."""
        response = FetchResponse(
            status_code=200, url="https://example.com/", body=b"12345"
        )

        assert response.body_size == 5


class TestErrors:
    """Tests for the error hierarchy."""

    def test_error_classes(self) -> None:
        """Test each error carries its classification."""
        assert FetchTimeoutError("t").error_class == FetchErrorClass.NETWORK_TIMEOUT
        assert (
            ResponseSizeExceededError("s").error_class
            == FetchErrorClass.RESPONSE_SIZE_EXCEEDED
        )

    def test_error_keeps_message_and_url(self) -> None:
        """Test message and url attributes are set."""
        error = FetchTimeoutError("timed out", "https://example.com/")

        assert error.message == "timed out"
        assert error.url == "https://example.com/"
        assert str(error) == "timed out"


class TestFetchMetrics:
    """Tests for FetchMetrics."""

    def setup_method(self) -> None:
        FetchMetrics.reset()

    def test_singleton(self) -> None:
        """Test get_instance returns the same object until reset."""
        first = FetchMetrics.get_instance()

        assert FetchMetrics.get_instance() is first
        FetchMetrics.reset()
        assert FetchMetrics.get_instance() is not first

    def test_counters(self) -> None:
        """Test requests, bytes, failures and durations are tallied."""
        metrics = FetchMetrics.get_instance()
        metrics.record_request(200, 100)
        metrics.record_request(304, 0)
        metrics.record_not_modified()
        metrics.record_failure(FetchErrorClass.NETWORK_TIMEOUT)
        metrics.record_duration(10.0)
        metrics.record_duration(30.0)

        data = metrics.to_dict()
        assert data["http_requests_total"] == {200: 1, 304: 1}
        assert data["http_not_modified_total"] == 1
        assert data["http_failures_total"] == {"NETWORK_TIMEOUT": 1}
        assert data["http_bytes_total"] == 100
        assert metrics.avg_duration_ms == 20.0

    def test_avg_duration_without_requests(self) -> None:
        """Test the average is zero before any request."""
        assert FetchMetrics.get_instance().avg_duration_ms == 0.0
