"""Unit tests for structured logging configuration."""

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog
from structlog.testing import capture_logs

from feedcore.observability import configure_logging, get_logger
from feedcore.update.parser import parse_update_messages


@pytest.fixture
def restore_structlog() -> Generator[None]:
    """Restore structlog and httpx logger levels after a test reconfigures them."""
    levels = {name: logging.getLogger(name).level for name in ("httpx", "httpcore")}
    yield
    structlog.reset_defaults()
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.mark.usefixtures("restore_structlog")
    def test_json_output(self) -> None:
        """Test events are rendered as JSON with level, timestamp and service."""
        stream = io.StringIO()
        configure_logging(level=logging.INFO, output=stream, json_format=True)

        get_logger("fetch").info("fetch_complete", status_code=200)

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "fetch_complete"
        assert record["status_code"] == 200
        assert record["level"] == "info"
        assert record["service"] == "feedcore"
        assert record["component"] == "fetch"
        assert "timestamp" in record

    @pytest.mark.usefixtures("restore_structlog")
    def test_level_filtering(self) -> None:
        """Test events below the configured level are dropped."""
        stream = io.StringIO()
        configure_logging(level=logging.WARNING, output=stream, json_format=True)

        logger = get_logger("etag")
        logger.info("etag_lookup")
        logger.warning("fetch_failed")

        output = stream.getvalue()
        assert "etag_lookup" not in output
        assert "fetch_failed" in output

    @pytest.mark.usefixtures("restore_structlog")
    def test_console_output(self) -> None:
        """Test the console renderer is used when JSON is disabled."""
        stream = io.StringIO()
        configure_logging(level=logging.INFO, output=stream, json_format=False)

        get_logger("convert").info("conversion_suppressed", kind="XML")

        output = stream.getvalue()
        assert "conversion_suppressed" in output
        assert "kind" in output

    @pytest.mark.usefixtures("restore_structlog")
    def test_http_library_loggers_held_at_warning(self) -> None:
        """Test httpx request logging stays quiet unless the level is higher."""
        configure_logging(level=logging.DEBUG, output=io.StringIO())

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

        configure_logging(level=logging.ERROR, output=io.StringIO())

        assert logging.getLogger("httpx").level == logging.ERROR


class TestGetLogger:
    """Tests for component-bound loggers."""

    def test_component_bound(self) -> None:
        """Test the component name is attached to every event."""
        with capture_logs() as logs:
            get_logger("rss").info("feed_parsed", items=3)

        assert logs == [
            {
                "event": "feed_parsed",
                "items": 3,
                "component": "rss",
                "log_level": "info",
            }
        ]

    def test_without_component(self) -> None:
        """Test no component key is added when none is given."""
        with capture_logs() as logs:
            get_logger().info("startup")

        assert "component" not in logs[0]

    def test_update_parser_events_carry_component(self) -> None:
        """Test dropped update sections are reported by the update component."""
        with capture_logs() as logs:
            parse_update_messages("[1]\nUPDATE=x\nMESSAGE=m\nURL=https://e.com/\n")

        assert [(e["event"], e["component"]) for e in logs] == [
            ("update_section_dropped", "update")
        ]
