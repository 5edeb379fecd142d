"""Unit tests for the diagnostic CLI."""

import httpx
import pytest
from click.testing import CliRunner

from feedcore.cli import main as cli_main
from feedcore.fetch.client import ConditionalFetchClient
from tests.helpers.http import RecordingHandler, make_handler, raising_transport


RSS = b"""<rss version="2.0"><channel><title>CLI Feed</title>
<item><title>Only item</title><link>https://example.com/1</link></item>
</channel></rss>"""

UPDATES = b"[5.0]\nUPDATE=1\nMESSAGE=Upgrade now\nURL=https://example.com/5.0\n"

PAGE = b"""<html><head>
<link rel="alternate" type="application/rss+xml" href="/feed.xml">
</head></html>"""


def use_transport(monkeypatch: pytest.MonkeyPatch, transport: httpx.MockTransport) -> None:
    """Route CLI clients through a mock transport."""
    monkeypatch.setattr(
        cli_main,
        "_make_client",
        lambda: ConditionalFetchClient(transport=transport),
    )


def use_handler(monkeypatch: pytest.MonkeyPatch, handler: RecordingHandler) -> None:
    use_transport(monkeypatch, handler.transport)


class TestFeedCommand:
    """Tests for the feed command."""

    def test_prints_feed_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a feed is printed as JSON."""
        use_handler(monkeypatch, make_handler(httpx.Response(200, content=RSS)))

        result = CliRunner().invoke(cli_main.cli, ["feed", "https://example.com/rss"])

        assert result.exit_code == 0
        assert '"title": "CLI Feed"' in result.output
        assert "Only item" in result.output

    def test_missing_feed_exits_one(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a non-success status exits with 1."""
        use_handler(monkeypatch, make_handler(httpx.Response(404)))

        result = CliRunner().invoke(cli_main.cli, ["feed", "https://example.com/rss"])

        assert result.exit_code == 1

    def test_transport_error_exits_two(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test network failures exit with 2."""
        use_transport(
            monkeypatch,
            raising_transport(lambda r: httpx.ConnectError("refused", request=r)),
        )

        result = CliRunner().invoke(cli_main.cli, ["feed", "https://example.com/rss"])

        assert result.exit_code == 2


class TestUpdateCommand:
    """Tests for the update command."""

    def test_prints_matching_message(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the message for the requested version is printed."""
        handler = make_handler(httpx.Response(200, content=UPDATES))
        use_handler(monkeypatch, handler)

        result = CliRunner().invoke(
            cli_main.cli,
            [
                "update",
                "https://example.com/update",
                "--version",
                "5.0",
                "--param",
                "os=linux",
            ],
        )

        assert result.exit_code == 0
        assert "Upgrade now" in result.output
        assert handler.last_request.url.params["ver"] == "5.0"
        assert handler.last_request.url.params["os"] == "linux"

    def test_rejects_malformed_param(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test --param values must be KEY=VALUE."""
        use_handler(monkeypatch, make_handler(httpx.Response(200, content=UPDATES)))

        result = CliRunner().invoke(
            cli_main.cli,
            ["update", "https://example.com/update", "--version", "5.0", "--param", "oops"],
        )

        assert result.exit_code == 2
        assert "KEY=VALUE" in result.output


class TestDiscoverCommand:
    """Tests for the discover command."""

    def test_lists_feed_links(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test advertised feeds are printed as absolute URLs."""
        use_handler(monkeypatch, make_handler(httpx.Response(200, content=PAGE)))

        result = CliRunner().invoke(
            cli_main.cli, ["discover", "https://blog.example.com/post"]
        )

        assert result.exit_code == 0
        assert "https://blog.example.com/feed.xml" in result.output
