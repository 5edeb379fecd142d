"""Unit tests for feed element helpers."""

from datetime import UTC, datetime

import pytest

from feedcore.rss.xml import (
    MAX_SUMMARY_LENGTH,
    NS_RSS10,
    load_document,
    local_name,
    namespace_of,
    parse_datetime,
    parse_uri,
    strip_markup,
)


class TestLoadDocument:
    """Tests for document loading."""

    def test_captures_default_namespace(self) -> None:
        """Test the root's default namespace survives parsing."""
        document = load_document(
            b'<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" '
            b'xmlns="http://purl.org/rss/1.0/"><channel/></rdf:RDF>'
        )

        assert document.default_namespace == NS_RSS10
        assert local_name(document.root.tag) == "RDF"

    def test_nested_default_namespace_ignored(self) -> None:
        """Test only declarations on the root count."""
        document = load_document(
            b'<rss version="2.0"><channel xmlns="urn:inner"/></rss>'
        )

        assert document.default_namespace == ""

    def test_accepts_text(self) -> None:
        """Test str input is encoded before parsing."""
        document = load_document("<feed xmlns='http://www.w3.org/2005/Atom'/>")

        assert namespace_of(document.root.tag) == "http://www.w3.org/2005/Atom"


class TestParseDatetime:
    """Tests for timestamp parsing."""

    @pytest.mark.parametrize(
        "value",
        [
            "Tue, 02 Jan 2024 10:00:00 GMT",
            "Tue, 02 Jan 2024 12:00:00 +0200",
            "2024-01-02T10:00:00Z",
            "2024-01-02T05:00:00-05:00",
            "2024-01-02T10:00:00",
        ],
    )
    def test_equivalent_values(self, value: str) -> None:
        """Test RFC 822 and ISO 8601 forms normalize to the same instant."""
        assert parse_datetime(value) == datetime(2024, 1, 2, 10, tzinfo=UTC)

    def test_result_is_utc(self) -> None:
        """Test offsets are converted to UTC."""
        dt = parse_datetime("2024-01-02T12:00:00+02:00")

        assert dt is not None
        assert dt.tzinfo == UTC
        assert dt.hour == 10

    @pytest.mark.parametrize("value", ["", "   ", "yesterday", "2024-13-45"])
    def test_invalid_values(self, value: str) -> None:
        """Test unparseable values yield None."""
        assert parse_datetime(value) is None

    @pytest.mark.parametrize(
        "value",
        [
            "0001-01-01T00:00:00+05:00",
            "9999-12-31T23:00:00-05:00",
        ],
    )
    def test_out_of_range_after_utc_shift(self, value: str) -> None:
        """Test values pushed past the datetime range by their offset yield None."""
        assert parse_datetime(value) is None


class TestParseUri:
    """Tests for link parsing."""

    def test_absolute_uri(self) -> None:
        """Test absolute URIs are accepted."""
        uri = parse_uri(" https://example.com/a?b=c ")

        assert uri is not None
        assert str(uri) == "https://example.com/a?b=c"

    @pytest.mark.parametrize("value", ["", "relative/path", "not a url"])
    def test_rejected_values(self, value: str) -> None:
        """Test relative or garbage values yield None."""
        assert parse_uri(value) is None


class TestStripMarkup:
    """Tests for summary cleanup."""

    def test_removes_tags_and_trims(self) -> None:
        """Test tags are removed and whitespace trimmed."""
        assert strip_markup("  <p>Hi <a href='x'>there</a></p>  ") == "Hi there"

    def test_truncates(self) -> None:
        """Test the result is cut to the limit."""
        assert len(strip_markup("y" * 1000)) == MAX_SUMMARY_LENGTH
        assert strip_markup("abcdef", limit=3) == "abc"

    def test_empty(self) -> None:
        """Test empty input stays empty."""
        assert strip_markup("") == ""
