"""Parser for the line-oriented update/announcement protocol.

The format is a sequence of sections::

    [1.0.0]
    UPDATE=1
    MESSAGE=New version available
    URL=http://example.com/notice

A bracketed line opens a section named by the enclosed version. Other
non-blank lines are split at the first ``=`` into a key and a value; lines
without ``=`` are ignored and repeated keys keep the last value. Lines end
at CR, LF or CRLF only, so other Unicode separators stay inside values. A
section becomes an UpdateMessage only when UPDATE (an ASCII integer),
MESSAGE and URL (an absolute URI) are all present. Broken sections are
dropped one by one.
"""

import re
from dataclasses import dataclass, field

from pydantic import ValidationError

from feedcore.observability.logging import get_logger
from feedcore.update.models import (
    SectionError,
    SectionErrorReason,
    SectionResult,
    UpdateMessage,
)


KEY_UPDATE = "UPDATE"
KEY_MESSAGE = "MESSAGE"
KEY_URL = "URL"
REQUIRED_KEYS = (KEY_UPDATE, KEY_MESSAGE, KEY_URL)

NOTIFY_VALUE = 1

_INTEGER_RE = re.compile(r"\s*[+-]?\d+\s*", re.ASCII)


@dataclass
class _Section:
    """Accumulator for the section currently being read."""

    version: str = ""
    line: int | None = None
    values: dict[str, str] = field(default_factory=dict)

    @property
    def is_blank(self) -> bool:
        return not self.version and not self.values


class UpdateMessageParser:
    """Parses update-message documents into UpdateMessage records."""

    def __init__(self) -> None:
        self._log = get_logger("update")

    def parse(self, data: bytes | str) -> list[UpdateMessage]:
        """Parse a document, dropping malformed sections.

        Args:
            data: UTF-8 encoded bytes or already decoded text.

        Returns:
            Messages in the order their sections closed.
        """
        messages: list[UpdateMessage] = []
        for result in self.parse_sections(data):
            if result.message is not None:
                messages.append(result.message)
            elif result.error is not None:
                self._log.warning(
                    "update_section_dropped",
                    version=result.version,
                    reason=result.error.reason.value,
                    error=result.error.message,
                    line=result.error.line,
                )
        return messages

    def parse_sections(self, data: bytes | str) -> list[SectionResult]:
        """Parse a document into one result per section.

        Args:
            data: UTF-8 encoded bytes or already decoded text.

        Returns:
            Section results in document order, failures included.
        """
        text = (
            data.decode("utf-8-sig", errors="replace")
            if isinstance(data, bytes)
            else data
        )

        results: list[SectionResult] = []
        section = _Section()

        for line_no, line in enumerate(_split_lines(text), start=1):
            if not line.strip():
                continue

            if _is_header(line):
                result = _finalize(section)
                if result is not None:
                    results.append(result)
                section = _Section(version=line[1:-1], line=line_no)
                continue

            key, sep, value = line.partition("=")
            if sep:
                section.values[key] = value

        result = _finalize(section)
        if result is not None:
            results.append(result)

        return results


def parse_update_messages(data: bytes | str) -> list[UpdateMessage]:
    """Parse an update-message document with a default parser."""
    return UpdateMessageParser().parse(data)


def _split_lines(text: str) -> list[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def _is_header(line: str) -> bool:
    return len(line) >= 2 and line[0] == "[" and line[-1] == "]"


def _finalize(section: _Section) -> SectionResult | None:
    """Turn an accumulated section into a result.

    Returns None for the implicit empty section before the first header.
    """
    if section.is_blank:
        return None

    def failure(reason: SectionErrorReason, message: str) -> SectionResult:
        return SectionResult(
            version=section.version,
            error=SectionError(reason=reason, message=message, line=section.line),
        )

    if not section.version:
        return failure(
            SectionErrorReason.MISSING_VERSION,
            "key/value lines without a section version",
        )
    if not section.values:
        return failure(SectionErrorReason.EMPTY_SECTION, "section has no values")

    missing = [key for key in REQUIRED_KEYS if key not in section.values]
    if missing:
        return failure(
            SectionErrorReason.MISSING_KEY,
            f"missing required keys: {', '.join(missing)}",
        )

    raw_update = section.values[KEY_UPDATE]
    if not _INTEGER_RE.fullmatch(raw_update):
        return failure(
            SectionErrorReason.INVALID_UPDATE,
            f"UPDATE is not an integer: {raw_update!r}",
        )
    update = int(raw_update)

    try:
        message = UpdateMessage(
            version=section.version,
            notify=update == NOTIFY_VALUE,
            text=section.values[KEY_MESSAGE],
            uri=section.values[KEY_URL],  # type: ignore[arg-type]
        )
    except ValidationError as e:
        return failure(
            SectionErrorReason.INVALID_URL,
            f"URL is not a valid URI: {section.values[KEY_URL]!r} ({e.error_count()} errors)",
        )

    return SectionResult(version=section.version, message=message)
