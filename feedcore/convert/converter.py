"""Pluggable transforms from a response body to a typed value."""

import json
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, TypeVar
from xml.etree.ElementTree import Element

import defusedxml.ElementTree as DefusedET
import structlog
from pydantic import TypeAdapter

from feedcore.convert.models import ConversionResult, ConverterKind
from feedcore.rss.models import Feed
from feedcore.rss.parser import parse_feed
from feedcore.update.models import UpdateMessage
from feedcore.update.parser import UpdateMessageParser


logger = structlog.get_logger()

T = TypeVar("T")


def _none() -> None:
    return None


@dataclass
class ContentConverter(Generic[T]):
    """Converts a response body into a value of type T.

    The failure policy is read at call time: with ignore_exception false a
    failing transform propagates its exception unchanged; with it true the
    failure is logged once and default() is returned instead.

    Attributes:
        kind: Which conversion this converter performs.
        transform: Function applied to the raw body.
        default: Factory for the value returned on suppressed failures.
        ignore_exception: Whether failures are suppressed.
    """

    kind: ConverterKind
    transform: Callable[[bytes], T]
    default: Callable[[], T]
    ignore_exception: bool = False

    def try_convert(self, body: bytes) -> ConversionResult[T]:
        """Run the transform and capture its outcome.

        Args:
            body: Raw response body.

        Returns:
            ConversionResult holding the value or the raised exception.
        """
        try:
            return ConversionResult(kind=self.kind, value=self.transform(body))
        except Exception as e:  # noqa: BLE001
            return ConversionResult(kind=self.kind, error=e)

    def convert(self, body: bytes) -> T:
        """Convert a body according to the failure policy.

        Args:
            body: Raw response body.

        Returns:
            Converted value, or default() when a failure was suppressed.
        """
        result = self.try_convert(body)
        if result.error is None:
            return result.value  # type: ignore[return-value]

        if not self.ignore_exception:
            raise result.error

        logger.warning(
            "conversion_suppressed",
            component="convert",
            kind=self.kind.value,
            error_type=type(result.error).__name__,
            error=str(result.error),
        )
        return self.default()


def function_converter(
    func: Callable[[bytes], T],
    default: Callable[[], T] = _none,  # type: ignore[assignment]
    ignore_exception: bool = False,
) -> ContentConverter[T]:
    """Wrap a caller-supplied transform.

    Args:
        func: Transform applied to the body.
        default: Factory for the value returned on suppressed failures.
        ignore_exception: Whether failures are suppressed.
    """
    return ContentConverter(
        kind=ConverterKind.FUNCTION,
        transform=func,
        default=default,
        ignore_exception=ignore_exception,
    )


def json_converter(
    model: type[T] | Any | None = None,
    ignore_exception: bool = False,
) -> ContentConverter[Any]:
    """Deserialize JSON, optionally validating it into a model type.

    Args:
        model: Any type pydantic can validate (BaseModel, dataclass,
            list[...], ...). Without it the decoded JSON value is returned.
        ignore_exception: Whether failures are suppressed.
    """
    if model is None:
        transform: Callable[[bytes], Any] = json.loads
    else:
        adapter = TypeAdapter(model)
        transform = adapter.validate_json

    return ContentConverter(
        kind=ConverterKind.JSON,
        transform=transform,
        default=_none,
        ignore_exception=ignore_exception,
    )


def xml_converter(
    model: Callable[[Element], T] | None = None,
    ignore_exception: bool = False,
) -> ContentConverter[Any]:
    """Parse XML with defusedxml, optionally mapping the root element.

    Args:
        model: Function building a value from the root element. Without it
            the root element itself is returned.
        ignore_exception: Whether failures are suppressed.
    """

    def transform(body: bytes) -> Any:
        root = DefusedET.fromstring(body)
        return model(root) if model is not None else root

    return ContentConverter(
        kind=ConverterKind.XML,
        transform=transform,
        default=_none,
        ignore_exception=ignore_exception,
    )


def update_message_converter(
    ignore_exception: bool = False,
) -> ContentConverter[list[UpdateMessage]]:
    """Parse the update/announcement text protocol."""
    parser = UpdateMessageParser()
    return ContentConverter(
        kind=ConverterKind.UPDATE_MESSAGE,
        transform=parser.parse,
        default=list,
        ignore_exception=ignore_exception,
    )


def feed_converter(
    ignore_exception: bool = False,
    clock: Callable[[], datetime] | None = None,
) -> ContentConverter[Feed | None]:
    """Parse an RSS 1.0, RSS 2.0 or Atom document into a Feed.

    Args:
        ignore_exception: Whether failures are suppressed.
        clock: Source of the lastChecked timestamp.
    """

    def transform(body: bytes) -> Feed | None:
        return parse_feed(body, now=clock() if clock is not None else None)

    return ContentConverter(
        kind=ConverterKind.FEED,
        transform=transform,
        default=_none,
        ignore_exception=ignore_exception,
    )
