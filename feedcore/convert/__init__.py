"""Content conversion from response bodies to typed values."""

from feedcore.convert.converter import (
    ContentConverter,
    feed_converter,
    function_converter,
    json_converter,
    update_message_converter,
    xml_converter,
)
from feedcore.convert.models import ConversionResult, ConverterKind


__all__ = [
    # Converter
    "ContentConverter",
    "ConverterKind",
    "ConversionResult",
    # Constructors
    "function_converter",
    "json_converter",
    "xml_converter",
    "update_message_converter",
    "feed_converter",
]
