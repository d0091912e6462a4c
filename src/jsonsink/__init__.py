"""
JSON value model with a strict/lenient parser and a streaming writer.

Both directions meet in one fluent write interface, the sink: JsonWriter
turns sink calls into JSON text, JsonBuilder turns the same calls into a
JsonObject/JsonArray tree, and JsonParser drives any sink from JSON text.

    >>> import jsonsink
    >>> jsonsink.loads('{"a": [1, 2.5]}')
    JsonObject({'a': JsonArray([LazyNumber('1'), LazyNumber('2.5')])})
    >>> jsonsink.JsonWriter().begin_object().value("a", 1).end().done()
    '{"a":1}'
"""

from typing import IO, Any

from ._builder import JsonBuilder
from ._config import ParseConfig, WriteConfig
from ._errors import (
    IllegalStateError,
    JsonDepthError,
    JsonError,
    JsonParserError,
    JsonWriterError,
    ParsePosition,
)
from ._lexer import JsonLexer, JsonToken, TokenType
from ._parser import JsonParser, JsonSource, ParseState
from ._profiling import HotPathStats, clear_hot_path_stats, get_hot_path_stats
from ._sink import ContainerKind, Frame, JsonSink
from ._values import JsonArray, JsonObject, JsonValue, LazyNumber
from ._writer import JsonWriter

__version__ = "0.1.0"


def loads(s: str | bytes | bytearray, **kwargs: Any) -> JsonValue:
    """
    Parses a JSON document into a value tree.

    Keyword arguments build a ParseConfig (strict, max_depth, lazy_numbers).
    """
    if not isinstance(s, str | bytes | bytearray):
        raise TypeError(
            "the JSON object must be str, bytes or bytearray, "
            f"not {type(s).__name__}"
        )
    return JsonParser(ParseConfig(**kwargs)).parse(s)


def load(fp: IO[str] | IO[bytes], **kwargs: Any) -> JsonValue:
    """Parses the whole content of a file-like object."""
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")
    return JsonParser(ParseConfig(**kwargs)).parse(fp)


def parse(source: JsonSource, sink: JsonSink | None = None, **kwargs: Any) -> Any:
    """
    Parses source into sink and returns sink.done().

    With a JsonWriter sink this re-emits the document, e.g. to reformat it:

        parse(text, JsonWriter(config=WriteConfig(indent=2)))
    """
    return JsonParser(ParseConfig(**kwargs)).parse(source, sink)


def dumps(obj: Any, **kwargs: Any) -> str:
    """
    Serializes a value to JSON text.

    Keyword arguments build a WriteConfig (strict, max_depth, indent).
    """
    writer = JsonWriter(config=WriteConfig(**kwargs))
    writer.value(obj).done()
    return writer.getvalue()


def dump(obj: Any, fp: IO[str], **kwargs: Any) -> None:
    """Serializes a value as JSON text onto a writable text stream."""
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")
    JsonWriter(fp, config=WriteConfig(**kwargs)).value(obj).done()


__all__ = [
    "ContainerKind",
    "Frame",
    "HotPathStats",
    "IllegalStateError",
    "JsonArray",
    "JsonBuilder",
    "JsonDepthError",
    "JsonError",
    "JsonLexer",
    "JsonObject",
    "JsonParser",
    "JsonParserError",
    "JsonSink",
    "JsonSource",
    "JsonToken",
    "JsonValue",
    "JsonWriter",
    "JsonWriterError",
    "LazyNumber",
    "ParseConfig",
    "ParsePosition",
    "ParseState",
    "TokenType",
    "WriteConfig",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "get_hot_path_stats",
    "load",
    "loads",
    "parse",
]
