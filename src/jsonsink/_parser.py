"""
State machine JSON parser.

The parser walks the token stream with one state per grammar production
and an explicit stack of frames, so deeply nested input costs heap rather
than Python call stack. Every value it recognizes is forwarded to a sink:
a JsonBuilder by default, or any JsonSink the caller supplies.
"""

import logging
from enum import Enum
from typing import IO, Any

from ._builder import JsonBuilder
from ._config import ParseConfig, WriteConfig
from ._errors import (
    IllegalStateError,
    JsonDepthError,
    JsonParserError,
    JsonWriterError,
)
from ._lexer import JsonLexer, JsonToken, TokenType
from ._profiling import profile
from ._sink import ContainerKind, Frame, JsonSink
from ._values import LazyNumber

logger = logging.getLogger(__name__)

type JsonSource = str | bytes | bytearray | IO[str] | IO[bytes]

_LENIENT_CONSTANTS = frozenset({"NaN", "Infinity"})
_LENIENT_KEY_TOKENS = frozenset(
    {TokenType.IDENTIFIER, TokenType.TRUE, TokenType.FALSE, TokenType.NULL}
)


class ParseState(Enum):
    """Parser states, one per grammar production."""

    VALUE = "value"
    ARRAY_START = "array_start"
    ARRAY_VALUE = "array_value"
    ARRAY_COMMA = "array_comma"
    OBJECT_START = "object_start"
    OBJECT_KEY = "object_key"
    OBJECT_COLON = "object_colon"
    OBJECT_COMMA = "object_comma"
    END = "end"


def _decode_source(source: Any) -> str:
    """Reads file objects and decodes UTF-8 bytes into text."""
    if hasattr(source, "read"):
        source = source.read()
    if isinstance(source, bytes | bytearray):
        data = bytes(source)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            valid = data[: e.start].decode("utf-8")
            raise JsonParserError(
                "Invalid UTF-8 byte sequence", valid, len(valid)
            ) from e
    if not isinstance(source, str):
        raise TypeError(
            "the JSON object must be str, bytes or bytearray, "
            f"not {type(source).__name__}"
        )
    return source


class JsonParser:
    """
    Parses JSON text in strict (RFC 8259) or lenient mode.

    A parser holds only its configuration; each parse() call owns its own
    lexer, frame stack and sink, so one parser may be reused sequentially.
    """

    def __init__(self, config: ParseConfig | None = None) -> None:
        self.config = config if config is not None else ParseConfig()

    def parse(self, source: JsonSource, sink: JsonSink | None = None) -> Any:
        """
        Parses source and returns sink.done().

        Without a sink the result is the value tree. Parsing is all or
        nothing: on failure a JsonParserError propagates and no partial tree
        is returned. The smaller of the parser's and the sink's depth limits
        applies, and a value the sink refuses (NaN reaching a strict writer)
        is reported as a JsonParserError at the offending token.
        """
        text = _decode_source(source)
        if sink is None:
            sink = JsonBuilder(
                config=WriteConfig(strict=False, max_depth=self.config.max_depth)
            )

        start = 0
        if text.startswith("\ufeff"):
            if self.config.strict:
                raise JsonParserError(
                    "JSON input should not contain BOM (Byte Order Mark)",
                    text,
                    0,
                )
            start = 1

        logger.debug(
            "Parsing %d characters (strict=%s)", len(text), self.config.strict
        )
        with profile("parse", len(text)):
            lexer = JsonLexer(text, strict=self.config.strict, pos=start)
            self._run(lexer, sink)
        return sink.done()

    def _run(self, lexer: JsonLexer, sink: JsonSink) -> None:
        strict = self.config.strict
        frames: list[Frame] = []
        state = ParseState.VALUE
        token = lexer.next_token()
        comma: JsonToken = token
        max_depth = min(self.config.max_depth, sink.config.max_depth - sink.depth)

        try:
            while state is not ParseState.END:
                kind = token.type

                if state is ParseState.ARRAY_COMMA:
                    if kind is TokenType.COMMA:
                        comma = token
                        state = ParseState.ARRAY_VALUE
                        token = lexer.next_token()
                    elif kind is TokenType.END_ARRAY:
                        state, token = self._close(lexer, sink, frames)
                    else:
                        raise lexer.error("Expecting ',' or ']'", token.start)

                elif state is ParseState.OBJECT_COMMA:
                    if kind is TokenType.COMMA:
                        comma = token
                        state = ParseState.OBJECT_KEY
                        token = lexer.next_token()
                    elif kind is TokenType.END_OBJECT:
                        state, token = self._close(lexer, sink, frames)
                    else:
                        raise lexer.error("Expecting ',' or '}'", token.start)

                elif state is ParseState.OBJECT_COLON:
                    if kind is not TokenType.COLON:
                        raise lexer.error("Expecting ':' delimiter", token.start)
                    state = ParseState.VALUE
                    token = lexer.next_token()

                elif state in (ParseState.OBJECT_START, ParseState.OBJECT_KEY):
                    if kind is TokenType.END_OBJECT:
                        if state is ParseState.OBJECT_KEY:
                            self._trailing_comma(lexer, comma, "object")
                        state, token = self._close(lexer, sink, frames)
                        continue
                    if kind is TokenType.STRING or (
                        not strict and kind in _LENIENT_KEY_TOKENS
                    ):
                        sink.key(token.value)
                    else:
                        raise lexer.error(
                            "Expecting property name enclosed in double quotes",
                            token.start,
                        )
                    state = ParseState.OBJECT_COLON
                    token = lexer.next_token()

                else:
                    if kind is TokenType.END_ARRAY and state is not ParseState.VALUE:
                        # ARRAY_START closes an empty array, ARRAY_VALUE
                        # follows a comma.
                        if state is ParseState.ARRAY_VALUE:
                            self._trailing_comma(lexer, comma, "array")
                        state, token = self._close(lexer, sink, frames)
                    elif kind in (TokenType.BEGIN_ARRAY, TokenType.BEGIN_OBJECT):
                        state = self._open(lexer, sink, frames, token, max_depth)
                        token = lexer.next_token()
                    else:
                        self._scalar(lexer, sink, token)
                        state = self._after_value(frames)
                        token = lexer.next_token()
        except IllegalStateError:
            raise
        except JsonWriterError as exc:
            # The sink refused a value the parser accepted.
            raise JsonParserError(str(exc), lexer.text, token.start) from exc

        if token.type is not TokenType.EOF:
            raise lexer.error("Extra data", token.start)
        logger.debug("Parsed document ending at offset %d", lexer.pos)

    def _open(
        self,
        lexer: JsonLexer,
        sink: JsonSink,
        frames: list[Frame],
        token: JsonToken,
        max_depth: int,
    ) -> ParseState:
        if len(frames) >= max_depth:
            raise JsonDepthError(
                f"Maximum nesting depth of {max_depth} exceeded",
                lexer.text,
                token.start,
            )
        if token.type is TokenType.BEGIN_ARRAY:
            frames.append(Frame(ContainerKind.ARRAY, awaiting_key=False))
            sink.begin_array()
            return ParseState.ARRAY_START
        frames.append(Frame(ContainerKind.OBJECT, awaiting_key=True))
        sink.begin_object()
        return ParseState.OBJECT_START

    def _close(
        self, lexer: JsonLexer, sink: JsonSink, frames: list[Frame]
    ) -> tuple[ParseState, JsonToken]:
        frames.pop()
        sink.end()
        return self._after_value(frames), lexer.next_token()

    @staticmethod
    def _after_value(frames: list[Frame]) -> ParseState:
        if not frames:
            return ParseState.END
        frame = frames[-1]
        frame.count += 1
        if frame.kind is ContainerKind.ARRAY:
            return ParseState.ARRAY_COMMA
        return ParseState.OBJECT_COMMA

    def _trailing_comma(
        self, lexer: JsonLexer, comma: JsonToken, container: str
    ) -> None:
        if self.config.strict:
            raise lexer.error(
                f"Illegal trailing comma before end of {container}", comma.start
            )
        logger.debug("Accepted trailing comma at offset %d", comma.start)

    def _scalar(self, lexer: JsonLexer, sink: JsonSink, token: JsonToken) -> None:
        """Forwards a scalar token to the sink or rejects it."""
        kind = token.type
        if kind is TokenType.STRING:
            sink.value(token.value)
        elif kind is TokenType.NUMBER:
            sink.value(self._number(token.value))
        elif kind is TokenType.TRUE:
            sink.value(True)
        elif kind is TokenType.FALSE:
            sink.value(False)
        elif kind is TokenType.NULL:
            sink.null()
        elif kind is TokenType.IDENTIFIER and not self.config.strict:
            if token.value in _LENIENT_CONSTANTS:
                sink.value(self._number(token.value))
            else:
                logger.debug("Accepted unquoted string at offset %d", token.start)
                sink.value(token.value)
        else:
            raise lexer.error("Expecting value", token.start)

    def _number(self, raw: str) -> LazyNumber | int | float:
        number = LazyNumber(raw)
        if self.config.lazy_numbers:
            return number
        return number.value
