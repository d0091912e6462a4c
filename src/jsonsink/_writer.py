"""
Streaming JSON text writer.

JsonWriter implements the sink contract by appending grammar-correct text
as each call arrives. No intermediate tree is built: the frame stack alone
drives comma placement and indentation.
"""

import logging
import math
import re
from decimal import Decimal
from typing import IO, Any

from ._config import WriteConfig
from ._profiling import profile
from ._sink import ContainerKind, Frame, JsonSink
from ._values import LazyNumber

logger = logging.getLogger(__name__)

_ESCAPE_MAP = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
# Control characters, plus lone surrogates so the text always encodes.
_NEEDS_ESCAPE = re.compile(r'["\\\x00-\x1f\ud800-\udfff]')
_STRICT_NUMBER = re.compile(r"-?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?")


def _escape_char(match: re.Match[str]) -> str:
    char = match.group()
    escaped = _ESCAPE_MAP.get(char)
    if escaped is None:
        escaped = f"\\u{ord(char):04x}"
    return escaped


def encode_string(s: str) -> str:
    """Quotes s and escapes it per the JSON escape table."""
    with profile("write_string", len(s)):
        return '"' + _NEEDS_ESCAPE.sub(_escape_char, s) + '"'


def _encode_special(n: float | Decimal) -> str:
    if n != n:
        return "NaN"
    return "Infinity" if n > 0 else "-Infinity"


def encode_number(n: int | float | Decimal | LazyNumber) -> str:
    """
    Encodes a number in its shortest round-trippable form.

    A LazyNumber whose literal already follows the strict grammar is
    written verbatim; lenient literals (leading zeros, a '+' sign) are
    re-encoded from their value. NaN and infinities come out as the lenient
    literals, the caller decides whether they are allowed.
    """
    if isinstance(n, LazyNumber):
        if _STRICT_NUMBER.fullmatch(n.raw):
            return n.raw
        n = n.value
    if isinstance(n, int):
        return str(n)
    if isinstance(n, Decimal):
        if n.is_nan() or n.is_infinite():
            return _encode_special(n)
        return str(n)
    if math.isnan(n) or math.isinf(n):
        return _encode_special(n)
    return repr(n)


class JsonWriter(JsonSink):
    """
    Writes JSON text incrementally.

    Without an output stream the text is buffered and returned by done();
    with one, every call writes through to out.write().

        JsonWriter().begin_object().value("a", 1).end().done()  # '{"a":1}'
    """

    def __init__(
        self, out: IO[str] | None = None, *, config: WriteConfig | None = None
    ) -> None:
        super().__init__(config)
        if out is not None and not hasattr(out, "write"):
            raise TypeError("out must have a write() method")
        self._out = out
        self._buffer: list[str] = []
        self._write = out.write if out is not None else self._buffer.append
        self._indent = self.config.indent_unit

    def _separate(self, parent: Frame) -> None:
        """Writes the comma and line break that precede a container entry."""
        if parent.count:
            self._write(",")
        if self._indent is not None:
            self._write("\n" + self._indent * len(self._frames))

    def _prefix(self, parent: Frame | None) -> None:
        # Object entries were already separated when their key was written.
        if parent is not None and parent.kind is ContainerKind.ARRAY:
            self._separate(parent)

    def _write_key(self, key: str, frame: Frame) -> None:
        self._separate(frame)
        self._write(encode_string(key))
        self._write(":" if self._indent is None else ": ")

    def _write_scalar(self, value: Any, parent: Frame | None) -> None:
        self._prefix(parent)
        if value is None:
            self._write("null")
        elif value is True:
            self._write("true")
        elif value is False:
            self._write("false")
        elif isinstance(value, str):
            self._write(encode_string(value))
        else:
            self._write(encode_number(value))

    def _open_container(self, frame: Frame, parent: Frame | None) -> None:
        self._prefix(parent)
        self._write("[" if frame.kind is ContainerKind.ARRAY else "{")

    def _close_container(self, frame: Frame, parent: Frame | None) -> None:
        if self._indent is not None and frame.count:
            self._write("\n" + self._indent * len(self._frames))
        self._write("]" if frame.kind is ContainerKind.ARRAY else "}")

    def done(self) -> str | None:
        """
        Finishes the document.

        Returns the buffered text, or None when writing to a stream (which is
        flushed). Raises IllegalStateError if a container is still open or
        nothing was written.
        """
        self._finish()
        if self._out is None:
            text = self.getvalue()
            logger.debug("Finished JSON document of %d characters", len(text))
            return text
        flush = getattr(self._out, "flush", None)
        if flush is not None:
            flush()
        logger.debug("Finished JSON document on %r", self._out)
        return None

    def getvalue(self) -> str:
        """Returns the text buffered so far; empty when writing to a stream."""
        return "".join(self._buffer)
