"""
Error taxonomy shared by the parser, writer and builder.

Parser errors describe malformed input and carry the position of the
offending token. Writer errors describe misuse of the sink contract by the
calling code and are programmer bugs rather than data problems.
"""

from dataclasses import dataclass

type Position = int


@dataclass(frozen=True)
class ParsePosition:
    """Character offset of a parse failure with its derived line and column."""

    offset: int
    line: int
    column: int

    @classmethod
    def from_offset(cls, doc: str, pos: Position) -> "ParsePosition":
        """Derives 1-based line and column numbers for an offset into doc."""
        if not doc:
            return cls(pos, 1, pos + 1)
        line = doc.count("\n", 0, pos) + 1
        column = pos - doc.rfind("\n", 0, pos)
        return cls(pos, line, column)


class JsonError(Exception):
    """Base class for every error raised by jsonsink."""


class JsonParserError(JsonError, ValueError):
    """
    Handles JSON parsing failures with precise position information.

    Carries the character offset, the derived line/column numbers and the
    UTF-8 byte offset of the failure, plus the document itself so callers
    can render context around it.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos
        self.position = ParsePosition.from_offset(doc, pos)
        self.lineno = self.position.line
        self.colno = self.position.column

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    @property
    def byte_offset(self) -> int:
        """Offset of the failure in the UTF-8 encoding of the document."""
        return len(self.doc[: self.pos].encode("utf-8", "surrogatepass"))

    def __reduce__(self) -> tuple[type, tuple[str, str, int]]:
        return self.__class__, (self.msg, self.doc, self.pos)


class JsonDepthError(JsonParserError):
    """Raised when input nests containers deeper than the configured limit."""


class JsonWriterError(JsonError):
    """Raised when a value cannot be written as JSON."""


class IllegalStateError(JsonWriterError):
    """Raised when sink calls are issued in an order JSON does not allow."""
