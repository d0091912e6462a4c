"""
Single-character lookahead scanner for JSON text.

The lexer decodes strings and delimits numbers as it goes, so each token
carries its final value. It never judges whether a token is allowed where it
appears; unexpected characters come back as INVALID tokens and the parser
reports them with the expectation of its current state.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ._errors import JsonParserError, Position
from ._profiling import profile


class TokenType(Enum):
    BEGIN_OBJECT = "{"
    END_OBJECT = "}"
    BEGIN_ARRAY = "["
    END_ARRAY = "]"
    COMMA = ","
    COLON = ":"
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    IDENTIFIER = "identifier"
    INVALID = "invalid"
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class JsonToken:
    """
    A scanned token with its source span.

    value is the decoded text for strings, the raw literal for numbers, the
    word for literals and identifiers, and the character itself otherwise.
    """

    type: TokenType
    value: Any
    start: Position
    end: Position


_STRUCTURAL = {
    "{": TokenType.BEGIN_OBJECT,
    "}": TokenType.END_OBJECT,
    "[": TokenType.BEGIN_ARRAY,
    "]": TokenType.END_ARRAY,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
}
_LITERALS = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "null": TokenType.NULL,
}
_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_DIGITS = frozenset("0123456789")
_WHITESPACE = frozenset(" \t\n\r")
_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_HEX4 = re.compile(r"[0-9a-fA-F]{4}")
# Characters that end a run of plain string content, per (quote, strict).
# Strict mode also stops on control characters and lone surrogates.
_STRING_STOPS = {
    ('"', True): re.compile(r'["\\\x00-\x1f\ud800-\udfff]'),
    ('"', False): re.compile(r'["\\]'),
    ("'", False): re.compile(r"['\\]"),
}


class JsonLexer:
    """
    Tokenizes JSON input for the state machine parser.

    In strict mode only RFC 8259 tokens are produced. In lenient mode the
    lexer also skips // and /* */ comments, scans single quoted strings,
    accepts raw control characters in strings, unpaired surrogate escapes,
    leading zeros, a leading '+' and signed Infinity.
    """

    def __init__(self, text: str, strict: bool = True, pos: Position = 0):
        self.text = text
        self.strict = strict
        self.pos = pos
        self.length = len(text)

    def error(self, msg: str, pos: Position) -> JsonParserError:
        return JsonParserError(msg, self.text, pos)

    def peek(self, offset: int = 0) -> str:
        """Returns the character at pos + offset without advancing."""
        index = self.pos + offset
        return self.text[index] if index < self.length else "\0"

    def skip_whitespace(self) -> None:
        """Skips insignificant whitespace, and comments when lenient."""
        text = self.text
        while self.pos < self.length:
            char = text[self.pos]
            if char in _WHITESPACE:
                self.pos += 1
            elif char == "/" and not self.strict and self.peek(1) in "/*":
                self._skip_comment()
            else:
                break

    def _skip_comment(self) -> None:
        start = self.pos
        if self.peek(1) == "/":
            end = self.text.find("\n", start + 2)
            self.pos = self.length if end < 0 else end + 1
            return
        end = self.text.find("*/", start + 2)
        if end < 0:
            raise self.error("Unterminated comment starting at", start)
        self.pos = end + 2

    def next_token(self) -> JsonToken:
        """Returns the next token; EOF once the input is exhausted."""
        self.skip_whitespace()
        start = self.pos
        if start >= self.length:
            return JsonToken(TokenType.EOF, None, start, start)

        char = self.text[start]
        structural = _STRUCTURAL.get(char)
        if structural is not None:
            self.pos += 1
            return JsonToken(structural, char, start, self.pos)
        if char == '"' or (char == "'" and not self.strict):
            return self.scan_string(char)
        if char in _DIGITS or char == "-" or (char == "+" and not self.strict):
            return self.scan_number()

        word = _IDENTIFIER.match(self.text, start)
        if word is not None:
            self.pos = word.end()
            text = word.group()
            return JsonToken(
                _LITERALS.get(text, TokenType.IDENTIFIER), text, start, self.pos
            )

        self.pos += 1
        return JsonToken(TokenType.INVALID, char, start, self.pos)

    def scan_string(self, quote: str = '"') -> JsonToken:
        """Scans and decodes a quoted string starting at the current position."""
        with profile("scan_string"):
            start = self.pos
            stop_re = _STRING_STOPS[quote, self.strict and quote == '"']
            text = self.text
            chunks: list[str] = []
            self.pos += 1

            while True:
                stop = stop_re.search(text, self.pos)
                if stop is None:
                    raise self.error("Unterminated string starting at", start)
                chunks.append(text[self.pos : stop.start()])
                self.pos = stop.start()

                char = stop.group()
                if char == quote:
                    self.pos += 1
                    break
                if char == "\\":
                    chunks.append(self._scan_escape(start))
                elif char < " ":
                    raise self.error("Invalid control character at", self.pos)
                else:
                    raise self.error("Lone surrogate character at", self.pos)

            return JsonToken(TokenType.STRING, "".join(chunks), start, self.pos)

    def _scan_escape(self, string_start: Position) -> str:
        """Decodes the escape sequence at the current backslash."""
        escape_pos = self.pos
        if escape_pos + 1 >= self.length:
            raise self.error("Unterminated string starting at", string_start)

        char = self.text[escape_pos + 1]
        simple = _ESCAPES.get(char)
        if simple is None and char == "'" and not self.strict:
            simple = "'"
        if simple is not None:
            self.pos += 2
            return simple
        if char != "u":
            raise self.error(f"Invalid \\escape: {char!r}", escape_pos)

        code = self._scan_hex(escape_pos)
        self.pos += 6
        if 0xD800 <= code <= 0xDBFF:
            if self.text.startswith("\\u", self.pos):
                low = self._scan_hex(self.pos)
                if 0xDC00 <= low <= 0xDFFF:
                    self.pos += 6
                    return chr(
                        0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                    )
            if self.strict:
                raise self.error("Unpaired high surrogate", escape_pos)
        elif 0xDC00 <= code <= 0xDFFF and self.strict:
            raise self.error("Unpaired low surrogate", escape_pos)
        return chr(code)

    def _scan_hex(self, escape_pos: Position) -> int:
        digits = self.text[escape_pos + 2 : escape_pos + 6]
        if not _HEX4.fullmatch(digits):
            raise self.error("Invalid \\uXXXX escape", escape_pos)
        return int(digits, 16)

    def _scan_digits(self) -> int:
        count = 0
        while self.peek() in _DIGITS:
            self.pos += 1
            count += 1
        return count

    def _scan_integer_part(self, start: Position) -> None:
        """Scans the integer part of a JSON number."""
        if self.peek() not in _DIGITS:
            raise self.error("Invalid number", start)
        if self.peek() == "0" and self.strict:
            self.pos += 1
            if self.peek() in _DIGITS:
                raise self.error("Leading zeros not allowed", start)
        else:
            self._scan_digits()

    def _scan_decimal_part(self, start: Position) -> None:
        """Scans the fraction of a JSON number if present."""
        if self.peek() == ".":
            self.pos += 1
            if not self._scan_digits():
                raise self.error("Invalid decimal number", start)

    def _scan_exponent_part(self, start: Position) -> None:
        """Scans the exponent of a JSON number if present."""
        if self.peek() in "eE":
            self.pos += 1
            if self.peek() in "+-":
                self.pos += 1
            if not self._scan_digits():
                raise self.error("Invalid exponent", start)

    def scan_number(self) -> JsonToken:
        """Scans a number literal, keeping its raw text."""
        with profile("scan_number"):
            start = self.pos
            if self.peek() in "+-":
                self.pos += 1
                if not self.strict and self.text.startswith("Infinity", self.pos):
                    self.pos += len("Infinity")
                    return JsonToken(
                        TokenType.NUMBER, self.text[start : self.pos], start, self.pos
                    )

            self._scan_integer_part(start)
            self._scan_decimal_part(start)
            self._scan_exponent_part(start)

            return JsonToken(
                TokenType.NUMBER, self.text[start : self.pos], start, self.pos
            )
