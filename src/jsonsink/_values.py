"""
In-memory JSON value model.

Objects and arrays are dict and list subclasses with typed accessors,
strings, booleans and null map to str, bool and None. Numbers produced by the
parser are LazyNumber instances that keep their literal text and only decode
it when a numeric view is requested.
"""

import math
import numbers
import re
from decimal import Decimal
from functools import total_ordering
from typing import Any

type JsonValue = (
    JsonObject
    | JsonArray
    | str
    | LazyNumber
    | int
    | float
    | Decimal
    | bool
    | None
)

_NUMBER_LITERAL = re.compile(r"[+-]?[0-9]+(\.[0-9]+)?([eE][+-]?[0-9]+)?")
_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")
_SPECIAL_LITERALS = {
    "NaN": math.nan,
    "Infinity": math.inf,
    "+Infinity": math.inf,
    "-Infinity": -math.inf,
}

_INT64_RANGE = 1 << 64
_INT64_OFFSET = 1 << 63


@total_ordering
class LazyNumber:
    """
    A JSON number kept as its original literal text.

    The numeric value is decoded on first access and cached. Integer shaped
    literals decode to an exact int, everything else to a float, so values
    beyond 53 bits of precision stay exact in raw and to_decimal() while
    float() applies the usual rounding. Comparisons with a Decimal use the
    exact literal.
    """

    __slots__ = ("_value", "raw")

    def __init__(self, raw: str) -> None:
        if not isinstance(raw, str):
            raise TypeError(f"raw must be a string, not {type(raw).__name__}")
        if raw not in _SPECIAL_LITERALS and not _NUMBER_LITERAL.fullmatch(raw):
            raise ValueError(f"Invalid number literal: {raw!r}")
        self.raw = raw
        self._value: int | float | None = None

    @property
    def value(self) -> int | float:
        """The decoded number, computed once and cached."""
        if self._value is None:
            self._value = self._decode()
        return self._value

    def _decode(self) -> int | float:
        special = _SPECIAL_LITERALS.get(self.raw)
        if special is not None:
            return special
        if self.is_integral:
            return int(self.raw)
        return float(self.raw)

    @property
    def is_integral(self) -> bool:
        """True when the literal has no fraction or exponent."""
        return _INTEGER_LITERAL.fullmatch(self.raw) is not None

    @property
    def is_special(self) -> bool:
        """True for the lenient NaN and Infinity literals."""
        return self.raw in _SPECIAL_LITERALS

    def to_decimal(self) -> Decimal:
        """Returns the literal as an exact Decimal."""
        return Decimal(self.raw)

    def as_int64(self) -> int:
        """Narrows the integer view to a signed 64-bit value."""
        return (int(self) + _INT64_OFFSET) % _INT64_RANGE - _INT64_OFFSET

    def __int__(self) -> int:
        return int(self.value)

    def __float__(self) -> float:
        if self.is_special:
            return float(self.value)
        return float(self.raw)

    def __index__(self) -> int:
        if not self.is_integral:
            raise TypeError(f"{self.raw!r} is not an integer literal")
        return int(self.value)

    def __bool__(self) -> bool:
        return bool(self.value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LazyNumber):
            return self.value == other.value
        if isinstance(other, Decimal) and not self.is_special:
            return self.to_decimal() == other
        if isinstance(other, numbers.Number):
            return self.value == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, LazyNumber):
            return self.value < other.value
        if isinstance(other, Decimal) and not self.is_special:
            return self.to_decimal() < other
        if isinstance(other, int | float | Decimal):
            return self.value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"LazyNumber({self.raw!r})"


numbers.Number.register(LazyNumber)

_MISSING: Any = object()


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


class _TypedAccess[K]:
    """
    Typed getters shared by JsonObject (keyed by str) and JsonArray (keyed
    by index). A missing entry or a value of the wrong type yields the
    default. Numeric getters accept any number except bool.
    """

    def _lookup(self, key: K) -> Any:
        """
        Returns the entry at key, or _MISSING when there is none.

        Subclasses must override this; every getter reads through it.
        """
        raise NotImplementedError

    def get_string(self, key: K, default: str | None = None) -> str | None:
        value = self._lookup(key)
        return value if isinstance(value, str) else default

    def get_int(self, key: K, default: int = 0) -> int:
        value = self._lookup(key)
        return int(value) if _is_number(value) else default

    def get_float(self, key: K, default: float = 0.0) -> float:
        value = self._lookup(key)
        return float(value) if _is_number(value) else default

    def get_bool(self, key: K, default: bool = False) -> bool:
        value = self._lookup(key)
        return value if isinstance(value, bool) else default

    def get_number(self, key: K, default: Any = None) -> Any:
        value = self._lookup(key)
        return value if _is_number(value) else default

    def get_object(
        self, key: K, default: "JsonObject | None" = None
    ) -> "JsonObject | None":
        value = self._lookup(key)
        return value if isinstance(value, dict) else default

    def get_array(
        self, key: K, default: "JsonArray | None" = None
    ) -> "JsonArray | None":
        value = self._lookup(key)
        return value if isinstance(value, list) else default

    def is_null(self, key: K) -> bool:
        """True only when the entry exists and holds null."""
        return self._lookup(key) is None

    def is_string(self, key: K) -> bool:
        return isinstance(self._lookup(key), str)

    def is_number(self, key: K) -> bool:
        return _is_number(self._lookup(key))

    def is_boolean(self, key: K) -> bool:
        return isinstance(self._lookup(key), bool)


class JsonObject(_TypedAccess[str], dict[str, JsonValue]):
    """An ordered JSON object; keys keep their insertion order."""

    def _lookup(self, key: str) -> Any:
        return self.get(key, _MISSING)

    def __repr__(self) -> str:
        return f"JsonObject({dict.__repr__(self)})"


class JsonArray(_TypedAccess[int], list[JsonValue]):
    """
    A JSON array. Negative and out of range indexes behave like missing
    entries in the typed getters.
    """

    def _lookup(self, key: int) -> Any:
        if key < 0:
            return _MISSING
        try:
            return self[key]
        except IndexError:
            return _MISSING

    def __repr__(self) -> str:
        return f"JsonArray({list.__repr__(self)})"
