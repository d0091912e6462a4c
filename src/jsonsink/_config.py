"""Immutable configuration for the parser and the sinks."""

from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 512


def _check_max_depth(max_depth: int) -> None:
    if not isinstance(max_depth, int) or isinstance(max_depth, bool):
        raise TypeError("max_depth must be an integer")
    if max_depth < 1:
        raise ValueError("max_depth must be at least 1")


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JSON parsing behavior with immutable settings.

    strict enforces RFC 8259 exactly; when False the parser accepts the
    lenient superset (single quoted and unquoted strings, trailing commas,
    comments, NaN/Infinity, relaxed numbers). lazy_numbers keeps numbers as
    LazyNumber instances instead of converting them to int/float eagerly.
    """

    strict: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    lazy_numbers: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.strict, bool):
            raise TypeError("strict must be a boolean")
        if not isinstance(self.lazy_numbers, bool):
            raise TypeError("lazy_numbers must be a boolean")
        _check_max_depth(self.max_depth)


@dataclass(frozen=True)
class WriteConfig:
    """
    Configures JSON emission for the writer and the builder.

    strict rejects NaN and infinities; when False they are written as the
    lenient literals NaN, Infinity and -Infinity. indent is either None for
    compact output, a unit string, or a number of spaces.
    """

    strict: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    indent: str | int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.strict, bool):
            raise TypeError("strict must be a boolean")
        _check_max_depth(self.max_depth)
        if self.indent is not None and (
            isinstance(self.indent, bool)
            or not isinstance(self.indent, str | int)
        ):
            raise TypeError("indent must be None, a string or an integer")
        if isinstance(self.indent, int) and self.indent < 0:
            raise ValueError("indent must not be negative")

    @property
    def indent_unit(self) -> str | None:
        """Returns the string added per nesting level, or None for compact."""
        if self.indent is None:
            return None
        if isinstance(self.indent, int):
            return " " * self.indent
        return self.indent
