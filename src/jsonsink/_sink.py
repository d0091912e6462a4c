"""
The sink contract: one fluent write interface for every JSON consumer.

JsonSink enforces the call sequence rules of a JSON document (keys before
values inside objects, no keys inside arrays, one root value, balanced
containers) against an explicit stack of frames. Concrete sinks only supply
the emission hooks, so the text writer and the tree builder share every
error condition.
"""

import math
import numbers
from abc import ABC, abstractmethod
from collections.abc import Collection, Iterator, Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Self

from ._config import WriteConfig
from ._errors import IllegalStateError, JsonWriterError
from ._values import LazyNumber


class ContainerKind(Enum):
    """The two JSON container kinds a frame can represent."""

    ARRAY = "array"
    OBJECT = "object"


@dataclass(slots=True)
class Frame:
    """
    One open container on a sink or parser stack.

    awaiting_key is True while an object expects its next key; pending_key
    holds the key written for the value that follows. key is the entry under
    which this container itself is stored in its parent.
    """

    kind: ContainerKind
    awaiting_key: bool
    count: int = 0
    key: str | None = None
    pending_key: str | None = None
    container: Any = None


class _ValueKind(Enum):
    SCALAR = "scalar"
    NUMBER = "number"
    OBJECT = "object"
    ARRAY = "array"


_UNSET: Any = object()


def _classify(value: Any) -> _ValueKind:
    """Sorts a Python value into the JSON type closure or rejects it."""
    if value is None or isinstance(value, bool | str):
        return _ValueKind.SCALAR
    if isinstance(value, numbers.Real | Decimal | LazyNumber):
        return _ValueKind.NUMBER
    if isinstance(value, Mapping):
        return _ValueKind.OBJECT
    if isinstance(value, Collection) and not isinstance(
        value, bytes | bytearray | memoryview
    ):
        return _ValueKind.ARRAY
    raise JsonWriterError(
        f"Object of type {type(value).__name__} is not JSON serializable"
    )


def _stringify_key(key: Any) -> str:
    """Converts a mapping key to an object key the way JSON encoders do."""
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, int | float):
        return str(key)
    raise JsonWriterError(
        f"keys must be str, int, float or bool, not {type(key).__name__}"
    )


class JsonSink(ABC):
    """
    Common interface of JsonWriter and JsonBuilder.

    Every operation has an unkeyed form, valid inside arrays and at the
    root, and a keyed form, valid inside objects. The key is the optional
    first positional argument: value("a", 1) writes "a": 1 while value(1)
    writes a bare 1. key(k) followed by an unkeyed call is equivalent to the
    keyed call.
    """

    def __init__(self, config: WriteConfig | None = None) -> None:
        self.config = config if config is not None else WriteConfig()
        self._frames: list[Frame] = []
        self._finished = False

    @property
    def depth(self) -> int:
        """Number of containers currently open."""
        return len(self._frames)

    # Emission hooks

    @abstractmethod
    def _write_key(self, key: str, frame: Frame) -> None: ...

    @abstractmethod
    def _write_scalar(self, value: Any, parent: Frame | None) -> None: ...

    @abstractmethod
    def _open_container(self, frame: Frame, parent: Frame | None) -> None: ...

    @abstractmethod
    def _close_container(self, frame: Frame, parent: Frame | None) -> None: ...

    @abstractmethod
    def done(self) -> Any:
        """Finishes the document; fails unless exactly one value is complete."""

    # Contract

    def begin_array(self, key: str | None = None) -> Self:
        """Starts an array, stored under key when inside an object."""
        self._begin(ContainerKind.ARRAY, key)
        return self

    def begin_object(self, key: str | None = None) -> Self:
        """Starts an object, stored under key when inside an object."""
        self._begin(ContainerKind.OBJECT, key)
        return self

    def end(self) -> Self:
        """Ends the innermost open array or object."""
        if not self._frames:
            raise IllegalStateError("Cannot end: no array or object is open")
        frame = self._frames[-1]
        if frame.kind is ContainerKind.OBJECT and not frame.awaiting_key:
            raise IllegalStateError(
                f"Cannot end object: key {frame.pending_key!r} has no value"
            )
        self._frames.pop()
        parent = self._frames[-1] if self._frames else None
        self._close_container(frame, parent)
        if parent is None:
            self._finished = True
        return self

    def key(self, key: str) -> Self:
        """Writes the key of the next key/value pair."""
        if not isinstance(key, str):
            raise JsonWriterError(
                f"keys must be strings, not {type(key).__name__}"
            )
        if self._finished:
            raise IllegalStateError(
                "A complete JSON value has already been written"
            )
        if not self._frames:
            raise IllegalStateError("Cannot write a key outside of an object")
        frame = self._frames[-1]
        if frame.kind is ContainerKind.ARRAY:
            raise IllegalStateError("Cannot write a key inside an array")
        if not frame.awaiting_key:
            raise IllegalStateError(
                f"Key {frame.pending_key!r} is still awaiting a value"
            )
        self._write_key(key, frame)
        frame.awaiting_key = False
        frame.pending_key = key
        return self

    def null(self, key: str | None = None) -> Self:
        """Writes a null, stored under key when inside an object."""
        if key is not None:
            self.key(key)
        self._scalar(None)
        return self

    def value(self, key_or_value: Any, value: Any = _UNSET) -> Self:
        """
        Writes any JSON-compatible value: value(v) or value(key, v).

        Mappings and collections are expanded into objects and arrays.
        Values outside the JSON type closure raise JsonWriterError.
        """
        if value is _UNSET:
            key, value = None, key_or_value
        else:
            key = key_or_value
        kind = _classify(value)
        if kind is _ValueKind.NUMBER:
            value = self._check_number(value)
        if key is not None:
            self.key(key)
        self._emit(value, kind)
        return self

    def array(self, key_or_values: Any, values: Any = _UNSET) -> Self:
        """Writes a collection as an array: array(c) or array(key, c)."""
        return self._write_container(
            key_or_values, values, _ValueKind.ARRAY
        )

    def object(self, key_or_mapping: Any, mapping: Any = _UNSET) -> Self:
        """Writes a mapping as an object: object(m) or object(key, m)."""
        return self._write_container(
            key_or_mapping, mapping, _ValueKind.OBJECT
        )

    # Internals

    def _write_container(
        self, key_or_value: Any, value: Any, expected: _ValueKind
    ) -> Self:
        if value is _UNSET:
            key, value = None, key_or_value
        else:
            key = key_or_value
        if _classify(value) is not expected:
            wanted = "mapping" if expected is _ValueKind.OBJECT else "collection"
            raise JsonWriterError(
                f"Expected a {wanted}, not {type(value).__name__}"
            )
        if key is not None:
            self.key(key)
        self._expand(value, expected)
        return self

    def _before_value(self) -> Frame | None:
        """Validates that a value may start here and returns its parent."""
        if self._finished:
            raise IllegalStateError(
                "A complete JSON value has already been written"
            )
        if not self._frames:
            return None
        parent = self._frames[-1]
        if parent.kind is ContainerKind.OBJECT and parent.awaiting_key:
            raise IllegalStateError(
                "Expected a key before a value inside an object"
            )
        return parent

    def _after_value(self, parent: Frame) -> None:
        parent.count += 1
        if parent.kind is ContainerKind.OBJECT:
            parent.awaiting_key = True
            parent.pending_key = None

    def _begin(self, kind: ContainerKind, key: str | None) -> None:
        if len(self._frames) >= self.config.max_depth:
            raise JsonWriterError(
                f"Maximum nesting depth of {self.config.max_depth} exceeded"
            )
        if key is not None:
            self.key(key)
        parent = self._before_value()
        frame = Frame(kind, awaiting_key=kind is ContainerKind.OBJECT)
        if parent is not None:
            frame.key = parent.pending_key
        self._open_container(frame, parent)
        if parent is not None:
            self._after_value(parent)
        self._frames.append(frame)

    def _scalar(self, value: Any) -> None:
        parent = self._before_value()
        self._write_scalar(value, parent)
        if parent is None:
            self._finished = True
        else:
            self._after_value(parent)

    def _check_number(self, value: Any) -> int | float | Decimal | LazyNumber:
        """Normalizes a number and rejects NaN/Infinity in strict mode."""
        if isinstance(value, LazyNumber):
            special = value.is_special
        elif isinstance(value, Decimal):
            special = value.is_nan() or value.is_infinite()
        elif isinstance(value, numbers.Integral):
            return int(value)
        else:
            value = float(value)
            special = math.isnan(value) or math.isinf(value)
        if special and self.config.strict:
            raise JsonWriterError(
                f"Out of range float values are not JSON compliant: {value!r}"
            )
        return value

    def _emit(self, value: Any, kind: _ValueKind) -> None:
        if kind is _ValueKind.OBJECT or kind is _ValueKind.ARRAY:
            self._expand(value, kind)
        else:
            self._scalar(value)

    def _expand(self, root: Any, kind: _ValueKind) -> None:
        """
        Writes a mapping or collection tree without recursion.

        Each open container keeps an iterator on a local stack; the sink's
        own depth limit stops self-referencing structures.
        """
        stack: list[tuple[bool, Iterator[Any]]] = []
        self._open_native(root, kind, stack)
        while stack:
            is_mapping, items = stack[-1]
            item = next(items, _UNSET)
            if item is _UNSET:
                stack.pop()
                self.end()
                continue
            if is_mapping:
                item_key, item = item
                item_key = _stringify_key(item_key)
            item_kind = _classify(item)
            if item_kind is _ValueKind.NUMBER:
                item = self._check_number(item)
            if is_mapping:
                self.key(item_key)
            if item_kind is _ValueKind.OBJECT or item_kind is _ValueKind.ARRAY:
                self._open_native(item, item_kind, stack)
            else:
                self._scalar(item)

    def _open_native(
        self,
        value: Any,
        kind: _ValueKind,
        stack: list[tuple[bool, Iterator[Any]]],
    ) -> None:
        if kind is _ValueKind.OBJECT:
            self._begin(ContainerKind.OBJECT, None)
            stack.append((True, iter(list(value.items()))))
        else:
            self._begin(ContainerKind.ARRAY, None)
            stack.append((False, iter(value)))

    def _finish(self) -> None:
        if self._frames:
            raise IllegalStateError(
                f"Cannot finish: {len(self._frames)} array or object "
                "still open"
            )
        if not self._finished:
            raise IllegalStateError("Cannot finish: no value was written")
