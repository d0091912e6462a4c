"""In-memory sink that materializes a value tree instead of text."""

from typing import Any

from ._config import WriteConfig
from ._sink import ContainerKind, Frame, JsonSink
from ._values import JsonArray, JsonObject, JsonValue


class JsonBuilder(JsonSink):
    """
    Builds JsonObject/JsonArray trees through the sink contract.

    Each open frame references the container being filled; end() attaches
    it to its parent, or keeps it as the root once the stack is empty.

        JsonBuilder().begin_array().value(1).null().end().done()  # [1, None]
    """

    def __init__(self, *, config: WriteConfig | None = None) -> None:
        super().__init__(config)
        self._root: JsonValue = None

    def _write_key(self, key: str, frame: Frame) -> None:
        pass

    def _insert(self, value: Any, parent: Frame | None, key: str | None) -> None:
        if parent is None:
            self._root = value
        elif parent.kind is ContainerKind.ARRAY:
            parent.container.append(value)
        else:
            parent.container[key] = value

    def _write_scalar(self, value: Any, parent: Frame | None) -> None:
        self._insert(value, parent, parent.pending_key if parent else None)

    def _open_container(self, frame: Frame, parent: Frame | None) -> None:
        if frame.kind is ContainerKind.ARRAY:
            frame.container = JsonArray()
        else:
            frame.container = JsonObject()

    def _close_container(self, frame: Frame, parent: Frame | None) -> None:
        self._insert(frame.container, parent, frame.key)

    def done(self) -> JsonValue:
        """Returns the root value once the document is complete."""
        self._finish()
        return self._root
