"""
Tree builder tests.

Validates JsonBuilder materializes the same document a writer would emit,
as JsonObject and JsonArray containers.
"""

import math
from decimal import Decimal
from fractions import Fraction

import pytest

import jsonsink
from jsonsink import JsonArray, JsonBuilder, JsonObject, LazyNumber, WriteConfig


def test_builds_nested_tree() -> None:
    """
    Validates containers are attached under their keys and in order.
    """
    tree = (
        JsonBuilder()
        .begin_object()
        .begin_object("outer")
        .begin_array("items")
        .value(1)
        .begin_object()
        .value("deep", "yes")
        .end()
        .end()
        .value("after", False)
        .end()
        .null("last")
        .end()
        .done()
    )

    assert tree == {
        "outer": {"items": [1, {"deep": "yes"}], "after": False},
        "last": None,
    }
    assert isinstance(tree, JsonObject)
    assert isinstance(tree["outer"], JsonObject)
    assert isinstance(tree["outer"]["items"], JsonArray)
    assert list(tree) == ["outer", "last"]


@pytest.mark.parametrize("scalar", [None, True, "text", 7, 2.5])
def test_scalar_root(scalar: object) -> None:
    """
    Validates a single scalar is a complete document.
    """
    assert JsonBuilder().value(scalar).done() == scalar


def test_native_values_are_copied() -> None:
    """
    Validates the tree does not share containers with its input.
    """
    source = {"a": [1, 2]}
    tree = JsonBuilder().value(source).done()
    source["a"].append(3)

    assert tree == {"a": [1, 2]}
    assert isinstance(tree["a"], JsonArray)


def test_numbers_normalized() -> None:
    """
    Validates number types stored in the tree.
    """
    tree = (
        JsonBuilder()
        .array([LazyNumber("1.50"), Decimal("2.25"), Fraction(1, 4), 3])
        .done()
    )
    assert isinstance(tree[0], LazyNumber)
    assert isinstance(tree[1], Decimal)
    assert type(tree[2]) is float
    assert tree == [1.5, Decimal("2.25"), 0.25, 3]


def test_nan_rejected_when_strict() -> None:
    """
    Validates a strict builder refuses NaN and infinities.
    """
    with pytest.raises(jsonsink.JsonWriterError, match="not JSON compliant"):
        JsonBuilder().value(math.nan)
    with pytest.raises(jsonsink.JsonWriterError):
        JsonBuilder().begin_array().value(-math.inf)


def test_nan_accepted_when_lenient() -> None:
    """
    Validates a lenient builder keeps NaN and infinities.
    """
    builder = JsonBuilder(config=WriteConfig(strict=False))
    tree = builder.array([math.nan, math.inf]).done()
    assert math.isnan(tree[0])
    assert tree[1] == math.inf


def test_parser_default_sink_keeps_lenient_numbers() -> None:
    """
    Validates parsing NaN builds a tree without raising.
    """
    tree = jsonsink.loads('{"v": NaN}', strict=False)
    assert tree.get_number("v").is_special


def test_builder_depth_limit() -> None:
    """
    Validates the builder honours its own nesting limit.
    """
    builder = JsonBuilder(config=WriteConfig(max_depth=1))
    with pytest.raises(jsonsink.JsonWriterError, match="nesting depth of 1"):
        builder.value([[1]])
