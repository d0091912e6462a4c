"""
Test data generators for jsonsink benchmarks.

Every generator is seeded so repeated runs measure the same documents:
- Different sizes (small object, large object)
- Different shapes (mixed array, nested structure, numeric table)
- String-heavy content with escape sequences
- Lenient documents with comments and trailing commas
"""

import json
import random
import string
from collections.abc import Callable
from typing import Any

_SEED = 8259
_ESCAPE_PROBABILITY = 0.3
_ESCAPES = ['"', "\\", "/", "\b", "\f", "\n", "\r", "\t", "\x01", "é", "€"]


def _random_string(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))


def _small_object(rng: random.Random) -> dict[str, Any]:
    return {
        "id": 12345,
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "active": True,
        "balance": 1234.56,
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
    }


def _large_object(rng: random.Random) -> dict[str, Any]:
    """A user profile with a transaction history (> 10KB)."""
    return {
        "user_id": rng.randint(1000000, 9999999),
        "profile": {
            "first_name": _random_string(rng, 10),
            "last_name": _random_string(rng, 12),
            "language": rng.choice(["en", "es", "fr", "de", "zh"]),
            "notifications": {
                "email": rng.choice([True, False]),
                "push": rng.choice([True, False]),
            },
        },
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(rng.uniform(1.0, 1000.0), 2),
                "currency": rng.choice(["USD", "EUR", "GBP", "JPY"]),
                "description": f"Payment for {_random_string(rng, 20)}",
                "status": rng.choice(["completed", "pending", "failed"]),
                "refund": None,
            }
            for i in range(80)
        ],
    }


def _mixed_array(rng: random.Random) -> list[Any]:
    choices: list[Callable[[int], Any]] = [
        lambda i: rng.randint(-1000, 1000),
        lambda i: round(rng.uniform(-100.0, 100.0), 3),
        lambda i: _random_string(rng, rng.randint(5, 30)),
        lambda i: rng.choice([True, False]),
        lambda i: None,
        lambda i: {"index": i, "score": round(rng.uniform(0, 100), 2)},
    ]
    return [rng.choice(choices)(i) for i in range(300)]


def _nested_structure(rng: random.Random) -> dict[str, Any]:
    def level(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(rng, 10)}
        return {
            "level": depth,
            "items": [level(depth - 1) for _ in range(3)],
            "nested": level(depth - 1),
        }

    return level(7)


def _numeric_table(rng: random.Random) -> dict[str, Any]:
    """Rows of numbers, where lazy decoding pays off the most."""
    return {
        "columns": ["t", "x", "y", "z"],
        "rows": [
            [i, rng.random(), rng.uniform(-1e6, 1e6), rng.getrandbits(62)]
            for i in range(500)
        ],
    }


def _string_heavy(rng: random.Random) -> dict[str, Any]:
    def escaped() -> str:
        return "".join(
            rng.choice(_ESCAPES)
            if rng.random() < _ESCAPE_PROBABILITY
            else rng.choice(string.ascii_letters + " ")
            for _ in range(50)
        )

    return {
        "strings": [escaped() for _ in range(100)],
        "paths": {
            f"key_{i}": f"C:\\Users\\{_random_string(rng, 8)}\\file_{i}.txt"
            for i in range(20)
        },
    }


_GENERATORS: dict[str, Callable[[random.Random], Any]] = {
    "small_object": _small_object,
    "large_object": _large_object,
    "mixed_array": _mixed_array,
    "nested_structure": _nested_structure,
    "numeric_table": _numeric_table,
    "string_heavy": _string_heavy,
}

DATA_TYPES = tuple(_GENERATORS)


def generate_value(data_type: str) -> Any:
    """Generates the Python value for the given data type."""
    if data_type not in _GENERATORS:
        raise ValueError(f"Unknown data type: {data_type}")
    return _GENERATORS[data_type](random.Random(_SEED))


def generate_test_data(data_type: str) -> str:
    """Generates compact JSON text for the given data type."""
    return json.dumps(generate_value(data_type), separators=(",", ":"))


def generate_lenient_document(data_type: str) -> str:
    """
    Generates a lenient document: the indented JSON text with a comment per
    line and a trailing comma after every last array element.
    """
    lines = json.dumps(generate_value(data_type), indent=2).splitlines()
    out = ["/* generated */"]
    for line, following in zip(lines, lines[1:] + [""], strict=True):
        closes_array = following.strip().startswith("]")
        if closes_array and not line.rstrip().endswith("["):
            line += ","
        out.append(f"{line} // {len(out)}")
    return "\n".join(out)
