"""
JSON specification pass2 test from json.org test suite.

Validates parsing of a deeply nested array and the depth limit around it.
"""

import pytest

import jsonsink

# from https://json.org/JSON_checker/test/pass2.json
JSON = r"""
[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]
"""


def test_parse() -> None:
    """
    Validates parsing and round-trip writing of 19 nested arrays.
    """
    res = jsonsink.loads(JSON)

    out = jsonsink.dumps(res)
    assert out == JSON.strip()
    assert res == jsonsink.loads(out)


def test_depth_limit_boundary() -> None:
    """
    Validates the document parses at exactly its depth and fails one below.
    """
    assert jsonsink.loads(JSON, max_depth=19)

    with pytest.raises(jsonsink.JsonDepthError) as exc_info:
        jsonsink.loads(JSON, max_depth=18)
    assert exc_info.value.pos == 19
