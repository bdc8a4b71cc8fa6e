import math

import pytest

from diffpack.core.canonical import (
    NotCanonicalizable,
    canonicalize,
    format_repr,
    format_value,
)


def test_equivalent_inputs_canonicalize_to_same_structure() -> None:
    left = {
        "prompt": "line one\nline two",
        "metadata": {
            "labels": ("alpha", "beta"),
            "unknown": {"b": 2, "a": 1},
        },
    }

    right = {
        "metadata": {
            "unknown": {"a": 1, "b": 2},
            "labels": ["alpha", "beta"],
        },
        "prompt": "line one\nline two",
    }

    assert format_value(left) == format_value(right)


def test_list_order_is_significant() -> None:
    assert format_value(["a", "b"]) != format_value(["b", "a"])


def test_mapping_keys_are_sorted() -> None:
    canonical = canonicalize({"b": 2, "a": None, "c": {"z": 1, "y": 2}})

    assert list(canonical) == ["a", "b", "c"]
    assert list(canonical["c"]) == ["y", "z"]


def test_non_string_keys_are_rejected() -> None:
    with pytest.raises(NotCanonicalizable, match="non-string mapping key: 1"):
        canonicalize({1: "a"})


def test_floats_keep_full_precision() -> None:
    assert canonicalize(0.1 + 0.2) == 0.30000000000000004
    assert format_value({"x": 0.1 + 0.2}) != format_value({"x": 0.3})


def test_line_endings_are_preserved() -> None:
    assert canonicalize("a\r\nb") == "a\r\nb"
    assert format_value(["a\r\nb"]) != format_value(["a\nb"])


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_floats_are_rejected(value: float) -> None:
    with pytest.raises(NotCanonicalizable, match="NaN and infinity"):
        canonicalize({"value": value})


def test_unsupported_types_are_rejected() -> None:
    with pytest.raises(NotCanonicalizable, match="unsupported type: complex"):
        canonicalize({"value": 1 + 2j})


def test_format_value_passes_strings_through() -> None:
    assert format_value("raw\r\ntext") == "raw\r\ntext"


def test_format_value_renders_indented_sorted_json() -> None:
    assert format_value({"b": [1], "a": "é"}) == '{\n  "a": "é",\n  "b": [\n    1\n  ]\n}'


def test_format_value_falls_back_to_pprint() -> None:
    assert format_value({"value": 1 + 2j}) == "{'value': (1+2j)}"
    assert format_value({1: "a"}) == "{1: 'a'}"


def test_format_repr_keeps_types_apart() -> None:
    assert format_repr("1") == "'1'"
    assert format_repr(1) == "1"
    assert format_repr((1, 2)) == "(1, 2)"
    assert format_repr([1, 2]) == "[1, 2]"
