"""Deterministic value rendering for assertion diffs."""

from __future__ import annotations

import json
import math
import pprint
from typing import Any


class NotCanonicalizable(TypeError):
    """Value has no faithful JSON form."""


def canonicalize(value: Any) -> Any:
    """Normalize JSON-compatible values to a deterministic structure.

    Mapping keys are sorted and tuples become lists. Strings and floats are
    kept exactly, and non-string keys are rejected so that ``{1: ...}`` and
    ``{"1": ...}`` never share a rendering.
    """
    if isinstance(value, dict):
        for key in value:
            if not isinstance(key, str):
                raise NotCanonicalizable(f"non-string mapping key: {key!r}")
        return {key: canonicalize(value[key]) for key in sorted(value)}

    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]

    if value is None or isinstance(value, (str, int)):
        return value

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise NotCanonicalizable("NaN and infinity have no canonical JSON form")
        return value

    raise NotCanonicalizable(f"unsupported type: {type(value).__name__}")


def format_value(value: Any) -> str:
    """Render a value as multi-line text for a line diff.

    Strings pass through. JSON-compatible values become indented canonical
    JSON; anything else falls back to ``pprint``.
    """
    if isinstance(value, str):
        return value
    try:
        canonical = canonicalize(value)
    except NotCanonicalizable:
        return format_repr(value)
    return json.dumps(canonical, ensure_ascii=False, sort_keys=True, indent=2)


def format_repr(value: Any) -> str:
    """``pprint`` rendering; keeps quotes on strings and the exact container types."""
    return pprint.pformat(value, sort_dicts=True)
