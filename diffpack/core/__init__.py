"""Deterministic value primitives for DiffKit."""

from diffpack.core.canonical import (
    NotCanonicalizable,
    canonicalize,
    format_repr,
    format_value,
)

__all__ = [
    "NotCanonicalizable",
    "canonicalize",
    "format_value",
    "format_repr",
]
