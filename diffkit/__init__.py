"""Stable public API surface for DiffKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from diffpack import __version__
from diffpack.diff import (
    AssertionResult,
    DiffAssertionError,
    DiffConfig,
    DiffConfigError,
    DiffError,
    DiffKind,
    DiffLimitExceededError,
    DiffOp,
    assert_equal,
    build_message,
    compare_values,
    diff_sequence,
    diff_text,
)


def diff(
    actual: Sequence[Any],
    expected: Sequence[Any],
    *,
    max_edit_distance: int | None = None,
) -> list[DiffOp]:
    """Shortest edit script from ``actual`` to ``expected``."""
    return diff_sequence(actual, expected, config=_config(max_edit_distance))


def diffstr(
    actual: str,
    expected: str,
    *,
    word_diff: bool = True,
    max_edit_distance: int | None = None,
) -> list[DiffOp]:
    """Line diff of two strings with word-level details on changed lines."""
    return diff_text(
        actual,
        expected,
        config=_config(max_edit_distance, word_diff=word_diff),
    )


def _config(max_edit_distance: int | None, *, word_diff: bool = True) -> DiffConfig:
    if max_edit_distance is None:
        return DiffConfig(
            max_edit_distance=DiffConfig.from_env().max_edit_distance,
            word_diff=word_diff,
        )
    return DiffConfig(max_edit_distance=max_edit_distance, word_diff=word_diff)


__all__ = [
    "__version__",
    "DiffKind",
    "DiffOp",
    "DiffConfig",
    "AssertionResult",
    "DiffError",
    "DiffConfigError",
    "DiffLimitExceededError",
    "DiffAssertionError",
    "diff",
    "diffstr",
    "diff_sequence",
    "diff_text",
    "compare_values",
    "assert_equal",
    "build_message",
]
