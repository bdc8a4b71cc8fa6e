"""Diff subsystem exceptions."""

from __future__ import annotations

from typing import Any


class DiffError(Exception):
    """Base class for diff errors."""


class DiffConfigError(DiffError):
    """Invalid diff configuration."""


class DiffLimitExceededError(DiffError):
    """Edit distance grew past the configured cap."""

    def __init__(self, *, limit: int, left_length: int, right_length: int) -> None:
        self.limit = limit
        self.left_length = left_length
        self.right_length = right_length
        super().__init__(
            f"edit distance exceeds max_edit_distance={limit} "
            f"(left_length={left_length}, right_length={right_length})"
        )


class DiffAssertionError(AssertionError):
    """Raised by ``assert_equal`` when actual and expected values differ."""

    def __init__(self, message: str, *, result: Any) -> None:
        super().__init__(message)
        self.result = result
