"""Actual-vs-expected comparison helpers for test failure reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from diffpack.core.canonical import format_repr, format_value
from diffpack.diff.config import DiffConfig
from diffpack.diff.engine import diff_sequence
from diffpack.diff.exceptions import DiffAssertionError
from diffpack.diff.formatting import build_message
from diffpack.diff.models import DiffOp, edit_distance, summarize_ops
from diffpack.diff.text import diff_text


@dataclass(slots=True)
class AssertionResult:
    """Outcome of comparing an actual value with an expected one."""

    passed: bool
    ops: list[DiffOp] = field(default_factory=list)
    string_diff: bool = False

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def render(self, *, color: bool = False) -> str:
        if self.passed:
            return ""
        return "\n".join(build_message(self.ops, color=color, string_diff=self.string_diff))

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "pass" if self.passed else "fail",
            "exit_code": self.exit_code,
            "string_diff": self.string_diff,
            "edit_distance": edit_distance(self.ops),
            "summary": summarize_ops(self.ops),
            "ops": [op.to_dict() for op in self.ops] if not self.passed else [],
        }


def compare_values(
    actual: Any,
    expected: Any,
    *,
    config: DiffConfig | None = None,
) -> AssertionResult:
    """Compare two values and keep the diff when they differ.

    Two strings get the word-refined text diff. Other values are rendered with
    ``format_value`` and compared line by line; when both renderings coincide
    the ``pprint`` form is diffed instead, which keeps type differences visible.
    """
    if actual == expected:
        return AssertionResult(passed=True)

    if isinstance(actual, str) and isinstance(expected, str):
        return AssertionResult(
            passed=False,
            ops=diff_text(actual, expected, config=config),
            string_diff=True,
        )

    actual_text = format_value(actual)
    expected_text = format_value(expected)
    if actual_text == expected_text:
        # Unequal values with one rendering, e.g. "1" and 1 or (1,) and [1].
        actual_text = format_repr(actual)
        expected_text = format_repr(expected)

    return AssertionResult(
        passed=False,
        ops=diff_sequence(actual_text.split("\n"), expected_text.split("\n"), config=config),
    )


def assert_equal(
    actual: Any,
    expected: Any,
    *,
    message: str | None = None,
    config: DiffConfig | None = None,
) -> None:
    """Raise ``DiffAssertionError`` with a rendered diff when values differ."""
    result = compare_values(actual, expected, config=config)
    if result.passed:
        return

    heading = f"Values are not equal: {message}" if message else "Values are not equal:"
    raise DiffAssertionError(f"{heading}\n{result.render()}", result=result)
