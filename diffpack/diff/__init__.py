"""Diff subsystem for DiffKit."""

from diffpack.diff.affix import common_affix_lengths
from diffpack.diff.assertion import AssertionResult, assert_equal, compare_values
from diffpack.diff.config import MAX_EDIT_DISTANCE_ENV_VAR, DiffConfig
from diffpack.diff.engine import diff_sequence, shortest_edit_script
from diffpack.diff.exceptions import (
    DiffAssertionError,
    DiffConfigError,
    DiffError,
    DiffLimitExceededError,
)
from diffpack.diff.formatting import build_message, render_diff_lines, render_diff_summary, sign_for
from diffpack.diff.models import DIFF_KINDS, DiffKind, DiffOp, edit_distance, summarize_ops
from diffpack.diff.text import diff_text, merge_whitespace
from diffpack.diff.tokenize import escape_invisible, tokenize_lines, tokenize_words

__all__ = [
    "DIFF_KINDS",
    "DiffKind",
    "DiffOp",
    "DiffConfig",
    "MAX_EDIT_DISTANCE_ENV_VAR",
    "DiffError",
    "DiffConfigError",
    "DiffLimitExceededError",
    "DiffAssertionError",
    "common_affix_lengths",
    "shortest_edit_script",
    "diff_sequence",
    "diff_text",
    "merge_whitespace",
    "escape_invisible",
    "tokenize_lines",
    "tokenize_words",
    "edit_distance",
    "summarize_ops",
    "sign_for",
    "render_diff_lines",
    "render_diff_summary",
    "build_message",
    "AssertionResult",
    "compare_values",
    "assert_equal",
]
