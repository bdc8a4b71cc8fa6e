"""Data models for edit scripts and word-level details."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Literal

DiffKind = Literal["kept", "inserted", "removed"]

DIFF_KINDS: tuple[str, ...] = ("kept", "inserted", "removed")


@dataclass(slots=True)
class DiffOp:
    """One edit-script entry.

    ``details`` holds the word-level sub-diff of a changed text line and is
    only ever set on ``inserted``/``removed`` entries produced by ``diff_text``.
    """

    kind: DiffKind
    value: Any
    details: list[DiffOp] | None = None

    @property
    def changed(self) -> bool:
        return self.kind != "kept"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "value": self.value,
            "details": (
                [detail.to_dict() for detail in self.details]
                if self.details is not None
                else None
            ),
        }


def summarize_ops(ops: Iterable[DiffOp]) -> dict[str, int]:
    counts = {kind: 0 for kind in DIFF_KINDS}
    for op in ops:
        counts[op.kind] += 1
    return counts


def edit_distance(ops: Iterable[DiffOp]) -> int:
    """Number of insertions plus deletions in a script."""
    return sum(1 for op in ops if op.kind != "kept")
