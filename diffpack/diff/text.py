"""Two-pass text diff: lines first, then words inside paired changed lines."""

from __future__ import annotations

from diffpack.diff.config import DiffConfig, resolve_config
from diffpack.diff.engine import run_with_lifecycle, shortest_edit_script
from diffpack.diff.models import DiffKind, DiffOp
from diffpack.diff.tokenize import escape_invisible, tokenize_lines, tokenize_words


def diff_text(
    a: str,
    b: str,
    *,
    word_diff: bool | None = None,
    config: DiffConfig | None = None,
) -> list[DiffOp]:
    """Line diff of ``a`` against ``b`` with word-level ``details`` on changed lines.

    Both inputs are escaped with ``escape_invisible`` first, so line values
    carry visible markers for tabs, carriage returns and line feeds.
    """
    resolved = resolve_config(config)
    if word_diff is not None and word_diff != resolved.word_diff:
        resolved = DiffConfig(
            max_edit_distance=resolved.max_edit_distance,
            word_diff=word_diff,
        )
    return run_with_lifecycle(
        "text",
        a,
        b,
        config=resolved,
        compute=lambda: _diff_text(a, b, config=resolved),
    )


def _diff_text(a: str, b: str, *, config: DiffConfig) -> list[DiffOp]:
    lines = shortest_edit_script(
        tokenize_lines(f"{escape_invisible(a)}\n"),
        tokenize_lines(f"{escape_invisible(b)}\n"),
        max_edit_distance=config.max_edit_distance,
    )
    if config.word_diff:
        attach_word_details(lines, max_edit_distance=config.max_edit_distance)
    return lines


def attach_word_details(lines: list[DiffOp], *, max_edit_distance: int | None = None) -> None:
    """Pair changed lines and fill their ``details`` in place.

    Every line on the side with fewer changes looks for a partner on the other
    side, consuming candidates in order until one shares real (non-whitespace)
    content. Unpaired lines keep ``details=None``.
    """
    added = [line for line in lines if line.kind == "inserted"]
    removed = [line for line in lines if line.kind == "removed"]

    if len(added) < len(removed):
        shorter, longer = added, removed
    else:
        shorter, longer = removed, added

    candidates = iter(longer)
    for line in shorter:
        for candidate in candidates:
            old, new = (line, candidate) if line.kind == "removed" else (candidate, line)
            words = shortest_edit_script(
                tokenize_words(old.value),
                tokenize_words(new.value),
                max_edit_distance=max_edit_distance,
            )
            if _shares_content(words):
                old.details = merge_whitespace(_details_for("removed", words))
                new.details = merge_whitespace(_details_for("inserted", words))
                break


def merge_whitespace(details: list[DiffOp]) -> list[DiffOp]:
    """Re-tag whitespace-only kept tokens sitting between two same-kind changes.

    ``[removed "foo", kept " ", removed "bar"]`` becomes three removed tokens,
    so a changed run is not split up by the spaces inside it.
    """
    merged: list[DiffOp] = []
    for index, detail in enumerate(details):
        if detail.kind == "kept" and detail.value and detail.value.isspace():
            before = details[index - 1] if index > 0 else None
            after = details[index + 1] if index + 1 < len(details) else None
            if (
                before is not None
                and after is not None
                and before.kind != "kept"
                and before.kind == after.kind
            ):
                merged.append(DiffOp(kind=before.kind, value=detail.value))
                continue
        merged.append(detail)
    return merged


def _details_for(kind: DiffKind, words: list[DiffOp]) -> list[DiffOp]:
    return [
        DiffOp(kind=word.kind, value=word.value)
        for word in words
        if word.kind == kind or word.kind == "kept"
    ]


def _shares_content(words: list[DiffOp]) -> bool:
    return any(word.kind == "kept" and word.value.strip() for word in words)
