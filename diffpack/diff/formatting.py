"""Terminal rendering for edit scripts."""

from __future__ import annotations

from collections.abc import Sequence

import typer

from diffpack.diff.models import DiffKind, DiffOp, summarize_ops

_SIGNS: dict[str, str] = {
    "inserted": "+   ",
    "removed": "-   ",
    "kept": "    ",
}
_COLORS: dict[str, str | None] = {
    "inserted": typer.colors.GREEN,
    "removed": typer.colors.RED,
    "kept": None,
}


def sign_for(kind: DiffKind) -> str:
    return _SIGNS[kind]


def render_diff_lines(ops: Sequence[DiffOp], *, color: bool = False) -> list[str]:
    """Render one display line per op, prefixed with its sign.

    Changed lines with word ``details`` show the changed words in bold; all
    other lines show their whole value.
    """
    rendered: list[str] = []
    for op in ops:
        sign = _style(sign_for(op.kind), op.kind, color=color)
        if op.details is None:
            body = _style(_display_value(op.value), op.kind, color=color)
        else:
            body = "".join(
                _style(
                    _display_value(detail.value),
                    op.kind,
                    color=color,
                    bold=detail.kind != "kept",
                )
                for detail in op.details
            )
        rendered.append(sign + body)
    return rendered


def build_message(
    ops: Sequence[DiffOp],
    *,
    color: bool = False,
    string_diff: bool = False,
) -> list[str]:
    """Assemble the ``[Diff] Actual / Expected`` report block."""
    header = (
        f"    {_paint('[Diff]', None, color=color, bold=True)} "
        f"{_paint('Actual', typer.colors.RED, color=color, bold=True)} / "
        f"{_paint('Expected', typer.colors.GREEN, color=color, bold=True)}"
    )
    lines = render_diff_lines(ops, color=color)
    body = ["\n".join(lines)] if string_diff else lines
    return ["", "", header, "", "", *body, ""]


def render_diff_summary(ops: Sequence[DiffOp]) -> str:
    summary = summarize_ops(ops)
    return (
        f"kept={summary['kept']} inserted={summary['inserted']} "
        f"removed={summary['removed']}"
    )


def _display_value(value: object) -> str:
    text = value if isinstance(value, str) else str(value)
    # Line tokens carry their own terminator; the renderer adds line breaks.
    return text.replace("\r\n", "").replace("\n", "").replace("\r", "")


def _style(text: str, kind: str, *, color: bool, bold: bool = False) -> str:
    return _paint(text, _COLORS[kind], color=color, bold=bold)


def _paint(text: str, fg: str | None, *, color: bool, bold: bool = False) -> str:
    if not color or not text or (fg is None and not bold):
        return text
    return typer.style(text, fg=fg, bold=True if bold else None)
