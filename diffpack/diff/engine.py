"""Shortest edit script engine.

Implements the O(NP) variant of Myers' O(ND) difference algorithm
(Wu, Manber, Myers, Miller: "An O(NP) Sequence Comparison Algorithm") on top of
common prefix/suffix trimming. Elements only need to support ``==``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from diffpack.diff.affix import common_affix_lengths
from diffpack.diff.config import DiffConfig, resolve_config
from diffpack.diff.exceptions import DiffLimitExceededError
from diffpack.diff.models import DiffOp, edit_distance, summarize_ops
from diffpack.plugins import DiffEndEvent, DiffStartEvent, get_active_plugin_manager
from diffpack.plugins.base import DiffMode

# Backtrace move kinds. Slot 0 of the log is the root and carries _ROOT.
_ROOT = 0
_SLIDE = 1  # consume one element of the longer side
_DOWN = 2  # consume one element of the shorter side
_SNAKE = 3  # diagonal, element kept


@dataclass(frozen=True, slots=True)
class FarthestPoint:
    """Furthest ``y`` reached on one diagonal and the log slot that got there."""

    y: int
    slot: int


_UNREACHED = FarthestPoint(y=-1, slot=0)


@dataclass(slots=True)
class BacktraceLog:
    """Append-only move log addressed by integer slot."""

    prev: list[int] = field(default_factory=lambda: [0])
    moves: list[int] = field(default_factory=lambda: [_ROOT])

    def append(self, prev: int, move: int) -> int:
        self.prev.append(prev)
        self.moves.append(move)
        return len(self.moves) - 1

    def __len__(self) -> int:
        return len(self.moves)


def diff_sequence(
    a: Sequence[Any],
    b: Sequence[Any],
    *,
    config: DiffConfig | None = None,
) -> list[DiffOp]:
    """Return the shortest edit script turning ``a`` into ``b``.

    Replaying the script on ``a`` (skip ``removed``, keep ``kept``, add
    ``inserted``) reproduces ``b``.
    """
    resolved = resolve_config(config)
    return run_with_lifecycle(
        "sequence",
        a,
        b,
        config=resolved,
        compute=lambda: shortest_edit_script(
            a, b, max_edit_distance=resolved.max_edit_distance
        ),
    )


def run_with_lifecycle(
    mode: DiffMode,
    a: Sequence[Any],
    b: Sequence[Any],
    *,
    config: DiffConfig,
    compute: Callable[[], list[DiffOp]],
) -> list[DiffOp]:
    """Run ``compute`` between ``on_diff_start`` and ``on_diff_end`` hooks."""
    plugin_manager = get_active_plugin_manager()
    if not plugin_manager.enabled:
        return compute()

    plugin_manager.on_diff_start(
        DiffStartEvent(
            mode=mode,
            left_length=len(a),
            right_length=len(b),
            max_edit_distance=config.max_edit_distance,
            word_diff=config.word_diff if mode == "text" else None,
        )
    )

    try:
        ops = compute()
    except Exception as error:
        plugin_manager.on_diff_end(
            DiffEndEvent(
                mode=mode,
                status="error",
                error_type=error.__class__.__name__,
                error_message=str(error),
            )
        )
        raise

    plugin_manager.on_diff_end(
        DiffEndEvent(
            mode=mode,
            status="ok",
            edit_distance=edit_distance(ops),
            summary=summarize_ops(ops),
        )
    )
    return ops


def shortest_edit_script(
    a: Sequence[Any],
    b: Sequence[Any],
    *,
    max_edit_distance: int | None = None,
) -> list[DiffOp]:
    """Trim shared affixes, then search the remaining cores."""
    a_len = len(a)
    b_len = len(b)
    prefix, suffix = common_affix_lengths(a, b)

    head = [DiffOp(kind="kept", value=a[index]) for index in range(prefix)]
    tail = [DiffOp(kind="kept", value=a[index]) for index in range(a_len - suffix, a_len)]

    a_core = a[prefix : a_len - suffix]
    b_core = b[prefix : b_len - suffix]

    if not a_core and not b_core:
        return head + tail
    if not a_core:
        _check_limit(len(b_core), max_edit_distance, a_len=a_len, b_len=b_len)
        return head + [DiffOp(kind="inserted", value=value) for value in b_core] + tail
    if not b_core:
        _check_limit(len(a_core), max_edit_distance, a_len=a_len, b_len=b_len)
        return head + [DiffOp(kind="removed", value=value) for value in a_core] + tail

    core = _search(a_core, b_core, max_edit_distance=max_edit_distance, a_len=a_len, b_len=b_len)
    return head + core + tail


def _search(
    a: Sequence[Any],
    b: Sequence[Any],
    *,
    max_edit_distance: int | None,
    a_len: int,
    b_len: int,
) -> list[DiffOp]:
    # The search wants the longer sequence on the x axis.
    swapped = len(b) > len(a)
    longer, shorter = (b, a) if swapped else (a, b)
    m = len(longer)
    n = len(shorter)
    delta = m - n
    # One spare slot at each end so k - 1 and k + 1 always index the buffer.
    offset = n + 1
    fp = [_UNREACHED] * (m + n + 3)
    log = BacktraceLog()

    def snake(k: int) -> FarthestPoint:
        slide = fp[k - 1 + offset]
        down = fp[k + 1 + offset]

        if slide.y == -1 and down.y == -1:
            y, slot = 0, 0
        elif down.y == -1 or k == m or slide.y > down.y + 1:
            y, slot = slide.y, log.append(slide.slot, _SLIDE)
        else:
            y, slot = down.y + 1, log.append(down.slot, _DOWN)

        while y + k < m and y < n and longer[y + k] == shorter[y]:
            slot = log.append(slot, _SNAKE)
            y += 1
        return FarthestPoint(y=y, slot=slot)

    def visit(k: int) -> None:
        if -n <= k <= m:
            fp[k + offset] = snake(k)

    p = -1
    while fp[delta + offset].y < n:
        p += 1
        _check_limit(delta + 2 * p, max_edit_distance, a_len=a_len, b_len=b_len)
        # Order matters: each pass reads neighbours already rewritten this round.
        for k in range(-p, delta):
            visit(k)
        for k in range(delta + p, delta, -1):
            visit(k)
        visit(delta)

    return _backtrace(log, fp[delta + offset].slot, longer, shorter, swapped=swapped)


def _backtrace(
    log: BacktraceLog,
    slot: int,
    longer: Sequence[Any],
    shorter: Sequence[Any],
    *,
    swapped: bool,
) -> list[DiffOp]:
    slide_kind = "inserted" if swapped else "removed"
    down_kind = "removed" if swapped else "inserted"

    x = len(longer) - 1
    y = len(shorter) - 1
    ops: list[DiffOp] = []
    while slot != 0:
        move = log.moves[slot]
        if move == _SLIDE:
            ops.append(DiffOp(kind=slide_kind, value=longer[x]))
            x -= 1
        elif move == _DOWN:
            ops.append(DiffOp(kind=down_kind, value=shorter[y]))
            y -= 1
        else:
            # Kept values come from the left-hand input.
            ops.append(DiffOp(kind="kept", value=shorter[y] if swapped else longer[x]))
            x -= 1
            y -= 1
        slot = log.prev[slot]

    ops.reverse()
    return ops


def _check_limit(distance: int, limit: int | None, *, a_len: int, b_len: int) -> None:
    if limit is not None and distance > limit:
        raise DiffLimitExceededError(limit=limit, left_length=a_len, right_length=b_len)
