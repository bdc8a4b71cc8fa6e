"""Common prefix/suffix detection for edit-script inputs."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def common_affix_lengths(a: Sequence[Any], b: Sequence[Any]) -> tuple[int, int]:
    """Return ``(prefix, suffix)`` lengths of the runs shared by ``a`` and ``b``.

    The suffix scan never reaches into the prefix, so
    ``prefix + suffix <= min(len(a), len(b))``.
    """
    a_len = len(a)
    b_len = len(b)
    limit = min(a_len, b_len)

    prefix = 0
    while prefix < limit and a[prefix] == b[prefix]:
        prefix += 1

    suffix = 0
    suffix_limit = limit - prefix
    while suffix < suffix_limit and a[a_len - 1 - suffix] == b[b_len - 1 - suffix]:
        suffix += 1

    return prefix, suffix
