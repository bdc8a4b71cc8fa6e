"""Runtime configuration for diff calls."""

from __future__ import annotations

from dataclasses import dataclass
import os

from diffpack.diff.exceptions import DiffConfigError

MAX_EDIT_DISTANCE_ENV_VAR = "DIFFKIT_MAX_EDIT_DISTANCE"


@dataclass(slots=True)
class DiffConfig:
    """Configuration for diff execution.

    ``max_edit_distance`` caps the search depth. The search itself has no
    timeout, so callers diffing untrusted or very large inputs should set it.
    """

    max_edit_distance: int | None = None
    word_diff: bool = True

    def __post_init__(self) -> None:
        self.max_edit_distance = normalize_max_edit_distance(self.max_edit_distance)
        if not isinstance(self.word_diff, bool):
            raise DiffConfigError("word_diff must be a boolean")

    @classmethod
    def from_env(cls) -> DiffConfig:
        raw = os.getenv(MAX_EDIT_DISTANCE_ENV_VAR, "").strip()
        if not raw:
            return cls()
        try:
            limit = int(raw)
        except ValueError as exc:
            raise DiffConfigError(
                f"{MAX_EDIT_DISTANCE_ENV_VAR} must be an integer, got {raw!r}"
            ) from exc
        return cls(max_edit_distance=limit)

    def to_dict(self) -> dict[str, object]:
        return {
            "max_edit_distance": self.max_edit_distance,
            "word_diff": self.word_diff,
        }


def normalize_max_edit_distance(value: int | None) -> int | None:
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise DiffConfigError("max_edit_distance must be an integer or None")
    if value < 0:
        raise DiffConfigError("max_edit_distance must be >= 0")
    return value


def resolve_config(config: DiffConfig | None) -> DiffConfig:
    return config if config is not None else DiffConfig.from_env()
