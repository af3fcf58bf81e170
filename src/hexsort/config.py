"""Game configuration: board size, spawn ranges and scoring rules."""
from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Tuple

from hexsort.constants import (
    BOARD_RADIUS,
    LEVEL_TARGET_STEP,
    MERGE_THRESHOLD,
    OPTION_SLOTS,
    PALETTE_NAMES,
    POINTS_PER_UNIT,
)


@dataclass(frozen=True, slots=True)
class GameConfig:
    board_radius: int = BOARD_RADIUS
    palette_size: int = len(PALETTE_NAMES)
    stack_size_range: Tuple[int, int] = (3, 6)
    colors_per_stack_range: Tuple[int, int] = (1, 3)
    color_switch_chance: float = 0.3
    merge_threshold: int = MERGE_THRESHOLD
    points_per_unit: int = POINTS_PER_UNIT
    level_target_step: int = LEVEL_TARGET_STEP
    option_slots: int = OPTION_SLOTS

    def __post_init__(self) -> None:
        if self.board_radius < 0:
            raise ValueError(f"board_radius must be >= 0, got {self.board_radius}")
        if not 1 <= self.palette_size <= len(PALETTE_NAMES):
            raise ValueError(
                f"palette_size must be between 1 and {len(PALETTE_NAMES)}, got {self.palette_size}"
            )
        _check_range("stack_size_range", self.stack_size_range, minimum=1)
        _check_range("colors_per_stack_range", self.colors_per_stack_range, minimum=1)
        if not 0.0 <= self.color_switch_chance <= 1.0:
            raise ValueError(f"color_switch_chance must be within [0, 1], got {self.color_switch_chance}")
        if self.merge_threshold < 2:
            raise ValueError(f"merge_threshold must be >= 2, got {self.merge_threshold}")
        if self.points_per_unit < 0:
            raise ValueError(f"points_per_unit must be >= 0, got {self.points_per_unit}")
        if self.level_target_step < 1:
            raise ValueError(f"level_target_step must be >= 1, got {self.level_target_step}")
        if self.option_slots < 1:
            raise ValueError(f"option_slots must be >= 1, got {self.option_slots}")

    def palette(self) -> Tuple[str, ...]:
        return PALETTE_NAMES[: self.palette_size]

    def level_target(self, level: int) -> int:
        return self.level_target_step * level

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        values = dict(data)
        for key in ("stack_size_range", "colors_per_stack_range"):
            if key in values:
                values[key] = tuple(values[key])
        return cls(**values)


def _check_range(name: str, value: Tuple[int, int], *, minimum: int) -> None:
    try:
        low, high = value
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a (min, max) pair, got {value!r}") from None
    if low < minimum or high < low:
        raise ValueError(f"{name} must satisfy {minimum} <= min <= max, got {value!r}")


def load_config(path: str | Path) -> GameConfig:
    """Read a JSON object of GameConfig fields; missing keys keep their defaults."""
    with Path(path).open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Configuration file {path} must contain a JSON object")
    return GameConfig.from_mapping(payload)
