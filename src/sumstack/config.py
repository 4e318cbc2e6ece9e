"""Session configuration with construction-time validation."""
from __future__ import annotations

from dataclasses import dataclass

from sumstack.constants import (
    GRID_COLS,
    GRID_ROWS,
    INITIAL_ROWS,
    SCORE_PER_POINT,
    TARGET_FALLBACK,
    TARGET_MAX,
    TARGET_MAX_TERMS,
    TARGET_MIN,
    TARGET_MIN_TERMS,
    TILE_MAX_VALUE,
    TILE_MIN_VALUE,
    TIMED_MODE_INTERVAL,
)


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Board geometry and tuning values for one game.

    Defaults reproduce the classic 10x7 board. Call ``validate`` (the
    controller does this for you) before using a hand-built config.
    """

    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    initial_rows: int = INITIAL_ROWS
    timed_interval: int = TIMED_MODE_INTERVAL
    min_value: int = TILE_MIN_VALUE
    max_value: int = TILE_MAX_VALUE
    target_min: int = TARGET_MIN
    target_max: int = TARGET_MAX
    target_fallback: int = TARGET_FALLBACK
    target_min_terms: int = TARGET_MIN_TERMS
    target_max_terms: int = TARGET_MAX_TERMS
    score_per_point: int = SCORE_PER_POINT

    def validate(self) -> "GameConfig":
        if self.rows <= 0:
            raise ValueError(f"rows must be positive, got {self.rows}")
        if self.cols <= 0:
            raise ValueError(f"cols must be positive, got {self.cols}")
        if not 0 <= self.initial_rows <= self.rows:
            raise ValueError(
                f"initial_rows must be within [0, {self.rows}], got {self.initial_rows}"
            )
        if self.timed_interval <= 0:
            raise ValueError(f"timed_interval must be positive, got {self.timed_interval}")
        if self.min_value < 1:
            raise ValueError(f"min_value must be at least 1, got {self.min_value}")
        if self.min_value > self.max_value:
            raise ValueError("min_value must not exceed max_value")
        if self.target_min > self.target_max:
            raise ValueError("target_min must not exceed target_max")
        if not 1 <= self.target_min_terms <= self.target_max_terms:
            raise ValueError("target term counts must satisfy 1 <= min <= max")
        if self.score_per_point < 0:
            raise ValueError("score_per_point must not be negative")
        return self
