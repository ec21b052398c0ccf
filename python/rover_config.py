"""
Configuration constants for the rover simulator.

Grid bounds live here so every bounds check (parser gate and Position)
reads the same numbers. Lower bounds are always zero.
"""

from __future__ import annotations

from dataclasses import dataclass

GRID_MAX_X = 6
GRID_MAX_Y = 6

# Seconds to pause between rover steps when animating
ANIMATION_DELAY_SECONDS = 0.5

# Cell markers
UNVISITED = "."
TRAIL = "X"


@dataclass(frozen=True)
class GridBounds:
    """Exclusive upper bounds of the grid; valid cells are 0 <= x < max_x, 0 <= y < max_y."""

    max_x: int = GRID_MAX_X
    max_y: int = GRID_MAX_Y

    def __post_init__(self) -> None:
        if self.max_x <= 0 or self.max_y <= 0:
            raise ValueError(
                f"Grid bounds must be positive\n"
                f"  Got: max_x={self.max_x}, max_y={self.max_y}"
            )

    def x_in_range(self, x: int) -> bool:
        return 0 <= x < self.max_x

    def y_in_range(self, y: int) -> bool:
        return 0 <= y < self.max_y

    def contains(self, x: int, y: int) -> bool:
        return self.x_in_range(x) and self.y_in_range(y)

    @property
    def cell_count(self) -> int:
        return self.max_x * self.max_y


DEFAULT_BOUNDS = GridBounds()
