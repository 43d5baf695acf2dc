# ================================
# file: core/coords.py
# ================================
from __future__ import annotations
from typing import Tuple, Iterator
import numpy as np

# Import configuration parameters
from core.config import ARENA_WIDTH, ARENA_LENGTH, DISPLAY_BORDER, FOOTPRINT_RADIUS
from core.types import Cell


class CoordinateSystem:
    """Unified coordinate frames for the arena.

    arena : (col, row), origin at the south-west cell, NORTH = +row
    grid  : (r, c) index into the rendered grid, r=0 at the top (north),
            shifted by `border` cells of blocked frame on every side
    user  : 1-based (x, y) as typed by an operator, same axes as arena
    """

    def __init__(self, width: int = ARENA_WIDTH, length: int = ARENA_LENGTH,
                 border: int = DISPLAY_BORDER) -> None:
        self.width = int(width)
        self.length = int(length)
        self.border = int(border)

    @property
    def grid_shape(self) -> Tuple[int, int]:
        """(rows, cols) of the rendered grid including the border."""
        return (self.length + 2 * self.border, self.width + 2 * self.border)

    @property
    def arena_slice(self) -> Tuple[slice, slice]:
        """Grid index slices covering the arena region only."""
        b = self.border
        return (slice(b, b + self.length), slice(b, b + self.width))

    # Arena <-> grid
    def arena_to_grid(self, col: int, row: int) -> Tuple[int, int]:
        return (self.border + (self.length - 1 - row), self.border + col)

    def grid_to_arena(self, r: int, c: int) -> Cell:
        return (c - self.border, self.length - 1 - (r - self.border))

    def arena_array_to_grid(self, arr: np.ndarray) -> np.ndarray:
        """Arena-frame [row, col] array as a view in grid row order (north first)."""
        return arr[::-1, :]

    # User <-> arena
    def user_to_arena(self, x: int, y: int) -> Cell:
        return (int(x) - 1, int(y) - 1)

    def arena_to_user(self, col: int, row: int) -> Tuple[int, int]:
        return (col + 1, row + 1)

    # Validation
    def is_in_arena(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.length

    def footprint_fits(self, col: int, row: int, radius: int = FOOTPRINT_RADIUS) -> bool:
        """True when the (2r+1)^2 block centred on (col, row) lies inside the arena."""
        return (radius <= col <= self.width - 1 - radius and
                radius <= row <= self.length - 1 - radius)

    def neighbourhood(self, col: int, row: int, radius: int = FOOTPRINT_RADIUS) -> Iterator[Cell]:
        """Arena cells of the square block around (col, row), clipped to the arena."""
        for c in range(col - radius, col + radius + 1):
            for r in range(row - radius, row + radius + 1):
                if self.is_in_arena(c, r):
                    yield (c, r)


# Default arena coordinate system
coord_system = CoordinateSystem()
