# ================================
# file: sim/reconcile.py
# ================================
from __future__ import annotations
from typing import Optional, Sequence
import numpy as np
from scipy.ndimage import binary_dilation, generate_binary_structure

from core.config import FOOTPRINT_RADIUS, LANDMARK_RADIUS
from core.coords import CoordinateSystem
from core.types import Cell, CellState, MazeClass


def landmark_mask(coords: CoordinateSystem, landmarks: Sequence[Cell],
                  radius: int = LANDMARK_RADIUS) -> np.ndarray:
    """Boolean (length, width) mask in grid row order; True inside any landmark zone."""
    seeds = np.zeros((coords.length, coords.width), dtype=bool)
    for col, row in landmarks:
        if coords.is_in_arena(col, row):
            seeds[row, col] = True
    if radius > 0 and seeds.any():
        # 8-connected structure grows each seed into a (2r+1)^2 square
        seeds = binary_dilation(seeds, structure=generate_binary_structure(2, 2), iterations=radius)
    return coords.arena_array_to_grid(seeds)


def footprint_mask(coords: CoordinateSystem, center: Optional[Cell],
                   radius: int = FOOTPRINT_RADIUS) -> np.ndarray:
    """Boolean (length, width) mask in grid row order covering the robot footprint."""
    mask = np.zeros((coords.length, coords.width), dtype=bool)
    if center is not None:
        col, row = center
        r0, r1 = max(0, row - radius), min(coords.length, row + radius + 1)
        c0, c1 = max(0, col - radius), min(coords.width, col + radius + 1)
        mask[r0:r1, c0:c1] = True
    return coords.arena_array_to_grid(mask)


def reconcile_maze_display(states: np.ndarray, maze_grid: np.ndarray,
                           coords: CoordinateSystem, center: Optional[Cell],
                           lm_mask: np.ndarray) -> int:
    """Repaint every arena cell outside the footprint from the classification grid.

    EMPTY -> VISITED (LANDMARK_VISITED inside a landmark zone),
    OBSTACLE -> OBSTACLE, UNKNOWN -> untouched. Idempotent.
    Caller must hold the grid write section. Returns the number of changed cells.
    """
    region = states[coords.arena_slice]          # view into the shared grid
    ref = coords.arena_array_to_grid(maze_grid)
    outside = ~footprint_mask(coords, center)

    target = region.copy()
    empty = outside & (ref == MazeClass.EMPTY)
    target[empty & lm_mask] = CellState.LANDMARK_VISITED
    target[empty & ~lm_mask] = CellState.VISITED
    target[outside & (ref == MazeClass.OBSTACLE)] = CellState.OBSTACLE

    changed = int((target != region).sum())
    if changed:
        region[...] = target
    return changed
