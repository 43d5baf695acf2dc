# ================================
# file: sim/cell_grid.py
# ================================
from __future__ import annotations
from typing import Iterable, Optional, Sequence
import contextlib
import threading
import numpy as np

from core.config import START_CELL, GOAL_CELL, LANDMARK_RADIUS
from core.coords import CoordinateSystem, coord_system
from core.types import Cell, CellState, EXPLORED_STATES


@contextlib.contextmanager
def _readonly(arr: np.ndarray):
    """
    Make array read-only inside the context to catch illegal writes
    from code that only holds a read section.
    """
    old = arr.flags.writeable
    arr.flags.writeable = False
    try:
        yield
    finally:
        arr.flags.writeable = old


class MazeCellGrid:
    """Rendered cell states shared by the pose machine, the coverage monitor
    and the display.

    states[r, c] is indexed in the grid frame (north row first, border ring
    included). All access goes through `write()` / `read()` sections of one
    re-entrant lock; a pose change and its reconciliation share one write
    section so a later read sees both.
    """
    def __init__(self, coords: Optional[CoordinateSystem] = None) -> None:
        self.coords = coords or coord_system
        self.states: np.ndarray = np.full(self.coords.grid_shape, CellState.UNVISITED, dtype=np.uint8)
        self._lock = threading.RLock()
        self.reset()

    @contextlib.contextmanager
    def write(self):
        with self._lock:
            yield self.states

    @contextlib.contextmanager
    def read(self):
        with self._lock:
            with _readonly(self.states):
                yield self.states

    def reset(self, landmarks: Sequence[Cell] = (START_CELL, GOAL_CELL),
              radius: int = LANDMARK_RADIUS) -> None:
        """Full reset: arena unvisited, border blocked, landmark zones marked."""
        with self.write() as states:
            states.fill(CellState.BORDER)
            states[self.coords.arena_slice] = CellState.UNVISITED
            for lm in landmarks:
                for cell in self.coords.neighbourhood(lm[0], lm[1], radius):
                    states[self.coords.arena_to_grid(*cell)] = CellState.LANDMARK

    def get(self, col: int, row: int) -> CellState:
        with self.read() as states:
            return CellState(int(states[self.coords.arena_to_grid(col, row)]))

    def set(self, col: int, row: int, state: CellState) -> None:
        with self.write() as states:
            states[self.coords.arena_to_grid(col, row)] = state

    def count(self, wanted: Iterable[CellState] = EXPLORED_STATES) -> int:
        """Number of arena cells (border excluded) currently in `wanted`."""
        with self.read() as states:
            region = states[self.coords.arena_slice]
            return int(np.isin(region, [int(s) for s in wanted]).sum())

    def cells_in(self, state: CellState) -> list:
        """Arena cells currently rendered as `state`."""
        with self.read() as states:
            b = self.coords.border
            rs, cs = np.nonzero(states[self.coords.arena_slice] == state)
            return [self.coords.grid_to_arena(int(r) + b, int(c) + b) for r, c in zip(rs, cs)]

    def snapshot(self) -> np.ndarray:
        with self.read() as states:
            return states.copy()
