# ================================
# file: sim/arena.py
# ================================
from __future__ import annotations
from typing import Optional, Sequence, Dict
import numpy as np

from core.config import ARENA_WIDTH, ARENA_LENGTH
from core.types import Cell


class ArenaLayout:
    """Ground-truth obstacle layout of the arena.

    grid[row, col] is True where an obstacle is present; row 0 is the south
    edge. While a map is being drawn the layout is editable; `frozen()`
    returns the read-only copy that exploration runs against.
    """
    def __init__(self, width: int = ARENA_WIDTH, length: int = ARENA_LENGTH,
                 grid: Optional[np.ndarray] = None) -> None:
        self.width = int(width)
        self.length = int(length)
        if grid is None:
            self.grid: np.ndarray = np.zeros((self.length, self.width), dtype=bool)
        else:
            grid = np.asarray(grid, dtype=bool)
            if grid.shape != (self.length, self.width):
                raise ValueError(f"layout grid shape {grid.shape} != {(self.length, self.width)}")
            self.grid = grid.copy()

    @property
    def read_only(self) -> bool:
        return not self.grid.flags.writeable

    def _check_cell(self, col: int, row: int) -> None:
        if not (0 <= col < self.width and 0 <= row < self.length):
            raise ValueError(f"cell ({col}, {row}) outside {self.width}x{self.length} arena")

    def is_obstacle(self, col: int, row: int) -> bool:
        """Obstacle lookup; anything outside the arena counts as blocked."""
        if not (0 <= col < self.width and 0 <= row < self.length):
            return True
        return bool(self.grid[row, col])

    def set_obstacle(self, col: int, row: int, value: bool = True) -> None:
        self._check_cell(col, row)
        self.grid[row, col] = bool(value)

    def toggle_obstacle(self, col: int, row: int) -> bool:
        """Flip one cell and return its new value."""
        self._check_cell(col, row)
        self.grid[row, col] = not self.grid[row, col]
        return bool(self.grid[row, col])

    def clear(self) -> None:
        self.grid[:] = False

    def obstacle_count(self) -> int:
        return int(self.grid.sum())

    def copy(self) -> "ArenaLayout":
        return ArenaLayout(self.width, self.length, self.grid)

    def frozen(self) -> "ArenaLayout":
        """Read-only copy; writes raise ValueError from numpy."""
        out = self.copy()
        out.grid.flags.writeable = False
        return out

    # ---- descriptor text: one line per row, north-most row first ----
    def to_descriptor(self) -> str:
        lines = []
        for row in range(self.length - 1, -1, -1):
            lines.append("".join("1" if v else "0" for v in self.grid[row]))
        return "\n".join(lines) + "\n"

    @classmethod
    def from_descriptor(cls, text: str, width: int = ARENA_WIDTH,
                        length: int = ARENA_LENGTH) -> "ArenaLayout":
        lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
        return cls.from_rows(lines, width, length)

    @classmethod
    def from_rows(cls, rows: Sequence[str], width: int = ARENA_WIDTH,
                  length: int = ARENA_LENGTH) -> "ArenaLayout":
        """Build from '0'/'1' strings listed north-most row first."""
        if len(rows) != length:
            raise ValueError(f"descriptor has {len(rows)} rows, expected {length}")
        layout = cls(width, length)
        for i, line in enumerate(rows):
            if len(line) != width or set(line) - {"0", "1"}:
                raise ValueError(f"descriptor line {i + 1} is not {width} chars of 0/1: {line!r}")
            row = length - 1 - i
            layout.grid[row] = [ch == "1" for ch in line]
        return layout

    def get_layout_info(self) -> Dict:
        return {
            'size': (self.width, self.length),
            'obstacle_count': self.obstacle_count(),
            'free_count': int(self.grid.size - self.obstacle_count()),
            'read_only': self.read_only,
        }

    def obstacles(self) -> Sequence[Cell]:
        rows, cols = np.nonzero(self.grid)
        return [(int(c), int(r)) for r, c in zip(rows, cols)]
