# ================================
# file: sim/maze_ref.py
# ================================
from __future__ import annotations
import threading
import numpy as np

from core.config import ARENA_WIDTH, ARENA_LENGTH
from core.types import MazeClass


class MazeReference:
    """Explorer's classification grid, grid[row, col] in the arena frame.

    Values follow the occupancy encoding 0=free, 1=obstacle, 2=unknown.
    Knowledge is monotonic within a run: a cell only leaves UNKNOWN once.
    """
    def __init__(self, width: int = ARENA_WIDTH, length: int = ARENA_LENGTH) -> None:
        self.width = int(width)
        self.length = int(length)
        self.grid: np.ndarray = np.full((self.length, self.width), MazeClass.UNKNOWN, dtype=np.uint8)
        self._lock = threading.Lock()

    def reset(self) -> None:
        """Forget everything. Only valid between runs."""
        with self._lock:
            self.grid.fill(MazeClass.UNKNOWN)

    def get(self, col: int, row: int) -> MazeClass:
        return MazeClass(int(self.grid[row, col]))

    def classify(self, col: int, row: int, value: MazeClass) -> bool:
        """Record knowledge for one cell. Returns True when the cell was new.

        Raises ValueError on UNKNOWN targets or on a contradicting
        re-classification.
        """
        value = MazeClass(value)
        if value is MazeClass.UNKNOWN:
            raise ValueError("cannot classify a cell back to UNKNOWN")
        if not (0 <= col < self.width and 0 <= row < self.length):
            raise ValueError(f"cell ({col}, {row}) outside maze reference")
        with self._lock:
            cur = int(self.grid[row, col])
            if cur == value:
                return False
            if cur != MazeClass.UNKNOWN:
                raise ValueError(f"cell ({col}, {row}) already {MazeClass(cur).name}, "
                                 f"refusing {value.name}")
            self.grid[row, col] = value
            return True

    def snapshot(self) -> np.ndarray:
        with self._lock:
            return self.grid.copy()

    def known_count(self) -> int:
        with self._lock:
            return int((self.grid != MazeClass.UNKNOWN).sum())
