# ================================
# file: explore/explorer.py
# ================================
from abc import ABC, abstractmethod
from typing import Callable

from core.config import START_CELL, GOAL_CELL
from core.types import Cell
from sim.maze_ref import MazeReference


class Explorer(ABC):
    """Explorer service base class - the search strategy behind a run.

    The orchestrator runs `explore()` on a background thread. The explorer
    drives the robot through the pose state machine it is handed and is the
    only writer of its maze reference. It must return promptly once
    `should_stop()` turns True.
    """
    START: Cell = START_CELL
    GOAL: Cell = GOAL_CELL

    @abstractmethod
    def explore(self, start: Cell, speed: int, robot, should_stop: Callable[[], bool]) -> None:
        pass

    @abstractmethod
    def get_maze_ref(self) -> MazeReference:
        pass

    def reset(self) -> None:
        """Forget discovered cells before a new run. No-op by default."""
        pass
