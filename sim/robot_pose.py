# ================================
# file: sim/robot_pose.py
# ================================
from __future__ import annotations
from typing import Optional, List
import numpy as np

from core.config import FOOTPRINT_RADIUS, START_CELL, GOAL_CELL
from core.coords import CoordinateSystem
from core.errors import OutOfRangeError, OutOfBoundsError
from core.types import Cell, CellState, Orientation, Pose
from .cell_grid import MazeCellGrid
from .reconcile import landmark_mask, reconcile_maze_display


class PoseStateMachine:
    """Robot pose on the arena grid plus the footprint it paints.

    Every mutation (initialize / turn / move) updates the footprint cells and
    then reconciles the rest of the grid against the explorer's maze
    reference, all inside one write section of the shared cell grid.
    `explorer` only needs get_maze_ref() and the START / GOAL landmarks;
    without one, reconciliation is skipped.
    Thread-safety: mutations come from the explorer thread; readers go
    through the grid lock.
    """
    def __init__(self, grid: MazeCellGrid, explorer=None, coords: Optional[CoordinateSystem] = None,
                 recorder=None, logger_func=None, log_file=None) -> None:
        self.grid = grid
        self.coords = coords or grid.coords
        self.explorer = explorer
        self.recorder = recorder
        self.logger_func = logger_func
        self.log_file = log_file
        self._pose: Optional[Pose] = None
        landmarks = (getattr(explorer, "START", START_CELL), getattr(explorer, "GOAL", GOAL_CELL))
        self._lm_mask: np.ndarray = landmark_mask(self.coords, landmarks)

    def _log(self, message: str, module: str = "POSE") -> None:
        if self.logger_func and self.log_file:
            self.logger_func(self.log_file, message, module)
        else:
            print(f"[{module}] {message}")

    # ---- state access ----
    @property
    def is_initialized(self) -> bool:
        return self._pose is not None

    @property
    def pose(self) -> Optional[Pose]:
        with self.grid.read():
            return self._pose.copy() if self._pose is not None else None

    @property
    def position(self) -> Cell:
        return self._require_pose().position

    @property
    def orientation(self) -> Orientation:
        return self._require_pose().orientation

    def footprint(self) -> List[Cell]:
        p = self._require_pose().position
        return list(self.coords.neighbourhood(p[0], p[1], FOOTPRINT_RADIUS))

    def clear(self) -> None:
        """Forget the pose (used by a full maze reset)."""
        with self.grid.write():
            self._pose = None

    def _require_pose(self) -> Pose:
        if self._pose is None:
            raise RuntimeError("robot pose not initialized")
        return self._pose

    def _paint(self, states: np.ndarray, cell: Cell, state: CellState) -> None:
        states[self.coords.arena_to_grid(*cell)] = state

    # ---- commands ----
    def initialize(self, cell: Cell, orientation: Orientation = Orientation.NORTH) -> None:
        """Place the robot; the whole footprint must fit inside the arena."""
        col, row = int(cell[0]), int(cell[1])
        if not self.coords.footprint_fits(col, row):
            raise OutOfRangeError(f"start cell ({col}, {row}) leaves the footprint outside "
                                  f"the {self.coords.width}x{self.coords.length} arena")
        with self.grid.write() as states:
            pose = Pose((col, row), orientation)
            for c in self.coords.neighbourhood(col, row, FOOTPRINT_RADIUS):
                self._paint(states, c, CellState.FOOTPRINT)
            self._paint(states, pose.ahead(), CellState.LEAD)
            self._pose = pose
            self._render(states)
        self._log(f"robot placed at {pose.position} facing {orientation.name}")
        self._record()

    def turn_right(self) -> None:
        self._turn(self._require_pose().orientation.right())

    def turn_left(self) -> None:
        self._turn(self._require_pose().orientation.left())

    def face(self, target: Orientation) -> int:
        """Turn to `target` with the fewest 90-degree turns; returns turns made."""
        cur = self._require_pose().orientation
        if cur is target:
            return 0
        if cur.left() is target:
            self.turn_left()
            return 1
        turns = 0
        while self._require_pose().orientation is not target:
            self.turn_right()
            turns += 1
        return turns

    def _turn(self, new_orientation: Orientation) -> None:
        with self.grid.write() as states:
            pose = self._require_pose()
            self._paint(states, pose.ahead(), CellState.FOOTPRINT)
            pose.orientation = new_orientation
            self._paint(states, pose.ahead(), CellState.LEAD)
            self._render(states)
        self._record()

    def can_move_forward(self) -> bool:
        nxt = self._require_pose().ahead()
        return self.coords.footprint_fits(*nxt)

    def move_forward(self) -> None:
        """Advance one cell; the three cells entering the footprint are revealed."""
        pose = self._require_pose()
        nxt = pose.ahead()
        if not self.coords.footprint_fits(*nxt):
            raise OutOfBoundsError(f"move {pose.orientation.name} from {pose.position} "
                                   f"would leave the arena")
        with self.grid.write() as states:
            # old lead becomes an interior footprint cell
            self._paint(states, pose.ahead(), CellState.FOOTPRINT)
            edge = pose.ahead(2)
            pc, pr = pose.orientation.right().delta
            for k in (-1, 1):
                self._paint(states, (edge[0] + k * pc, edge[1] + k * pr), CellState.FOOTPRINT)
            self._paint(states, edge, CellState.LEAD)
            pose.position = nxt
            self._render(states)
        self._record()

    def render(self) -> int:
        """Reconcile non-footprint cells with the explorer's classification."""
        with self.grid.write() as states:
            return self._render(states)

    def _render(self, states: np.ndarray) -> int:
        if self.explorer is None:
            return 0
        maze_ref = self.explorer.get_maze_ref()
        center = self._pose.position if self._pose is not None else None
        return reconcile_maze_display(states, maze_ref.snapshot(), self.coords, center, self._lm_mask)

    def _record(self) -> None:
        if self.recorder is not None and self._pose is not None:
            self.recorder.log_pose(self.pose)
