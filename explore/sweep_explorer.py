# ================================
# file: explore/sweep_explorer.py
# ================================
from __future__ import annotations
from typing import Callable, Optional
import time

from core.config import FOOTPRINT_RADIUS, SENSOR_RANGE, SWEEP_LANE_PITCH
from core.coords import CoordinateSystem, coord_system
from core.errors import NoLayoutError
from core.types import Cell, MazeClass, Orientation
from sim.arena import ArenaLayout
from sim.maze_ref import MazeReference
from .explorer import Explorer


class SweepExplorer(Explorer):
    """Deterministic lane sweep over the arena.

    Drives to the south-west corner, then sweeps north/south lanes spaced one
    footprint width apart, shifting east between lanes. After every step it
    senses the loaded layout within `sensor_range` cells of the footprint
    edge. A lane ends early when the cells ahead are blocked; the sweep ends
    when the robot cannot shift to another lane.
    """
    def __init__(self, layout: Optional[ArenaLayout] = None, coords: Optional[CoordinateSystem] = None,
                 sensor_range: int = SENSOR_RANGE, lane_pitch: int = SWEEP_LANE_PITCH,
                 logger_func=None, log_file=None) -> None:
        self.layout = layout
        self.coords = coords or coord_system
        self.sensor_range = int(sensor_range)
        self.lane_pitch = int(lane_pitch)
        self.logger_func = logger_func
        self.log_file = log_file
        self.maze_ref = MazeReference(self.coords.width, self.coords.length)
        self.steps = 0
        self._delay = 0.0
        self._should_stop: Callable[[], bool] = lambda: False

    def _log(self, message: str, module: str = "EXPLORE") -> None:
        if self.logger_func and self.log_file:
            self.logger_func(self.log_file, message, module)
        else:
            print(f"[{module}] {message}")

    def set_layout(self, layout: ArenaLayout) -> None:
        self.layout = layout

    def get_maze_ref(self) -> MazeReference:
        return self.maze_ref

    def reset(self) -> None:
        self.maze_ref.reset()
        self.steps = 0

    # ---- sensing ----
    def sense(self, robot) -> int:
        """Classify every cell within sensor range of the footprint; returns new cells."""
        col, row = robot.position
        new = 0
        for c, r in self.coords.neighbourhood(col, row, FOOTPRINT_RADIUS + self.sensor_range):
            value = MazeClass.OBSTACLE if self.layout.is_obstacle(c, r) else MazeClass.EMPTY
            if self.maze_ref.classify(c, r, value):
                new += 1
        if new:
            robot.render()
        return new

    def _known_obstacle(self, cell: Cell) -> bool:
        col, row = cell
        if not self.coords.is_in_arena(col, row):
            return True
        known = self.maze_ref.get(col, row)
        if known is MazeClass.UNKNOWN:
            # nothing sensed there yet: bump into it
            return self.layout.is_obstacle(col, row)
        return known is MazeClass.OBSTACLE

    def blocked(self, robot) -> bool:
        """True when the three cells entering the footprint are not all free."""
        pose = robot.pose
        if not self.coords.footprint_fits(*pose.ahead()):
            return True
        edge = pose.ahead(FOOTPRINT_RADIUS + 1)
        pc, pr = pose.orientation.right().delta
        return any(self._known_obstacle((edge[0] + k * pc, edge[1] + k * pr))
                   for k in range(-FOOTPRINT_RADIUS, FOOTPRINT_RADIUS + 1))

    # ---- motion ----
    def _after_step(self, robot) -> None:
        self.steps += 1
        self.sense(robot)
        if self._delay > 0:
            time.sleep(self._delay)

    def _drive(self, robot, direction: Orientation, max_steps: Optional[int] = None) -> int:
        """Face `direction` and move until blocked, stopped or max_steps; returns moves."""
        if self._should_stop():
            return 0
        if robot.orientation is not direction:
            robot.face(direction)
            self._after_step(robot)
        moved = 0
        while max_steps is None or moved < max_steps:
            if self._should_stop() or self.blocked(robot):
                break
            robot.move_forward()
            moved += 1
            self._after_step(robot)
        return moved

    def explore(self, start: Cell, speed: int, robot, should_stop: Callable[[], bool]) -> None:
        if self.layout is None:
            raise NoLayoutError("sweep explorer has no arena layout")
        if not robot.is_initialized:
            robot.initialize(start)
        self._should_stop = should_stop
        self._delay = 1.0 / speed if speed > 0 else 0.0
        self._log(f"sweep from {robot.position} at speed {speed}")

        self.sense(robot)
        self._drive(robot, Orientation.WEST)
        self._drive(robot, Orientation.SOUTH)

        east_limit = self.coords.width - 1 - FOOTPRINT_RADIUS
        heading = Orientation.NORTH
        while not should_stop():
            self._drive(robot, heading)
            shift = min(self.lane_pitch, east_limit - robot.position[0])
            if shift <= 0 or self._drive(robot, Orientation.EAST, shift) < shift:
                break
            heading = heading.reverse()

        self._log(f"sweep finished after {self.steps} steps, "
                  f"{self.maze_ref.known_count()} cells known")
