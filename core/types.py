# ================================
# file: core/types.py
# ================================
"""Shared data structures for cells, orientation, pose and grid states.
Use minimal typing: Tuple/Optional only.
"""
from __future__ import annotations
from typing import Tuple
from enum import Enum, IntEnum

# Arena frame (col, row)
Cell = Tuple[int, int]


class Orientation(Enum):
    """Robot facing. Declaration order is clockwise."""
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def right(self) -> "Orientation":
        return Orientation((self.value + 1) % 4)

    def left(self) -> "Orientation":
        return Orientation((self.value - 1) % 4)

    def reverse(self) -> "Orientation":
        return Orientation((self.value + 2) % 4)

    @property
    def delta(self) -> Cell:
        """Unit step (dcol, drow) in the arena frame; NORTH is +row."""
        return _DELTAS[self]


_DELTAS = {
    Orientation.NORTH: (0, 1),
    Orientation.EAST: (1, 0),
    Orientation.SOUTH: (0, -1),
    Orientation.WEST: (-1, 0),
}


class MazeClass(IntEnum):
    """Explorer classification per arena cell: 0=free, 1=obstacle, 2=unknown."""
    EMPTY = 0
    OBSTACLE = 1
    UNKNOWN = 2


class CellState(IntEnum):
    """Rendered state of one display cell."""
    UNVISITED = 0
    BORDER = 1
    LANDMARK = 2
    FOOTPRINT = 3
    LEAD = 4
    VISITED = 5
    LANDMARK_VISITED = 6
    OBSTACLE = 7


# States counted as explored by the coverage monitor
EXPLORED_STATES = (CellState.FOOTPRINT, CellState.LEAD,
                   CellState.VISITED, CellState.LANDMARK_VISITED)


class Pose:
    """Robot pose on the arena grid.


    Attributes
    -----------
    position : (col, row) centre of the 3x3 footprint
    orientation : Orientation
    """
    __slots__ = ("position", "orientation")


    def __init__(self, position: Cell, orientation: Orientation = Orientation.NORTH) -> None:
        self.position = (int(position[0]), int(position[1]))
        self.orientation = orientation


    def copy(self) -> "Pose":
        return Pose(self.position, self.orientation)


    def ahead(self, steps: int = 1) -> Cell:
        """Cell `steps` away in the facing direction."""
        dc, dr = self.orientation.delta
        return (self.position[0] + steps * dc, self.position[1] + steps * dr)


    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pose):
            return NotImplemented
        return self.position == other.position and self.orientation == other.orientation


    def __repr__(self) -> str:
        return f"Pose({self.position}, {self.orientation.name})"
