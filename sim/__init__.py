# ================================
# file: sim/__init__.py
# ================================
"""Simulation world: arena layout, explorer knowledge, rendered cells and
the robot pose state machine that paints them.
"""
from .arena import ArenaLayout
from .maze_ref import MazeReference
from .cell_grid import MazeCellGrid
from .reconcile import reconcile_maze_display, landmark_mask
from .robot_pose import PoseStateMachine


__all__ = ["ArenaLayout", "MazeReference", "MazeCellGrid",
           "reconcile_maze_display", "landmark_mask", "PoseStateMachine"]
