# ================================
# file: core/__init__.py
# ================================
"""
Core Package

Exports fundamental types, configurations, errors and coordinate helpers.
"""
from core.types import Cell, Orientation, MazeClass, CellState, Pose, EXPLORED_STATES
from core.coords import CoordinateSystem, coord_system
from core.errors import (
    ExplorationError, OutOfRangeError, OutOfBoundsError, NoLayoutError, DescriptorIOError,
)
from core.config import (
    # Arena configuration
    ARENA_WIDTH, ARENA_LENGTH, ARENA_CELLS, DISPLAY_BORDER, FOOTPRINT_RADIUS,

    # Landmarks
    START_CELL, GOAL_CELL, LANDMARK_RADIUS,

    # Exploration configuration
    DEFAULT_SPEED, DEFAULT_TARGET_COVERAGE, DEFAULT_TIME_LIMIT_S, MAX_TARGET_COVERAGE,

    # Timing
    TIMER_TICK_S, COVERAGE_POLL_INTERVAL_S,
)

__all__ = [
    # Types
    'Cell', 'Orientation', 'MazeClass', 'CellState', 'Pose', 'EXPLORED_STATES',

    # Coordinates
    'CoordinateSystem', 'coord_system',

    # Errors
    'ExplorationError', 'OutOfRangeError', 'OutOfBoundsError', 'NoLayoutError',
    'DescriptorIOError',

    # Configuration
    'ARENA_WIDTH', 'ARENA_LENGTH', 'ARENA_CELLS', 'DISPLAY_BORDER', 'FOOTPRINT_RADIUS',
    'START_CELL', 'GOAL_CELL', 'LANDMARK_RADIUS',
    'DEFAULT_SPEED', 'DEFAULT_TARGET_COVERAGE', 'DEFAULT_TIME_LIMIT_S', 'MAX_TARGET_COVERAGE',
    'TIMER_TICK_S', 'COVERAGE_POLL_INTERVAL_S',
]
