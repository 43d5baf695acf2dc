# ================================
# file: core/config.py
# ================================
"""
Global configuration for the grid arena exploration simulator.
Units are cells and seconds unless stated otherwise.

Organization:
1. Arena & Coordinate System
2. Landmarks
3. Exploration Defaults
4. Timing
5. Files
6. GUI & Logging
"""
from __future__ import annotations
import os

# ================================
# 1. ARENA & COORDINATE SYSTEM
# ================================
ARENA_WIDTH: int = 15           # Columns (west -> east)
ARENA_LENGTH: int = 20          # Rows (south -> north)
ARENA_CELLS: int = ARENA_WIDTH * ARENA_LENGTH

# Rendered grid = arena plus a ring of blocked border cells
DISPLAY_BORDER: int = 1

# Robot footprint is 3x3 centred on the pose cell
FOOTPRINT_RADIUS: int = 1

# ================================
# 2. LANDMARKS
# ================================
# Arena frame (col, row); each landmark owns its 3x3 neighbourhood
START_CELL: tuple = (1, 1)
GOAL_CELL: tuple = (ARENA_WIDTH - 2, ARENA_LENGTH - 2)
LANDMARK_RADIUS: int = 1

# ================================
# 3. EXPLORATION DEFAULTS
# ================================
DEFAULT_SPEED: int = 10                 # Robot steps per second (0 = unthrottled)
DEFAULT_TARGET_COVERAGE: int = 100      # Percent
DEFAULT_TIME_LIMIT_S: int = 360         # Seconds
MAX_TARGET_COVERAGE: int = 100

# Reference explorer: cells sensed beyond the footprint edge
SENSOR_RANGE: int = 1
SWEEP_LANE_PITCH: int = 2 * FOOTPRINT_RADIUS + 1

# ================================
# 4. TIMING
# ================================
TIMER_TICK_S: float = 1.0               # Countdown tick period
COVERAGE_POLL_INTERVAL_S: float = 0.02  # Back-off between coverage polls
THREAD_JOIN_TIMEOUT_S: float = 2.0

# ================================
# 5. FILES
# ================================
ARENA_DESCRIPTOR_PATH: str = os.path.join(os.getcwd(), "map-descriptors", "arena.txt")
LOG_DIR: str = "logs"

# ================================
# 6. GUI & LOGGING
# ================================
GUI_UPDATE_RATE_HZ: float = 10.0
# Cell colours, indexed by core.types.CellState value
GUI_CELL_COLORS: tuple = (
    "black",      # UNVISITED
    "dimgray",    # BORDER
    "orange",     # LANDMARK
    "cyan",       # FOOTPRINT
    "pink",       # LEAD
    "limegreen",  # VISITED
    "orange",     # LANDMARK_VISITED
    "red",        # OBSTACLE
)

