# ================================
# file: tests/conftest.py
# ================================
import threading

import matplotlib
matplotlib.use("Agg")

import pytest

from core.coords import CoordinateSystem
from explore import ExplorationOrchestrator, Explorer, SweepExplorer
from gui import HeadlessDisplay
from sim import ArenaLayout, MazeCellGrid, MazeReference, PoseStateMachine


@pytest.fixture
def coords():
    return CoordinateSystem()


@pytest.fixture
def grid(coords):
    return MazeCellGrid(coords)


@pytest.fixture
def explorer(coords):
    return SweepExplorer(ArenaLayout(coords.width, coords.length), coords)


@pytest.fixture
def robot(grid, explorer):
    return PoseStateMachine(grid, explorer)


@pytest.fixture
def display(coords):
    return HeadlessDisplay(coords)


@pytest.fixture
def make_orchestrator(display, tmp_path):
    """Orchestrator factory with fast timer ticks and polls."""
    def _make(explorer=None, tick_s=0.05, poll_interval=0.005, **kwargs):
        if explorer is None:
            explorer = SweepExplorer(coords=display.grid.coords)
        kwargs.setdefault("descriptor_path", str(tmp_path / "map-descriptors" / "arena.txt"))
        return ExplorationOrchestrator(explorer, display, tick_s=tick_s,
                                       poll_interval=poll_interval, **kwargs)
    return _make


class IdleExplorer(Explorer):
    """Explorer that never moves; returns when told to stop."""
    def __init__(self):
        self.maze_ref = MazeReference()
        self.started = threading.Event()

    def explore(self, start, speed, robot, should_stop):
        self.started.set()
        while not should_stop():
            threading.Event().wait(0.005)

    def get_maze_ref(self):
        return self.maze_ref


class LingeringExplorer(Explorer):
    """Explorer that keeps its thread alive after being told to stop,
    until `release` is set."""
    def __init__(self):
        self.maze_ref = MazeReference()
        self.stopped = threading.Event()
        self.release = threading.Event()
        self.should_stop = None

    def explore(self, start, speed, robot, should_stop):
        self.should_stop = should_stop
        while not should_stop():
            threading.Event().wait(0.005)
        self.stopped.set()
        self.release.wait(5.0)

    def get_maze_ref(self):
        return self.maze_ref


class FailingExplorer(Explorer):
    """Explorer whose search blows up after the first move."""
    def __init__(self):
        self.maze_ref = MazeReference()

    def explore(self, start, speed, robot, should_stop):
        robot.move_forward()
        raise RuntimeError("sensor failure")

    def get_maze_ref(self):
        return self.maze_ref


@pytest.fixture
def idle_explorer():
    return IdleExplorer()


@pytest.fixture
def failing_explorer():
    return FailingExplorer()


@pytest.fixture
def lingering_explorer():
    explorer = LingeringExplorer()
    yield explorer
    explorer.release.set()
