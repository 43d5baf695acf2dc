# ================================
# file: explore/coverage_monitor.py
# ================================
from __future__ import annotations
from typing import Callable, Optional
import numpy as np

from core.config import COVERAGE_POLL_INTERVAL_S
from core.types import EXPLORED_STATES
from sim.cell_grid import MazeCellGrid
from .termination import TerminationState, TerminationReason


class CoverageMonitor:
    """Polls the rendered grid and trips REACHED_COVERAGE at the target.

    Coverage = explored / arena cells * 100, recomputed from scratch each
    poll (footprint cells count even before the explorer classifies them).
    Between polls the loop waits on the termination condition instead of
    spinning.
    """
    def __init__(self, grid: MazeCellGrid, termination: TerminationState, target_coverage: float,
                 display=None, poll_interval: float = COVERAGE_POLL_INTERVAL_S,
                 recorder=None, logger_func=None, log_file=None) -> None:
        self.grid = grid
        self.termination = termination
        self.target_coverage = float(target_coverage)
        self.display = display
        self.poll_interval = float(poll_interval)
        self.recorder = recorder
        self.logger_func = logger_func
        self.log_file = log_file
        self.last_coverage: float = 0.0
        self.polls = 0
        self._explored = np.array([int(s) for s in EXPLORED_STATES], dtype=np.uint8)

    def _log(self, message: str, module: str = "COVERAGE") -> None:
        if self.logger_func and self.log_file:
            self.logger_func(self.log_file, message, module)
        else:
            print(f"[{module}] {message}")

    def compute_coverage(self) -> float:
        with self.grid.read() as states:
            region = states[self.grid.coords.arena_slice]
            explored = int(np.isin(region, self._explored).sum())
            return 100.0 * explored / float(region.size)

    def poll_once(self) -> float:
        coverage = self.compute_coverage()
        self.last_coverage = coverage
        self.polls += 1
        if self.display is not None:
            self.display.set_coverage(coverage)
        if self.recorder is not None:
            self.recorder.log_coverage(coverage)
        if coverage >= self.target_coverage:
            if self.termination.trip(TerminationReason.REACHED_COVERAGE):
                self._log(f"target coverage {self.target_coverage:.0f}% reached "
                          f"({coverage:.1f}%) after {self.polls} polls")
        return coverage

    def run(self, on_exit: Optional[Callable[[], None]] = None) -> None:
        """Loop until the termination variant leaves RUNNING, then call on_exit."""
        try:
            # at least one sample, even when the run is over before it starts
            self.poll_once()
            while self.termination.is_running():
                if self.termination.wait(self.poll_interval):
                    break
                self.poll_once()
        finally:
            if on_exit is not None:
                on_exit()
