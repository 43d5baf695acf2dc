# ================================
# file: gui/display.py
# ================================
from abc import ABC, abstractmethod
from typing import List, Optional
import threading

from core.coords import CoordinateSystem
from sim.cell_grid import MazeCellGrid


class DisplaySink(ABC):
    """Display sink base class - what the exploration core talks to"""

    @abstractmethod
    def set_status(self, message: str) -> None:
        pass

    @abstractmethod
    def set_coverage(self, percent: float) -> None:
        pass

    @abstractmethod
    def set_time_counter(self, seconds_remaining: int) -> None:
        pass

    @abstractmethod
    def get_maze_cell_grid(self) -> MazeCellGrid:
        """Shared rendered grid (read/write through its lock sections)."""
        pass

    def refresh_input(self) -> None:
        """Reset operator input widgets before a run. No-op by default."""
        pass

    def alert(self) -> None:
        """Audible/visual alert at timeout. No-op by default."""
        pass


class HeadlessDisplay(DisplaySink):
    """Display sink without widgets: keeps a history of every update and logs
    status lines. Safe to call from the timer, explorer and monitor threads.
    """
    def __init__(self, coords: Optional[CoordinateSystem] = None,
                 logger_func=None, log_file=None) -> None:
        self.grid = MazeCellGrid(coords)
        self.logger_func = logger_func
        self.log_file = log_file
        self.statuses: List[str] = []
        self.coverages: List[float] = []
        self.time_counters: List[int] = []
        self.alerts = 0
        self.input_refreshes = 0
        self._lock = threading.Lock()

    def _log(self, message: str, module: str = "DISPLAY") -> None:
        if self.logger_func and self.log_file:
            self.logger_func(self.log_file, message, module)
        else:
            print(f"[{module}] {message}")

    @property
    def status(self) -> Optional[str]:
        with self._lock:
            return self.statuses[-1] if self.statuses else None

    @property
    def coverage(self) -> Optional[float]:
        with self._lock:
            return self.coverages[-1] if self.coverages else None

    def set_status(self, message: str) -> None:
        with self._lock:
            self.statuses.append(message)
        self._log(message, "STATUS")

    def set_coverage(self, percent: float) -> None:
        with self._lock:
            self.coverages.append(float(percent))

    def set_time_counter(self, seconds_remaining: int) -> None:
        with self._lock:
            self.time_counters.append(int(seconds_remaining))

    def get_maze_cell_grid(self) -> MazeCellGrid:
        return self.grid

    def refresh_input(self) -> None:
        with self._lock:
            self.input_refreshes += 1

    def alert(self) -> None:
        with self._lock:
            self.alerts += 1
        self._log("time limit alert", "STATUS")
