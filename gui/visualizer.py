# ================================
# file: gui/visualizer.py
# ================================
from __future__ import annotations
from typing import Optional
import numpy as np
import matplotlib
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap, BoundaryNorm
from matplotlib.patches import Patch

from core.config import GUI_CELL_COLORS, GUI_UPDATE_RATE_HZ
from core.coords import CoordinateSystem
from core.types import CellState
from .display import HeadlessDisplay


def select_backend(interactive: bool = True) -> str:
    """Pick the first usable interactive backend, else fall back to Agg."""
    if interactive:
        for backend in ["TkAgg", "Qt5Agg", "QtAgg", "MacOSX"]:
            try:
                matplotlib.use(backend, force=True)
                print(f"[GUI] matplotlib backend: {backend}")
                return backend
            except Exception as e:
                print(f"[GUI] backend {backend} unavailable: {e}")
    matplotlib.use("Agg", force=True)
    print("[GUI] matplotlib backend: Agg (non-interactive)")
    return "Agg"


class Visualizer(HeadlessDisplay):
    """Matplotlib view of the rendered maze grid.

    The worker threads only record updates (inherited from HeadlessDisplay);
    drawing happens in `update()` on the thread that owns the figure.
    """
    def __init__(self, coords: Optional[CoordinateSystem] = None,
                 logger_func=None, log_file=None) -> None:
        super().__init__(coords, logger_func, log_file)
        n = len(GUI_CELL_COLORS)
        self._cmap = ListedColormap(list(GUI_CELL_COLORS))
        self._norm = BoundaryNorm(np.arange(n + 1) - 0.5, n)
        self._time_left: Optional[int] = None

        self.fig, self.ax = plt.subplots(figsize=(6, 8))
        self.im = self.ax.imshow(self.grid.snapshot(), cmap=self._cmap, norm=self._norm,
                                 interpolation='nearest')
        rows, cols = self.grid.coords.grid_shape
        self.ax.set_xticks(np.arange(-0.5, cols, 1), minor=True)
        self.ax.set_yticks(np.arange(-0.5, rows, 1), minor=True)
        self.ax.grid(which='minor', color='gray', linewidth=0.5)
        self.ax.tick_params(which='both', bottom=False, left=False,
                            labelbottom=False, labelleft=False)
        legend = [Patch(facecolor=GUI_CELL_COLORS[s], label=s.name.lower())
                  for s in (CellState.FOOTPRINT, CellState.LEAD, CellState.VISITED,
                            CellState.OBSTACLE, CellState.LANDMARK)]
        self.ax.legend(handles=legend, loc='upper left', bbox_to_anchor=(1.0, 1.0), fontsize=7)
        self.fig.tight_layout()
        plt.ion()

    def set_time_counter(self, seconds_remaining: int) -> None:
        super().set_time_counter(seconds_remaining)
        self._time_left = int(seconds_remaining)

    def _title(self) -> str:
        cov = self.coverage
        parts = [self.status or "idle"]
        parts.append(f"coverage {cov:.1f}%" if cov is not None else "coverage -")
        if self._time_left is not None:
            parts.append(f"time left {self._time_left}s")
        return " | ".join(parts)

    def update(self) -> None:
        """Redraw from the shared grid; call from the GUI thread."""
        self.im.set_data(self.grid.snapshot())
        self.ax.set_title(self._title(), fontsize=9)
        self.fig.canvas.draw()
        self.fig.canvas.flush_events()

    def run_until_done(self, orchestrator, rate_hz: float = GUI_UPDATE_RATE_HZ) -> None:
        """Keep redrawing while the orchestrator's workers are alive."""
        period = 1.0 / max(rate_hz, 1e-3)
        while orchestrator.is_running:
            self.update()
            plt.pause(period)
        self.update()

    def save(self, path: str) -> None:
        self.update()
        self.fig.savefig(path)

    def close(self) -> None:
        try:
            plt.close(self.fig)
        except Exception as e:
            print(f"[GUI] error while closing figure: {e}")
