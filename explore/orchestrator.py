# ================================
# file: explore/orchestrator.py
# ================================
from __future__ import annotations
"""Exploration orchestrator: configuration, map loading, robot placement and
the concurrent run (countdown timer + explorer thread + coverage monitor thread).
"""
from typing import Optional
from enum import Enum
import threading
import traceback

from core.config import (
    DEFAULT_SPEED, DEFAULT_TARGET_COVERAGE, DEFAULT_TIME_LIMIT_S, MAX_TARGET_COVERAGE,
    TIMER_TICK_S, COVERAGE_POLL_INTERVAL_S, ARENA_DESCRIPTOR_PATH, THREAD_JOIN_TIMEOUT_S,
)
from core.errors import NoLayoutError, OutOfRangeError, DescriptorIOError
from core.types import Cell, Orientation
from appio.descriptor import write_descriptor
from sim.arena import ArenaLayout
from sim.robot_pose import PoseStateMachine
from .countdown_timer import CountdownTimer
from .coverage_monitor import CoverageMonitor
from .termination import TerminationState, TerminationReason


class ExplorationState(Enum):
    IDLE = 0
    RUNNING = 1
    COMPLETED_COVERAGE = 2
    COMPLETED_TIMEOUT = 3


class ExplorationSession:
    """Everything owned by one run: timer, monitor and worker threads."""
    def __init__(self, timer: CountdownTimer, monitor: CoverageMonitor) -> None:
        self.timer = timer
        self.monitor = monitor
        self.explore_thread: Optional[threading.Thread] = None
        self.monitor_thread: Optional[threading.Thread] = None
        self.error: Optional[BaseException] = None
        # set once the run is over; reconfiguration never clears it
        self.stop_evt = threading.Event()

    def threads(self):
        return [t for t in (self.explore_thread, self.monitor_thread) if t is not None]

    def alive(self) -> bool:
        return any(t.is_alive() for t in self.threads())


class ExplorationOrchestrator:
    """Owns run configuration and reconciles the two termination sources.

    States: IDLE -> RUNNING -> {COMPLETED_COVERAGE, COMPLETED_TIMEOUT};
    a worker failure reports through the status channel and returns to IDLE.
    """
    def __init__(self, explorer, display, descriptor_path: Optional[str] = ARENA_DESCRIPTOR_PATH,
                 tick_s: float = TIMER_TICK_S, poll_interval: float = COVERAGE_POLL_INTERVAL_S,
                 recorder=None, logger_func=None, log_file=None) -> None:
        self.explorer = explorer
        self.display = display
        self.grid = display.get_maze_cell_grid()
        self.coords = self.grid.coords
        self.descriptor_path = descriptor_path
        self.tick_s = tick_s
        self.poll_interval = poll_interval
        self.recorder = recorder
        self.logger_func = logger_func
        self.log_file = log_file

        self.robot = PoseStateMachine(self.grid, explorer, self.coords, recorder=recorder,
                                      logger_func=logger_func, log_file=log_file)
        self.termination = TerminationState()
        self.speed: int = DEFAULT_SPEED
        self.target_coverage: int = DEFAULT_TARGET_COVERAGE
        self.time_limit: int = DEFAULT_TIME_LIMIT_S

        self.editor_layout = ArenaLayout(self.coords.width, self.coords.length)
        self.layout: Optional[ArenaLayout] = None
        self.state = ExplorationState.IDLE
        self.session: Optional[ExplorationSession] = None
        self.last_error: Optional[BaseException] = None
        self._state_lock = threading.Lock()
        self.reset_maze()

    def _log(self, message: str, module: str = "ORCH") -> None:
        if self.logger_func and self.log_file:
            self.logger_func(self.log_file, message, module)
        else:
            print(f"[{module}] {message}")

    # ---- derived views ----
    @property
    def is_running(self) -> bool:
        if self.state is ExplorationState.RUNNING:
            return True
        return self.session is not None and self.session.alive()

    @property
    def is_timeout(self) -> bool:
        return self.termination.is_timeout

    @property
    def has_reached_target_coverage(self) -> bool:
        return self.termination.has_reached_target_coverage

    @property
    def coverage(self) -> float:
        if self.session is not None:
            return self.session.monitor.last_coverage
        return 0.0

    def _refuse_while_running(self, what: str) -> bool:
        if self.is_running:
            self.display.set_status(f"warning: cannot {what} while exploring")
            return True
        return False

    # ---- map editing / loading ----
    def toggle_obstacle(self, cell: Cell) -> bool:
        return self.editor_layout.toggle_obstacle(*cell)

    def clear_map(self) -> None:
        self.editor_layout.clear()
        self.display.set_status("finished map clearing")

    def load_map(self, layout: Optional[ArenaLayout] = None) -> ArenaLayout:
        """Freeze `layout` (default: the edited one) for exploration and persist it."""
        if self._refuse_while_running("load a map"):
            return self.layout
        source = layout if layout is not None else self.editor_layout
        if layout is not None:
            self.editor_layout = layout.copy()
        self.layout = source.frozen()
        if hasattr(self.explorer, "set_layout"):
            self.explorer.set_layout(self.layout)
        if self.descriptor_path:
            try:
                write_descriptor(self.layout, self.descriptor_path)
                self._log(f"arena descriptor written to {self.descriptor_path}")
            except DescriptorIOError as e:
                self._log(f"descriptor write failed: {e}")
                self.display.set_status("warning: failed to write arena descriptor")
        self._log(f"layout loaded: {self.layout.get_layout_info()}")
        self.display.set_status("finished map loading")
        return self.layout

    # ---- maze / robot placement ----
    def reset_maze(self) -> None:
        """Full grid reset: arena unvisited, border blocked, landmarks marked."""
        self.robot.clear()
        self.explorer.reset()
        self.grid.reset(landmarks=(self.explorer.START, self.explorer.GOAL))

    def reset_robot(self, cell: Cell, orientation: Orientation = Orientation.NORTH) -> bool:
        if self._refuse_while_running("move the robot"):
            return False
        self.reset_maze()
        try:
            self.robot.initialize(cell, orientation)
        except OutOfRangeError as e:
            self._log(str(e))
            self.display.set_status("warning: robot position out of range")
            self.reset_maze()
            return False
        self.display.set_status("robot initial position set")
        return True

    def reset_robot_user(self, x: int, y: int) -> bool:
        """Place the robot from 1-based operator coordinates."""
        return self.reset_robot(self.coords.user_to_arena(x, y))

    # ---- configuration ----
    def configure_speed(self, speed: int) -> bool:
        if self._refuse_while_running("change speed"):
            return False
        if speed < 0:
            self.display.set_status("warning: robot speed out of range")
            return False
        self.speed = int(speed)
        self.display.set_status("robot speed set")
        return True

    def configure_target_coverage(self, coverage: int) -> bool:
        if self._refuse_while_running("change target coverage"):
            return False
        if coverage > MAX_TARGET_COVERAGE or coverage < 0:
            self.display.set_status("warning: target coverage out of range")
            return False
        self.target_coverage = int(coverage)
        if self.target_coverage == 0:
            self.termination.trip(TerminationReason.REACHED_COVERAGE)
        else:
            self.termination.clear(TerminationReason.REACHED_COVERAGE)
        self.display.set_status("target coverage set")
        return True

    def configure_time_limit(self, seconds: int) -> bool:
        if self._refuse_while_running("change time limit"):
            return False
        if seconds < 0:
            self.display.set_status("warning: time limit out of range")
            return False
        self.time_limit = int(seconds)
        if self.time_limit == 0:
            self.termination.trip(TerminationReason.TIMED_OUT)
        else:
            self.termination.clear(TerminationReason.TIMED_OUT)
        self.display.set_status("exploring time limit set")
        return True

    # ---- run ----
    def start(self) -> ExplorationSession:
        """Launch timer, explorer and coverage monitor; returns without blocking."""
        with self._state_lock:
            if self.is_running:
                raise RuntimeError("exploration already running")
        self.display.refresh_input()
        if self.layout is None:
            self.display.set_status("warning: no layout loaded yet")
            self._log("start refused: no layout loaded")
            raise NoLayoutError("no arena layout loaded")
        if not self.robot.is_initialized:
            self.reset_robot(self.explorer.START)
        self.termination.clear(TerminationReason.ABORTED)
        self.last_error = None

        timer = CountdownTimer(self.time_limit, on_tick=self.display.set_time_counter,
                               on_expire=self._on_timeout, tick_s=self.tick_s,
                               logger_func=self.logger_func, log_file=self.log_file)
        monitor = CoverageMonitor(self.grid, self.termination, self.target_coverage,
                                  display=self.display, poll_interval=self.poll_interval,
                                  recorder=self.recorder, logger_func=self.logger_func,
                                  log_file=self.log_file)
        session = ExplorationSession(timer, monitor)
        session.explore_thread = threading.Thread(target=self._run_explorer, args=(session,),
                                                  name="explorer", daemon=True)
        session.monitor_thread = threading.Thread(target=self._run_monitor, args=(session,),
                                                  name="coverage-monitor", daemon=True)
        with self._state_lock:
            self.session = session
            self.state = ExplorationState.RUNNING

        self._log(f"exploration start: pose={self.robot.pose} speed={self.speed} "
                  f"target={self.target_coverage}% limit={self.time_limit}s")
        self.display.set_status("robot exploring")
        timer.start()
        session.explore_thread.start()
        session.monitor_thread.start()
        return session

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Join the worker threads. Returns True when both have exited."""
        if self.session is None:
            return True
        for t in self.session.threads():
            t.join(timeout)
        return not self.session.alive()

    def _on_timeout(self) -> None:
        if self.termination.trip(TerminationReason.TIMED_OUT):
            self._log("time limit reached")
        self.display.alert()

    def _run_explorer(self, session: ExplorationSession) -> None:
        try:
            self.explorer.explore(self.robot.position, self.speed, self.robot,
                                  lambda: (session.stop_evt.is_set()
                                           or not self.termination.is_running()))
        except Exception as e:
            self._fail(session, e)
            return
        self.display.set_status("robot exploration completed")

    def _run_monitor(self, session: ExplorationSession) -> None:
        try:
            session.monitor.run(on_exit=lambda: self._finish(session))
        except Exception as e:
            self._fail(session, e)

    def _fail(self, session: ExplorationSession, exc: BaseException) -> None:
        session.error = exc
        session.stop_evt.set()
        self.last_error = exc
        self._log(f"worker failed: {exc!r}\n{traceback.format_exc()}")
        self.termination.trip(TerminationReason.ABORTED)
        session.timer.stop()
        with self._state_lock:
            self.state = ExplorationState.IDLE
        self.display.set_status(f"error: {exc}")

    def _finish(self, session: ExplorationSession) -> None:
        session.stop_evt.set()
        if session.timer.is_running():
            session.timer.stop()
        reason = self.termination.reason
        with self._state_lock:
            if self.state is not ExplorationState.RUNNING:
                return
            if reason is TerminationReason.REACHED_COVERAGE:
                self.state = ExplorationState.COMPLETED_COVERAGE
            elif reason is TerminationReason.TIMED_OUT:
                self.state = ExplorationState.COMPLETED_TIMEOUT
            else:
                return
        self._log(f"exploration finished: {reason.name} at {session.monitor.last_coverage:.1f}%")
        if reason is TerminationReason.REACHED_COVERAGE:
            self.display.set_status("target coverage reached")
        else:
            self.display.set_status("exploration time limit reached")

    def stop_threads(self, timeout: float = THREAD_JOIN_TIMEOUT_S) -> None:
        """Abort a live run (e.g. on Ctrl+C) and join its workers."""
        if self.session is None:
            return
        if self.termination.trip(TerminationReason.ABORTED):
            with self._state_lock:
                self.state = ExplorationState.IDLE
            self.display.set_status("exploration aborted")
        self.session.stop_evt.set()
        self.session.timer.stop()
        self.wait(timeout)
