# ================================
# file: tests/test_orchestrator.py
# ================================
import os
import time

import pytest

from appio.logger import RunLogger
from core.errors import NoLayoutError
from core.types import CellState
from explore.orchestrator import ExplorationState
from sim.arena import ArenaLayout


# ---- configuration ----
def test_zero_target_coverage_counts_as_reached(make_orchestrator, display):
    orch = make_orchestrator()
    assert orch.configure_target_coverage(0)
    assert orch.has_reached_target_coverage
    assert orch.configure_target_coverage(50)
    assert not orch.has_reached_target_coverage
    assert display.status == "target coverage set"


@pytest.mark.parametrize("value", [101, -1])
def test_target_coverage_out_of_range(make_orchestrator, display, value):
    orch = make_orchestrator()
    orch.configure_target_coverage(40)
    assert not orch.configure_target_coverage(value)
    assert orch.target_coverage == 40
    assert display.status == "warning: target coverage out of range"


def test_zero_time_limit_counts_as_timed_out(make_orchestrator, display):
    orch = make_orchestrator()
    assert orch.configure_time_limit(0)
    assert orch.is_timeout
    orch.configure_time_limit(30)
    assert not orch.is_timeout
    assert display.status == "exploring time limit set"


def test_negative_speed_rejected(make_orchestrator, display):
    orch = make_orchestrator()
    assert not orch.configure_speed(-1)
    assert display.status == "warning: robot speed out of range"
    assert orch.configure_speed(0)
    assert orch.speed == 0


# ---- map loading and robot placement ----
def test_start_without_layout(make_orchestrator, display):
    orch = make_orchestrator()
    with pytest.raises(NoLayoutError):
        orch.start()
    assert display.status == "warning: no layout loaded yet"
    assert orch.state is ExplorationState.IDLE


def test_reset_robot_out_of_range(make_orchestrator, display):
    orch = make_orchestrator()
    assert not orch.reset_robot((0, 5))
    assert display.status == "warning: robot position out of range"
    assert not orch.robot.is_initialized
    assert orch.grid.count() == 0


def test_reset_robot_from_user_coordinates(make_orchestrator, display):
    orch = make_orchestrator()
    assert orch.reset_robot_user(8, 10)
    assert orch.robot.position == (7, 9)
    assert display.status == "robot initial position set"
    # placing again wipes the previous footprint
    assert orch.reset_robot_user(3, 3)
    assert orch.grid.count() == 9
    assert orch.grid.get(7, 9) is CellState.UNVISITED


def test_edit_clear_and_load_map(make_orchestrator, display, tmp_path):
    orch = make_orchestrator()
    orch.toggle_obstacle((4, 4))
    orch.toggle_obstacle((5, 4))
    orch.toggle_obstacle((5, 4))
    layout = orch.load_map()
    assert layout.read_only
    assert layout.obstacles() == [(4, 4)]
    assert orch.explorer.layout is layout
    assert display.status == "finished map loading"

    path = tmp_path / "map-descriptors" / "arena.txt"
    lines = path.read_text().splitlines()
    assert len(lines) == 20
    assert lines[20 - 1 - 4][4] == "1"

    orch.clear_map()
    assert display.status == "finished map clearing"
    assert orch.editor_layout.obstacle_count() == 0
    # the loaded copy is unaffected by later edits
    assert layout.obstacle_count() == 1


def test_load_map_survives_descriptor_write_failure(make_orchestrator, display, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    orch = make_orchestrator(descriptor_path=str(blocker / "arena.txt"))
    layout = orch.load_map(ArenaLayout())
    assert orch.layout is layout
    assert "warning: failed to write arena descriptor" in display.statuses
    assert display.status == "finished map loading"


# ---- runs ----
def test_run_reaches_target_coverage(make_orchestrator, display):
    orch = make_orchestrator()
    orch.load_map()
    orch.reset_robot_user(8, 10)
    orch.configure_speed(0)
    orch.configure_target_coverage(50)
    orch.configure_time_limit(60)
    orch.start()
    assert orch.wait(10.0)

    assert orch.state is ExplorationState.COMPLETED_COVERAGE
    assert orch.has_reached_target_coverage and not orch.is_timeout
    assert orch.coverage >= 50.0
    assert "target coverage reached" in display.statuses
    assert display.input_refreshes == 1
    assert display.alerts == 0
    covs = display.coverages
    assert all(b >= a for a, b in zip(covs, covs[1:]))
    assert not orch.session.timer.is_running()


def test_run_times_out(make_orchestrator, display, idle_explorer):
    orch = make_orchestrator(idle_explorer, tick_s=0.02)
    orch.load_map()
    orch.configure_target_coverage(100)
    orch.configure_time_limit(2)
    orch.start()
    assert orch.wait(5.0)
    orch.session.timer.join(1.0)

    assert idle_explorer.started.is_set()
    assert orch.robot.position == idle_explorer.START
    assert orch.state is ExplorationState.COMPLETED_TIMEOUT
    assert orch.is_timeout and not orch.has_reached_target_coverage
    assert display.time_counters == [1, 0]
    assert display.alerts == 1
    assert "exploration time limit reached" in display.statuses


def test_explorer_failure_returns_to_idle(make_orchestrator, display, failing_explorer):
    orch = make_orchestrator(failing_explorer)
    orch.load_map()
    orch.configure_time_limit(60)
    orch.configure_target_coverage(100)
    orch.start()
    assert orch.wait(5.0)

    assert orch.state is ExplorationState.IDLE
    assert isinstance(orch.last_error, RuntimeError)
    assert "error: sensor failure" in display.statuses
    assert not orch.session.timer.is_running()


def test_start_while_running_and_abort(make_orchestrator, display, idle_explorer):
    orch = make_orchestrator(idle_explorer)
    orch.load_map()
    orch.configure_time_limit(60)
    orch.configure_target_coverage(100)
    orch.start()
    assert orch.is_running
    with pytest.raises(RuntimeError):
        orch.start()
    assert not orch.configure_speed(3)
    assert display.status == "warning: cannot change speed while exploring"

    orch.stop_threads(2.0)
    assert not orch.is_running
    assert orch.state is ExplorationState.IDLE
    assert "exploration aborted" in display.statuses


def test_sweep_never_drives_into_obstacles(make_orchestrator, display, tmp_path):
    layout = ArenaLayout()
    for cell in [(7, 10), (7, 11), (10, 4), (3, 15), (12, 8)]:
        layout.set_obstacle(*cell)
    recorder = RunLogger()
    orch = make_orchestrator(recorder=recorder)
    orch.load_map(layout)
    orch.reset_robot_user(8, 5)
    orch.configure_speed(0)
    orch.configure_target_coverage(100)
    orch.configure_time_limit(40)
    orch.start()
    assert orch.wait(10.0)

    assert orch.last_error is None
    assert len(recorder.poses) > 10
    for _, col, row, _ in recorder.poses:
        for c in (col - 1, col, col + 1):
            for r in (row - 1, row, row + 1):
                assert not layout.is_obstacle(c, r), (col, row)
    rendered = orch.grid.cells_in(CellState.OBSTACLE)
    assert rendered
    assert all(layout.is_obstacle(*cell) for cell in rendered)

    recorder.save(str(tmp_path / "run.npz"))
    assert os.path.exists(tmp_path / "run.npz")


def test_zero_time_limit_run_ends_without_ticks(make_orchestrator, display):
    orch = make_orchestrator()
    orch.load_map()
    orch.configure_target_coverage(100)
    orch.configure_time_limit(0)
    orch.start()
    assert orch.wait(5.0)
    orch.session.timer.join(1.0)

    assert orch.state is ExplorationState.COMPLETED_TIMEOUT
    assert display.alerts == 0
    assert display.time_counters == []
    assert "exploration time limit reached" in display.statuses


def test_zero_target_coverage_run_ends_at_once(make_orchestrator, display):
    orch = make_orchestrator()
    orch.load_map()
    orch.configure_time_limit(60)
    orch.configure_target_coverage(0)
    orch.start()
    assert orch.wait(5.0)

    assert orch.state is ExplorationState.COMPLETED_COVERAGE
    assert display.alerts == 0
    assert display.coverages
    assert "target coverage reached" in display.statuses


def test_finished_run_cannot_be_revived_by_reconfiguring(make_orchestrator, display,
                                                         lingering_explorer):
    orch = make_orchestrator(lingering_explorer)
    orch.load_map()
    orch.configure_time_limit(60)
    orch.configure_target_coverage(0)
    orch.start()
    orch.session.monitor_thread.join(5.0)
    assert lingering_explorer.stopped.wait(5.0)
    assert orch.state is ExplorationState.COMPLETED_COVERAGE

    # explorer thread still alive: configuration and restart are refused
    assert orch.is_running
    assert not orch.configure_target_coverage(90)
    assert display.status == "warning: cannot change target coverage while exploring"
    assert orch.has_reached_target_coverage
    with pytest.raises(RuntimeError):
        orch.start()

    lingering_explorer.release.set()
    assert orch.wait(5.0)
    assert orch.configure_target_coverage(90)
    assert not orch.has_reached_target_coverage
    # the finished session's stop signal stays set
    assert lingering_explorer.should_stop()


def test_explorer_stops_moving_once_coverage_is_reached(make_orchestrator):
    orch = make_orchestrator()
    orch.load_map()
    orch.reset_robot_user(8, 10)
    orch.configure_speed(5)
    orch.configure_target_coverage(10)
    orch.configure_time_limit(60)
    orch.start()
    orch.session.monitor_thread.join(10.0)
    assert orch.state is ExplorationState.COMPLETED_COVERAGE

    orch.configure_target_coverage(90)
    orch.session.explore_thread.join(2.0)
    assert not orch.session.explore_thread.is_alive()
    pose = orch.robot.pose
    time.sleep(0.5)
    assert orch.robot.pose == pose
