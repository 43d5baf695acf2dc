# ================================
# file: main.py
# ================================
from __future__ import annotations
"""Project entrypoint: loads an arena, places the robot and runs one
exploration with the sweeping reference explorer.

Usage (headless):
    python main.py --map ./map-descriptors/arena.txt --start 8 10 --coverage 80 --time-limit 60
Usage (GUI):
    python main.py --gui --speed 5
"""
import argparse
import os
import traceback
from datetime import datetime
from typing import Optional, Sequence

from core.config import (
    DEFAULT_SPEED, DEFAULT_TARGET_COVERAGE, DEFAULT_TIME_LIMIT_S,
    ARENA_DESCRIPTOR_PATH, LOG_DIR, THREAD_JOIN_TIMEOUT_S,
)
from core.errors import ExplorationError
from appio import log_to_file, open_run_log, RunLogger, read_descriptor
from explore import ExplorationOrchestrator, SweepExplorer
from gui import HeadlessDisplay


def run(map_path: Optional[str] = None, start: Optional[Sequence[int]] = None,
        speed: int = DEFAULT_SPEED, coverage: int = DEFAULT_TARGET_COVERAGE,
        time_limit: int = DEFAULT_TIME_LIMIT_S, use_gui: bool = False,
        save_log: Optional[str] = None, descriptor_out: str = ARENA_DESCRIPTOR_PATH,
        log_dir: str = LOG_DIR) -> int:
    """Wire modules and run one exploration. Returns a process exit code.
    Parameters
    ----------
    map_path   : Arena descriptor to explore. If None, an empty arena is used.
    start      : 1-based (x, y) start cell. If None, the START landmark.
    use_gui    : Show the matplotlib grid view while exploring.
    save_log   : Optional .npz path for the pose / coverage timeline.
    """
    log_file = open_run_log(log_dir)
    display = None
    orchestrator = None
    try:
        log_to_file(log_file, "=" * 60)
        log_to_file(log_file, "arena exploration run")
        log_to_file(log_file, f"started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        log_to_file(log_file, f"map: {map_path if map_path else 'empty arena'}")
        log_to_file(log_file, f"view: {'matplotlib' if use_gui else 'headless'}")
        log_to_file(log_file, "=" * 60)

        if use_gui:
            from gui.visualizer import Visualizer, select_backend
            select_backend(interactive=True)
            display = Visualizer(logger_func=log_to_file, log_file=log_file)
        else:
            display = HeadlessDisplay(logger_func=log_to_file, log_file=log_file)

        recorder = RunLogger() if save_log else None
        explorer = SweepExplorer(logger_func=log_to_file, log_file=log_file)
        orchestrator = ExplorationOrchestrator(explorer, display, descriptor_path=descriptor_out,
                                               recorder=recorder, logger_func=log_to_file,
                                               log_file=log_file)

        layout = read_descriptor(map_path) if map_path else None
        orchestrator.load_map(layout)
        if start is not None:
            if not orchestrator.reset_robot_user(start[0], start[1]):
                log_to_file(log_file, f"start {tuple(start)} rejected, using START landmark")
        orchestrator.configure_speed(speed)
        orchestrator.configure_target_coverage(coverage)
        orchestrator.configure_time_limit(time_limit)

        orchestrator.start()
        if use_gui:
            display.run_until_done(orchestrator)
        orchestrator.wait()

        log_to_file(log_file, f"final state: {orchestrator.state.name}, "
                              f"coverage {orchestrator.coverage:.1f}%")
        if recorder is not None:
            recorder.save(save_log)
            log_to_file(log_file, f"run timeline saved to {save_log}")
        return 0 if orchestrator.last_error is None else 1

    except KeyboardInterrupt:
        log_to_file(log_file, "user interrupted (Ctrl+C)")
        return 130
    except ExplorationError as e:
        log_to_file(log_file, f"exploration error: {e}", "ERROR")
        return 2
    except Exception as e:
        log_to_file(log_file, f"fatal error: {e}", "ERROR")
        traceback.print_exc()
        return 1
    finally:
        if orchestrator is not None:
            orchestrator.stop_threads(THREAD_JOIN_TIMEOUT_S)
        if use_gui and display is not None:
            display.close()
        log_to_file(log_file, "cleanup completed")
        log_file.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Grid arena exploration simulator")
    parser.add_argument("--map", type=str, default=None, help="Arena descriptor file (0/1 rows)")
    parser.add_argument("--start", nargs=2, type=int, default=None, metavar=("X", "Y"),
                        help="1-based robot start cell")
    parser.add_argument("--speed", type=int, default=DEFAULT_SPEED, help="Steps per second (0 = unthrottled)")
    parser.add_argument("--coverage", type=int, default=DEFAULT_TARGET_COVERAGE, help="Target coverage percent")
    parser.add_argument("--time-limit", type=int, default=DEFAULT_TIME_LIMIT_S, help="Time limit in seconds")
    parser.add_argument("--gui", action="store_true", help="Show the matplotlib grid view")
    parser.add_argument("--save-log", type=str, default=None, help="Save pose/coverage timeline (.npz)")
    parser.add_argument("--descriptor-out", type=str, default=ARENA_DESCRIPTOR_PATH,
                        help="Where load_map writes the arena descriptor")
    parser.add_argument("--log-dir", type=str, default=os.environ.get("ARENA_LOG_DIR", LOG_DIR))
    args = parser.parse_args(argv)

    return run(map_path=args.map, start=args.start, speed=args.speed, coverage=args.coverage,
               time_limit=args.time_limit, use_gui=args.gui, save_log=args.save_log,
               descriptor_out=args.descriptor_out, log_dir=args.log_dir)


if __name__ == "__main__":
    raise SystemExit(main())
