# ================================
# file: appio/logger.py
# ================================
from __future__ import annotations
from typing import Optional
from datetime import datetime
import os
import threading
import time
import numpy as np

from core.types import Pose


def log_to_file(log_file, message, module="MAIN"):
    """Write message to log file with timestamp and module"""
    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    log_entry = f"[{timestamp}] [{module}] {message}\n"
    if log_file is not None:
        log_file.write(log_entry)
        log_file.flush()  # Ensure immediate write
    print(log_entry.strip())  # Also print to console


def open_run_log(log_dir: str, prefix: str = "exploration_log"):
    """Open a timestamped text log for one run."""
    os.makedirs(log_dir, exist_ok=True)
    log_filename = f"{prefix}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.txt"
    return open(os.path.join(log_dir, log_filename), 'w', encoding='utf-8')


class RunLogger:
    """Simple NPZ logger for poses and coverage samples of one exploration run.
    Writers are the explorer thread (poses) and the monitor thread (coverage).
    """
    def __init__(self) -> None:
        self.t0 = time.time()
        self.poses = []
        self.coverage = []
        self._lock = threading.Lock()

    def log_pose(self, pose: Optional[Pose]) -> None:
        if pose is None:
            return
        with self._lock:
            self.poses.append((time.time()-self.t0, pose.position[0], pose.position[1],
                               pose.orientation.value))

    def log_coverage(self, percent: float) -> None:
        with self._lock:
            self.coverage.append((time.time()-self.t0, float(percent)))

    def save(self, path: str) -> None:
        with self._lock:
            poses = np.asarray(self.poses, dtype=float).reshape(-1, 4)
            coverage = np.asarray(self.coverage, dtype=float).reshape(-1, 2)
        np.savez_compressed(path, poses=poses, coverage=coverage)
