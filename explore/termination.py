# ================================
# file: explore/termination.py
# ================================
from __future__ import annotations
from typing import Optional
from enum import Enum
import threading


class TerminationReason(Enum):
    RUNNING = 0
    REACHED_COVERAGE = 1
    TIMED_OUT = 2
    ABORTED = 3          # worker failure


class TerminationState:
    """Single termination variant shared by the timer, explorer and monitor.

    Leaves RUNNING exactly once per configuration via `trip()`; the first
    caller wins, so "timed out and reached coverage" cannot both hold.
    """
    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._reason = TerminationReason.RUNNING

    @property
    def reason(self) -> TerminationReason:
        with self._cond:
            return self._reason

    def is_running(self) -> bool:
        return self.reason is TerminationReason.RUNNING

    @property
    def is_timeout(self) -> bool:
        return self.reason is TerminationReason.TIMED_OUT

    @property
    def has_reached_target_coverage(self) -> bool:
        return self.reason is TerminationReason.REACHED_COVERAGE

    def trip(self, reason: TerminationReason) -> bool:
        """RUNNING -> reason. Returns False if another reason already won."""
        if reason is TerminationReason.RUNNING:
            raise ValueError("trip() needs a terminal reason")
        with self._cond:
            if self._reason is not TerminationReason.RUNNING:
                return False
            self._reason = reason
            self._cond.notify_all()
            return True

    def clear(self, reason: TerminationReason) -> bool:
        """reason -> RUNNING, only if `reason` is the current one."""
        with self._cond:
            if self._reason is not reason:
                return False
            self._reason = TerminationReason.RUNNING
            return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until terminated or timeout. Returns True once terminated."""
        with self._cond:
            if self._reason is TerminationReason.RUNNING:
                self._cond.wait(timeout)
            return self._reason is not TerminationReason.RUNNING
