# ================================
# file: explore/countdown_timer.py
# ================================
from __future__ import annotations
from typing import Callable, Optional
import threading

from core.config import TIMER_TICK_S


class CountdownTimer:
    """One tick per `tick_s` countdown on a daemon thread.

    Each tick decrements the counter and reports the remaining value through
    `on_tick`. At zero the timer stops itself and calls `on_expire`.
    A limit of zero has nothing to count and the thread exits at once.
    """
    def __init__(self, time_limit: int, on_tick: Optional[Callable[[int], None]] = None,
                 on_expire: Optional[Callable[[], None]] = None, tick_s: float = TIMER_TICK_S,
                 logger_func=None, log_file=None) -> None:
        self.time_limit = int(time_limit)
        self.tick_s = float(tick_s)
        self.on_tick = on_tick
        self.on_expire = on_expire
        self.logger_func = logger_func
        self.log_file = log_file
        self._remaining = self.time_limit
        self._stop_evt = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.expired = False

    def _log(self, message: str, module: str = "TIMER") -> None:
        if self.logger_func and self.log_file:
            self.logger_func(self.log_file, message, module)
        else:
            print(f"[{module}] {message}")

    @property
    def remaining(self) -> int:
        return self._remaining

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("timer already started")
        self._thread = threading.Thread(target=self._run, name="countdown-timer", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_evt.set()

    def is_running(self) -> bool:
        return (self._thread is not None and self._thread.is_alive()
                and not self._stop_evt.is_set())

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        while self._remaining > 0:
            if self._stop_evt.wait(self.tick_s):
                return
            self._remaining -= 1
            if self.on_tick:
                self.on_tick(self._remaining)
            if self._remaining == 0:
                self._stop_evt.set()
                self.expired = True
                self._log(f"time limit of {self.time_limit}s reached")
                if self.on_expire:
                    self.on_expire()
