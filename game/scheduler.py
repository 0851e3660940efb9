"""Fixed-rate host that drives :meth:`FactorySim.advance` from a thread."""
from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from game.simulation import FactorySim

logger = logging.getLogger(__name__)


class TickScheduler:
    """
    Calls ``sim.advance()`` every ``interval`` seconds until stopped.

    The sim decides whether a call actually ticks, so toggling processing off
    stops ticks immediately even while this thread keeps running.
    """

    def __init__(self, sim: FactorySim, interval: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.sim = sim
        self.interval = interval
        self.ticks_run = 0
        self._count_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name="tick-scheduler", daemon=True)
        self._thread.start()
        logger.info(f"Tick scheduler started (interval: {self.interval:.3f}s)")

    def stop(self, timeout: float = 5.0) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join(timeout)
        self._thread = None
        logger.info(f"Tick scheduler stopped after {self.ticks_run} ticks")

    def run_for(self, calls: int) -> int:
        """Issue ``calls`` advances synchronously and return how many ticked."""
        ran = 0
        for _ in range(calls):
            if self.sim.advance():
                ran += 1
        self._count_ticks(ran)
        return ran

    def _count_ticks(self, ran: int) -> None:
        with self._count_lock:
            self.ticks_run += ran

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            started = time.perf_counter()
            if self.sim.advance():
                self._count_ticks(1)
            elapsed = time.perf_counter() - started
            # wait() returns early when stop() is called
            if self._stop_event.wait(max(0.0, self.interval - elapsed)):
                break
