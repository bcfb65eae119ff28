"""
TickScheduler - Periodic trigger for the oscillator
Epoch-based timing: tick n is due at epoch + n * interval, so jitter
in one cycle does not accumulate into drift.

The oscillator does not know about this class; anything that calls
tick(now) periodically will do.
"""

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def wall_clock_ms() -> float:
    """Current wall-clock time in milliseconds."""
    return time.time() * 1000.0


class TickScheduler(threading.Thread):
    """
    Calls target(now_ms) every interval_ms on its own daemon thread.

    Calls are made one at a time from this thread, so the target never
    sees overlapping ticks. If a tick overruns and deadlines are missed,
    the missed ticks are skipped (counted in skipped_ticks), not replayed.
    """

    def __init__(self, target: Callable[[float], object], interval_ms: float = 100.0,
                 clock: Optional[Callable[[], float]] = None, name: str = "VCO Timer"):
        """
        Args:
            target: Callable receiving the tick timestamp in milliseconds
            interval_ms: Tick period in milliseconds
            clock: Timestamp source in milliseconds (default: wall clock)
            name: Thread name
        """
        super().__init__(name=name, daemon=True)
        if interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval_ms}")

        self.target = target
        self.interval_ms = float(interval_ms)
        self.clock = clock or wall_clock_ms

        self.tick_count = 0
        self.skipped_ticks = 0
        self._stop_event = threading.Event()

    def _fire(self) -> None:
        self.target(self.clock())
        self.tick_count += 1

    def run_ticks(self, count: int) -> None:
        """Fire `count` ticks synchronously, without waiting between them."""
        for _ in range(count):
            self._fire()

    def run(self):
        """Main timer loop."""
        interval_s = self.interval_ms / 1000.0
        epoch = time.perf_counter()
        next_index = 0

        logger.debug("%s started: interval=%.1fms", self.name, self.interval_ms)

        while not self._stop_event.is_set():
            try:
                self._fire()
            except Exception:
                # target owns its error policy; keep the timer alive
                logger.exception("Tick target raised")

            next_index += 1
            now = time.perf_counter()
            due_index = int((now - epoch) / interval_s)

            if due_index > next_index:
                # Overran whole periods: drop them, fire the current one now
                missed = due_index - next_index
                self.skipped_ticks += missed
                next_index = due_index
                logger.debug("Skipped %d late tick(s)", missed)

            delay = epoch + next_index * interval_s - now
            if delay > 0:
                self._stop_event.wait(delay)

        logger.debug("%s stopped after %d ticks", self.name, self.tick_count)

    def stop(self, timeout: float = 2.0) -> None:
        """Stop the timer and wait for the thread to exit."""
        self._stop_event.set()
        if self.is_alive():
            self.join(timeout=timeout)

    @property
    def running(self) -> bool:
        return self.is_alive() and not self._stop_event.is_set()
