"""
Session timer for Minesweeper.

Ticks once per period on a background thread and buffers the ticks on a
queue that the single-threaded session drains once per frame.
"""
import logging
import queue
import threading
from typing import Optional


logger = logging.getLogger(__name__)


class _Schedule:
    """One run of the repeating tick, from start() to stop()."""

    def __init__(self, period: float) -> None:
        self.period = period
        self.ticks: "queue.Queue[bool]" = queue.Queue()
        self.stop_event = threading.Event()
        self.thread = threading.Thread(
            target=self._run, name="minesweep-timer", daemon=True
        )

    def _run(self) -> None:
        while not self.stop_event.wait(self.period):
            # Once stopped, the queue is detached from the timer and any
            # late tick put here is never observed.
            self.ticks.put(True)


class SessionTimer:
    """
    Repeating wall-clock timer with non-blocking polling.

    Each start() gets its own queue, so a tick produced by an outgoing
    schedule after stop() can never reach a later poll().
    """

    def __init__(self, period: float = 1.0) -> None:
        """
        Initialize the timer.

        Args:
            period: Seconds between ticks.
        """
        if period <= 0:
            raise ValueError("Timer period must be positive")
        self.period = period
        self._schedule: Optional[_Schedule] = None

    @property
    def is_running(self) -> bool:
        return self._schedule is not None

    def start(self) -> None:
        """Start ticking. A running timer is restarted."""
        self.stop()
        schedule = _Schedule(self.period)
        schedule.thread.start()
        self._schedule = schedule
        logger.debug("Timer started with period %.3fs", self.period)

    def stop(self) -> None:
        """Cancel the schedule and discard undelivered ticks. Idempotent."""
        schedule = self._schedule
        if schedule is None:
            return
        self._schedule = None
        schedule.stop_event.set()
        logger.debug("Timer stopped")

    def poll(self) -> Optional[bool]:
        """
        Take one buffered tick without blocking.

        Returns:
            True if a tick was available, None otherwise.
        """
        schedule = self._schedule
        if schedule is None:
            return None
        try:
            return schedule.ticks.get_nowait()
        except queue.Empty:
            return None

    def drain(self) -> int:
        """Take every buffered tick and return how many there were."""
        count = 0
        while self.poll() is not None:
            count += 1
        return count
