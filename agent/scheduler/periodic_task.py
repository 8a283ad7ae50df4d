"""
Mini-HIDS — Periodic Task

Background thread that runs one callable on a fixed period until the
shared stop event is set. Used for both the sample and the report loop.
"""

import threading
from typing import Callable

from agent.logging_config import logger


class PeriodicTask:

    def __init__(
        self,
        name: str,
        interval: float,
        action: Callable[[], object],
        stop_event: threading.Event,
        run_immediately: bool = False,
    ):
        self.name = name
        self._interval = interval
        self._action = action
        self._stop_event = stop_event
        self._run_immediately = run_immediately
        self._thread: threading.Thread | None = None
        self.runs = 0

    def start(self) -> None:
        """Start the background thread."""
        self._thread = threading.Thread(
            target=self._run,
            name=f"minihids-{self.name}",
            daemon=True,
        )
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        if self._thread:
            self._thread.join(timeout=timeout)

    @property
    def alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        if self._run_immediately:
            self._tick()
        # wait() returns True as soon as the stop event is set
        while not self._stop_event.wait(timeout=self._interval):
            self._tick()
        logger.debug("%s task stopped", self.name)

    def _tick(self) -> None:
        try:
            self._action()
        except Exception:
            logger.exception("%s cycle failed", self.name)
        self.runs += 1
