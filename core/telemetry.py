# core/telemetry.py

"""
Simulated telemetry pulse for the dashboard.

Every interval the tick may flag a short-lived "telemetry" highlight. The
job only exists while a session is authenticated and the facility is not
locked down, and it never touches audit or entity state.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from apscheduler.schedulers.base import BaseScheduler

from core.scheduler import cancel_job, schedule_every, schedule_once

TICK_JOB_ID = "telemetry-tick"
RESET_JOB_ID = "telemetry-highlight-reset"
HIGHLIGHT = "telemetry"


class TelemetryMonitor:

    def __init__(
        self,
        scheduler: Optional[BaseScheduler] = None,
        interval_seconds: float = 12,
        probability: float = 0.15,
        highlight_seconds: float = 1.5,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._scheduler = scheduler
        self.interval_seconds = interval_seconds
        self.probability = probability
        self.highlight_seconds = highlight_seconds
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._active = False
        self.highlight: Optional[str] = None

    @property
    def active(self) -> bool:
        return self._active

    def sync(self, should_run: bool):
        """Start or suspend the tick to match the console state."""
        if should_run == self._active:
            return
        self._active = should_run
        if self._scheduler is None:
            if not should_run:
                self.highlight = None
            return

        if should_run:
            schedule_every(self._scheduler, TICK_JOB_ID, self.interval_seconds, self.tick)
        else:
            cancel_job(self._scheduler, TICK_JOB_ID)
            cancel_job(self._scheduler, RESET_JOB_ID)
            self.highlight = None

    def tick(self) -> bool:
        if not self._active:
            return False
        if self._rng.random() >= self.probability:
            return False

        self.highlight = HIGHLIGHT
        if self._scheduler is not None:
            schedule_once(
                self._scheduler,
                RESET_JOB_ID,
                self._clock() + timedelta(seconds=self.highlight_seconds),
                self._reset,
            )
        return True

    def _reset(self):
        self.highlight = None
