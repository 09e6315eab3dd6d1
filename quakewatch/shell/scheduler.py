"""Polling Scheduler - Imperative Shell.

Runs the refresh job on a fixed interval in a background thread using
APScheduler. A tick that fires while the previous run is still going is
skipped rather than run concurrently.
"""

import logging
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger


logger = logging.getLogger(__name__)


POLL_JOB_ID = "feed-refresh"


class PollingScheduler:
    """Background interval scheduler for the feed refresh."""

    def __init__(self, interval_seconds: int, scheduler: BackgroundScheduler | None = None) -> None:
        self.interval_seconds = interval_seconds
        self._scheduler = scheduler or BackgroundScheduler(
            job_defaults={
                "coalesce": True,
                "max_instances": 1,
                "misfire_grace_time": interval_seconds,
            },
            timezone="UTC",
        )
        self._started = False

    @property
    def running(self) -> bool:
        return self._started

    def start(self, job: Callable[[], object]) -> None:
        """Schedule `job` every interval and start the scheduler."""
        if self._started:
            return

        self._scheduler.add_job(
            job,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=POLL_JOB_ID,
            replace_existing=True,
        )
        self._scheduler.start()
        self._started = True
        logger.info("Polling scheduler started (every %ds)", self.interval_seconds)

    def stop(self) -> None:
        """Stop the scheduler without waiting for a running job."""
        if not self._started:
            return

        self._scheduler.shutdown(wait=False)
        self._started = False
        logger.info("Polling scheduler stopped")
