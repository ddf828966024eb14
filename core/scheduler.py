# core/scheduler.py
from datetime import datetime
from typing import Callable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from core.logging_config import logger


def create_scheduler() -> AsyncIOScheduler:
    """
    Event-loop scheduler for every kernel timer (notification expiry,
    telemetry tick). Runs on the app's loop, so no extra threads.
    Jobs added before start() wait as pending jobs.
    """
    return AsyncIOScheduler(timezone="UTC")


def start_scheduler(scheduler: BaseScheduler):
    if not scheduler.running:
        scheduler.start()
        logger.info("⏰ Scheduler started.")


def stop_scheduler(scheduler: BaseScheduler):
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped.")


def schedule_once(scheduler: BaseScheduler, job_id: str, run_at: datetime, func: Callable, *args):
    scheduler.add_job(
        func,
        trigger=DateTrigger(run_date=run_at),
        args=list(args),
        id=job_id,
        replace_existing=True,
        # late expiries still run
        misfire_grace_time=None,
    )


def schedule_every(scheduler: BaseScheduler, job_id: str, seconds: float, func: Callable):
    scheduler.add_job(
        func,
        trigger=IntervalTrigger(seconds=seconds),
        id=job_id,
        replace_existing=True,
        coalesce=True,
    )


def cancel_job(scheduler: BaseScheduler, job_id: str) -> bool:
    """Remove a job; False when it already fired or never existed."""
    try:
        scheduler.remove_job(job_id)
        return True
    except JobLookupError:
        return False
