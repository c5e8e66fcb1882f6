import logging
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from config import APP_TIMEZONE, RENT_GENERATION_DAY, RENT_GENERATION_HOUR
from tasks.rent_generation import run_rent_generation

logger = logging.getLogger(__name__)

RENT_GENERATION_JOB_ID = 'monthly_rent_generation_job'


def register_jobs(scheduler, job: Callable = run_rent_generation):
    # Once a month at a fixed hour; one instance at a time, missed runs coalesced
    scheduler.add_job(
        job,
        CronTrigger(day=RENT_GENERATION_DAY, hour=RENT_GENERATION_HOUR, minute=0, timezone=APP_TIMEZONE),
        id=RENT_GENERATION_JOB_ID,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=60 * 60 * 6,
        replace_existing=True,
    )
    return scheduler


def build_scheduler(job: Callable = run_rent_generation) -> BackgroundScheduler:
    return register_jobs(BackgroundScheduler(timezone=APP_TIMEZONE), job)


scheduler = build_scheduler()


def start_scheduler():
    if scheduler.running:
        logger.warning("Scheduler already running, skipping duplicate start.")
        return
    scheduler.start()
    for job in scheduler.get_jobs():
        logger.info(f"Registered job {job.id}, next run at {job.next_run_time}")


def shutdown_scheduler():
    if scheduler.running:
        scheduler.shutdown(wait=False)
