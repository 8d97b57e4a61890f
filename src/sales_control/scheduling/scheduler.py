"""
Report Scheduler
Cron-driven daily triggers of the report jobs in a named timezone.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from zoneinfo import ZoneInfo

from croniter import croniter

from sales_control.core.exceptions import ConfigurationException
from sales_control.core.logging import get_logger
from sales_control.jobs.dispatcher import JobDispatcher
from sales_control.scheduling.locks import JobLock

logger = get_logger(__name__)


@dataclass
class ScheduledJob:
    name: str
    cron: str
    timezone: str
    next_run: datetime | None = None
    last_run: datetime | None = None
    run_count: int = 0
    skipped_count: int = 0
    tz: ZoneInfo = field(init=False, repr=False)

    def __post_init__(self):
        if not croniter.is_valid(self.cron):
            raise ConfigurationException(
                f"Invalid cron expression '{self.cron}' for {self.name}",
                details={"job": self.name, "cron": self.cron},
            )
        self.tz = ZoneInfo(self.timezone)

    def compute_next_run(self, after: datetime) -> datetime:
        """Next due time strictly after `after`, evaluated in the job's timezone."""
        return croniter(self.cron, after.astimezone(self.tz)).get_next(datetime)

    def is_due(self, now: datetime) -> bool:
        return self.next_run is not None and self.next_run <= now


class ReportScheduler:
    """
    Runs each registered job when its cron time comes, one run at a time.

    Every due run takes the job's lock first; a run whose lock is held
    elsewhere is skipped rather than queued behind it.
    """

    def __init__(
        self,
        dispatcher: JobDispatcher,
        lock: JobLock,
        lock_ttl_seconds: int = 3600,
        poll_seconds: float = 30.0,
        run_sync: bool = True,
        clock: Callable[[], datetime] | None = None,
    ):
        self.dispatcher = dispatcher
        self.lock = lock
        self.lock_ttl_seconds = lock_ttl_seconds
        self.poll_seconds = poll_seconds
        self.run_sync = run_sync
        self._clock = clock or (lambda: datetime.now(ZoneInfo("UTC")))
        self.jobs: dict[str, ScheduledJob] = {}
        self._stop_event = threading.Event()

    def add_job(self, name: str, cron: str, timezone: str) -> ScheduledJob:
        job = ScheduledJob(name=name, cron=cron, timezone=timezone)
        job.next_run = job.compute_next_run(self._clock())
        self.jobs[name] = job
        logger.info(f"Scheduled {name} ({cron} {timezone}), next run: {job.next_run.isoformat()}")
        return job

    def run_pending(self, now: datetime | None = None) -> list[str]:
        """Run every due job once; returns the names that actually ran."""
        now = now or self._clock()
        ran = []
        for job in self.jobs.values():
            if not job.is_due(now):
                continue
            if self.run_job(job):
                ran.append(job.name)
            job.next_run = job.compute_next_run(now)
        return ran

    def run_job(self, job: ScheduledJob) -> bool:
        token = self.lock.acquire(job.name, self.lock_ttl_seconds)
        if token is None:
            job.skipped_count += 1
            logger.warning(f"Skipping {job.name}: previous run still holds the lock", extra={"job": job.name})
            return False

        try:
            logger.info(f"Running scheduled job: {job.name}", extra={"job": job.name})
            self.dispatcher.dispatch(job.name, sync=self.run_sync)
            job.run_count += 1
        except Exception as e:
            # The job already logged the failure with its trace; keep the schedule alive
            logger.error(f"Scheduled job failed: {job.name} - {e}", extra={"job": job.name, "error": str(e)})
        finally:
            job.last_run = self._clock()
            self.lock.release(job.name, token)
        return True

    def run_forever(self) -> None:
        logger.info(f"Scheduler started with {len(self.jobs)} job(s)")
        self._stop_event.clear()
        while not self._stop_event.is_set():
            self.run_pending()
            self._stop_event.wait(self.poll_seconds)
        logger.info("Scheduler stopped")

    def stop(self) -> None:
        self._stop_event.set()

    def get_status(self) -> list[dict]:
        return [
            {
                "name": job.name,
                "cron": job.cron,
                "timezone": job.timezone,
                "next_run": job.next_run.isoformat() if job.next_run else None,
                "last_run": job.last_run.isoformat() if job.last_run else None,
                "run_count": job.run_count,
                "skipped_count": job.skipped_count,
            }
            for job in self.jobs.values()
        ]
