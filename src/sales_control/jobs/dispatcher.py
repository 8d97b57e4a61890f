"""
Job Dispatcher
Runs report jobs in-process or hands them to the task queue for a worker.
"""

import datetime as dt
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sales_control.core.constants import JobName
from sales_control.core.logging import get_logger
from sales_control.domain.dates import resolve_report_date
from sales_control.domain.interfaces.infrastructure import ITaskQueue
from sales_control.jobs.base import JobResult
from sales_control.jobs.registry import JobRegistry

logger = get_logger(__name__)

# Order in which the trigger command runs the daily jobs
DAILY_REPORT_JOBS: tuple[str, ...] = (JobName.ADMIN_REPORT.value, JobName.SELLER_REPORT.value)


@dataclass(frozen=True)
class Dispatch:
    """What happened to one dispatched job."""

    job_name: str
    report_date: dt.date
    queued: bool
    task_id: str | None = None
    result: JobResult | None = None


class JobDispatcher:
    """
    Sync mode runs the job on the calling thread and returns its result.
    Queued mode publishes a task carrying the job name and the resolved date.
    """

    def __init__(
        self,
        registry: JobRegistry,
        task_queue_factory: Callable[[], ITaskQueue],
        timezone: str | None = None,
    ):
        self.registry = registry
        self._task_queue_factory = task_queue_factory
        self._task_queue: ITaskQueue | None = None
        self.timezone = timezone

    @property
    def task_queue(self) -> ITaskQueue:
        if self._task_queue is None:
            self._task_queue = self._task_queue_factory()
        return self._task_queue

    def dispatch(
        self,
        job_name: str,
        report_date: dt.date | str | None = None,
        sync: bool = False,
    ) -> Dispatch:
        job = self.registry.get(job_name)
        # Resolved now so a task picked up after midnight still reports its own day
        day = resolve_report_date(report_date, self.timezone)

        if sync:
            result = job.run(day)
            return Dispatch(job_name=job.name, report_date=day, queued=False, result=result)

        task_id = self.task_queue.publish(job.name, {"date": day.isoformat()})
        logger.info(
            f"Queued {job.name} for {day.isoformat()}",
            extra={"job": job.name, "date": day.isoformat(), "task_id": task_id},
        )
        return Dispatch(job_name=job.name, report_date=day, queued=True, task_id=task_id)

    def dispatch_daily_reports(
        self,
        report_date: dt.date | str | None = None,
        sync: bool = False,
    ) -> list[Dispatch]:
        """Admin report first, then the seller reports."""
        return [self.dispatch(name, report_date, sync=sync) for name in DAILY_REPORT_JOBS]

    def handle_task(self, task_name: str, payload: dict[str, Any]) -> JobResult:
        """Worker side of a queued dispatch. Exceptions propagate to the consumer."""
        job = self.registry.get(task_name)
        return job.run(payload.get("date"))
