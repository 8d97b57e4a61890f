"""Daily schedule of the report jobs with no-overlap locking."""

from .locks import JobLock, LocalJobLock, RedisJobLock
from .scheduler import ReportScheduler, ScheduledJob

__all__ = ["JobLock", "LocalJobLock", "RedisJobLock", "ReportScheduler", "ScheduledJob"]
