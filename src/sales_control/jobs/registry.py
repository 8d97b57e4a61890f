"""Lookup of report jobs by their queue/schedule name."""

from sales_control.core.exceptions import UnknownJobException
from sales_control.jobs.base import ReportJob


class JobRegistry:
    def __init__(self, jobs: list[ReportJob] | None = None):
        self._jobs: dict[str, ReportJob] = {}
        for job in jobs or []:
            self.register(job)

    def register(self, job: ReportJob) -> "JobRegistry":
        self._jobs[job.name] = job
        return self

    def get(self, name: str) -> ReportJob:
        try:
            return self._jobs[name]
        except KeyError:
            raise UnknownJobException(name) from None

    def names(self) -> list[str]:
        return list(self._jobs)

    def __contains__(self, name: object) -> bool:
        return name in self._jobs
