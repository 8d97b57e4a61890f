"""Daily report jobs and their dispatch."""

from .base import Delivery, JobResult, ReportJob
from .dispatcher import DAILY_REPORT_JOBS, Dispatch, JobDispatcher
from .registry import JobRegistry
from .report_jobs import AdminReportJob, SellerReportJob

__all__ = [
    "Delivery",
    "JobResult",
    "ReportJob",
    "DAILY_REPORT_JOBS",
    "Dispatch",
    "JobDispatcher",
    "JobRegistry",
    "AdminReportJob",
    "SellerReportJob",
]
