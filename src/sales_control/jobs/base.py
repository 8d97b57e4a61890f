"""
Report Job Base
Resolve the date, build one delivery per recipient, and send each one on its
own so a failing recipient never stops the others.
"""

import datetime as dt
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any

from sales_control.core.logging import get_logger_with_context
from sales_control.domain.dates import resolve_report_date
from sales_control.domain.interfaces.infrastructure import IMailer
from sales_control.mail.messages import ReportMail
from sales_control.mail.renderer import TemplateRenderer


@dataclass(frozen=True)
class Delivery:
    """One rendered report bound for one recipient."""

    recipient_id: int
    recipient_email: str
    recipient_name: str
    mail: ReportMail
    total_sales: int
    total_amount: Decimal
    total_commission: Decimal


@dataclass
class JobResult:
    """Outcome of one job run whose report generation succeeded."""

    job_name: str
    report_date: dt.date
    total_recipients: int = 0
    sent_count: int = 0
    failed_recipients: list[str] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return len(self.failed_recipients)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["report_date"] = self.report_date.isoformat()
        data["failed_count"] = self.failed_count
        return data


class ReportJob(ABC):
    """
    Base class of the daily report jobs.

    A run is idempotent per (job, date): it only reads sales and sends mail,
    so it can be retried by the queue as a whole.
    """

    name: str
    # Logged instead of the fan-out when there is nobody to send to; None
    # still runs the (empty) fan-out and logs the summary.
    empty_message: str | None = None

    def __init__(
        self,
        mailer: IMailer,
        renderer: TemplateRenderer,
        max_workers: int = 1,
        timezone: str | None = None,
    ):
        self.mailer = mailer
        self.renderer = renderer
        self.max_workers = max(1, max_workers)
        self.timezone = timezone
        # Every record of a run names its job
        self.logger = get_logger_with_context(__name__, job=self.name)

    @abstractmethod
    def prepare(self, report_date: dt.date) -> list[Delivery]:
        """Generate the report(s) of the date and address them."""
        pass

    def run(self, report_date: dt.date | str | None = None) -> JobResult:
        """
        Run the job for one date.

        Args:
            report_date: Date or YYYY-MM-DD string; today in the reporting
                timezone when omitted

        Returns:
            JobResult with per-recipient counts

        Raises:
            Whatever report generation raised, after logging it. Send
            failures are logged and counted, never raised.
        """
        day = resolve_report_date(report_date, self.timezone)
        self.logger.info(
            f"Starting {self.name} for {day.isoformat()}",
            extra={"date": day.isoformat()},
        )

        try:
            deliveries = self.prepare(day)
        except Exception as e:
            self.logger.error(
                f"Failed to generate reports for {self.name}: {e}",
                extra={"date": day.isoformat(), "error": str(e)},
                exc_info=True,
            )
            raise

        result = JobResult(job_name=self.name, report_date=day, total_recipients=len(deliveries))

        if not deliveries and self.empty_message:
            self.logger.info(
                self.empty_message.format(date=day.isoformat()),
                extra={"date": day.isoformat()},
            )
            return result

        for delivery, sent in zip(deliveries, self._fan_out(deliveries)):
            if sent:
                result.sent_count += 1
            else:
                result.failed_recipients.append(delivery.recipient_email)

        self.logger.info(
            f"{self.name} finished: {result.sent_count}/{result.total_recipients} sent",
            extra={
                "date": day.isoformat(),
                "total_recipients": result.total_recipients,
                "sent_count": result.sent_count,
                "failed_count": result.failed_count,
            },
        )
        return result

    def _fan_out(self, deliveries: list[Delivery]) -> list[bool]:
        if self.max_workers == 1 or len(deliveries) <= 1:
            return [self._deliver(delivery) for delivery in deliveries]

        # _deliver never raises, so one branch cannot cancel its siblings
        workers = min(self.max_workers, len(deliveries))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix=self.name) as executor:
            return list(executor.map(self._deliver, deliveries))

    def _deliver(self, delivery: Delivery) -> bool:
        try:
            message = delivery.mail.build(
                self.renderer,
                to=delivery.recipient_email,
                to_name=delivery.recipient_name,
            )
            self.mailer.send(message)
        except Exception as e:
            self.logger.error(
                f"Failed to send report to {delivery.recipient_email}: {e}",
                extra={
                    "recipient_id": delivery.recipient_id,
                    "recipient_email": delivery.recipient_email,
                    "error": str(e),
                },
            )
            return False

        self.logger.info(
            f"Report sent to {delivery.recipient_email}",
            extra={
                "recipient_id": delivery.recipient_id,
                "recipient_email": delivery.recipient_email,
                "total_sales": delivery.total_sales,
                "total_amount": delivery.total_amount,
                "total_commission": delivery.total_commission,
            },
        )
        return True
