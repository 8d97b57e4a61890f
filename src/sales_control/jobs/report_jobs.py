"""The two daily report jobs: admin-wide and per seller."""

import datetime as dt

from sales_control.core.constants import JobName
from sales_control.domain.interfaces.infrastructure import IMailer
from sales_control.domain.interfaces.services import ISalesReportService, IUserService
from sales_control.jobs.base import Delivery, ReportJob
from sales_control.mail.messages import DailySalesReportMail, DailySellerSalesReportMail
from sales_control.mail.renderer import TemplateRenderer


class AdminReportJob(ReportJob):
    """Sends the admin-wide report of the date to every user."""

    name = JobName.ADMIN_REPORT.value

    def __init__(
        self,
        report_service: ISalesReportService,
        user_service: IUserService,
        mailer: IMailer,
        renderer: TemplateRenderer,
        max_workers: int = 1,
        timezone: str | None = None,
    ):
        super().__init__(mailer, renderer, max_workers, timezone)
        self.report_service = report_service
        self.user_service = user_service

    def prepare(self, report_date: dt.date) -> list[Delivery]:
        report = self.report_service.generate_daily_sales_report(report_date)
        users = self.user_service.get_all_users()

        return [
            Delivery(
                recipient_id=user.id,
                recipient_email=user.email,
                recipient_name=user.name,
                mail=DailySalesReportMail(report.addressed_to(user.name)),
                total_sales=report.total_sales,
                total_amount=report.total_amount,
                total_commission=report.total_commission,
            )
            for user in users
        ]


class SellerReportJob(ReportJob):
    """Sends each seller the report of their own sales; sellers without sales get nothing."""

    name = JobName.SELLER_REPORT.value
    empty_message = "No sales found for {date}"

    def __init__(
        self,
        report_service: ISalesReportService,
        mailer: IMailer,
        renderer: TemplateRenderer,
        max_workers: int = 1,
        timezone: str | None = None,
    ):
        super().__init__(mailer, renderer, max_workers, timezone)
        self.report_service = report_service

    def prepare(self, report_date: dt.date) -> list[Delivery]:
        reports = self.report_service.generate_daily_sales_report_by_seller(report_date)

        return [
            Delivery(
                recipient_id=report.seller_id,
                recipient_email=report.seller_email,
                recipient_name=report.seller_name,
                mail=DailySellerSalesReportMail(report),
                total_sales=report.total_sales,
                total_amount=report.total_amount,
                total_commission=report.total_commission,
            )
            for report in reports
        ]
