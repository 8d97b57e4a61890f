"""
Report Mails
Subject and template context of the two daily report e-mails.

Both carry the subject "Daily Sales Report - DD/MM/YYYY" and expose the
recipient name, the formatted date and the three totals to the template.
"""

from abc import ABC, abstractmethod
from typing import Any

from sales_control.core.constants import DISPLAY_DATE_FORMAT, REPORT_SUBJECT_TEMPLATE
from sales_control.domain.interfaces.infrastructure import MailMessage
from sales_control.domain.reports import DailySalesReport, DailySellerSalesReport
from sales_control.mail.renderer import TemplateRenderer


class ReportMail(ABC):
    template: str

    @property
    @abstractmethod
    def subject(self) -> str:
        ...

    @abstractmethod
    def context(self) -> dict[str, Any]:
        ...

    def build(self, renderer: TemplateRenderer, to: str, to_name: str | None = None) -> MailMessage:
        context = self.context()
        return MailMessage(
            to=to,
            to_name=to_name,
            subject=self.subject,
            html_body=renderer.render(f"{self.template}.html", context),
            text_body=renderer.render(f"{self.template}.txt", context),
        )


class DailySalesReportMail(ReportMail):
    """Admin-wide report addressed to one administrator."""

    template = "daily_sales_report"

    def __init__(self, report: DailySalesReport):
        self.report = report

    @property
    def subject(self) -> str:
        return REPORT_SUBJECT_TEMPLATE.format(
            date=self.report.report_date.strftime(DISPLAY_DATE_FORMAT)
        )

    def context(self) -> dict[str, Any]:
        return {
            "recipient_name": self.report.recipient_name,
            "total_sales": self.report.total_sales,
            "total_amount": self.report.total_amount,
            "total_commission": self.report.total_commission,
            "report_date": self.report.report_date.strftime(DISPLAY_DATE_FORMAT),
        }


class DailySellerSalesReportMail(ReportMail):
    """Report of one seller's own sales."""

    template = "daily_seller_sales_report"

    def __init__(self, report: DailySellerSalesReport):
        self.report = report

    @property
    def subject(self) -> str:
        return REPORT_SUBJECT_TEMPLATE.format(
            date=self.report.report_date.strftime(DISPLAY_DATE_FORMAT)
        )

    def context(self) -> dict[str, Any]:
        return {
            "recipient_name": self.report.seller_name,
            "total_sales": self.report.total_sales,
            "total_amount": self.report.total_amount,
            "total_commission": self.report.total_commission,
            "report_date": self.report.report_date.strftime(DISPLAY_DATE_FORMAT),
        }
