"""Report e-mails: templates, message builders and transports."""

from .mailers import LogMailer, SmtpMailer
from .messages import DailySalesReportMail, DailySellerSalesReportMail, ReportMail
from .renderer import TemplateRenderer

__all__ = [
    "LogMailer",
    "SmtpMailer",
    "DailySalesReportMail",
    "DailySellerSalesReportMail",
    "ReportMail",
    "TemplateRenderer",
]
