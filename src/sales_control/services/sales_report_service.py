"""
Sales Report Service
Aggregates persisted sales into the daily admin-wide and per-seller reports.
"""

import datetime as dt
from decimal import Decimal
from typing import Any

from sales_control.core.constants import MONEY_QUANTUM
from sales_control.core.logging import get_logger
from sales_control.data_access.db import SessionScope, session_scope
from sales_control.domain.dates import resolve_report_date
from sales_control.domain.interfaces.repositories import ISaleRepository
from sales_control.domain.interfaces.services import ISalesReportService
from sales_control.domain.reports import DailySalesReport, DailySellerSalesReport

logger = get_logger(__name__)


def _as_int(value: Any) -> int:
    return int(value or 0)


def _as_money(value: Any) -> Decimal:
    # Database drivers hand sums back as Decimal, float or str; None for no rows
    if value is None:
        return Decimal("0").quantize(MONEY_QUANTUM)
    return Decimal(str(value)).quantize(MONEY_QUANTUM)


class SalesReportService(ISalesReportService):
    def __init__(
        self,
        sale_repository: ISaleRepository,
        transaction: SessionScope = session_scope,
        timezone: str | None = None,
    ):
        self._sale_repository = sale_repository
        self._transaction = transaction
        self._timezone = timezone

    def generate_daily_sales_report(
        self, report_date: dt.date | str | None = None
    ) -> DailySalesReport:
        """
        Generate the admin-wide report of one day.

        Args:
            report_date: Date or YYYY-MM-DD string; today when omitted

        Returns:
            Report addressed to the placeholder recipient; all totals are
            zero when no sale exists on the date
        """
        day = resolve_report_date(report_date, self._timezone)

        with self._transaction() as session:
            totals = self._sale_repository.get_daily_sales_report(session, day)

        report = DailySalesReport(
            total_sales=_as_int(totals.get("total_sales")),
            total_amount=_as_money(totals.get("total_amount")),
            total_commission=_as_money(totals.get("total_commission")),
            report_date=day,
        )
        logger.debug(f"Generated daily sales report for {day}", extra=report.to_dict())
        return report

    def generate_daily_sales_report_by_seller(
        self, report_date: dt.date | str | None = None
    ) -> list[DailySellerSalesReport]:
        """
        Generate one report per seller that sold on the date, ordered by seller id.
        Sellers without sales that day are not part of the result.
        """
        day = resolve_report_date(report_date, self._timezone)

        with self._transaction() as session:
            rows = self._sale_repository.get_daily_sales_report_by_seller(session, day)

        reports = [
            DailySellerSalesReport(
                seller_id=_as_int(row["seller_id"]),
                seller_name=row["seller_name"],
                seller_email=row["seller_email"],
                total_sales=_as_int(row["total_sales"]),
                total_amount=_as_money(row["total_amount"]),
                total_commission=_as_money(row["total_commission"]),
                report_date=day,
            )
            for row in rows
        ]
        logger.debug(f"Generated {len(reports)} seller reports for {day}")
        return reports
