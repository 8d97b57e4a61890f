"""Daily report value objects built by the report service."""

import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict

from sales_control.core.constants import DEFAULT_REPORT_RECIPIENT


class DailySalesReport(BaseModel):
    """
    Admin-wide totals of one day.

    The report is immutable; addressing it to a recipient returns a copy, so
    one generated report can be rendered for any number of administrators
    (sequentially or concurrently) without sharing mutable state.
    """

    model_config = ConfigDict(frozen=True)

    recipient_name: str = DEFAULT_REPORT_RECIPIENT
    total_sales: int
    total_amount: Decimal
    total_commission: Decimal
    report_date: dt.date

    def addressed_to(self, recipient_name: str) -> "DailySalesReport":
        return self.model_copy(update={"recipient_name": recipient_name})

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class DailySellerSalesReport(BaseModel):
    """Totals of one seller on one day. Only built for sellers with sales."""

    model_config = ConfigDict(frozen=True)

    seller_id: int
    seller_name: str
    seller_email: str
    total_sales: int
    total_amount: Decimal
    total_commission: Decimal
    report_date: dt.date

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
