"""
Demo data set for trying the report pipeline end to end.

Four sellers, nine sales on the seed date and two on the day before, plus
one administrator. The last seller has no sales and so gets no report.
"""

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal

from sales_control.core.container import DIContainer
from sales_control.core.logging import get_logger
from sales_control.domain.entities import Sale, Seller, SellerInput, User, UserInput
from sales_control.domain.interfaces import ISalesReportService, ISellerService, IUserService
from sales_control.domain.reports import DailySellerSalesReport
from sales_control.services import SaleService

logger = get_logger(__name__)

DEMO_SELLERS: list[tuple[str, str]] = [
    ("John Doe", "john_doe@example.com"),
    ("Jane Doe", "jane_doe@example.com"),
    ("John Smith", "john_smith@example.com"),
    ("Jane Smith", "jane_smith@example.com"),
]

DEMO_ADMIN: tuple[str, str] = ("Admin", "admin@example.com")

# (seller index, amount, days before the seed date)
DEMO_SALES: list[tuple[int, str, int]] = [
    (0, "250.00", 0),
    (0, "150.00", 0),
    (0, "350.00", 0),
    (1, "500.00", 0),
    (1, "300.00", 0),
    (2, "1000.00", 0),
    (2, "750.00", 0),
    (2, "450.00", 0),
    (2, "200.00", 0),
    (0, "100.00", 1),
    (1, "200.00", 1),
]


@dataclass
class SeedSummary:
    report_date: dt.date
    sellers: list[Seller] = field(default_factory=list)
    admins: list[User] = field(default_factory=list)
    sales: list[Sale] = field(default_factory=list)
    expected_reports: list[DailySellerSalesReport] = field(default_factory=list)

    @property
    def sellers_without_sales(self) -> list[Seller]:
        reported = {report.seller_id for report in self.expected_reports}
        return [seller for seller in self.sellers if seller.id not in reported]


def seed_demo_data(container: DIContainer, report_date: dt.date) -> SeedSummary:
    """Insert the demo data set; fails on a database that already holds it."""
    seller_service = container.resolve(ISellerService)
    user_service = container.resolve(IUserService)
    # Uncached service: seeding must not warm the listing cache
    sale_service = container.resolve(SaleService)
    report_service = container.resolve(ISalesReportService)

    summary = SeedSummary(report_date=report_date)

    for name, email in DEMO_SELLERS:
        summary.sellers.append(seller_service.create_seller(SellerInput(name=name, email=email)))

    name, email = DEMO_ADMIN
    summary.admins.append(user_service.create_user(UserInput(name=name, email=email)))

    for seller_index, amount, days_before in DEMO_SALES:
        sale = sale_service.create_sale(
            summary.sellers[seller_index].id,
            Decimal(amount),
            report_date - dt.timedelta(days=days_before),
        )
        summary.sales.append(sale)

    summary.expected_reports = report_service.generate_daily_sales_report_by_seller(report_date)
    logger.info(
        f"Seeded {len(summary.sellers)} sellers and {len(summary.sales)} sales",
        extra={"date": report_date.isoformat()},
    )
    return summary
