"""
Unit Tests for Daily Sales Reports
Tests the admin-wide totals, the per-seller breakdown and value coercion.
"""
import datetime as dt
from decimal import Decimal
from unittest.mock import MagicMock, Mock, patch

import pytest

from sales_control.core.exceptions import InvalidReportDateException
from sales_control.domain.reports import DailySalesReport
from sales_control.services import SalesReportService

from .conftest import REPORT_DATE


@pytest.fixture
def seeded(sale_service, make_seller):
    """Seller A with three sales, seller B with one, seller C with none on the date."""
    seller_a = make_seller(name="Seller A")
    seller_b = make_seller(name="Seller B")
    seller_c = make_seller(name="Seller C")
    for amount in ("250.00", "150.00", "350.00"):
        sale_service.create_sale(seller_a.id, Decimal(amount), REPORT_DATE)
    sale_service.create_sale(seller_b.id, Decimal("500.00"), REPORT_DATE)
    sale_service.create_sale(seller_c.id, Decimal("999.00"), REPORT_DATE - dt.timedelta(days=1))
    return seller_a, seller_b, seller_c


class TestDailySalesReport:
    """Test the admin-wide report."""

    def test_totals_of_the_date(self, report_service, seeded):
        report = report_service.generate_daily_sales_report(REPORT_DATE)

        assert report.recipient_name == "Admin"
        assert report.total_sales == 4
        assert report.total_amount == Decimal("1250.00")
        assert report.total_commission == Decimal("106.25")
        assert report.report_date == REPORT_DATE

    def test_no_sales_gives_zero_totals(self, report_service):
        report = report_service.generate_daily_sales_report(REPORT_DATE)

        assert report.total_sales == 0
        assert report.total_amount == Decimal("0.00")
        assert report.total_commission == Decimal("0.00")

    def test_idempotent_without_writes(self, report_service, seeded):
        first = report_service.generate_daily_sales_report(REPORT_DATE)
        second = report_service.generate_daily_sales_report(REPORT_DATE)

        assert first == second

    def test_accepts_date_string(self, report_service, seeded):
        report = report_service.generate_daily_sales_report("2025-10-25")

        assert report.total_sales == 1
        assert report.total_amount == Decimal("999.00")

    def test_invalid_date_string(self, report_service):
        with pytest.raises(InvalidReportDateException):
            report_service.generate_daily_sales_report("26/10/2025")

    def test_defaults_to_today_in_report_timezone(self, report_service):
        with patch("sales_control.services.sales_report_service.resolve_report_date") as resolve:
            resolve.return_value = REPORT_DATE
            report = report_service.generate_daily_sales_report()

        resolve.assert_called_once_with(None, "America/Sao_Paulo")
        assert report.report_date == REPORT_DATE

    def test_commission_total_is_sum_of_stored_commissions(self, report_service, sale_service, make_seller):
        """Test that the total is not recomputed from the amount total."""
        seller = make_seller()
        # 0.05 and 0.05 at 8.5% round to 0.00 each; 0.10 at 8.5% would be 0.01
        sale_service.create_sale(seller.id, Decimal("0.05"), REPORT_DATE)
        sale_service.create_sale(seller.id, Decimal("0.05"), REPORT_DATE)

        report = report_service.generate_daily_sales_report(REPORT_DATE)

        assert report.total_amount == Decimal("0.10")
        assert report.total_commission == Decimal("0.00")


class TestDailySellerSalesReport:
    """Test the per-seller breakdown."""

    def test_seller_with_three_sales(self, report_service, seeded):
        seller_a = seeded[0]

        reports = report_service.generate_daily_sales_report_by_seller("2025-10-26")

        report_a = next(r for r in reports if r.seller_id == seller_a.id)
        assert report_a.seller_name == "Seller A"
        assert report_a.seller_email == seller_a.email
        assert report_a.total_sales == 3
        assert report_a.total_amount == Decimal("750.00")
        assert report_a.total_commission == Decimal("63.75")
        assert report_a.report_date == REPORT_DATE

    def test_sellers_without_sales_are_omitted(self, report_service, seeded):
        seller_a, seller_b, seller_c = seeded

        reports = report_service.generate_daily_sales_report_by_seller(REPORT_DATE)

        assert [r.seller_id for r in reports] == [seller_a.id, seller_b.id]
        assert seller_c.id not in {r.seller_id for r in reports}

    def test_no_sales_gives_empty_list(self, report_service, make_seller):
        make_seller()

        assert report_service.generate_daily_sales_report_by_seller(REPORT_DATE) == []


class TestAggregateCoercion:
    """Test coercion of untyped aggregate values."""

    def test_string_and_float_aggregates(self):
        repository = Mock()
        repository.get_daily_sales_report.return_value = {
            "total_sales": "3",
            "total_amount": 750.0,
            "total_commission": "63.75",
        }
        repository.get_daily_sales_report_by_seller.return_value = [
            {
                "seller_id": "7",
                "seller_name": "Seller A",
                "seller_email": "a@example.com",
                "total_sales": "3",
                "total_amount": "750",
                "total_commission": 63.75,
            }
        ]
        transaction = MagicMock()
        service = SalesReportService(repository, transaction=transaction)

        report = service.generate_daily_sales_report(REPORT_DATE)
        (seller_report,) = service.generate_daily_sales_report_by_seller(REPORT_DATE)

        assert report.total_sales == 3
        assert report.total_amount == Decimal("750.00")
        assert report.total_commission == Decimal("63.75")
        assert seller_report.seller_id == 7
        assert seller_report.total_amount == Decimal("750.00")
        assert seller_report.total_commission == Decimal("63.75")
        # One transaction per report
        assert transaction.call_count == 2

    def test_null_aggregates(self):
        repository = Mock()
        repository.get_daily_sales_report.return_value = {
            "total_sales": 0,
            "total_amount": None,
            "total_commission": None,
        }
        service = SalesReportService(repository, transaction=MagicMock())

        report = service.generate_daily_sales_report(REPORT_DATE)

        assert report.total_amount == Decimal("0.00")
        assert report.total_commission == Decimal("0.00")


class TestDailySalesReportValue:
    """Test the immutable report value."""

    def test_addressed_to_returns_copy(self):
        report = DailySalesReport(
            total_sales=1,
            total_amount=Decimal("10.00"),
            total_commission=Decimal("0.85"),
            report_date=REPORT_DATE,
        )

        addressed = report.addressed_to("Maria")

        assert addressed.recipient_name == "Maria"
        assert report.recipient_name == "Admin"
        assert addressed.total_amount == report.total_amount

    def test_report_is_frozen(self):
        report = DailySalesReport(
            total_sales=1,
            total_amount=Decimal("10.00"),
            total_commission=Decimal("0.85"),
            report_date=REPORT_DATE,
        )

        with pytest.raises(ValueError):
            report.recipient_name = "Maria"

    def test_to_dict(self):
        report = DailySalesReport(
            total_sales=1,
            total_amount=Decimal("10.00"),
            total_commission=Decimal("0.85"),
            report_date=REPORT_DATE,
        )

        assert report.to_dict() == {
            "recipient_name": "Admin",
            "total_sales": 1,
            "total_amount": "10.00",
            "total_commission": "0.85",
            "report_date": "2025-10-26",
        }
