"""
Service Interfaces
Domain layer contracts for sales, report and directory operations.
"""

import datetime as dt
from abc import ABC, abstractmethod
from decimal import Decimal

from sales_control.domain.entities import Page, Sale, Seller, SellerInput, User, UserInput
from sales_control.domain.reports import DailySalesReport, DailySellerSalesReport

Amount = Decimal | float | int | str


class ICommissionCalculator(ABC):
    """Computes the commission of a sale amount at a configured rate."""

    @abstractmethod
    def calculate(self, amount: Amount) -> Decimal:
        pass


class ISaleService(ABC):
    """
    Read/write contract for sales.

    Implemented directly by SaleService and transparently by the caching
    decorator wrapping it.
    """

    @abstractmethod
    def create_sale(self, seller_id: int, amount: Amount, sale_date: dt.date | str) -> Sale:
        """Compute the commission and persist the sale atomically."""
        pass

    @abstractmethod
    def get_all_sales(self, page_size: int, page: int = 1) -> Page[Sale]:
        """Paginated listing of all sales."""
        pass

    @abstractmethod
    def get_sales_by_seller(self, seller_id: int, page_size: int, page: int = 1) -> Page[Sale]:
        """Paginated listing of one seller's sales, most recent first."""
        pass


class ISalesReportService(ABC):
    """Builds the daily reports from persisted sales."""

    @abstractmethod
    def generate_daily_sales_report(
        self, report_date: dt.date | str | None = None
    ) -> DailySalesReport:
        """Admin-wide totals; today when no date is given."""
        pass

    @abstractmethod
    def generate_daily_sales_report_by_seller(
        self, report_date: dt.date | str | None = None
    ) -> list[DailySellerSalesReport]:
        """One report per seller with sales on the date."""
        pass


class ISellerService(ABC):

    @abstractmethod
    def create_seller(self, seller: SellerInput) -> Seller:
        pass

    @abstractmethod
    def get_all_sellers(self, page_size: int, page: int = 1) -> Page[Seller]:
        pass


class IUserService(ABC):

    @abstractmethod
    def create_user(self, user: UserInput) -> User:
        pass

    @abstractmethod
    def get_all_users(self) -> list[User]:
        pass

    @abstractmethod
    def find_user(self, user_id: int) -> User | None:
        pass
