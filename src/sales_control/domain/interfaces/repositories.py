"""
Repository Interfaces
Domain layer contracts for persisted records and the report aggregate queries.

Every method runs inside the caller's transaction: the session is opened
and committed by the service that owns the unit of work.
"""

import datetime as dt
from abc import ABC, abstractmethod
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from sqlmodel import Session

from sales_control.domain.entities import Page, Sale, Seller, SellerInput, User, UserInput


class ISaleRepository(ABC):
    """Interface for sale persistence and aggregation."""

    @abstractmethod
    def create(
        self,
        session: Session,
        *,
        seller_id: int,
        amount: Decimal,
        commission: Decimal,
        sale_date: dt.date,
    ) -> Sale:
        """Persist one sale row with an already computed commission."""
        pass

    @abstractmethod
    def get_all(self, session: Session, page_size: int, page: int = 1) -> Page[Sale]:
        """All sales in insertion order, seller included."""
        pass

    @abstractmethod
    def get_by_seller(
        self, session: Session, seller_id: int, page_size: int, page: int = 1
    ) -> Page[Sale]:
        """Sales of one seller, most recent date first."""
        pass

    @abstractmethod
    def get_daily_sales_report(self, session: Session, report_date: dt.date) -> Mapping[str, Any]:
        """
        Ungrouped aggregate over the sales of one date.

        Returns:
            Mapping with total_sales, total_amount and total_commission as
            produced by the database (sums are None when no row matches)
        """
        pass

    @abstractmethod
    def get_daily_sales_report_by_seller(
        self, session: Session, report_date: dt.date
    ) -> list[Mapping[str, Any]]:
        """
        Aggregate over the sales of one date grouped by seller.

        Returns:
            One mapping per seller with at least one sale: seller_id,
            seller_name, seller_email, total_sales, total_amount,
            total_commission
        """
        pass


class ISellerRepository(ABC):
    """Interface for seller persistence."""

    @abstractmethod
    def create(self, session: Session, seller: SellerInput) -> Seller:
        """Persist a seller; e-mail addresses are unique."""
        pass

    @abstractmethod
    def get_all(self, session: Session, page_size: int, page: int = 1) -> Page[Seller]:
        """All sellers ordered by id."""
        pass


class IUserRepository(ABC):
    """Interface for administrator persistence."""

    @abstractmethod
    def create(self, session: Session, user: UserInput) -> User:
        """Persist an administrator; e-mail addresses are unique."""
        pass

    @abstractmethod
    def get_all(self, session: Session) -> list[User]:
        """All administrators ordered by id."""
        pass

    @abstractmethod
    def find_by_id(self, session: Session, user_id: int) -> User | None:
        """Single administrator or None."""
        pass
