"""
Sales Service
Creates sales with their commission and serves the paginated listings.
"""

import datetime as dt

from sales_control.core.logging import get_logger
from sales_control.data_access.db import SessionScope, session_scope
from sales_control.domain.dates import coerce_date
from sales_control.domain.entities import Page, Sale
from sales_control.domain.interfaces.repositories import ISaleRepository
from sales_control.domain.interfaces.services import (
    Amount,
    ICommissionCalculator,
    ISaleService,
)
from sales_control.services.commission import to_money

logger = get_logger(__name__)


class SaleService(ISaleService):
    """
    Domain service for sales operations.
    Every read and write runs in its own transaction scope.
    """

    def __init__(
        self,
        sale_repository: ISaleRepository,
        commission_calculator: ICommissionCalculator,
        transaction: SessionScope = session_scope,
    ):
        self._sale_repository = sale_repository
        self._commission_calculator = commission_calculator
        self._transaction = transaction

    def create_sale(self, seller_id: int, amount: Amount, sale_date: dt.date | str) -> Sale:
        """
        Create new sale.

        The amount is stored rounded to cents and the commission is computed
        on that stored amount. Both happen before the transaction opens, so
        an invalid amount, rate or date never reaches the database.
        """
        value = to_money(amount)
        commission = self._commission_calculator.calculate(value)
        day = coerce_date(sale_date)

        with self._transaction() as session:
            sale = self._sale_repository.create(
                session,
                seller_id=seller_id,
                amount=value,
                commission=commission,
                sale_date=day,
            )

        logger.info(
            f"Created sale: {sale.id}",
            extra={"seller_id": seller_id, "amount": sale.amount, "commission": sale.commission},
        )
        return sale

    def get_all_sales(self, page_size: int, page: int = 1) -> Page[Sale]:
        with self._transaction() as session:
            return self._sale_repository.get_all(session, page_size, page)

    def get_sales_by_seller(self, seller_id: int, page_size: int, page: int = 1) -> Page[Sale]:
        with self._transaction() as session:
            return self._sale_repository.get_by_seller(session, seller_id, page_size, page)
