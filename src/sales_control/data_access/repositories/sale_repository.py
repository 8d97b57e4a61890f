import datetime as dt
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from sales_control.core.exceptions import RepositoryException
from sales_control.data_access.models import SaleRecord, SellerRecord
from sales_control.data_access.repositories.base import paginate
from sales_control.domain.entities import Page, Sale
from sales_control.domain.interfaces.repositories import ISaleRepository


class SqlSaleRepository(ISaleRepository):
    def create(
        self,
        session: Session,
        *,
        seller_id: int,
        amount: Decimal,
        commission: Decimal,
        sale_date: dt.date,
    ) -> Sale:
        record = SaleRecord(
            seller_id=seller_id,
            amount=amount,
            commission=commission,
            date=sale_date,
        )
        session.add(record)
        try:
            session.flush()
        except IntegrityError as e:
            raise RepositoryException(
                f"Could not persist sale for seller {seller_id}",
                details={"seller_id": seller_id, "error": str(e.orig)},
            ) from e
        session.refresh(record)
        return Sale.model_validate(record)

    def get_all(self, session: Session, page_size: int, page: int = 1) -> Page[Sale]:
        stmt = (
            select(SaleRecord)
            .options(selectinload(SaleRecord.seller))  # type: ignore[arg-type]
            .order_by(SaleRecord.id)
        )
        return paginate(session, stmt, Sale, page_size, page)

    def get_by_seller(
        self, session: Session, seller_id: int, page_size: int, page: int = 1
    ) -> Page[Sale]:
        stmt = (
            select(SaleRecord)
            .options(selectinload(SaleRecord.seller))  # type: ignore[arg-type]
            .where(SaleRecord.seller_id == seller_id)
            .order_by(SaleRecord.date.desc(), SaleRecord.id.desc())  # type: ignore[attr-defined,union-attr]
        )
        return paginate(session, stmt, Sale, page_size, page)

    def get_daily_sales_report(self, session: Session, report_date: dt.date) -> Mapping[str, Any]:
        stmt = (
            select(  # type: ignore[call-overload]
                func.count(SaleRecord.id).label("total_sales"),
                func.sum(SaleRecord.amount).label("total_amount"),
                func.sum(SaleRecord.commission).label("total_commission"),
            )
            .where(SaleRecord.date == report_date)
        )
        row = session.exec(stmt).one()
        return dict(row._mapping)

    def get_daily_sales_report_by_seller(
        self, session: Session, report_date: dt.date
    ) -> list[Mapping[str, Any]]:
        # Inner join + WHERE: sellers without sales that day produce no group
        stmt = (
            select(  # type: ignore[call-overload]
                SellerRecord.id.label("seller_id"),  # type: ignore[union-attr]
                SellerRecord.name.label("seller_name"),  # type: ignore[attr-defined]
                SellerRecord.email.label("seller_email"),  # type: ignore[attr-defined]
                func.count(SaleRecord.id).label("total_sales"),
                func.sum(SaleRecord.amount).label("total_amount"),
                func.sum(SaleRecord.commission).label("total_commission"),
            )
            .select_from(SaleRecord)
            .join(SellerRecord, SellerRecord.id == SaleRecord.seller_id)
            .where(SaleRecord.date == report_date)
            .group_by(SellerRecord.id, SellerRecord.name, SellerRecord.email)
            .order_by(SellerRecord.id)
        )
        return [dict(row._mapping) for row in session.exec(stmt).all()]
