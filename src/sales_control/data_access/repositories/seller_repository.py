from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from sales_control.core.exceptions import DuplicateRecordException
from sales_control.data_access.models import SellerRecord
from sales_control.data_access.repositories.base import paginate
from sales_control.domain.entities import Page, Seller, SellerInput
from sales_control.domain.interfaces.repositories import ISellerRepository


class SqlSellerRepository(ISellerRepository):
    def create(self, session: Session, seller: SellerInput) -> Seller:
        record = SellerRecord(name=seller.name, email=seller.email)
        session.add(record)
        try:
            session.flush()
        except IntegrityError as e:
            raise DuplicateRecordException("Seller", "email", seller.email) from e
        return Seller.model_validate(record)

    def get_all(self, session: Session, page_size: int, page: int = 1) -> Page[Seller]:
        stmt = select(SellerRecord).order_by(SellerRecord.id)
        return paginate(session, stmt, Seller, page_size, page)
