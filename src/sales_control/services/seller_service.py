from sales_control.core.logging import get_logger
from sales_control.data_access.db import SessionScope, session_scope
from sales_control.domain.entities import Page, Seller, SellerInput
from sales_control.domain.interfaces.repositories import ISellerRepository
from sales_control.domain.interfaces.services import ISellerService

logger = get_logger(__name__)


class SellerService(ISellerService):
    def __init__(self, seller_repository: ISellerRepository, transaction: SessionScope = session_scope):
        self._seller_repository = seller_repository
        self._transaction = transaction

    def create_seller(self, seller: SellerInput) -> Seller:
        with self._transaction() as session:
            created = self._seller_repository.create(session, seller)
        logger.info(f"Created seller: {created.id}", extra={"seller_email": created.email})
        return created

    def get_all_sellers(self, page_size: int, page: int = 1) -> Page[Seller]:
        with self._transaction() as session:
            return self._seller_repository.get_all(session, page_size, page)
