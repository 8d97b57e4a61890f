"""
Sale Cache Service
Cache-aside decorator around any ISaleService for the "all sales" listing.

Only the first page of get_all_sales is cached, under
``sales:all:page_size:<N>`` for 600 seconds. Writes do not invalidate the
listing: a new sale can stay invisible there until the entry expires.
"""

import datetime as dt

from sales_control.core.constants import SALES_CACHE_KEY_PREFIX, SALES_CACHE_TTL_SECONDS
from sales_control.core.logging import get_logger
from sales_control.domain.entities import Page, Sale
from sales_control.domain.interfaces.infrastructure import ICacheStore
from sales_control.domain.interfaces.services import Amount, ISaleService

logger = get_logger(__name__)


class SaleCacheService(ISaleService):
    """Proxy for another ISaleService adding a cached read path."""

    def __init__(self, sale_service: ISaleService, cache_store: ICacheStore):
        self._sale_service = sale_service
        self._cache_store = cache_store

    @staticmethod
    def cache_key(page_size: int) -> str:
        return f"{SALES_CACHE_KEY_PREFIX}:page_size:{page_size}"

    def create_sale(self, seller_id: int, amount: Amount, sale_date: dt.date | str) -> Sale:
        return self._sale_service.create_sale(seller_id, amount, sale_date)

    def get_all_sales(self, page_size: int, page: int = 1) -> Page[Sale]:
        if page != 1:
            return self._sale_service.get_all_sales(page_size, page)

        key = self.cache_key(page_size)
        cached = self._cache_store.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for key: {key}")
            return Page[Sale].model_validate_json(cached)

        logger.debug(f"Cache miss for key: {key}")
        listing = self._sale_service.get_all_sales(page_size)
        self._cache_store.set(key, listing.model_dump_json(), SALES_CACHE_TTL_SECONDS)
        return listing

    def get_sales_by_seller(self, seller_id: int, page_size: int, page: int = 1) -> Page[Sale]:
        return self._sale_service.get_sales_by_seller(seller_id, page_size, page)
