"""
Unit Tests for the Cache-Aside Sale Listing
Tests hits, misses, expiry, key layout and the absence of invalidation.
"""
from decimal import Decimal
from unittest.mock import Mock

import pytest

from sales_control.core.constants import SALES_CACHE_TTL_SECONDS
from sales_control.domain.entities import Page, Sale
from sales_control.domain.interfaces import ISaleService
from sales_control.services import SaleCacheService

from .conftest import REPORT_DATE


def _page(*amounts: str, page_size: int = 10) -> Page[Sale]:
    items = [
        Sale(id=i, seller_id=1, amount=Decimal(a), commission=Decimal("0.00"), date=REPORT_DATE)
        for i, a in enumerate(amounts, start=1)
    ]
    return Page[Sale](items=items, total=len(items), page=1, page_size=page_size)


class TestSaleCacheService:
    """Test the decorator against a mocked wrapped service."""

    def setup_method(self):
        self.wrapped = Mock(spec=ISaleService)
        self.store = Mock()
        self.store.get.return_value = None
        self.service = SaleCacheService(self.wrapped, self.store)

    def test_cache_key_includes_page_size(self):
        assert SaleCacheService.cache_key(10) == "sales:all:page_size:10"
        assert SaleCacheService.cache_key(25) == "sales:all:page_size:25"

    def test_miss_reads_through_and_stores_with_ttl(self):
        listing = _page("100.00")
        self.wrapped.get_all_sales.return_value = listing

        result = self.service.get_all_sales(10)

        assert result == listing
        self.wrapped.get_all_sales.assert_called_once_with(10)
        key, value, ttl = self.store.set.call_args.args
        assert key == "sales:all:page_size:10"
        assert ttl == SALES_CACHE_TTL_SECONDS == 600
        assert Page[Sale].model_validate_json(value) == listing

    def test_hit_skips_wrapped_service(self):
        listing = _page("100.00", "200.00")
        self.store.get.return_value = listing.model_dump_json()

        result = self.service.get_all_sales(10)

        assert result == listing
        self.wrapped.get_all_sales.assert_not_called()
        self.store.set.assert_not_called()

    def test_other_pages_bypass_cache(self):
        self.wrapped.get_all_sales.return_value = _page("1.00")

        self.service.get_all_sales(10, page=2)

        self.wrapped.get_all_sales.assert_called_once_with(10, 2)
        self.store.get.assert_not_called()
        self.store.set.assert_not_called()

    def test_create_sale_and_seller_listing_are_forwarded(self):
        self.service.create_sale(1, Decimal("10"), REPORT_DATE)
        self.service.get_sales_by_seller(1, 5, 2)

        self.wrapped.create_sale.assert_called_once_with(1, Decimal("10"), REPORT_DATE)
        self.wrapped.get_sales_by_seller.assert_called_once_with(1, 5, 2)
        self.store.get.assert_not_called()
        self.store.delete.assert_not_called()


class TestSaleCacheServiceWithStore:
    """Test the decorator over the real service and the in-memory store."""

    @pytest.fixture
    def seller(self, make_seller):
        return make_seller()

    def test_repeated_call_within_ttl_is_served_from_cache(self, sale_service, cache_store, seller):
        sale_service.create_sale(seller.id, Decimal("250.00"), REPORT_DATE)
        spy = Mock(wraps=sale_service)
        service = SaleCacheService(spy, cache_store)

        first = service.get_all_sales(10)
        second = service.get_all_sales(10)

        assert first == second
        assert spy.get_all_sales.call_count == 1

    def test_expired_entry_reads_through_again(self, sale_service, cache_store, cache_clock, seller):
        spy = Mock(wraps=sale_service)
        service = SaleCacheService(spy, cache_store)
        service.get_all_sales(10)

        cache_clock.advance(SALES_CACHE_TTL_SECONDS - 1)
        service.get_all_sales(10)
        assert spy.get_all_sales.call_count == 1

        cache_clock.advance(1)
        service.get_all_sales(10)
        assert spy.get_all_sales.call_count == 2

    def test_evicted_entry_reads_through_again(self, sale_service, cache_store):
        spy = Mock(wraps=sale_service)
        service = SaleCacheService(spy, cache_store)
        service.get_all_sales(10)

        cache_store.delete(SaleCacheService.cache_key(10))
        service.get_all_sales(10)

        assert spy.get_all_sales.call_count == 2

    def test_page_sizes_do_not_collide(self, cached_sale_service, seller):
        for amount in ("1", "2", "3"):
            cached_sale_service.create_sale(seller.id, Decimal(amount), REPORT_DATE)

        small = cached_sale_service.get_all_sales(1)
        large = cached_sale_service.get_all_sales(10)

        assert len(small.items) == 1
        assert len(large.items) == 3

    def test_new_sale_is_not_visible_until_expiry(self, cached_sale_service, cache_clock, seller):
        """Test that writes do not invalidate the cached listing."""
        cached_sale_service.create_sale(seller.id, Decimal("100"), REPORT_DATE)
        assert cached_sale_service.get_all_sales(10).total == 1

        cached_sale_service.create_sale(seller.id, Decimal("200"), REPORT_DATE)
        assert cached_sale_service.get_all_sales(10).total == 1

        cache_clock.advance(SALES_CACHE_TTL_SECONDS)
        assert cached_sale_service.get_all_sales(10).total == 2

    def test_cached_listing_keeps_sellers_and_decimals(self, cached_sale_service, seller):
        cached_sale_service.create_sale(seller.id, Decimal("350.00"), REPORT_DATE)
        cached_sale_service.get_all_sales(10)

        cached = cached_sale_service.get_all_sales(10)

        assert cached.items[0].amount == Decimal("350.00")
        assert cached.items[0].commission == Decimal("29.75")
        assert cached.items[0].seller.email == seller.email
        assert cached.items[0].date == REPORT_DATE
