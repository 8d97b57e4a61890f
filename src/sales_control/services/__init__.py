"""Application services: commission, sales, cache-aside listing, reports, directory."""

from .commission import CommissionCalculator, calculate_commission
from .sale_cache_service import SaleCacheService
from .sale_service import SaleService
from .sales_report_service import SalesReportService
from .seller_service import SellerService
from .user_service import UserService

__all__ = [
    "CommissionCalculator",
    "calculate_commission",
    "SaleCacheService",
    "SaleService",
    "SalesReportService",
    "SellerService",
    "UserService",
]
