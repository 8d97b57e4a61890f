"""
Application constants and enumerations.
Central location for values that are part of external contracts.
"""

from decimal import Decimal
from enum import Enum
from typing import Final

# Cache-aside listing of all sales. Key and TTL are read by other services.
SALES_CACHE_KEY_PREFIX: Final[str] = "sales:all"
SALES_CACHE_TTL_SECONDS: Final[int] = 600

# Placeholder recipient of the admin-wide report before it is addressed
DEFAULT_REPORT_RECIPIENT: Final[str] = "Admin"

MONEY_QUANTUM: Final[Decimal] = Decimal("0.01")

REPORT_DATE_FORMAT: Final[str] = "%Y-%m-%d"
DISPLAY_DATE_FORMAT: Final[str] = "%d/%m/%Y"
REPORT_SUBJECT_TEMPLATE: Final[str] = "Daily Sales Report - {date}"


class JobName(str, Enum):
    """Names under which report jobs are queued and scheduled."""

    ADMIN_REPORT = "send-daily-sales-reports-to-admin"
    SELLER_REPORT = "send-daily-sales-reports"


class TableNames(str, Enum):
    """Database table names."""

    SALES = "sales"
    SELLERS = "sellers"
    USERS = "users"
