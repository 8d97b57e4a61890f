"""Core module containing configuration, constants, and shared utilities."""

from .config import settings
from .constants import (
    SALES_CACHE_KEY_PREFIX,
    SALES_CACHE_TTL_SECONDS,
    JobName,
    TableNames,
)
from .exceptions import (
    BaseApplicationException,
    ConfigurationException,
    InvalidCommissionRateException,
    InvalidSaleAmountException,
    ValidationException,
)
from .logging import get_logger

__all__ = [
    "settings",
    "SALES_CACHE_KEY_PREFIX",
    "SALES_CACHE_TTL_SECONDS",
    "JobName",
    "TableNames",
    "BaseApplicationException",
    "ConfigurationException",
    "InvalidCommissionRateException",
    "InvalidSaleAmountException",
    "ValidationException",
    "get_logger",
]
