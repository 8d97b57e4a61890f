"""Domain interfaces (ports) implemented by data access and infrastructure."""

from .infrastructure import ICacheStore, IMailer, ITaskQueue, MailMessage
from .repositories import ISaleRepository, ISellerRepository, IUserRepository
from .services import (
    ICommissionCalculator,
    ISaleService,
    ISalesReportService,
    ISellerService,
    IUserService,
)

__all__ = [
    "ICacheStore",
    "IMailer",
    "ITaskQueue",
    "MailMessage",
    "ISaleRepository",
    "ISellerRepository",
    "IUserRepository",
    "ICommissionCalculator",
    "ISaleService",
    "ISalesReportService",
    "ISellerService",
    "IUserService",
]
