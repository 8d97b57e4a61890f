from .sale_repository import SqlSaleRepository
from .seller_repository import SqlSellerRepository
from .user_repository import SqlUserRepository

__all__ = [
    "SqlSaleRepository",
    "SqlSellerRepository",
    "SqlUserRepository",
]
