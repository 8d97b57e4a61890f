"""Domain layer containing business entities, report values and interfaces."""

from .entities import Page, Sale, Seller, SellerInput, User, UserInput
from .reports import DailySalesReport, DailySellerSalesReport

__all__ = [
    "Page",
    "Sale",
    "Seller",
    "SellerInput",
    "User",
    "UserInput",
    "DailySalesReport",
    "DailySellerSalesReport",
]
