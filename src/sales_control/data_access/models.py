"""SQLModel table definitions for sellers, administrators and sales."""

import datetime as dt
from decimal import Decimal

from sqlmodel import Field, Relationship, SQLModel

from sales_control.core.constants import TableNames


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class SellerRecord(SQLModel, table=True):
    __tablename__ = TableNames.SELLERS.value  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(max_length=255, unique=True, index=True)
    created_at: dt.datetime = Field(default_factory=_utcnow)


class UserRecord(SQLModel, table=True):
    __tablename__ = TableNames.USERS.value  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(max_length=255, unique=True, index=True)
    created_at: dt.datetime = Field(default_factory=_utcnow)


class SaleRecord(SQLModel, table=True):
    """One sale; amount and commission are stored with two decimal places."""

    __tablename__ = TableNames.SALES.value  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    seller_id: int = Field(foreign_key="sellers.id", index=True)
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    commission: Decimal = Field(max_digits=12, decimal_places=2)
    date: dt.date = Field(index=True)
    created_at: dt.datetime = Field(default_factory=_utcnow)

    seller: SellerRecord | None = Relationship()
