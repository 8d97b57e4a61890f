"""Domain entities exchanged between repositories, services and jobs."""

import datetime as dt
from decimal import Decimal
from math import ceil
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

T = TypeVar("T")


class DomainEntity(BaseModel):
    """
    Base class for persisted entities.
    Read from ORM records through attribute access and immutable afterwards.
    """

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
    )


class Seller(DomainEntity):
    id: int
    name: str
    email: str


class User(DomainEntity):
    """An administrator; every user receives the admin-wide report."""

    id: int
    name: str
    email: str


class Sale(DomainEntity):
    id: int
    seller_id: int
    amount: Decimal
    commission: Decimal
    date: dt.date
    seller: Seller | None = None


class _ContactInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        local, _, domain = v.partition("@")
        if not local or "." not in domain:
            raise ValueError(f"Invalid e-mail address: {v}")
        return v.lower()


class SellerInput(_ContactInput):
    """Data required to register a seller."""


class UserInput(_ContactInput):
    """Data required to register an administrator."""


class Page(BaseModel, Generic[T]):
    """One page of a paginated listing."""

    items: list[T]
    total: int
    page: int
    page_size: int

    @computed_field  # type: ignore[misc]
    @property
    def last_page(self) -> int:
        return max(1, ceil(self.total / self.page_size)) if self.page_size else 1
