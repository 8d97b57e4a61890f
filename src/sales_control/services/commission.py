"""
Commission Calculation
Pure, thread-safe computation of a sale's commission at a percentage rate.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from sales_control.core.constants import MONEY_QUANTUM
from sales_control.core.exceptions import (
    InvalidCommissionRateException,
    InvalidSaleAmountException,
)
from sales_control.domain.interfaces.services import Amount, ICommissionCalculator

_HUNDRED = Decimal(100)


def to_decimal(value: Amount) -> Decimal | None:
    """Exact decimal for numeric input; None when the value is not a finite number."""
    if isinstance(value, bool):
        return None
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def to_money(amount: Amount) -> Decimal:
    """
    Sale amount rounded half-up to cents, the precision it is stored with.

    Raises:
        InvalidSaleAmountException: amount is not a number, or is not
            greater than zero once rounded
    """
    value = to_decimal(amount)
    if value is None:
        raise InvalidSaleAmountException(amount)
    try:
        value = value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # More digits than the decimal context holds
        raise InvalidSaleAmountException(amount) from None
    if value <= 0:
        raise InvalidSaleAmountException(amount)
    return value


def calculate_commission(amount: Amount, rate: Amount) -> Decimal:
    """
    Commission of `amount` at `rate` percent, rounded half-up to two decimals.
    The amount is rounded to cents first, so the commission always matches
    the amount that gets stored.

    Raises:
        InvalidSaleAmountException: amount is not a number greater than zero
        InvalidCommissionRateException: rate is not a number in [0, 100]
    """
    value = to_money(amount)

    percent = to_decimal(rate)
    if percent is None or percent < 0 or percent > _HUNDRED:
        raise InvalidCommissionRateException(rate)

    return (value * percent / _HUNDRED).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


class CommissionCalculator(ICommissionCalculator):
    """Commission calculator bound to one configured rate."""

    def __init__(self, rate: Amount):
        # Validated on use so a misconfigured rate fails every sale, not startup
        self._rate = rate

    @property
    def rate(self) -> Amount:
        return self._rate

    def calculate(self, amount: Amount) -> Decimal:
        return calculate_commission(amount, self._rate)
