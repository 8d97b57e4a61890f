"""Calendar date helpers shared by services, jobs and the CLI."""

import datetime as dt
from zoneinfo import ZoneInfo

from sales_control.core.config import settings
from sales_control.core.constants import REPORT_DATE_FORMAT
from sales_control.core.exceptions import InvalidDateException, InvalidReportDateException


def today(timezone: str | None = None) -> dt.date:
    """Current calendar date in the reporting timezone."""
    return dt.datetime.now(ZoneInfo(timezone or settings.report_timezone)).date()


def coerce_date(
    value: dt.date | str,
    error: type[InvalidDateException] = InvalidDateException,
) -> dt.date:
    """Accept a date or a YYYY-MM-DD string; anything else raises `error`."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.datetime.strptime(str(value).strip(), REPORT_DATE_FORMAT).date()
    except ValueError as e:
        raise error(value) from e


def resolve_report_date(value: dt.date | str | None = None, timezone: str | None = None) -> dt.date:
    """Explicit date when given, otherwise today in the reporting timezone."""
    if value is None:
        return today(timezone)
    return coerce_date(value, InvalidReportDateException)
