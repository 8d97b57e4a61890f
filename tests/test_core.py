"""
Unit Tests for Core Infrastructure
Tests settings, dates, logging formatters, exceptions and the DI container.
"""
import datetime as dt
import json
import logging
from abc import ABC, abstractmethod
from decimal import Decimal

import pytest
from pydantic import ValidationError

from sales_control.core.config import CacheBackend, Settings
from sales_control.core.container import DIContainer, ServiceLifetime
from sales_control.core.exceptions import (
    BaseApplicationException,
    InvalidDateException,
    InvalidReportDateException,
    InvalidSaleAmountException,
)
from sales_control.core.logging import JSONFormatter, get_logger_with_context
from sales_control.domain.dates import coerce_date, resolve_report_date


class TestSettings:
    """Test configuration loading."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.commission_rate == Decimal("8.5")
        assert settings.default_page_size == 10
        assert settings.report_timezone == "America/Sao_Paulo"
        assert settings.admin_report_cron == "0 23 * * *"
        assert settings.seller_report_cron == "59 23 * * *"
        assert settings.report_queue_name == "sales_reports"
        assert settings.cache_key_prefix == ""
        assert settings.report_send_workers == 1

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("COMMISSION_RATE", "10")
        monkeypatch.setenv("CACHE_BACKEND", "memory")
        monkeypatch.setenv("DATABASE_URL", "sqlite://")

        settings = Settings(_env_file=None)

        assert settings.commission_rate == Decimal("10")
        assert settings.cache_backend == CacheBackend.MEMORY
        assert settings.is_sqlite is True

    def test_invalid_enum_value(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, cache_backend="memcached")


class TestDates:
    def test_coerce_date(self):
        assert coerce_date("2025-10-26") == dt.date(2025, 10, 26)
        assert coerce_date(dt.datetime(2025, 10, 26, 23, 59)) == dt.date(2025, 10, 26)
        assert coerce_date(dt.date(2025, 10, 26)) == dt.date(2025, 10, 26)

    @pytest.mark.parametrize("value", ["26/10/2025", "2025-02-30", "today", ""])
    def test_invalid_dates(self, value):
        with pytest.raises(InvalidDateException) as exc_info:
            coerce_date(value)

        assert str(exc_info.value).startswith("Invalid date:")

    def test_invalid_report_date(self):
        with pytest.raises(InvalidReportDateException) as exc_info:
            resolve_report_date("26/10/2025")

        assert str(exc_info.value) == "Invalid report date: expected YYYY-MM-DD, got: 26/10/2025"
        assert exc_info.value.details == {"field": "date", "value": "26/10/2025"}

    def test_today_in_report_timezone(self):
        resolved = resolve_report_date(None, "Pacific/Kiritimati")

        # UTC+14 is never behind UTC
        assert resolved >= dt.datetime.now(dt.timezone.utc).date()


class TestExceptions:
    def test_to_dict(self):
        exc = InvalidSaleAmountException(-5)

        assert exc.to_dict() == {
            "error": "InvalidSaleAmountException",
            "message": "Invalid sale amount: expected a positive numeric value, got: -5",
            "details": {"field": "amount", "value": "-5"},
        }
        assert isinstance(exc, BaseApplicationException)


class TestLogging:
    def test_json_formatter_emits_extras(self):
        record = logging.LogRecord("sales_control.jobs", logging.INFO, __file__, 1, "Report sent", None, None)
        record.job = "send-daily-sales-reports"
        record.total_amount = Decimal("750.00")

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Report sent"
        assert data["level"] == "INFO"
        assert data["job"] == "send-daily-sales-reports"
        assert data["total_amount"] == "750.00"

    def test_context_adapter_merges_extra(self, capture_logs):
        logger = get_logger_with_context("sales_control.tests.context", job="admin")
        caplog = capture_logs("sales_control.tests.context")

        logger.info("started", extra={"date": "2025-10-26"})

        record = caplog.records[-1]
        assert record.job == "admin"
        assert record.date == "2025-10-26"


class IGreeter(ABC):
    @abstractmethod
    def greet(self) -> str:
        pass


class Greeter(IGreeter):
    def greet(self) -> str:
        return "hello"


class Consumer:
    def __init__(self, greeter: IGreeter, suffix: str = "!"):
        self.greeter = greeter
        self.suffix = suffix


class TestDIContainer:
    """Test the dependency injection container."""

    def test_constructor_injection(self):
        container = DIContainer().bind(IGreeter, Greeter)

        consumer = container.resolve(Consumer)

        assert consumer.greeter.greet() == "hello"
        assert consumer.suffix == "!"

    def test_lifetimes(self):
        container = DIContainer()
        container.bind(IGreeter, Greeter, ServiceLifetime.SINGLETON)
        assert container.resolve(IGreeter) is container.resolve(IGreeter)

        container.bind(IGreeter, Greeter, ServiceLifetime.TRANSIENT)
        assert container.resolve(IGreeter) is not container.resolve(IGreeter)

    def test_factory_binding(self):
        container = DIContainer()
        container.bind(IGreeter, Greeter)
        container.bind_factory(Consumer, lambda c: Consumer(c.resolve(IGreeter), suffix="?"))

        assert container.resolve(Consumer).suffix == "?"
        assert container.resolve(Consumer) is container.resolve(Consumer)

    def test_unbound_interface(self):
        with pytest.raises(ValueError, match="No binding found"):
            DIContainer().resolve(IGreeter)

    def test_circular_dependency(self):
        container = DIContainer()
        container.bind_factory(IGreeter, lambda c: c.resolve(Consumer))
        container.bind_factory(Consumer, lambda c: c.resolve(IGreeter))

        with pytest.raises(ValueError, match="Circular dependency"):
            container.resolve(IGreeter)
