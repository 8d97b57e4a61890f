"""
Pytest Configuration and Fixtures
Provides shared fixtures and configuration for all tests.
"""
import datetime as dt
import logging
import threading
from decimal import Decimal
from unittest.mock import Mock

import pytest
from faker import Faker

from sales_control.bootstrap import build_container
from sales_control.caching import InMemoryCacheStore
from sales_control.core.config import Settings
from sales_control.core.exceptions import MailDeliveryException
from sales_control.data_access.db import build_engine, create_all, make_session_scope
from sales_control.data_access.repositories import (
    SqlSaleRepository,
    SqlSellerRepository,
    SqlUserRepository,
)
from sales_control.domain.entities import SellerInput, UserInput
from sales_control.domain.interfaces import IMailer, ITaskQueue, MailMessage
from sales_control.mail import TemplateRenderer
from sales_control.scheduling import LocalJobLock
from sales_control.services import (
    CommissionCalculator,
    SaleCacheService,
    SaleService,
    SalesReportService,
    SellerService,
    UserService,
)

REPORT_DATE = dt.date(2025, 10, 26)
REPORT_TIMEZONE = "America/Sao_Paulo"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingMailer(IMailer):
    """Mailer that records messages and fails for chosen addresses."""

    def __init__(self, fail_for: set[str] | None = None):
        self.fail_for = set(fail_for or ())
        self.attempted: list[str] = []
        self.sent: list[MailMessage] = []
        self._lock = threading.Lock()

    def send(self, message: MailMessage) -> None:
        with self._lock:
            self.attempted.append(message.to)
        if message.to in self.fail_for:
            raise MailDeliveryException(f"Mailbox unavailable: {message.to}", recipient=message.to)
        with self._lock:
            self.sent.append(message)

    @property
    def sent_to(self) -> list[str]:
        return [message.to for message in self.sent]


@pytest.fixture(scope="session")
def faker_instance() -> Faker:
    """Provide a Faker instance for generating test data."""
    faker = Faker(["en_US"])
    Faker.seed(42)
    return faker


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="testing",
        database_url="sqlite://",
        cache_backend="memory",
        mail_driver="log",
        commission_rate=Decimal("8.5"),
        report_timezone=REPORT_TIMEZONE,
        log_format="text",
    )


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of one test."""
    engine = build_engine("sqlite://", echo=False)
    create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def transaction(engine):
    return make_session_scope(engine)


@pytest.fixture
def sale_repository():
    return SqlSaleRepository()


@pytest.fixture
def seller_repository():
    return SqlSellerRepository()


@pytest.fixture
def user_repository():
    return SqlUserRepository()


@pytest.fixture
def commission_calculator():
    return CommissionCalculator(Decimal("8.5"))


@pytest.fixture
def sale_service(sale_repository, commission_calculator, transaction):
    return SaleService(sale_repository, commission_calculator, transaction=transaction)


@pytest.fixture
def seller_service(seller_repository, transaction):
    return SellerService(seller_repository, transaction=transaction)


@pytest.fixture
def user_service(user_repository, transaction):
    return UserService(user_repository, transaction=transaction)


@pytest.fixture
def report_service(sale_repository, transaction):
    return SalesReportService(sale_repository, transaction=transaction, timezone=REPORT_TIMEZONE)


@pytest.fixture
def cache_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_store(cache_clock) -> InMemoryCacheStore:
    return InMemoryCacheStore(clock=cache_clock)


@pytest.fixture
def cached_sale_service(sale_service, cache_store):
    return SaleCacheService(sale_service, cache_store)


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer(app_name="Sales Control")


@pytest.fixture
def task_queue():
    queue = Mock(spec=ITaskQueue)
    queue.publish.side_effect = lambda name, payload: f"task-{name}"
    return queue


@pytest.fixture
def container(test_settings, engine, cache_store, mailer, task_queue):
    return build_container(
        test_settings,
        engine=engine,
        cache_store=cache_store,
        mailer=mailer,
        task_queue=task_queue,
        job_lock=LocalJobLock(),
    )


@pytest.fixture
def make_seller(seller_service, faker_instance):
    """Create sellers with unique e-mail addresses."""

    def _make(name: str | None = None, email: str | None = None):
        return seller_service.create_seller(
            SellerInput(
                name=name or faker_instance.name(),
                email=email or faker_instance.unique.email(),
            )
        )

    return _make


@pytest.fixture
def make_user(user_service, faker_instance):
    def _make(name: str | None = None, email: str | None = None):
        return user_service.create_user(
            UserInput(
                name=name or faker_instance.name(),
                email=email or faker_instance.unique.email(),
            )
        )

    return _make


@pytest.fixture
def capture_logs(caplog):
    """
    Attach caplog to application loggers.
    They do not propagate to the root logger, so caplog cannot see them otherwise.
    """
    attached: list[logging.Logger] = []

    def _capture(*names: str):
        for name in names:
            logger = logging.getLogger(name)
            logger.addHandler(caplog.handler)
            attached.append(logger)
        return caplog

    yield _capture

    for logger in attached:
        logger.removeHandler(caplog.handler)
