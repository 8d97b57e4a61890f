"""
Application wiring.
Builds the dependency container from settings: engine, repositories,
services, cache, mail, jobs, queue and scheduler.
"""

from sqlalchemy.engine import Engine

from sales_control.caching import InMemoryCacheStore, RedisCacheStore
from sales_control.core.config import CacheBackend, MailDriver, Settings, get_settings
from sales_control.core.constants import JobName
from sales_control.core.container import DIContainer, ServiceLifetime
from sales_control.core.logging import get_logger
from sales_control.data_access.db import build_engine, create_all, make_session_scope
from sales_control.data_access.repositories import (
    SqlSaleRepository,
    SqlSellerRepository,
    SqlUserRepository,
)
from sales_control.domain.interfaces import (
    ICacheStore,
    ICommissionCalculator,
    IMailer,
    ISaleRepository,
    ISaleService,
    ISalesReportService,
    ISellerRepository,
    ISellerService,
    ITaskQueue,
    IUserRepository,
    IUserService,
)
from sales_control.jobs import AdminReportJob, JobDispatcher, JobRegistry, SellerReportJob
from sales_control.mail import LogMailer, SmtpMailer, TemplateRenderer
from sales_control.messaging import RabbitMQTaskQueue
from sales_control.scheduling import JobLock, LocalJobLock, RedisJobLock, ReportScheduler
from sales_control.services import (
    CommissionCalculator,
    SaleCacheService,
    SaleService,
    SalesReportService,
    SellerService,
    UserService,
)

logger = get_logger(__name__)


def _cache_store(settings: Settings) -> ICacheStore:
    if settings.cache_backend == CacheBackend.MEMORY:
        return InMemoryCacheStore()
    return RedisCacheStore.from_url(settings.redis_url, key_prefix=settings.cache_key_prefix)


def _job_lock(settings: Settings) -> JobLock:
    if settings.cache_backend == CacheBackend.MEMORY:
        return LocalJobLock()
    return RedisJobLock.from_url(settings.redis_url)


def _mailer(settings: Settings) -> IMailer:
    if settings.mail_driver == MailDriver.LOG:
        return LogMailer()
    return SmtpMailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        from_address=settings.mail_from_address,
        from_name=settings.mail_from_name,
        username=settings.smtp_username,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        timeout=settings.smtp_timeout,
    )


def build_container(
    settings: Settings | None = None,
    engine: Engine | None = None,
    cache_store: ICacheStore | None = None,
    mailer: IMailer | None = None,
    task_queue: ITaskQueue | None = None,
    job_lock: JobLock | None = None,
) -> DIContainer:
    """
    Wire the application.

    Explicit collaborators replace the ones built from settings, which is
    how tests swap in SQLite in memory, the in-memory cache and fake mailers.
    """
    settings = settings or get_settings()
    engine = engine or build_engine(settings.database_url, settings.database_echo)
    transaction = make_session_scope(engine)

    container = DIContainer()
    container.bind_instance(Settings, settings)
    container.bind_instance(Engine, engine)

    # Repositories are stateless
    container.bind(ISaleRepository, SqlSaleRepository, ServiceLifetime.SINGLETON)
    container.bind(ISellerRepository, SqlSellerRepository, ServiceLifetime.SINGLETON)
    container.bind(IUserRepository, SqlUserRepository, ServiceLifetime.SINGLETON)

    container.bind_factory(
        ICommissionCalculator,
        lambda c: CommissionCalculator(settings.commission_rate),
    )

    if cache_store is not None:
        container.bind_instance(ICacheStore, cache_store)
    else:
        container.bind_factory(ICacheStore, lambda c: _cache_store(settings))

    container.bind_factory(
        SaleService,
        lambda c: SaleService(
            c.resolve(ISaleRepository),
            c.resolve(ICommissionCalculator),
            transaction=transaction,
        ),
    )
    # Callers of ISaleService get the cache-aside decorator around SaleService
    container.bind_factory(
        ISaleService,
        lambda c: SaleCacheService(c.resolve(SaleService), c.resolve(ICacheStore)),
    )
    container.bind_factory(
        ISalesReportService,
        lambda c: SalesReportService(
            c.resolve(ISaleRepository),
            transaction=transaction,
            timezone=settings.report_timezone,
        ),
    )
    container.bind_factory(
        ISellerService,
        lambda c: SellerService(c.resolve(ISellerRepository), transaction=transaction),
    )
    container.bind_factory(
        IUserService,
        lambda c: UserService(c.resolve(IUserRepository), transaction=transaction),
    )

    if mailer is not None:
        container.bind_instance(IMailer, mailer)
    else:
        container.bind_factory(IMailer, lambda c: _mailer(settings))
    container.bind_factory(TemplateRenderer, lambda c: TemplateRenderer(app_name=settings.mail_from_name))

    container.bind_factory(
        AdminReportJob,
        lambda c: AdminReportJob(
            c.resolve(ISalesReportService),
            c.resolve(IUserService),
            c.resolve(IMailer),
            c.resolve(TemplateRenderer),
            max_workers=settings.report_send_workers,
            timezone=settings.report_timezone,
        ),
    )
    container.bind_factory(
        SellerReportJob,
        lambda c: SellerReportJob(
            c.resolve(ISalesReportService),
            c.resolve(IMailer),
            c.resolve(TemplateRenderer),
            max_workers=settings.report_send_workers,
            timezone=settings.report_timezone,
        ),
    )
    container.bind_factory(
        JobRegistry,
        lambda c: JobRegistry([c.resolve(AdminReportJob), c.resolve(SellerReportJob)]),
    )

    if task_queue is not None:
        container.bind_instance(ITaskQueue, task_queue)
    else:
        container.bind_factory(ITaskQueue, lambda c: RabbitMQTaskQueue.from_settings(settings))
    # The queue is only resolved when something is actually queued
    container.bind_factory(
        JobDispatcher,
        lambda c: JobDispatcher(
            c.resolve(JobRegistry),
            task_queue_factory=lambda: c.resolve(ITaskQueue),
            timezone=settings.report_timezone,
        ),
    )

    if job_lock is not None:
        container.bind_instance(JobLock, job_lock)
    else:
        container.bind_factory(JobLock, lambda c: _job_lock(settings))
    container.bind_factory(
        ReportScheduler,
        lambda c: ReportScheduler(
            c.resolve(JobDispatcher),
            c.resolve(JobLock),
            lock_ttl_seconds=settings.scheduler_lock_ttl_seconds,
            poll_seconds=settings.scheduler_poll_seconds,
        ),
    )

    logger.debug(f"Container built for {settings.environment.value} environment")
    return container


def register_daily_schedules(scheduler: ReportScheduler, settings: Settings) -> ReportScheduler:
    """Admin report at admin_report_cron, seller reports at seller_report_cron."""
    scheduler.add_job(JobName.ADMIN_REPORT.value, settings.admin_report_cron, settings.report_timezone)
    scheduler.add_job(JobName.SELLER_REPORT.value, settings.seller_report_cron, settings.report_timezone)
    return scheduler


def init_database(container: DIContainer) -> None:
    create_all(container.resolve(Engine))
