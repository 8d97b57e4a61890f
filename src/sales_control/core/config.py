"""
Centralized configuration management using Pydantic BaseSettings.
Values come from environment variables or a local .env file.
"""

from decimal import Decimal
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Environment types for the application."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class CacheBackend(str, Enum):
    """Supported cache store backends."""

    REDIS = "redis"
    MEMORY = "memory"


class MailDriver(str, Enum):
    """Supported mail transports."""

    SMTP = "smtp"
    LOG = "log"


class Settings(BaseSettings):
    """
    Application settings with support for multiple environments.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current environment (development, staging, production, testing)",
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./data/sales_control.db",
        description="Database connection URL",
    )
    database_echo: bool = Field(
        default=False,
        description="Echo SQL statements to the log",
    )

    # Sales
    commission_rate: Decimal = Field(
        default=Decimal("8.5"),
        description="Commission rate in percent applied to every sale",
    )
    default_page_size: int = Field(
        default=10,
        gt=0,
        description="Page size used by listings when none is requested",
    )

    # Cache
    cache_backend: CacheBackend = Field(
        default=CacheBackend.REDIS,
        description="Cache store backend (redis or memory)",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    cache_key_prefix: str = Field(
        default="",
        description="Prefix prepended to every cache key",
    )

    # Mail
    mail_driver: MailDriver = Field(
        default=MailDriver.SMTP,
        description="Mail transport (smtp delivers, log only writes to the log)",
    )
    smtp_host: str = Field(default="localhost", description="SMTP host")
    smtp_port: int = Field(default=587, description="SMTP port")
    smtp_username: str | None = Field(default=None, description="SMTP username")
    smtp_password: str | None = Field(
        default=None,
        description="SMTP password - MUST be set via environment variable",
    )
    smtp_use_tls: bool = Field(default=True, description="Issue STARTTLS before login")
    smtp_timeout: float = Field(default=30.0, description="SMTP socket timeout in seconds")
    mail_from_address: str = Field(
        default="reports@sales-control.local",
        description="Sender address of report e-mails",
    )
    mail_from_name: str = Field(
        default="Sales Control",
        description="Sender display name of report e-mails",
    )

    # Queue
    rabbitmq_host: str = Field(default="localhost", description="RabbitMQ host")
    rabbitmq_port: int = Field(default=5672, description="RabbitMQ port")
    rabbitmq_username: str = Field(default="guest", description="RabbitMQ username")
    rabbitmq_password: str = Field(default="guest", description="RabbitMQ password")
    rabbitmq_vhost: str = Field(default="/", description="RabbitMQ virtual host")
    report_queue_name: str = Field(
        default="sales_reports",
        description="Queue that carries report job tasks",
    )

    # Scheduling
    report_timezone: str = Field(
        default="America/Sao_Paulo",
        description="Timezone used for 'today' and for the daily schedules",
    )
    admin_report_cron: str = Field(
        default="0 23 * * *",
        description="Cron expression of the administrator report job",
    )
    seller_report_cron: str = Field(
        default="59 23 * * *",
        description="Cron expression of the seller report job",
    )
    scheduler_lock_ttl_seconds: int = Field(
        default=3600,
        gt=0,
        description="Expiry of a job lock held by a crashed scheduler",
    )
    scheduler_poll_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Interval between scheduler due-time checks",
    )
    report_send_workers: int = Field(
        default=1,
        ge=1,
        description="Concurrent sends per job run (1 sends sequentially)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Application log level",
    )
    log_format: str = Field(
        default="json",
        description="Log format (json/text)",
    )
    log_file_path: Path | None = Field(
        default=None,
        description="Log file path",
    )

    @computed_field  # type: ignore[misc]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @computed_field  # type: ignore[misc]
    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> "Settings":
    """Uses LRU cache to ensure single instance across application."""
    return Settings()


# Global settings instance
settings = get_settings()
