"""
Custom exception classes for the application.
Provides specific error types for better error handling and debugging.
"""

from typing import Any


class BaseApplicationException(Exception):
    """Base exception class for all application exceptions."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize base exception.

        Args:
            message: Error message
            error_code: Optional error code for categorization
            details: Optional additional error details
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logs and API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationException(BaseApplicationException):
    """Raised when configuration is invalid or missing."""

    pass


class InvalidCommissionRateException(ConfigurationException):
    """Raised when the configured commission rate is outside [0, 100]."""

    def __init__(self, rate: Any, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        details["rate"] = str(rate)
        super().__init__(
            f"Rate must be between 0 and 100, got: {rate}",
            details=details,
            **kwargs,
        )


class ValidationException(BaseApplicationException):
    """Raised when data validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any
    ) -> None:
        """
        Initialize validation exception.

        Args:
            message: Error message
            field: Field that failed validation
            value: Invalid value
            **kwargs: Additional arguments
        """
        details = kwargs.get("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        kwargs["details"] = details
        super().__init__(message, **kwargs)


class InvalidSaleAmountException(ValidationException):
    """Raised when a sale amount is not a positive number."""

    def __init__(self, amount: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Invalid sale amount: expected a positive numeric value, got: {amount}",
            field="amount",
            value=amount,
            **kwargs,
        )


class InvalidDateException(ValidationException):
    """Raised when a date cannot be parsed as YYYY-MM-DD."""

    label = "date"

    def __init__(self, value: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Invalid {self.label}: expected YYYY-MM-DD, got: {value}",
            field="date",
            value=value,
            **kwargs,
        )


class InvalidReportDateException(InvalidDateException):
    """Raised when the date a report is asked for cannot be parsed."""

    label = "report date"


class DatabaseException(BaseApplicationException):
    """Raised when database operations fail."""

    pass


class RepositoryException(DatabaseException):
    """Raised when repository operations fail."""

    pass


class DuplicateRecordException(RepositoryException):
    """Raised when a unique column (e.g. e-mail) already holds the value."""

    def __init__(self, entity: str, field: str, value: Any, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        details.update({"entity": entity, "field": field, "value": str(value)})
        super().__init__(
            f"{entity} with {field} '{value}' already exists",
            details=details,
            **kwargs,
        )


class MailDeliveryException(BaseApplicationException):
    """Raised when the mail transport rejects or fails to deliver a message."""

    def __init__(self, message: str, recipient: str | None = None, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        if recipient:
            details["recipient"] = recipient
        super().__init__(message, details=details, **kwargs)


class TaskQueueException(BaseApplicationException):
    """Raised when publishing to or consuming from the task queue fails."""

    pass


class UnknownJobException(BaseApplicationException):
    """Raised when a job name has no registered job."""

    def __init__(self, job_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"No job registered under '{job_name}'",
            details={"job_name": job_name},
            **kwargs,
        )
