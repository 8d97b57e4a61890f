"""
Infrastructure Interfaces
Narrow contracts for the externally owned cache store, mail transport and work queue.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


class ICacheStore(ABC):
    """Key-value store with per-key expiry."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Stored value, or None when missing or expired."""
        pass

    @abstractmethod
    def set(self, key: str, value: str, ttl: int) -> bool:
        """Store value for ttl seconds."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key; True when something was removed."""
        pass


@dataclass(frozen=True)
class MailMessage:
    """A rendered e-mail ready for the transport."""

    to: str
    subject: str
    html_body: str
    text_body: str | None = None
    to_name: str | None = None
    headers: dict[str, str] = field(default_factory=dict)


class IMailer(ABC):
    """Hands rendered messages to a mail transport."""

    @abstractmethod
    def send(self, message: MailMessage) -> None:
        """Deliver one message or raise MailDeliveryException."""
        pass


class ITaskQueue(ABC):
    """Work queue carrying named job tasks to background workers."""

    @abstractmethod
    def publish(self, task_name: str, payload: dict[str, Any]) -> str:
        """Enqueue a task and return its id."""
        pass

    @abstractmethod
    def consume(self, handler: Callable[[str, dict[str, Any]], Any]) -> None:
        """Block, calling handler(task_name, payload) for every task."""
        pass

    def close(self) -> None:
        pass
