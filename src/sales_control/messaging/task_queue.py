"""
RabbitMQ Task Queue
Durable queue of report job tasks, published by the trigger command and the
scheduler, consumed by `sales-control worker`.
"""

import json
import uuid
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

import pika
from pika.exceptions import AMQPError

from sales_control.core.config import Settings
from sales_control.core.exceptions import TaskQueueException
from sales_control.core.logging import get_logger
from sales_control.domain.interfaces.infrastructure import ITaskQueue

logger = get_logger(__name__)


@dataclass
class TaskMessage:
    """Task message structure"""

    task_name: str
    payload: dict[str, Any]
    task_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_json(self) -> str:
        return json.dumps(asdict(self), default=str)

    @classmethod
    def from_json(cls, body: bytes | str) -> "TaskMessage":
        data = json.loads(body)
        return cls(
            task_name=data["task_name"],
            payload=data.get("payload") or {},
            task_id=data.get("task_id") or str(uuid.uuid4()),
            created_at=data.get("created_at") or datetime.now(timezone.utc).isoformat(),
        )


class RabbitMQTaskQueue(ITaskQueue):
    """
    Blocking pika client for one durable queue.

    The connection is opened lazily on first publish/consume, so building the
    queue object never touches the network.
    """

    def __init__(
        self,
        queue_name: str,
        host: str = "localhost",
        port: int = 5672,
        username: str = "guest",
        password: str = "guest",
        virtual_host: str = "/",
        connection_factory: Callable[[pika.ConnectionParameters], Any] = pika.BlockingConnection,
    ):
        self.queue_name = queue_name
        self.connection_params = pika.ConnectionParameters(
            host=host,
            port=port,
            virtual_host=virtual_host,
            credentials=pika.PlainCredentials(username, password),
            heartbeat=600,
            blocked_connection_timeout=300,
            connection_attempts=3,
            retry_delay=2.0,
        )
        self._connection_factory = connection_factory
        self.connection = None
        self.channel = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "RabbitMQTaskQueue":
        return cls(
            queue_name=settings.report_queue_name,
            host=settings.rabbitmq_host,
            port=settings.rabbitmq_port,
            username=settings.rabbitmq_username,
            password=settings.rabbitmq_password,
            virtual_host=settings.rabbitmq_vhost,
        )

    def connect(self) -> None:
        """Establish connection to RabbitMQ and declare the queue."""
        if self.connection is not None and not self.connection.is_closed:
            return

        try:
            self.connection = self._connection_factory(self.connection_params)
            self.channel = self.connection.channel()
            self.channel.queue_declare(queue=self.queue_name, durable=True)
        except AMQPError as e:
            raise TaskQueueException(f"Failed to connect to RabbitMQ: {e}") from e

        logger.info(f"Connected to RabbitMQ queue {self.queue_name}")

    def publish(self, task_name: str, payload: dict[str, Any]) -> str:
        """
        Publish a task message to the queue.

        Returns:
            Task ID for tracking
        """
        self.connect()
        message = TaskMessage(task_name=task_name, payload=payload)

        properties = pika.BasicProperties(
            content_type="application/json",
            message_id=message.task_id,
            delivery_mode=2,  # Persistent
        )
        try:
            self.channel.basic_publish(
                exchange="",
                routing_key=self.queue_name,
                body=message.to_json(),
                properties=properties,
            )
        except AMQPError as e:
            raise TaskQueueException(f"Failed to publish task {task_name}: {e}") from e

        logger.info(f"Published task {task_name} with ID {message.task_id}")
        return message.task_id

    def consume(self, handler: Callable[[str, dict[str, Any]], Any], prefetch_count: int = 1) -> None:
        """
        Consume tasks until the connection closes or consuming is stopped.

        A handler that returns acknowledges the message. A handler that raises
        negatively acknowledges it: requeued on the first failure, dropped on
        a failed redelivery. Unparseable messages are dropped.
        """
        self.connect()

        def process_message(ch, method, properties, body):
            try:
                task = TaskMessage.from_json(body)
            except (ValueError, KeyError, TypeError) as e:
                logger.error(f"Discarding malformed task message: {e}")
                ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
                return

            try:
                handler(task.task_name, task.payload)
            except Exception as e:
                requeue = not method.redelivered
                logger.error(
                    f"Task {task.task_name} failed: {e}",
                    extra={"task_id": task.task_id, "job": task.task_name, "requeue": requeue},
                )
                ch.basic_nack(delivery_tag=method.delivery_tag, requeue=requeue)
                return

            ch.basic_ack(delivery_tag=method.delivery_tag)
            logger.info(f"Processed task {task.task_name} successfully", extra={"task_id": task.task_id})

        self.channel.basic_qos(prefetch_count=prefetch_count)
        self.channel.basic_consume(queue=self.queue_name, on_message_callback=process_message)

        logger.info(f"Started consuming from {self.queue_name}")
        try:
            self.channel.start_consuming()
        except AMQPError as e:
            raise TaskQueueException(f"Consumer on {self.queue_name} stopped: {e}") from e

    def stop(self) -> None:
        if self.channel is not None:
            self.channel.stop_consuming()

    def close(self) -> None:
        if self.connection is not None and not self.connection.is_closed:
            self.connection.close()
        self.connection = None
        self.channel = None
