"""Task queue used to run report jobs on background workers."""

from .task_queue import RabbitMQTaskQueue, TaskMessage

__all__ = ["RabbitMQTaskQueue", "TaskMessage"]
