"""Core task store, service and HTTP-facing models."""

from task_tracker_api.app.errors import InvalidCursorError, TaskNotFoundError
from task_tracker_api.app.models import Cursor, Task, TaskStatus
from task_tracker_api.app.service import TaskService
from task_tracker_api.app.storage import InMemoryTaskRepository, TaskRepository

__all__ = [
    "Cursor",
    "InMemoryTaskRepository",
    "InvalidCursorError",
    "Task",
    "TaskNotFoundError",
    "TaskRepository",
    "TaskService",
    "TaskStatus",
]
