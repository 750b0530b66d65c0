"""Errors raised by the task store and cursor codec."""

from __future__ import annotations


class TaskNotFoundError(KeyError):
    """Raised when an id references no live task."""

    def __init__(self, task_id: int) -> None:
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Task {self.task_id} does not exist"


class InvalidCursorError(ValueError):
    """Raised when a pagination token cannot be decoded."""
