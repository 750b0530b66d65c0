"""Task service: defaults, timestamps, and page normalization over a repository."""

from __future__ import annotations

import math

from .cursor import decode_cursor, encode_cursor
from .models import (
    CreateTaskRequest,
    CursorPage,
    OffsetPage,
    Task,
    TaskStatus,
    UpdateTaskRequest,
)
from .storage import Clock, TaskRepository, utc_now


class TaskService:
    """Application-facing operations on tasks.

    The repository stamps ``updated_at`` inside its own update, so an
    update here is a single atomic repository call.
    """

    def __init__(
        self,
        repository: TaskRepository,
        *,
        clock: Clock | None = None,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ) -> None:
        if default_page_size < 1 or max_page_size < 1:
            raise ValueError("page sizes must be positive")
        self.repository = repository
        self._clock = clock or utc_now
        self.default_page_size = min(default_page_size, max_page_size)
        self.max_page_size = max_page_size

    def create(self, payload: CreateTaskRequest) -> Task:
        now = self._clock()
        return self.repository.create(
            title=payload.title,
            description=payload.description,
            status=payload.status or TaskStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    def get(self, task_id: int) -> Task:
        return self.repository.get(task_id)

    def update(self, task_id: int, payload: UpdateTaskRequest) -> Task:
        return self.repository.update(task_id, **payload.changes())

    def delete(self, task_id: int) -> None:
        self.repository.delete(task_id)

    def list_offset(
        self,
        *,
        status: TaskStatus | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> OffsetPage:
        page = max(page, 1)
        page_size = self._page_size(page_size)
        items, total = self.repository.list_offset(status, page, page_size)
        return OffsetPage(
            items=items,
            total_count=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size),
        )

    def list_cursor(
        self,
        *,
        status: TaskStatus | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> CursorPage:
        """List tasks after an opaque cursor token.

        Raises InvalidCursorError when the token does not decode.
        """
        after = decode_cursor(cursor)
        limit = self._page_size(limit)
        items, next_cursor = self.repository.list_cursor(after, limit, status)
        return CursorPage(items=items, next_cursor=encode_cursor(next_cursor), limit=limit)

    def _page_size(self, requested: int | None) -> int:
        if requested is None or requested < 1:
            return self.default_page_size
        return min(requested, self.max_page_size)
