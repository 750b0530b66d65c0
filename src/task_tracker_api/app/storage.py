"""Task repository contract and its in-memory backend.

Terms used in this file:
- Repository: the object that owns every stored task and hands out copies.
- Offset listing: "page N of size P", ordered by id.
- Cursor listing: "the next L tasks after position (created_at, id)".
- Index: a sorted list of (created_at, id) keys kept next to the tasks so
  cursor listing can binary-search its resume point.
"""

from __future__ import annotations

import bisect
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol

from .errors import TaskNotFoundError
from .locks import ReadWriteLock
from .models import Cursor, Task, TaskStatus, as_utc

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


class TaskRepository(Protocol):
    def create(
        self,
        *,
        title: str,
        description: str = "",
        status: TaskStatus = TaskStatus.PENDING,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> Task: ...

    def get(self, task_id: int) -> Task: ...

    def update(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        status: TaskStatus | None = None,
    ) -> Task: ...

    def delete(self, task_id: int) -> None: ...

    def count(self, status: TaskStatus | None = None) -> int: ...

    def list_offset(
        self,
        status: TaskStatus | None,
        page: int,
        page_size: int,
    ) -> tuple[list[Task], int]: ...

    def list_cursor(
        self,
        after: Cursor | None,
        limit: int,
        status: TaskStatus | None = None,
    ) -> tuple[list[Task], Cursor | None]: ...


class InMemoryTaskRepository:
    """Thread-safe, process-local task store.

    Mutations hold the write side of a reader/writer lock; lookups and
    listings hold the read side, so they run concurrently with each other
    and always see a consistent snapshot.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or utc_now
        self._lock = ReadWriteLock()
        self._seq = 0
        # Ids are assigned in increasing order and dicts keep insertion
        # order, so iterating this mapping yields tasks sorted by id.
        self._tasks: dict[int, Task] = {}
        self._index: list[tuple[datetime, int]] = []

    def create(
        self,
        *,
        title: str,
        description: str = "",
        status: TaskStatus = TaskStatus.PENDING,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> Task:
        """Store a new task under the next id and return a copy of it."""
        with self._lock.write():
            created = as_utc(created_at or self._clock())
            updated = max(as_utc(updated_at or created), created)
            self._seq += 1
            task = Task(
                id=self._seq,
                title=title,
                description=description,
                status=status,
                created_at=created,
                updated_at=updated,
            )
            self._tasks[task.id] = task
            bisect.insort(self._index, task.sort_key())
            return task.model_copy()

    def get(self, task_id: int) -> Task:
        with self._lock.read():
            task = self._tasks.get(task_id)
            if task is None:
                raise TaskNotFoundError(task_id)
            return task.model_copy()

    def update(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        status: TaskStatus | None = None,
    ) -> Task:
        """Overwrite the given fields and stamp updated_at in one step."""
        with self._lock.write():
            current = self._tasks.get(task_id)
            if current is None:
                raise TaskNotFoundError(task_id)

            changes: dict[str, object] = {}
            if title is not None:
                changes["title"] = title
            if description is not None:
                changes["description"] = description
            if status is not None:
                changes["status"] = status
            # Never move updated_at backwards, even if the clock does.
            changes["updated_at"] = max(as_utc(self._clock()), current.updated_at)

            updated = current.model_copy(update=changes)
            self._tasks[task_id] = updated
            return updated.model_copy()

    def delete(self, task_id: int) -> None:
        with self._lock.write():
            task = self._tasks.pop(task_id, None)
            if task is None:
                raise TaskNotFoundError(task_id)
            position = bisect.bisect_left(self._index, task.sort_key())
            del self._index[position]

    def count(self, status: TaskStatus | None = None) -> int:
        with self._lock.read():
            if status is None:
                return len(self._tasks)
            return sum(1 for task in self._tasks.values() if task.status == status)

    def list_offset(
        self,
        status: TaskStatus | None,
        page: int,
        page_size: int,
    ) -> tuple[list[Task], int]:
        """Return one id-ordered page plus the total number of matches.

        Callers normalize page and page_size; a page past the end is empty.
        """
        with self._lock.read():
            matches = [
                task
                for task in self._tasks.values()
                if status is None or task.status == status
            ]
        start = (page - 1) * page_size
        items = matches[start : start + page_size]
        return [task.model_copy() for task in items], len(matches)

    def list_cursor(
        self,
        after: Cursor | None,
        limit: int,
        status: TaskStatus | None = None,
    ) -> tuple[list[Task], Cursor | None]:
        """Return up to ``limit`` tasks strictly after ``after``.

        Ordering is (created_at, id) ascending. The returned cursor points at
        the last item and is only set when more matches remain.
        """
        if limit <= 0:
            limit = 10
        with self._lock.read():
            start = 0
            if after is not None:
                start = bisect.bisect_right(self._index, after.sort_key())
            items: list[Task] = []
            has_more = False
            for position in range(start, len(self._index)):
                task = self._tasks[self._index[position][1]]
                if status is not None and task.status != status:
                    continue
                if len(items) == limit:
                    has_more = True
                    break
                items.append(task.model_copy())

        next_cursor = Cursor.after(items[-1]) if has_more else None
        return items, next_cursor
