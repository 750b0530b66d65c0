"""Pydantic models shared across API, service, and storage.

Terms used in this file:
- Alias: the camelCase name a field uses on the wire (createdAt, pageSize).
- populate_by_name: lets callers build models with the snake_case names too.
- Cursor: the (created_at, id) position of the last task a client has seen.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    try:
        return value.astimezone(UTC)
    except OverflowError as exc:
        raise ValueError("timestamp out of range once converted to UTC") from exc


class TaskStatus(str, Enum):
    """Closed set of task lifecycle states."""

    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"


class ApiModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Task(ApiModel):
    """Canonical task record shape returned by API/storage."""

    id: int = Field(gt=0)
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return as_utc(value)

    def sort_key(self) -> tuple[datetime, int]:
        return (self.created_at, self.id)


class Cursor(BaseModel):
    """Position of the last task returned by a cursor listing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Short keys keep the encoded token compact.
    created_at: datetime = Field(alias="t")
    id: int = Field(gt=0)

    @field_validator("created_at")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return as_utc(value)

    @classmethod
    def after(cls, task: Task) -> Cursor:
        return cls(created_at=task.created_at, id=task.id)

    def sort_key(self) -> tuple[datetime, int]:
        return (self.created_at, self.id)


class CreateTaskRequest(ApiModel):
    """Request body for POST /tasks."""

    title: str
    description: str = ""
    # None means "use the default" (Pending).
    status: TaskStatus | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _null_description_is_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value


class UpdateTaskRequest(ApiModel):
    """Request body for PUT/PATCH /tasks/{id}; absent or null fields are kept."""

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("title must not be blank")
        return value

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller actually wants to overwrite."""
        return self.model_dump(exclude_none=True)


class OffsetPage(ApiModel):
    """Response body for offset (page number) listing."""

    items: list[Task] = Field(default_factory=list)
    total_count: int
    page: int
    page_size: int
    total_pages: int


class CursorPage(ApiModel):
    """Response body for cursor listing."""

    items: list[Task] = Field(default_factory=list)
    next_cursor: str | None = None
    limit: int
