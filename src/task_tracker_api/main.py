"""FastAPI application wiring for the task tracker.

Terms used in this file:
- FastAPI app: the main web application object.
- Route/path operation: a function exposed over HTTP (for example, GET /health).
- response_model: Pydantic model used to validate/shape API responses.
- app.state: a place to store shared runtime objects (settings, service).
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import FastAPI, HTTPException, Path, Query, Request, Response

from .app.errors import InvalidCursorError, TaskNotFoundError
from .app.models import (
    CreateTaskRequest,
    CursorPage,
    OffsetPage,
    Task,
    TaskStatus,
    UpdateTaskRequest,
)
from .app.service import TaskService
from .app.storage import InMemoryTaskRepository, TaskRepository
from .config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

TaskId = Annotated[int, Path(gt=0, description="Positive task id")]


def create_app(
    *,
    storage: TaskRepository | None = None,
    settings_override: Settings | None = None,
) -> FastAPI:
    """Application factory.

    Each call builds a fresh app with its own repository unless one is
    injected, which keeps tests isolated from each other.
    """
    settings = settings_override or get_settings()
    repository = storage if storage is not None else InMemoryTaskRepository()
    service = TaskService(
        repository,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )

    app = FastAPI(title=settings.app_name, version="0.1.0")
    # Shared objects live in app.state so route handlers can reuse them.
    app.state.settings = settings
    app.state.service = service

    def _service(request: Request) -> TaskService:
        return request.app.state.service

    # Multiple health endpoints map to the same function for compatibility with
    # different probes/load balancers.
    @app.get("/health")
    @app.get("/healthz")
    @app.get("/live")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/tasks", response_model=Task, status_code=201)
    def create_task(payload: CreateTaskRequest, request: Request) -> Task:
        task = _service(request).create(payload)
        logger.info("task_api event=created task_id=%s status=%s", task.id, task.status.value)
        return task

    @app.get("/tasks", response_model=OffsetPage)
    def list_tasks(
        request: Request,
        status: TaskStatus | None = None,
        page: int = 1,
        page_size: Annotated[int | None, Query(alias="pageSize")] = None,
    ) -> OffsetPage:
        return _service(request).list_offset(status=status, page=page, page_size=page_size)

    # Declared before /tasks/{task_id} so "cursor" is not parsed as an id.
    @app.get("/tasks/cursor", response_model=CursorPage)
    def list_tasks_by_cursor(
        request: Request,
        status: TaskStatus | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> CursorPage:
        try:
            return _service(request).list_cursor(status=status, cursor=cursor, limit=limit)
        except InvalidCursorError as exc:
            logger.info("task_api event=invalid_cursor cursor=%r", cursor)
            raise HTTPException(status_code=400, detail="Invalid cursor") from exc

    @app.get("/tasks/{task_id}", response_model=Task)
    def get_task(task_id: TaskId, request: Request) -> Task:
        try:
            return _service(request).get(task_id)
        except TaskNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Task not found") from exc

    @app.put("/tasks/{task_id}", response_model=Task)
    @app.patch("/tasks/{task_id}", response_model=Task)
    def update_task(task_id: TaskId, payload: UpdateTaskRequest, request: Request) -> Task:
        try:
            task = _service(request).update(task_id, payload)
        except TaskNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Task not found") from exc
        logger.info(
            "task_api event=updated task_id=%s fields=%s",
            task_id,
            sorted(payload.changes()),
        )
        return task

    @app.delete("/tasks/{task_id}", status_code=204, response_class=Response)
    def delete_task(task_id: TaskId, request: Request) -> Response:
        try:
            _service(request).delete(task_id)
        except TaskNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Task not found") from exc
        logger.info("task_api event=deleted task_id=%s", task_id)
        return Response(status_code=204)

    return app


# Module-level app for `uvicorn task_tracker_api.main:app`.
app = create_app()
