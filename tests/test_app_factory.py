from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from task_tracker_api import server
from task_tracker_api.app.storage import InMemoryTaskRepository
from task_tracker_api.config.settings import Settings
from task_tracker_api.main import create_app


def test_create_app_uses_injected_repository() -> None:
    repository = InMemoryTaskRepository()
    app = create_app(storage=repository, settings_override=Settings())

    assert app.state.service.repository is repository
    with TestClient(app) as client:
        client.post("/tasks", json={"title": "stored"})
    assert repository.count() == 1


def test_create_app_builds_fresh_repository_per_app() -> None:
    first = create_app(settings_override=Settings())
    second = create_app(settings_override=Settings())
    assert first.state.service.repository is not second.state.service.repository


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASK_TRACKER_MAX_PAGE_SIZE", "25")
    monkeypatch.setenv("TASK_TRACKER_APP_NAME", "tracker-under-test")

    settings = Settings()
    app = create_app(settings_override=settings)

    assert settings.max_page_size == 25
    assert app.title == "tracker-under-test"
    assert app.state.service.max_page_size == 25


def test_task_events_are_logged(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="task_tracker_api.main"):
        task_id = client.post("/tasks", json={"title": "logged"}).json()["id"]
        client.delete(f"/tasks/{task_id}")

    messages = [record.getMessage() for record in caplog.records]
    assert f"task_api event=created task_id={task_id} status=Pending" in messages
    assert f"task_api event=deleted task_id={task_id}" in messages


def test_server_main_runs_uvicorn_with_cli_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, dict]] = []
    monkeypatch.setattr(
        server.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs))
    )
    monkeypatch.setattr(server, "configure_logging", lambda level: None)

    server.main(["--host", "0.0.0.0", "--port", "9000", "--log-level", "debug"])

    assert calls == [
        (
            "task_tracker_api.main:app",
            {
                "host": "0.0.0.0",
                "port": 9000,
                "reload": False,
                "log_config": None,
                "log_level": "debug",
            },
        )
    ]


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        server.configure_logging("chatty")
