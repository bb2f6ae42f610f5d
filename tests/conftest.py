# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_client.api.identity import IdentityClient
from todo_client.api.todo_service import TodoServiceClient
from todo_client.cli.bootstrap import TodoApp, create_app
from todo_client.storage.kv_store import SqliteKeyValueStore

from .fakes import FakeService, RecordingNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="DevOps Todo App",
        log_level="DEBUG",
        user_service_url="http://identity.test",
        todo_service_url="http://todos.test",
        user_me_path="",
        http_timeout_seconds=5.0,
        confirm_alerts=False,
        data_dir=tmp_path,
        session_db_path=tmp_path / "session.sqlite3",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> SqliteKeyValueStore:
    return SqliteKeyValueStore(settings.session_db_path)


@pytest.fixture()
def identity_service() -> FakeService:
    return FakeService()


@pytest.fixture()
def todo_service() -> FakeService:
    return FakeService()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def app(
    settings: SimpleNamespace,
    store: SqliteKeyValueStore,
    identity_service: FakeService,
    todo_service: FakeService,
    notifier: RecordingNotifier,
) -> TodoApp:
    """
    TodoApp wired with recording fakes behind real HTTP clients.

    NOTE: the SQLite store and the httpx clients are real; only the network
    is replaced (httpx.MockTransport).
    """
    return create_app(
        notifier,
        settings=settings,
        store=store,
        identity=IdentityClient(
            settings.user_service_url,
            me_path=settings.user_me_path,
            transport=identity_service.transport(),
        ),
        todo_service=TodoServiceClient(settings.todo_service_url, transport=todo_service.transport()),
    )
