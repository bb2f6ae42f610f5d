# tests/test_session_controller.py

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from todo_client.api.identity import IdentityClient
from todo_client.api.todo_service import TodoServiceClient
from todo_client.cli.bootstrap import create_app
from todo_client.core.errors import ErrorKind, NoticeLevel
from todo_client.core.models import FormMode, User
from todo_client.core.state import TOKEN_KEY, USER_KEY

from .fakes import FakeService, task_payload


def _persist(store, token: str | None, user: str | None) -> None:
    if token is not None:
        store.set(TOKEN_KEY, token)
    if user is not None:
        store.set(USER_KEY, user)


@pytest.mark.asyncio
async def test_restore_with_complete_session_fetches_todos_once(app, store, todo_service) -> None:
    _persist(store, "tok-saved", json.dumps({"id": 3, "username": "bob", "email": "bob@corp.test"}))
    todo_service.on("GET", "/todos", body=[task_payload(1, "Existing")])

    assert await app.session.restore() is True

    assert app.state.is_authenticated
    assert app.state.user == User(id=3, username="bob", email="bob@corp.test")
    assert app.state.token == "tok-saved"
    calls = todo_service.calls("GET", "/todos")
    assert len(calls) == 1
    assert calls[0].headers["Authorization"] == "Bearer tok-saved"
    assert [t.title for t in app.state.todos] == ["Existing"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("token", "user"),
    [
        (None, None),
        ("tok", None),
        (None, json.dumps({"id": 1, "username": "a", "email": "a@example.com"})),
    ],
)
async def test_restore_with_missing_value_stays_logged_out(app, store, todo_service, token, user) -> None:
    _persist(store, token, user)

    assert await app.session.restore() is False

    assert not app.state.is_authenticated
    assert app.state.user is None
    assert todo_service.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("raw_user", ["{not json", "[1, 2]", json.dumps({"username": "no-id"})])
async def test_restore_with_unreadable_user_is_silent(app, store, todo_service, notifier, raw_user) -> None:
    _persist(store, "tok", raw_user)

    assert await app.session.restore() is False

    assert not app.state.is_authenticated
    assert todo_service.requests == []
    assert notifier.notices == []


@pytest.mark.asyncio
async def test_login_synthesizes_user_persists_and_fetches(app, store, identity_service, todo_service) -> None:
    identity_service.on("POST", "/login", body={"access_token": "tok1", "token_type": "bearer"})
    todo_service.on("GET", "/todos", body=[])

    assert await app.session.login("alice", "x") is True

    login_call = identity_service.calls("POST", "/login")[0]
    assert FakeService.body(login_call) == {"username": "alice", "password": "x"}
    assert "Authorization" not in login_call.headers

    assert app.state.user == User(id=1, username="alice", email="alice@example.com")
    assert app.state.token == "tok1"
    assert store.get(TOKEN_KEY) == "tok1"
    assert json.loads(store.get(USER_KEY) or "") == {"id": 1, "username": "alice", "email": "alice@example.com"}

    fetches = todo_service.calls("GET", "/todos")
    assert len(fetches) == 1
    assert fetches[0].headers["Authorization"] == "Bearer tok1"
    assert app.state.form.password == ""


@pytest.mark.asyncio
async def test_login_uses_current_user_endpoint_when_configured(
    settings, store, identity_service, todo_service, notifier
) -> None:
    app = create_app(
        notifier,
        settings=settings,
        store=store,
        identity=IdentityClient(settings.user_service_url, me_path="/me", transport=identity_service.transport()),
        todo_service=TodoServiceClient(settings.todo_service_url, transport=todo_service.transport()),
    )
    identity_service.on("POST", "/login", body={"access_token": "tok2"})
    identity_service.on("GET", "/me", body={"id": 42, "username": "alice", "email": "alice@corp.test"})
    todo_service.on("GET", "/todos", body=[])

    assert await app.session.login("alice", "pw") is True

    assert app.state.user == User(id=42, username="alice", email="alice@corp.test")
    assert identity_service.calls("GET", "/me")[0].headers["Authorization"] == "Bearer tok2"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("route", "kind"),
    [
        ({"status": 401, "body": {"detail": "Invalid credentials"}}, ErrorKind.UNAUTHORIZED),
        ({"status": 500, "body": "boom"}, ErrorKind.SERVER),
        ({"error": httpx.ConnectError("connection refused")}, ErrorKind.TRANSPORT),
        ({"body": {"token": "wrong-field"}}, ErrorKind.SERVER),
    ],
)
async def test_login_failure_notifies_and_keeps_state(
    app, store, identity_service, todo_service, notifier, route, kind
) -> None:
    identity_service.on("POST", "/login", **route)

    assert await app.session.login("alice", "bad") is False

    assert not app.state.is_authenticated
    assert store.get(TOKEN_KEY) is None
    assert store.get(USER_KEY) is None
    assert todo_service.requests == []
    assert notifier.actions == ["Login failed"]
    assert notifier.notices[0].level == NoticeLevel.ERROR
    assert notifier.notices[0].kind == kind


@pytest.mark.asyncio
async def test_register_success_switches_to_login_without_session(app, identity_service, notifier) -> None:
    identity_service.on("POST", "/register", status=201, body={"id": 9, "username": "carol"})
    app.session.switch_mode(FormMode.REGISTER)

    assert await app.session.register("carol", "carol@example.com", "pw") is True

    body = FakeService.body(identity_service.calls("POST", "/register")[0])
    assert body == {"username": "carol", "email": "carol@example.com", "password": "pw"}
    assert app.state.form.mode == FormMode.LOGIN
    assert not app.state.is_authenticated
    assert notifier.notices[0].level == NoticeLevel.INFO
    assert notifier.notices[0].text() == "Registration successful! Please login."


@pytest.mark.asyncio
async def test_register_failure_keeps_register_form(app, identity_service, notifier) -> None:
    identity_service.on("POST", "/register", status=400, body={"detail": "Username already registered"})
    app.session.switch_mode(FormMode.REGISTER)

    assert await app.session.register("carol", "carol@example.com", "pw") is False

    assert app.state.form.mode == FormMode.REGISTER
    assert notifier.actions == ["Registration failed"]
    assert notifier.notices[0].kind == ErrorKind.VALIDATION
    assert notifier.notices[0].detail == "Username already registered"


@pytest.mark.asyncio
async def test_logout_clears_everything_and_is_idempotent(app, store, identity_service, todo_service) -> None:
    identity_service.on("POST", "/login", body={"access_token": "tok1"})
    todo_service.on("GET", "/todos", body=[task_payload(1, "a"), task_payload(2, "b")])
    await app.session.login("alice", "x")
    assert len(app.state.todos) == 2

    app.session.logout()

    assert app.state.user is None
    assert app.state.token is None
    assert app.state.todos == []
    assert store.get(TOKEN_KEY) is None
    assert store.get(USER_KEY) is None

    app.session.logout()
    assert not app.state.is_authenticated
    assert store.keys() == []


@pytest.mark.asyncio
async def test_login_in_flight_rejects_resubmission(app, identity_service, todo_service) -> None:
    identity_service.on("POST", "/login", body={"access_token": "tok1"}, delay=0.05)
    todo_service.on("GET", "/todos", body=[])

    first, second = await asyncio.gather(
        app.session.login("alice", "x"),
        app.session.login("alice", "x"),
    )

    assert (first, second) == (True, False)
    assert len(identity_service.calls("POST", "/login")) == 1
    assert app.state.busy == set()
