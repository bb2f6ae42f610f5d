# tests/test_api_clients.py

from __future__ import annotations

import pytest

from todo_client.api.identity import IdentityClient
from todo_client.api.todo_service import TodoServiceClient
from todo_client.core.errors import ErrorKind, RequestFailed

from .fakes import FakeService


@pytest.mark.parametrize(
    ("status", "kind"),
    [
        (400, ErrorKind.VALIDATION),
        (401, ErrorKind.UNAUTHORIZED),
        (403, ErrorKind.UNAUTHORIZED),
        (404, ErrorKind.VALIDATION),
        (422, ErrorKind.VALIDATION),
        (500, ErrorKind.SERVER),
        (503, ErrorKind.SERVER),
    ],
)
def test_error_kind_for_status(status: int, kind: ErrorKind) -> None:
    assert ErrorKind.for_status(status) == kind


@pytest.mark.asyncio
async def test_list_accepts_user_id_as_owner() -> None:
    svc = FakeService()
    svc.on(
        "GET",
        "/todos",
        body=[{"id": 1, "title": "a", "completed": True, "user_id": 5, "created_at": "2024-03-04T05:06:07"}],
    )
    client = TodoServiceClient("http://todos.test", transport=svc.transport())

    todos = await client.list_todos("tok")

    assert todos[0].owner_id == 5
    assert todos[0].completed is True
    assert todos[0].created_on().isoformat() == "2024-03-04"
    await client.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["<html>oops</html>", {"items": []}, [{"title": "no id"}]])
async def test_list_with_malformed_body_is_server_error(body) -> None:
    svc = FakeService()
    svc.on("GET", "/todos", body=body)
    client = TodoServiceClient("http://todos.test", transport=svc.transport())

    with pytest.raises(RequestFailed) as excinfo:
        await client.list_todos("tok")

    assert excinfo.value.kind == ErrorKind.SERVER
    await client.aclose()


@pytest.mark.asyncio
async def test_validation_detail_is_carried() -> None:
    svc = FakeService()
    svc.on("POST", "/todos", status=422, body={"detail": [{"loc": ["body", "title"], "msg": "field required"}]})
    client = TodoServiceClient("http://todos.test", transport=svc.transport())

    with pytest.raises(RequestFailed) as excinfo:
        await client.create_todo("tok", title="x", description="")

    assert excinfo.value.kind == ErrorKind.VALIDATION
    assert excinfo.value.status == 422
    assert "field required" in excinfo.value.detail
    await client.aclose()


@pytest.mark.asyncio
async def test_fetch_current_user_disabled_without_path() -> None:
    svc = FakeService()
    client = IdentityClient("http://identity.test", transport=svc.transport())

    assert await client.fetch_current_user("tok") is None
    assert svc.requests == []
    await client.aclose()


@pytest.mark.asyncio
async def test_base_url_keeps_path_prefix() -> None:
    svc = FakeService()
    svc.on("POST", "/api/login", body={"access_token": "t"})
    client = IdentityClient("http://gateway.test/api", transport=svc.transport())

    assert await client.login("u", "p") == "t"
    assert svc.requests[0].url.path == "/api/login"
    await client.aclose()


@pytest.mark.asyncio
async def test_app_aclose_closes_http_clients_and_leaves_store_usable(app) -> None:
    app.state.store.set("token", "tok1")

    await app.aclose()

    assert app.identity._http.is_closed
    assert app.todo_service._http.is_closed
    assert app.state.store.get("token") == "tok1"
    assert not hasattr(app.state.store, "close")
