# src/todo_client/api/todo_service.py

from __future__ import annotations

from typing import Any

import httpx

from ..core.errors import ErrorKind, RequestFailed
from ..core.models import Task
from .base import ServiceClient


class TodoServiceClient(ServiceClient):
    """Client for the task-storage service. Every call is bearer-authenticated."""

    service_name = "todos"

    async def list_todos(self, token: str) -> list[Task]:
        resp = await self._request("GET", "/todos", token=token)
        data = self._json(resp)
        if not isinstance(data, list):
            raise RequestFailed(ErrorKind.SERVER, "todo list response is not an array", status=resp.status_code)
        return [self._task(item, resp) for item in data]

    async def create_todo(self, token: str, *, title: str, description: str) -> Task:
        resp = await self._request(
            "POST",
            "/todos",
            token=token,
            json={"title": title, "description": description},
        )
        return self._task(self._json(resp), resp)

    async def update_todo(self, token: str, todo_id: int, **fields: Any) -> Task:
        resp = await self._request("PUT", f"/todos/{int(todo_id)}", token=token, json=fields)
        return self._task(self._json(resp), resp)

    async def delete_todo(self, token: str, todo_id: int) -> None:
        await self._request("DELETE", f"/todos/{int(todo_id)}", token=token)

    @staticmethod
    def _task(payload: Any, resp: httpx.Response) -> Task:
        try:
            return Task.from_payload(payload)
        except ValueError as e:
            raise RequestFailed(ErrorKind.SERVER, str(e), status=resp.status_code) from e
