# src/todo_client/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the controllers.

Controllers depend on Protocols instead of concrete implementations.
This keeps the HTTP clients, the local store and the notification surface
swappable and makes testing easier.
"""

from typing import Any, Protocol

from .errors import Notice
from .models import Task, User


class KeyValueStore(Protocol):
    """Process-local persistent string storage (survives restarts)."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class IdentityService(Protocol):
    async def login(self, username: str, password: str) -> str: ...
    async def register(self, username: str, email: str, password: str) -> None: ...

    async def fetch_current_user(self, token: str) -> User | None:
        """Return the authenticated user, or None when the service has no such endpoint."""
        ...


class TodoService(Protocol):
    async def list_todos(self, token: str) -> list[Task]: ...
    async def create_todo(self, token: str, *, title: str, description: str) -> Task: ...
    async def update_todo(self, token: str, todo_id: int, **fields: Any) -> Task: ...
    async def delete_todo(self, token: str, todo_id: int) -> None: ...


class Notifier(Protocol):
    """
    View-side port: how controllers surface a notification.

    notify() is synchronous; a console implementation may block until the
    user acknowledges an error.
    """

    def notify(self, notice: Notice) -> None: ...
