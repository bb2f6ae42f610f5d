# src/todo_client/controllers/todos.py

"""
Task list controller.

The local list is a cache of the task service: it is only ever replaced
wholesale, prepended to, patched or filtered with records the service
returned, and only after the service confirmed the request.
"""

from __future__ import annotations

import logging

from ..core.errors import ErrorKind, RequestFailed
from ..core.ports import Notifier, TodoService
from ..core.state import AppState
from .base import Controller

logger = logging.getLogger(__name__)


class TodoListController(Controller):
    def __init__(self, state: AppState, service: TodoService, notifier: Notifier) -> None:
        super().__init__(state, notifier)
        self._service = service

    def _require_token(self) -> str:
        token = self._state.token
        if not token:
            raise RequestFailed(ErrorKind.UNAUTHORIZED, "not logged in")
        return token

    async def refresh(self, token: str | None = None) -> bool:
        """Fetch the full list and replace local state. Server order is kept as-is."""
        with self._state.busy_guard("refresh") as ok:
            if not ok:
                return False
            try:
                todos = await self._service.list_todos(token or self._require_token())
            except RequestFailed as e:
                self._fail("Failed to fetch todos", e)
                return False

            self._state.todos = todos
            logger.debug("Fetched %d todos.", len(todos))
            return True

    async def create(self, title: str, description: str = "") -> bool:
        """
        Create a todo from the form input.

        An empty or whitespace-only title is rejected locally: no request, no
        state change. On failure the draft keeps what the user typed.
        """
        with self._state.busy_guard("create") as ok:
            if not ok:
                # The draft belongs to the request in flight.
                return False

            draft = self._state.draft
            draft.title = title
            draft.description = description or ""
            if not title.strip():
                return False

            try:
                todo = await self._service.create_todo(
                    self._require_token(),
                    title=draft.title,
                    description=draft.description,
                )
            except RequestFailed as e:
                self._fail("Failed to create todo", e)
                return False

            # newest first
            self._state.todos = [todo, *self._state.todos]
            draft.clear()
            logger.info("Created todo id=%s", todo.id)
            return True

    async def toggle_completion(self, todo_id: int, completed: bool) -> bool:
        with self._state.busy_guard(f"toggle:{todo_id}") as ok:
            if not ok:
                return False
            try:
                updated = await self._service.update_todo(
                    self._require_token(),
                    todo_id,
                    completed=bool(completed),
                )
            except RequestFailed as e:
                self._fail("Failed to update todo", e)
                return False

            # Replace the whole record: the server may have changed more than the flag.
            self._state.todos = [updated if t.id == todo_id else t for t in self._state.todos]
            if self._state.index_of(todo_id) is None:
                logger.debug("Updated todo id=%s is no longer in the local list.", todo_id)
            return True

    async def delete(self, todo_id: int) -> bool:
        with self._state.busy_guard(f"delete:{todo_id}") as ok:
            if not ok:
                return False
            try:
                await self._service.delete_todo(self._require_token(), todo_id)
            except RequestFailed as e:
                self._fail("Failed to delete todo", e)
                return False

            self._state.todos = [t for t in self._state.todos if t.id != todo_id]
            logger.info("Deleted todo id=%s", todo_id)
            return True
