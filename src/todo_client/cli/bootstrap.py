# src/todo_client/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the HTTP clients, the session store and the notifier into the
  controllers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..api.identity import IdentityClient
from ..api.todo_service import TodoServiceClient
from ..config import Settings, get_settings
from ..controllers.session import SessionController
from ..controllers.todos import TodoListController
from ..core.ports import IdentityService, KeyValueStore, Notifier, TodoService
from ..core.state import AppState
from ..storage.kv_store import SqliteKeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class TodoApp:
    state: AppState
    session: SessionController
    todos: TodoListController
    identity: IdentityService
    todo_service: TodoService

    async def aclose(self) -> None:
        """Close HTTP clients (best-effort, no exceptions escape)."""
        for client in (self.identity, self.todo_service):
            close = getattr(client, "aclose", None)
            if close is None:
                continue
            try:
                await close()
            except Exception:
                logger.debug("HTTP client close failed.", exc_info=True)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.session_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_app(
    notifier: Notifier,
    *,
    settings: Settings | None = None,
    store: KeyValueStore | None = None,
    identity: IdentityService | None = None,
    todo_service: TodoService | None = None,
) -> TodoApp:
    """
    Build a TodoApp from the provided settings.

    Every collaborator is injectable so tests can swap in fakes; anything not
    given is built from settings. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if store is None:
        _ensure_local_dirs(settings)
        store = SqliteKeyValueStore(settings.session_db_path)

    if identity is None:
        identity = IdentityClient(
            settings.user_service_url,
            me_path=settings.user_me_path,
            timeout_seconds=settings.http_timeout_seconds,
        )
    if todo_service is None:
        todo_service = TodoServiceClient(
            settings.todo_service_url,
            timeout_seconds=settings.http_timeout_seconds,
        )

    state = AppState(settings=settings, store=store)
    todos = TodoListController(state, todo_service, notifier)
    session = SessionController(state, identity, todos, notifier)

    logger.info(
        "App wired: identity=%s todos=%s",
        getattr(settings, "user_service_url", "?"),
        getattr(settings, "todo_service_url", "?"),
    )
    return TodoApp(state=state, session=session, todos=todos, identity=identity, todo_service=todo_service)
