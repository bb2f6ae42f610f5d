# src/todo_client/core/state.py

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from .errors import Notice
from .models import AuthForm, Task, TodoDraft, User
from .ports import KeyValueStore

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


@dataclass
class AppState:
    """
    Everything the view renders from, held in one injectable object.

    Controllers are the only writers. The view reads it.
    """

    # Store Settings on the state for easy access in other modules.
    settings: Any
    store: KeyValueStore

    user: User | None = None
    token: str | None = None
    todos: list[Task] = field(default_factory=list)

    draft: TodoDraft = field(default_factory=TodoDraft)
    form: AuthForm = field(default_factory=AuthForm)

    # Operation names currently awaiting a response.
    busy: set[str] = field(default_factory=set)
    notices: list[Notice] = field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and bool(self.token)

    def is_busy(self, op: str) -> bool:
        return op in self.busy

    @contextlib.contextmanager
    def busy_guard(self, op: str) -> Iterator[bool]:
        """
        Mark `op` busy for the duration of the block.

        Yields False (and leaves the flag alone) when `op` is already in
        flight, so callers can drop the duplicate submission.
        """
        if op in self.busy:
            logger.debug("Operation %s already in flight; ignoring re-submission.", op)
            yield False
            return
        self.busy.add(op)
        try:
            yield True
        finally:
            self.busy.discard(op)

    def activate(self, user: User, token: str) -> None:
        self.user = user
        self.token = token

    def clear_session(self) -> None:
        self.user = None
        self.token = None
        self.todos = []

    def index_of(self, todo_id: int) -> int | None:
        for i, t in enumerate(self.todos):
            if t.id == todo_id:
                return i
        return None
