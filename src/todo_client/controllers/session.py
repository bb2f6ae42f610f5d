# src/todo_client/controllers/session.py

from __future__ import annotations

import logging

from ..core.errors import Notice, RequestFailed
from ..core.models import FormMode, User
from ..core.ports import IdentityService, Notifier
from ..core.state import TOKEN_KEY, USER_KEY, AppState
from .base import Controller
from .todos import TodoListController

logger = logging.getLogger(__name__)


class SessionController(Controller):
    """
    Owns authentication state and its persisted copy.

    Persisted format: two strings in the key-value store, `token` and `user`
    (JSON-serialized User).
    """

    def __init__(
        self,
        state: AppState,
        identity: IdentityService,
        todos: TodoListController,
        notifier: Notifier,
    ) -> None:
        super().__init__(state, notifier)
        self._identity = identity
        self._todos = todos

    async def restore(self) -> bool:
        """Re-establish a persisted session, if there is a complete one. Runs once at startup."""
        store = self._state.store
        token = store.get(TOKEN_KEY)
        raw_user = store.get(USER_KEY)
        if not token or not raw_user:
            logger.debug("No persisted session.")
            return False

        try:
            user = User.from_json(raw_user)
        except ValueError:
            # Stay logged out; nothing to tell the user.
            logger.debug("Persisted user record is unreadable; staying logged out.", exc_info=True)
            return False

        self._state.activate(user, token)
        logger.info("Restored session for %s", user.username)
        await self._todos.refresh(token)
        return True

    async def login(self, username: str, password: str) -> bool:
        form = self._state.form
        form.username = username
        form.password = password

        with self._state.busy_guard("login") as ok:
            if not ok:
                return False
            try:
                token = await self._identity.login(username, password)
                user = await self._identity.fetch_current_user(token)
            except RequestFailed as e:
                self._fail("Login failed", e)
                return False

            if user is None:
                # No "current user" endpoint: id and email are placeholders.
                user = User.synthesize(username)

            store = self._state.store
            store.set(TOKEN_KEY, token)
            store.set(USER_KEY, user.to_json())

            self._state.activate(user, token)
            self._state.todos = []
            form.password = ""
            logger.info("Logged in as %s", user.username)

        await self._todos.refresh(token)
        return True

    async def register(self, username: str, email: str, password: str) -> bool:
        form = self._state.form
        form.username = username
        form.email = email
        form.password = password

        with self._state.busy_guard("register") as ok:
            if not ok:
                return False
            try:
                await self._identity.register(username, email, password)
            except RequestFailed as e:
                self._fail("Registration failed", e)
                return False

        logger.info("Registered account %s", username)
        self._notify(Notice.info("Registration successful! Please login."))
        self.switch_mode(FormMode.LOGIN)
        return True

    def logout(self) -> None:
        """Drop the session from memory and from the store. Safe to call when logged out."""
        was_authenticated = self._state.is_authenticated
        self._state.clear_session()
        self._state.form.password = ""

        store = self._state.store
        store.remove(TOKEN_KEY)
        store.remove(USER_KEY)

        if was_authenticated:
            logger.info("Logged out.")

    def switch_mode(self, mode: FormMode) -> None:
        self._state.form.mode = FormMode(mode)
