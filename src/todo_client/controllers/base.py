# src/todo_client/controllers/base.py

from __future__ import annotations

import logging

from ..core.errors import Notice, RequestFailed
from ..core.ports import Notifier
from ..core.state import AppState

logger = logging.getLogger(__name__)


class Controller:
    def __init__(self, state: AppState, notifier: Notifier) -> None:
        self._state = state
        self._notifier = notifier

    @property
    def state(self) -> AppState:
        return self._state

    def _notify(self, notice: Notice) -> None:
        self._state.notices.append(notice)
        self._notifier.notify(notice)

    def _fail(self, action: str, err: RequestFailed) -> None:
        logger.warning("%s: kind=%s status=%s detail=%s", action, err.kind.value, err.status, err.detail)
        self._notify(Notice.failure(action, err))
