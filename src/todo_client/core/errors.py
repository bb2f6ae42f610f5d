# src/todo_client/core/errors.py

"""
Error kinds shared by the HTTP clients, the controllers and the view.

Every remote failure ends up as a RequestFailed with one of four kinds.
Controllers never inspect httpx exceptions directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    TRANSPORT = "transport"
    UNAUTHORIZED = "unauthorized"
    VALIDATION = "validation"
    SERVER = "server"

    @classmethod
    def for_status(cls, status: int) -> ErrorKind:
        if status in (401, 403):
            return cls.UNAUTHORIZED
        if 400 <= status < 500:
            return cls.VALIDATION
        return cls.SERVER


class RequestFailed(Exception):
    def __init__(self, kind: ErrorKind, detail: str = "", *, status: int | None = None) -> None:
        self.kind = kind
        self.detail = detail
        self.status = status
        super().__init__(detail or kind.value)

    def __repr__(self) -> str:
        return f"RequestFailed(kind={self.kind.value!r}, status={self.status!r}, detail={self.detail!r})"


class NoticeLevel(StrEnum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notice:
    """One user-visible notification (the console's equivalent of an alert)."""

    level: NoticeLevel
    action: str
    kind: ErrorKind | None = None
    detail: str = ""

    @classmethod
    def info(cls, action: str) -> Notice:
        return cls(level=NoticeLevel.INFO, action=action)

    @classmethod
    def failure(cls, action: str, err: RequestFailed) -> Notice:
        return cls(level=NoticeLevel.ERROR, action=action, kind=err.kind, detail=err.detail)

    def text(self) -> str:
        if self.kind is None:
            return self.action
        if self.detail:
            return f"{self.action} [{self.kind.value}]: {self.detail}"
        return f"{self.action} [{self.kind.value}]"
