# src/todo_client/core/models.py

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Any


class FormMode(StrEnum):
    """Which auth form is active on the login screen."""

    LOGIN = "login"
    REGISTER = "register"


@dataclass(slots=True)
class User:
    id: int
    username: str
    email: str

    @classmethod
    def synthesize(cls, username: str) -> User:
        """
        Build the local user record after a login.

        The identity service's login response only carries a token, so id and
        email are placeholders derived from the submitted username.
        """
        return cls(id=1, username=username, email=f"{username}@example.com")

    @classmethod
    def from_payload(cls, data: Any) -> User:
        if not isinstance(data, dict):
            raise ValueError("user record must be a JSON object")
        try:
            return cls(
                id=int(data["id"]),
                username=str(data["username"]),
                email=str(data.get("email") or ""),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"malformed user record: {e}") from e

    @classmethod
    def from_json(cls, text: str) -> User:
        return cls.from_payload(json.loads(text))

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)


@dataclass(slots=True)
class Task:
    """A task record exactly as the task service returned it."""

    id: int
    title: str
    description: str | None
    completed: bool
    owner_id: int
    created_at: str

    @classmethod
    def from_payload(cls, data: Any) -> Task:
        if not isinstance(data, dict):
            raise ValueError("task record must be a JSON object")
        # The task service names the owner column user_id.
        owner = data.get("owner_id", data.get("user_id"))
        try:
            return cls(
                id=int(data["id"]),
                title=str(data["title"]),
                description=data.get("description"),
                completed=bool(data.get("completed", False)),
                owner_id=int(owner) if owner is not None else 0,
                created_at=str(data.get("created_at") or ""),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"malformed task record: {e}") from e

    def created_on(self) -> date | None:
        if not self.created_at:
            return None
        try:
            return datetime.fromisoformat(self.created_at).date()
        except ValueError:
            return None


@dataclass(slots=True)
class TodoDraft:
    title: str = ""
    description: str = ""

    def clear(self) -> None:
        self.title = ""
        self.description = ""


@dataclass(slots=True)
class AuthForm:
    mode: FormMode = FormMode.LOGIN
    username: str = ""
    email: str = ""
    password: str = ""
