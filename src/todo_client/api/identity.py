# src/todo_client/api/identity.py

from __future__ import annotations

import httpx

from ..core.errors import ErrorKind, RequestFailed
from ..core.models import User
from .base import ServiceClient


class IdentityClient(ServiceClient):
    """Client for the identity service (accounts + bearer tokens)."""

    service_name = "identity"

    def __init__(
        self,
        base_url: str,
        *,
        me_path: str = "",
        timeout_seconds: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout_seconds=timeout_seconds, transport=transport)
        self._me_path = me_path

    async def login(self, username: str, password: str) -> str:
        resp = await self._request("POST", "/login", json={"username": username, "password": password})
        data = self._json(resp)
        token = data.get("access_token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise RequestFailed(ErrorKind.SERVER, "login response has no access_token", status=resp.status_code)
        return token

    async def register(self, username: str, email: str, password: str) -> None:
        # Response body is not used.
        await self._request(
            "POST",
            "/register",
            json={"username": username, "email": email, "password": password},
        )

    async def fetch_current_user(self, token: str) -> User | None:
        if not self._me_path:
            return None
        resp = await self._request("GET", self._me_path, token=token)
        try:
            return User.from_payload(self._json(resp))
        except ValueError as e:
            raise RequestFailed(ErrorKind.SERVER, str(e), status=resp.status_code) from e
