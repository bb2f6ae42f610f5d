# src/todo_client/api/base.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.errors import ErrorKind, RequestFailed

logger = logging.getLogger(__name__)


def _make_timeout(seconds: float | None) -> httpx.Timeout:
    if seconds is None:
        return httpx.Timeout(None)
    return httpx.Timeout(seconds, connect=min(seconds, 10.0))


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class ServiceClient:
    """
    Thin JSON-over-HTTP wrapper shared by the identity and task clients.

    Every failure leaves here as RequestFailed:
    - any httpx error (connect, timeout, protocol) -> transport
    - non-2xx -> kind by status code
    - 2xx with a body that is not JSON -> server
    """

    service_name = "service"

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=_make_timeout(timeout_seconds),
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: Any = None,
    ) -> httpx.Response:
        headers = bearer(token) if token else None
        try:
            resp = await self._http.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.info("%s: %s %s failed (%s)", self.service_name, method, path, e.__class__.__name__)
            raise RequestFailed(ErrorKind.TRANSPORT, str(e) or e.__class__.__name__) from e

        if resp.is_success:
            logger.debug("%s: %s %s -> %d", self.service_name, method, path, resp.status_code)
            return resp

        kind = ErrorKind.for_status(resp.status_code)
        logger.info("%s: %s %s -> %d (%s)", self.service_name, method, path, resp.status_code, kind.value)
        raise RequestFailed(kind, _error_detail(resp), status=resp.status_code)

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise RequestFailed(ErrorKind.SERVER, "response body is not JSON", status=resp.status_code) from e


def _error_detail(resp: httpx.Response) -> str:
    """FastAPI-style services put the message under "detail"; fall back to raw text."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("detail"):
        detail = body["detail"]
        return detail if isinstance(detail, str) else str(detail)[:200]
    text = resp.text.strip()
    return text[:200] if text else f"HTTP {resp.status_code}"
