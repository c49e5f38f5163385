"""HTTP-клиент REST API клиники на базе ``httpx``."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import httpx

from config import Settings
from core.session import SessionStore

logger = logging.getLogger(__name__)

TENANT_HEADER = "x-tenant-key"


class ApiError(Exception):
    """Ошибка обращения к API.

    ``status_code`` равен ``None`` для сетевых ошибок без ответа сервера.
    """

    def __init__(self, status_code: int | None, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class UnauthorizedError(ApiError):
    """Ответ 401: токен отсутствует или истёк."""


def _drop_none(params: Mapping[str, Any] | None) -> dict[str, Any] | None:
    if params is None:
        return None
    return {key: value for key, value in params.items() if value is not None}


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, list):
            return "; ".join(str(part) for part in message)
        if message:
            return str(message)
    return f"HTTP {response.status_code}"


class ApiClient:
    """Тонкая обёртка над ``httpx.Client``.

    Каждый запрос получает ``Authorization: Bearer`` и ``x-tenant-key`` из
    стора сессии. На 401 сессия очищается и вызывается ``on_unauthorized``
    (в потоке, где выполнялся запрос).
    """

    def __init__(
        self,
        base_url: str,
        session: SessionStore,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        on_unauthorized: Callable[[], None] | None = None,
    ) -> None:
        self.session = session
        self.on_unauthorized = on_unauthorized
        self._client = httpx.Client(
            base_url=base_url.rstrip("/") + "/",
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
            event_hooks={"request": [self._inject_auth]},
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, session: SessionStore, **kwargs: Any
    ) -> "ApiClient":
        return cls(settings.api_url, session, timeout=settings.http_timeout, **kwargs)

    def _inject_auth(self, request: httpx.Request) -> None:
        token = self.session.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        tenant_key = self.session.tenant_key
        if tenant_key:
            request.headers[TENANT_HEADER] = tenant_key

    # --- публичные методы ---------------------------------------------------
    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        url = path.lstrip("/")
        had_token = bool(self.session.token)
        try:
            response = self._client.request(
                method, url, params=_drop_none(params), json=json
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            message = _error_message(exc.response)
            if status == 401:
                logger.warning("🔒 %s %s → 401: %s", method, path, message)
                if had_token:
                    self.session.clear()
                    if self.on_unauthorized is not None:
                        self.on_unauthorized()
                raise UnauthorizedError(status, message) from exc
            if status != 404:
                logger.error("❌ %s %s → %s: %s", method, path, status, message)
            raise ApiError(status, message) from exc
        except httpx.HTTPError as exc:
            logger.error("❌ %s %s: сетевая ошибка %s", method, path, exc)
            raise ApiError(None, str(exc) or exc.__class__.__name__) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def close(self) -> None:
        self._client.close()
