"""HTTP client for the Tomatodo backend.

The backend authenticates with an httpOnly ``token`` cookie set by
``/api/login`` and ``/api/register``; the underlying ``httpx.Client`` keeps
it in its cookie jar for every later call.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import ApiError, AuthenticationError
from ..settings import API_URL

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin synchronous wrapper over the backend's JSON endpoints."""

    def __init__(
        self,
        base_url: str = API_URL,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Auth ---------------------------------------------------------------
    def register(self, username: str, password: str) -> None:
        self._request(
            "POST", "/api/register", json={"username": username, "password": password}
        )
        logger.info("Registered user %s", username)

    def login(self, username: str, password: str) -> None:
        self._request(
            "POST", "/api/login", json={"username": username, "password": password}
        )
        logger.info("Logged in as %s", username)

    def logout(self) -> None:
        self._request("GET", "/api/logout")
        self._client.cookies.clear()

    def auth_check(self) -> str | None:
        """Return the signed-in username, or ``None`` when not signed in."""
        try:
            data = self._request("GET", "/api/auth-check")
        except AuthenticationError:
            return None
        if not data.get("authenticated"):
            return None
        return data.get("user", {}).get("username")

    # Preferences --------------------------------------------------------
    def get_preferences(self) -> dict[str, Any]:
        return self._request("GET", "/api/preferences")

    def put_preferences(self, payload: dict[str, Any]) -> None:
        self._request("PUT", "/api/preferences", json=payload)

    # Todos --------------------------------------------------------------
    def list_todos(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/todos")

    def add_todo(self, text: str) -> dict[str, Any]:
        return self._request("POST", "/api/todos", json={"text": text})

    def update_todo(self, todo_id: int, text: str, completed: bool) -> None:
        self._request(
            "PUT",
            f"/api/todos/{todo_id}",
            json={"text": text, "completed": completed},
        )

    def delete_todo(self, todo_id: int) -> None:
        self._request("DELETE", f"/api/todos/{todo_id}")

    # Internal -----------------------------------------------------------
    def _request(self, method: str, path: str, **kwargs) -> Any:
        response = self._client.request(method, path, **kwargs)
        if response.is_success:
            if not response.content:
                return {}
            try:
                return response.json()
            except ValueError:
                logger.debug("%s %s returned non-JSON body", method, path)
                raise ApiError(
                    response.status_code, "Unexpected response from server"
                ) from None

        message = _error_message(response)
        logger.debug("%s %s failed: %s %s", method, path, response.status_code, message)
        if response.status_code in (401, 403):
            raise AuthenticationError(response.status_code, message)
        raise ApiError(response.status_code, message)


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict):
        return str(data.get("message") or data.get("error") or data)
    return str(data)
