"""HTTP client for the wellness sessions API."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from wellness_sessions.api.session_models import PublicSessionOut, SessionOut
from wellness_sessions.config import Settings

T = TypeVar("T")

UNEXPECTED_RESPONSE = "Unexpected response from server"


@dataclass
class AuthContext:
    """Holds the caller's access token for API requests."""

    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def headers(self) -> dict[str, str]:
        if self.token is None:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def clear(self) -> None:
        """Forget the stored access token."""
        self.token = None


class ApiError(Exception):
    """Raised when the API answers with an error status or a malformed body."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class SessionsClient(Protocol):
    """Interface for the sessions API used by editors and views."""

    async def list_public(self) -> list[PublicSessionOut]:
        """Return published sessions."""

    async def list_mine(self) -> list[SessionOut]:
        """Return the caller's sessions."""

    async def get_mine(self, session_id: str) -> SessionOut:
        """Return one of the caller's sessions."""

    async def save_draft(
        self,
        title: str,
        tags: str,
        content_url: str,
        session_id: str | None = None,
    ) -> SessionOut:
        """Create or update a draft."""

    async def publish(self, session_id: str) -> SessionOut:
        """Publish a session."""

    async def delete(self, session_id: str) -> None:
        """Delete a session."""


@dataclass
class HttpxSessionsClient(SessionsClient):
    """Sessions API client implemented with httpx."""

    base_url: str
    auth: AuthContext
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, base_url: str, auth: AuthContext | None = None
    ) -> "HttpxSessionsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            auth=auth or AuthContext(),
            http_client=httpx.AsyncClient(),
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, auth: AuthContext | None = None
    ) -> "HttpxSessionsClient":
        """Create a client pointed at the configured API base URL."""
        return cls.create(settings.api_base_url, auth)

    async def list_public(self) -> list[PublicSessionOut]:
        """Fetch published sessions."""
        data = await self._request("GET", "/sessions")
        return _parse(
            data, lambda d: [PublicSessionOut.model_validate(i) for i in d["sessions"]]
        )

    async def list_mine(self) -> list[SessionOut]:
        """Fetch the caller's drafts and published sessions."""
        data = await self._request("GET", "/sessions/mine")
        return _parse(
            data, lambda d: [SessionOut.model_validate(i) for i in d["sessions"]]
        )

    async def get_mine(self, session_id: str) -> SessionOut:
        """Fetch a single session owned by the caller."""
        data = await self._request("GET", _mine_path(session_id))
        return _parse(data, _session)

    async def save_draft(
        self,
        title: str,
        tags: str,
        content_url: str,
        session_id: str | None = None,
    ) -> SessionOut:
        """Save the full form snapshot as a draft."""
        payload: dict[str, object] = {
            "title": title,
            "tags": tags,
            "content_url": content_url,
        }
        if session_id is not None:
            payload["sessionId"] = session_id
        data = await self._request("POST", "/sessions/draft", json=payload)
        return _parse(data, _session)

    async def publish(self, session_id: str) -> SessionOut:
        """Publish a session owned by the caller."""
        data = await self._request(
            "POST", "/sessions/publish", json={"sessionId": session_id}
        )
        return _parse(data, _session)

    async def delete(self, session_id: str) -> None:
        """Delete a session owned by the caller."""
        await self._request("DELETE", _mine_path(session_id))

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def _request(
        self, method: str, path: str, json: dict[str, object] | None = None
    ) -> Any:
        response = await self.http_client.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            headers=self.auth.headers(),
            timeout=10,
        )
        if response.status_code == httpx.codes.UNAUTHORIZED:
            self.auth.clear()
        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(httpx.codes.BAD_GATEWAY, UNEXPECTED_RESPONSE) from exc


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase


def _mine_path(session_id: str) -> str:
    return f"/sessions/mine/{quote(session_id, safe='')}"


def _session(data: Any) -> SessionOut:
    return SessionOut.model_validate(data["session"])


def _parse(data: Any, build: Callable[[Any], T]) -> T:
    """Build response models, reporting malformed bodies as API errors."""
    try:
        return build(data)
    except (KeyError, TypeError, ValidationError) as exc:
        raise ApiError(httpx.codes.BAD_GATEWAY, UNEXPECTED_RESPONSE) from exc
