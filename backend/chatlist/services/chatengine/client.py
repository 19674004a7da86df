"""Async HTTP client for the ChatEngine-style chat backend."""

import logging
from typing import Any, Protocol

import httpx

from chatlist.config import get_settings
from chatlist.errors import MalformedPayload, NetworkFailure

logger = logging.getLogger(__name__)


class ChatTransport(Protocol):
    """Calls the chat list layer makes to the remote chat service."""

    async def fetch_chats(self) -> list[dict[str, Any]]: ...

    async def fetch_latest_chats(self, limit: int) -> list[dict[str, Any]]: ...

    async def search_chats(self, query: str, scope_username: str) -> list[dict[str, Any]]: ...

    async def create_chat(self, title: str) -> dict[str, Any]: ...


class ChatEngineClient:
    """
    Async client for the chat backend REST API.

    Authenticates every request with the project id and the user's
    credentials. Records are returned raw; decoding is left to the store.
    """

    def __init__(
        self,
        server_url: str | None = None,
        project_id: str | None = None,
        username: str | None = None,
        user_secret: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()

        self._server_url = (server_url or settings.server_url).rstrip("/")
        self._username = username or settings.username
        self._timeout = timeout or settings.request_timeout

        self._http_client = httpx.AsyncClient(
            base_url=self._server_url,
            timeout=httpx.Timeout(self._timeout, connect=10.0),
            headers={
                "Project-ID": project_id or settings.project_id,
                "User-Name": self._username,
                "User-Secret": user_secret or settings.user_secret,
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    @property
    def username(self) -> str:
        """User the client authenticates as."""
        return self._username

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body."""
        try:
            response = await self._http_client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Chat backend HTTP error: {method} {path} -> "
                f"{e.response.status_code} - {e.response.text}"
            )
            raise NetworkFailure(
                f"{method} {path} failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Chat backend request error: {method} {path} - {e}")
            raise NetworkFailure(f"{method} {path} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedPayload(f"{method} {path} returned a non-JSON body") from e

    async def _request_list(self, method: str, path: str, **kwargs: Any) -> list[dict[str, Any]]:
        data = await self._request(method, path, **kwargs)
        if not isinstance(data, list):
            raise MalformedPayload(f"{method} {path} returned {type(data).__name__}, expected a list")
        return data

    async def fetch_chats(self) -> list[dict[str, Any]]:
        """Fetch every chat the user belongs to."""
        return await self._request_list("GET", "/chats/")

    async def fetch_latest_chats(self, limit: int) -> list[dict[str, Any]]:
        """Fetch the ``limit`` most recently active chats."""
        return await self._request_list("GET", f"/chats/latest/{limit}/")

    async def search_chats(self, query: str, scope_username: str) -> list[dict[str, Any]]:
        """Search the chats visible to ``scope_username``."""
        return await self._request_list(
            "GET",
            "/chats/search/",
            params={"query": query, "username": scope_username},
        )

    async def create_chat(self, title: str) -> dict[str, Any]:
        """Create a chat owned by the authenticated user."""
        data = await self._request("POST", "/chats/", json={"title": title})
        if not isinstance(data, dict):
            raise MalformedPayload(f"POST /chats/ returned {type(data).__name__}, expected an object")
        logger.debug(f"POST /chats/ returned chat {data.get('id')}")
        return data

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http_client.aclose()

    async def __aenter__(self) -> "ChatEngineClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
