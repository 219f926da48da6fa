"""Authenticated VRChat API client built on a shared httpx.AsyncClient."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from vrcli.config import Config
from vrcli.errors import AuthorizationError, FetchError, TransportError
from vrcli.models import UNFILTERED, Friend, FriendStatus, Partition, User, World
from vrcli.pagination import PageFetcher

logger = logging.getLogger(__name__)

_AUTH_STATUSES = (401, 403)


class VRChatClient:
    """Executes authenticated requests. Safe to share across concurrent tasks.

    Use as an async context manager so the underlying connection pool is
    closed once the command finishes::

        async with VRChatClient(config) as client:
            friends = await client.get_friends_page(FRIENDS_ONLINE, 0, 60)
    """

    def __init__(self, config: Config, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        cookies: dict[str, str] = {}
        if config.auth_cookie:
            cookies["auth"] = config.auth_cookie
        if config.two_factor_cookie:
            cookies["twoFactorAuth"] = config.two_factor_cookie

        auth: httpx.BasicAuth | None = None
        if not config.auth_cookie and config.username and config.password:
            auth = httpx.BasicAuth(config.username, config.password)

        self._http = httpx.AsyncClient(
            base_url=config.api_base,
            headers={"User-Agent": config.user_agent, "Accept": "application/json"},
            cookies=cookies,
            auth=auth,
            timeout=config.http_timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> VRChatClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Page fetchers: (partition, offset, limit) -> page
    # ------------------------------------------------------------------

    async def get_friends_page(self, partition: Partition, offset: int, limit: int) -> list[Friend]:
        data = await self._get_json(
            "/auth/user/friends",
            params={"offset": offset, "n": limit, **partition.params},
        )
        return [Friend.model_validate(entry) for entry in _as_list(data)]

    def search_users_page(self, query: str) -> PageFetcher[User]:
        """Bind *query* and return a page fetcher over the user search endpoint."""

        async def fetch(partition: Partition, offset: int, limit: int) -> list[User]:
            data = await self._get_json(
                "/users",
                params={"search": query, "offset": offset, "n": limit, **partition.params},
            )
            return [User.model_validate(entry) for entry in _as_list(data)]

        return fetch

    def search_worlds_page(self, query: str) -> PageFetcher[World]:
        """Bind *query* and return a page fetcher over the world search endpoint."""

        async def fetch(partition: Partition, offset: int, limit: int) -> list[World]:
            data = await self._get_json(
                "/worlds",
                params={"search": query, "offset": offset, "n": limit, **partition.params},
            )
            return [World.model_validate(entry) for entry in _as_list(data)]

        return fetch

    # ------------------------------------------------------------------
    # Single records
    # ------------------------------------------------------------------

    async def get_current_user(self) -> dict[str, Any]:
        data = await self._get_json("/auth/user")
        if not isinstance(data, dict) or "id" not in data:
            # The login endpoint answers with requiresTwoFactorAuth instead of a user.
            raise AuthorizationError("Two-factor authentication required", path="/auth/user")
        return data

    async def get_user(self, user_id: str) -> User:
        return User.model_validate(await self._get_json(f"/users/{user_id}"))

    async def get_world(self, world_id: str) -> World:
        return World.model_validate(await self._get_json(f"/worlds/{world_id}"))

    async def get_user_by_name(self, username: str) -> User:
        """Look up a user by exact account username (not display name)."""
        return User.model_validate(await self._get_json(f"/users/{username}/name"))

    async def get_friend_status(self, user_id: str) -> FriendStatus:
        return FriendStatus.model_validate(await self._get_json(f"/user/{user_id}/friendStatus"))

    async def find_user_by_name(self, display_name: str) -> User:
        """Resolve a display name to a full user record via one search page."""
        candidates = await self.search_users_page(display_name)(UNFILTERED, 0, 10)
        for candidate in candidates:
            if candidate.display_name.lower() == display_name.lower():
                return await self.get_user(candidate.id)
        raise FetchError(f"User not found: {display_name}", path="/users")

    async def resolve_user(self, identifier: str, *, force_id: bool = False) -> User:
        """Fetch a user by ID, or by exact display name when *identifier* is not an ID."""
        if force_id or is_user_id(identifier):
            return await self.get_user(identifier)
        return await self.find_user_by_name(identifier)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _get_json(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        logger.debug("GET %s params=%s", path, params)
        try:
            resp = await self._http.get(path, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = f"GET {path} failed with HTTP {status}"
            if status in _AUTH_STATUSES:
                raise AuthorizationError(message, path=path, status_code=status) from e
            raise TransportError(message, path=path, status_code=status) from e
        except httpx.HTTPError as e:
            raise TransportError(f"GET {path} failed: {e}", path=path) from e

        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(f"GET {path} returned invalid JSON", path=path) from e


def _as_list(data: Any) -> list[dict[str, Any]]:
    return data if isinstance(data, list) else []


def is_user_id(value: str) -> bool:
    """Whether *value* looks like a user ID rather than a display name.

    Current IDs are ``usr_`` followed by a UUID; legacy IDs are eight
    alphanumeric characters mixing letters and digits.
    """
    if value.startswith("usr_"):
        return len(value) - len("usr_") >= 32
    if len(value) == 8 and value.isascii() and value.isalnum():
        return any(c.isdigit() for c in value) and any(c.isalpha() for c in value)
    return False
