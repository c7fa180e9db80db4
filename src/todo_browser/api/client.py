# src/todo_browser/api/client.py

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ..config import DEFAULT_API_BASE_URL
from ..core.ports import RawRecord
from ..errors import HttpStatusError, NetworkError, PayloadDecodeError

logger = logging.getLogger(__name__)


class ResponseCache:
    """
    Decoded JSON payloads keyed by request path.

    Entries never expire; clear() is the only way to drop them. Create one per
    process (see cli.bootstrap) and hand it to APIClient.
    """

    def __init__(self) -> None:
        self._store: dict[str, Any] = {}

    def get(self, key: str) -> Any:
        return self._store.get(key)

    def set(self, key: str, value: Any) -> None:
        self._store[key] = value

    def has(self, key: str) -> bool:
        return key in self._store

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


class APIClient:
    """
    Async JSONPlaceholder client.

    Each request opens a short-lived httpx.AsyncClient, so the object can be
    used from any event loop (asyncio.run in the CLI, pytest-asyncio in tests).
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout_seconds: float = 10.0,
        cache: ResponseCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.cache = cache if cache is not None else ResponseCache()
        self._transport = transport

    @classmethod
    def from_settings(cls, settings, *, cache: ResponseCache | None = None) -> APIClient:
        return cls(
            base_url=str(getattr(settings, "api_base_url", DEFAULT_API_BASE_URL)),
            timeout_seconds=float(getattr(settings, "http_timeout_seconds", 10.0)),
            cache=cache,
        )

    async def _get_json(self, path: str, *, use_cache: bool = True) -> Any:
        if use_cache and self.cache.has(path):
            logger.debug("Cache hit: %s", path)
            return self.cache.get(path)

        url = f"{self.base_url}/{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise NetworkError(f"Network error fetching {path}: {e}", path=path) from e

        if not response.is_success:
            raise HttpStatusError(path, response.status_code)

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise PayloadDecodeError(f"Invalid JSON for {path}: {e}", path=path) from e

        if use_cache:
            self.cache.set(path, data)
        logger.debug("Fetched %s (status=%s)", path, response.status_code)
        return data

    async def fetch_users(self, *, use_cache: bool = True) -> list[RawRecord]:
        return await self._get_json("users", use_cache=use_cache)

    async def fetch_todos(self, *, use_cache: bool = True) -> list[RawRecord]:
        return await self._get_json("todos", use_cache=use_cache)

    async def fetch_user_todos(self, user_id: Any, *, use_cache: bool = True) -> list[RawRecord]:
        return await self._get_json(f"todos?userId={user_id}", use_cache=use_cache)

    def clear_cache(self) -> None:
        self.cache.clear()
