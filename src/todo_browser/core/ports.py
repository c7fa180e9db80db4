# src/todo_browser/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task manager.

The manager depends on Protocols instead of the concrete HTTP client.
This keeps the data source swappable and makes testing easier.
"""

from typing import Any, Callable, Protocol

RawRecord = dict[str, Any]
# JSON objects as returned by the API: {"id": 1, "title": "...", ...}.

Clock = Callable[[], float]
# Returns "now" as epoch seconds (time.time by default).


class TodoSource(Protocol):
    """Async source of raw users and todos (JSONPlaceholder-compatible)."""

    async def fetch_users(self, *, use_cache: bool = True) -> list[RawRecord]: ...

    async def fetch_todos(self, *, use_cache: bool = True) -> list[RawRecord]: ...
