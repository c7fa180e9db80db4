# tests/fakes.py

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any

from todo_browser.core.ports import RawRecord


class FixedDaysRandom(random.Random):
    """RNG whose randint() always returns the same number of days (pins task backdating)."""

    def __init__(self, days: int = 0) -> None:
        super().__init__(0)
        self.days = days

    def randint(self, a: int, b: int) -> int:
        return self.days


@dataclass(slots=True)
class FakeTodoSource:
    """
    In-memory TodoSource for manager/CLI tests.

    - Captures calls (endpoint, use_cache) for assertions
    - Raises `error` from the endpoint named in `fail_on`
    """

    users: list[RawRecord] = field(default_factory=list)
    todos: list[RawRecord] = field(default_factory=list)
    error: Exception | None = None
    fail_on: str = "todos"
    calls: list[tuple[str, bool]] = field(default_factory=list)
    cache_clears: int = 0

    async def fetch_users(self, *, use_cache: bool = True) -> list[RawRecord]:
        self.calls.append(("users", use_cache))
        self._maybe_fail("users")
        return [dict(u) for u in self.users]

    async def fetch_todos(self, *, use_cache: bool = True) -> list[RawRecord]:
        self.calls.append(("todos", use_cache))
        self._maybe_fail("todos")
        return [dict(t) for t in self.todos]

    def clear_cache(self) -> None:
        self.cache_clears += 1

    def _maybe_fail(self, endpoint: str) -> None:
        if self.error is not None and self.fail_on == endpoint:
            raise self.error


def todo(id: Any, user_id: Any, title: str = "task", completed: bool = False) -> RawRecord:
    return {"id": id, "userId": user_id, "title": title, "completed": completed}
