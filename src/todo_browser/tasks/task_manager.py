# src/todo_browser/tasks/task_manager.py

from __future__ import annotations

"""
Task manager.

Owns the in-memory collections loaded from a TodoSource and exposes the
task_processor queries as methods guarded by a "loaded" flag.

Storage is an arena: `_tasks` is the list of Task objects, `_index_by_id` maps
task id -> arena slot; load() attaches tasks to users through a user id -> slots map.
Single writer: only one load() may be in flight at a time.
"""

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from typing import Any

from ..core.ports import Clock, TodoSource
from ..errors import DataNotLoadedError, LoadError, TaskNotFoundError
from .task_models import STATUS_COMPLETED, STATUS_PENDING, Task, User, coerce_id
from .task_processor import (
    TaskStatistics,
    calculate_statistics,
    filter_by_status,
    filter_by_user,
    search_tasks,
    to_task_instances,
    unique_tags,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class LeaderboardRow:
    id: int | None
    name: str | None
    username: str | None
    completion_rate: int


class TaskManager:
    def __init__(
        self,
        api: TodoSource,
        *,
        clock: Clock = time.time,
        rng: random.Random | None = None,
    ) -> None:
        self.api = api
        self._clock = clock
        self._rng = rng
        self._users: list[User] = []
        self._tasks: list[Task] = []
        self._index_by_id: dict[int, int] = {}
        self.loaded = False

    # ---- loading ----

    async def load(self, *, use_cache: bool = True) -> bool:
        """
        Fetch users and todos concurrently and build the collections.

        Both requests must succeed. On failure nothing is committed and LoadError
        is raised with the original error chained.
        """
        try:
            users_raw, todos_raw = await asyncio.gather(
                self.api.fetch_users(use_cache=use_cache),
                self.api.fetch_todos(use_cache=use_cache),
            )

            now_ts = self._clock()
            tasks = to_task_instances(todos_raw, as_priority=True, now_ts=now_ts, rng=self._rng)
            users = [User.from_record(raw) for raw in users_raw]
        except Exception as e:
            logger.warning("Load failed: %s", e)
            raise LoadError(f"Load failed: {e}") from e

        index_by_id: dict[int, int] = {}
        slots_by_user: dict[int | None, list[int]] = {}
        for slot, task in enumerate(tasks):
            if task.id is not None:
                index_by_id.setdefault(task.id, slot)
            slots_by_user.setdefault(task.user_id, []).append(slot)

        for user in users:
            for slot in slots_by_user.get(user.id, []):
                user.add_task(tasks[slot])

        self._users = users
        self._tasks = tasks
        self._index_by_id = index_by_id
        self.loaded = True

        attached = sum(len(u.tasks) for u in users)
        logger.info(
            "Loaded %d users and %d tasks (%d attached to a user).",
            len(users),
            len(tasks),
            attached,
        )
        return True

    def ensure_loaded(self) -> None:
        if not self.loaded:
            raise DataNotLoadedError()

    # ---- queries ----

    def all_tasks(self) -> list[Task]:
        self.ensure_loaded()
        return self._tasks

    def all_users(self) -> list[User]:
        self.ensure_loaded()
        return self._users

    def tasks_by_user(self, user_id: Any) -> list[Task]:
        self.ensure_loaded()
        return filter_by_user(self._tasks, user_id)

    def completed_tasks(self) -> list[Task]:
        self.ensure_loaded()
        return filter_by_status(self._tasks, STATUS_COMPLETED)

    def pending_tasks(self) -> list[Task]:
        self.ensure_loaded()
        return filter_by_status(self._tasks, STATUS_PENDING)

    def statistics(self) -> TaskStatistics:
        self.ensure_loaded()
        return calculate_statistics(self._tasks, now_ts=self._clock())

    def search(self, *keywords: Any) -> list[Task]:
        self.ensure_loaded()
        return search_tasks(self._tasks, *keywords)

    def tags(self) -> set[str]:
        self.ensure_loaded()
        return unique_tags(self._tasks)

    def users_leaderboard(self) -> list[LeaderboardRow]:
        """Users by completion rate, highest first. Ties keep load order (sorted() is stable)."""
        self.ensure_loaded()
        rows = [
            LeaderboardRow(
                id=u.id,
                name=u.name,
                username=u.username,
                completion_rate=u.completion_rate(),
            )
            for u in self._users
        ]
        return sorted(rows, key=lambda r: r.completion_rate, reverse=True)

    def get_user_label(self, user_id: Any) -> str:
        wanted = coerce_id(user_id)
        for user in self._users:
            if wanted is not None and user.id == wanted:
                return user.label()
        return f"User {user_id}"

    # ---- mutation ----

    def toggle_task(self, task_id: Any) -> Task:
        self.ensure_loaded()
        wanted = coerce_id(task_id)
        slot = self._index_by_id.get(wanted) if wanted is not None else None
        if slot is None:
            raise TaskNotFoundError(task_id)

        task = self._tasks[slot]
        task.toggle()
        logger.debug("Toggled task_id=%s completed=%s", task.id, task.completed)
        return task
