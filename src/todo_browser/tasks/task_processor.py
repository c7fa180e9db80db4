# src/todo_browser/tasks/task_processor.py

"""
Query/aggregation helpers over task collections.

All functions are pure: they never mutate their inputs and return new
lists/dicts/sets. Passing a non-iterable (e.g. None) raises TypeError, except
for unique_tags() which returns an empty set.
"""

from __future__ import annotations

import random
import re
import time
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Any

from .task_models import DAY_SECONDS, Task, coerce_id, display_text

PRIORITY_ID_MODULUS = 10
PRIORITY_LABEL = "high"
PRIORITY_DUE_IN_SECONDS = 2 * DAY_SECONDS
MIN_TAG_LENGTH = 6

_WORD_SPLIT = re.compile(r"\W+", re.ASCII)


@dataclass(frozen=True, slots=True)
class TaskStatistics:
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    overdue_tasks: int
    unique_users: int

    def as_dict(self) -> dict[str, int]:
        """camelCase keys, as the JSON front-ends expect."""
        d = asdict(self)
        return {
            "totalTasks": d["total_tasks"],
            "completedTasks": d["completed_tasks"],
            "pendingTasks": d["pending_tasks"],
            "overdueTasks": d["overdue_tasks"],
            "uniqueUsers": d["unique_users"],
        }


def to_task_instances(
    records: Iterable[Mapping[str, Any]],
    *,
    as_priority: bool = True,
    now_ts: float | None = None,
    rng: random.Random | None = None,
) -> list[Task]:
    """
    Turn raw todos into Task objects.

    With as_priority, every todo whose id is a multiple of 10 becomes a "high"
    priority task due two days from now.
    """
    now_ts = time.time() if now_ts is None else now_ts
    out: list[Task] = []
    for record in records:
        task_id = record.get("id")
        is_int_id = isinstance(task_id, int) and not isinstance(task_id, bool)
        if as_priority and is_int_id and task_id % PRIORITY_ID_MODULUS == 0:
            out.append(
                Task.priority_from_record(
                    record,
                    priority=PRIORITY_LABEL,
                    due_at=now_ts + PRIORITY_DUE_IN_SECONDS,
                    now_ts=now_ts,
                    rng=rng,
                )
            )
        else:
            out.append(Task.from_record(record, now_ts=now_ts, rng=rng))
    return out


def filter_by_status(tasks: Iterable[Task], status: str = "Completed") -> list[Task]:
    return [t for t in tasks if t.status().startswith(status)]


def filter_by_user(tasks: Iterable[Task], user_id: Any) -> list[Task]:
    wanted = coerce_id(user_id)
    return [t for t in tasks if wanted is not None and t.user_id == wanted]


def search_tasks(tasks: Iterable[Task], *keywords: Any) -> list[Task]:
    """AND search: every keyword must appear in the title (case-insensitive)."""
    needles = [str(k).lower() for k in keywords]
    return [t for t in tasks if all(n in str(t.title).lower() for n in needles)]


def group_by_user(tasks: Iterable[Task]) -> dict[int | None, list[Task]]:
    groups: dict[int | None, list[Task]] = {}
    for task in tasks:
        groups.setdefault(task.user_id, []).append(task)
    return groups


def unique_tags(tasks: Any) -> set[str]:
    """Lowercase title words of 6+ characters. Lenient: bad input gives an empty set."""
    tags: set[str] = set()
    if not isinstance(tasks, (list, tuple)):
        return tags

    for task in tasks:
        if isinstance(task, Mapping):
            raw = task.get("title")
        else:
            raw = getattr(task, "title", None)
        title = display_text(raw)
        if not title:
            continue
        for word in _WORD_SPLIT.split(title):
            if len(word) >= MIN_TAG_LENGTH:
                tags.add(word.lower())
    return tags


def calculate_statistics(tasks: Iterable[Task], now_ts: float | None = None) -> TaskStatistics:
    items = list(tasks)
    now_ts = time.time() if now_ts is None else now_ts

    total = len(items)
    completed = sum(1 for t in items if t.completed)
    overdue = sum(1 for t in items if t.is_overdue(now_ts))
    users = {t.user_id for t in items}

    return TaskStatistics(
        total_tasks=total,
        completed_tasks=completed,
        pending_tasks=total - completed,
        overdue_tasks=overdue,
        unique_users=len(users),
    )
