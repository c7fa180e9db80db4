# src/todo_browser/tasks/task_models.py

"""
Domain entities: Task and User.

Task is a tagged variant: a plain task and a priority task share one dataclass and
differ by `kind`. Status and overdue rules are pure functions that dispatch on the
tag, so a priority task is always a valid task.
"""

from __future__ import annotations

import logging
import math
import random
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

DAY_SECONDS = 24 * 60 * 60
OVERDUE_AFTER_SECONDS = 7 * DAY_SECONDS
MAX_BACKDATE_DAYS = 13

STATUS_COMPLETED = "Completed"
STATUS_PENDING = "Pending"
DEFAULT_PRIORITY = "medium"


class TaskKind(StrEnum):
    PLAIN = "plain"
    PRIORITY = "priority"


def coerce_id(value: Any) -> int | None:
    """
    Numeric coercion for ids coming from user input or JSON.

    "1", 1 and 1.0 all map to 1. Anything that is not a whole number maps to None,
    which matches no task or user.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        num = float(str(value).strip())
    except ValueError:
        return None
    if not num.is_integer():
        return None
    return int(num)


def backdated_timestamp(now_ts: float | None = None, rng: random.Random | None = None) -> float:
    """Creation time 0..13 whole days before now (demo data variety)."""
    now_ts = time.time() if now_ts is None else now_ts
    days = (rng or random).randint(0, MAX_BACKDATE_DAYS)
    return now_ts - days * DAY_SECONDS


def parse_due_at(value: Any) -> float | None:
    """Accept epoch seconds, a datetime or an ISO-8601 string."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        logger.warning("Ignoring boolean due date: %r", value)
        return None
    if isinstance(value, (int, float)):
        if math.isnan(value):
            return None
        return float(value)
    if isinstance(value, datetime):
        return value.timestamp()
    text = str(value).strip()
    try:
        # "Z" suffix is what JS toISOString() produces.
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Unparsable due date %r, treating task as having none", value)
        return None
    if parsed.tzinfo is None and "T" not in text.upper() and " " not in text:
        # date-only forms are UTC midnight, date-times without offset stay local
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def display_text(value: Any) -> str:
    """String form of a raw field value: None -> "", true -> "true", 1.0 -> "1"."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(slots=True)
class Task:
    id: int | None
    title: str
    completed: bool
    user_id: int | None
    created_at: float

    kind: TaskKind = TaskKind.PLAIN
    priority: str | None = None
    due_at: float | None = None

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, Any],
        *,
        now_ts: float | None = None,
        rng: random.Random | None = None,
    ) -> Task:
        """Build a plain task from a raw todo ({id, title, completed, userId})."""
        return cls(
            id=record.get("id"),
            title=display_text(record.get("title")),
            completed=bool(record.get("completed")),
            user_id=record.get("userId"),
            created_at=backdated_timestamp(now_ts, rng),
        )

    @classmethod
    def priority_from_record(
        cls,
        record: Mapping[str, Any],
        *,
        priority: str = DEFAULT_PRIORITY,
        due_at: Any = None,
        now_ts: float | None = None,
        rng: random.Random | None = None,
    ) -> Task:
        task = cls.from_record(record, now_ts=now_ts, rng=rng)
        task.kind = TaskKind.PRIORITY
        task.priority = priority
        task.due_at = parse_due_at(due_at)
        return task

    @property
    def is_priority(self) -> bool:
        return self.kind is TaskKind.PRIORITY

    def toggle(self) -> None:
        self.completed = not self.completed

    def is_overdue(self, now_ts: float | None = None) -> bool:
        return is_overdue(self, now_ts)

    def status(self, now_ts: float | None = None) -> str:
        return task_status(self, now_ts)

    def to_line(self, now_ts: float | None = None) -> str:
        if self.is_priority:
            state = task_status(self, now_ts)
        elif self.completed:
            state = STATUS_COMPLETED
        elif is_overdue(self, now_ts):
            state = "Overdue"
        else:
            state = STATUS_PENDING
        return f"#{self.id} [User {self.user_id}] {state} — {self.title}"


def is_overdue(task: Task, now_ts: float | None = None) -> bool:
    """
    Plain rule: incomplete and created more than 7 days ago.
    Priority tasks with a due date use the due date instead.
    """
    if task.completed:
        return False
    now_ts = time.time() if now_ts is None else now_ts
    if task.kind is TaskKind.PRIORITY and task.due_at is not None:
        return now_ts > task.due_at
    return now_ts - task.created_at > OVERDUE_AFTER_SECONDS


def task_status(task: Task, now_ts: float | None = None) -> str:
    base = STATUS_COMPLETED if task.completed else STATUS_PENDING
    if task.kind is not TaskKind.PRIORITY:
        return base
    overdue = " (Overdue)" if is_overdue(task, now_ts) else ""
    return f"{base} [{task.priority}]{overdue}"


def round_half_up(value: float) -> int:
    # builtin round() is banker's rounding; completion rates use half-up
    return math.floor(value + 0.5)


@dataclass(slots=True)
class User:
    id: int | None
    name: str | None = None
    email: str | None = None
    username: str | None = None
    tasks: list[Task] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> User:
        return cls(
            id=record.get("id"),
            name=record.get("name"),
            email=record.get("email"),
            username=record.get("username"),
        )

    def add_task(self, task: Task) -> None:
        self.tasks.append(task)

    def completion_rate(self) -> int:
        total = len(self.tasks)
        if not total:
            return 0
        done = sum(1 for t in self.tasks if t.completed)
        return round_half_up(done / total * 100)

    def tasks_by_status(self, status: str = STATUS_COMPLETED, now_ts: float | None = None) -> list[Task]:
        return [t for t in self.tasks if task_status(t, now_ts).startswith(status)]

    def label(self) -> str:
        name = self.name if self.name is not None else "Unknown"
        username = self.username if self.username is not None else f"user{self.id}"
        return f"{name} (@{username})"
