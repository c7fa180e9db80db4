# tests/test_task_models.py

from __future__ import annotations

import random
import time
from datetime import datetime, timezone

import pytest

from todo_browser.tasks.task_models import (
    DAY_SECONDS,
    Task,
    TaskKind,
    User,
    coerce_id,
    is_overdue,
    parse_due_at,
    task_status,
)

from .fakes import FixedDaysRandom

NOW = 1_700_000_000.0  # 2023-11-14T22:13:20Z


def _task(created_days_ago: float = 0, completed: bool = False, **kw) -> Task:
    return Task(
        id=kw.pop("id", 1),
        title=kw.pop("title", "t"),
        completed=completed,
        user_id=kw.pop("user_id", 1),
        created_at=NOW - created_days_ago * DAY_SECONDS,
        **kw,
    )


def test_from_record_coerces_title_and_completed() -> None:
    rng = FixedDaysRandom(0)
    assert Task.from_record({"id": 1, "title": None, "userId": 1}, now_ts=NOW, rng=rng).title == ""
    assert Task.from_record({"id": 1, "title": 42, "userId": 1}, now_ts=NOW, rng=rng).title == "42"
    assert Task.from_record({"id": 1, "title": True, "userId": 1}, now_ts=NOW, rng=rng).title == "true"
    assert Task.from_record({"id": 1, "title": 1.0, "userId": 1}, now_ts=NOW, rng=rng).title == "1"
    assert Task.from_record({"id": 1, "title": 2.5, "userId": 1}, now_ts=NOW, rng=rng).title == "2.5"

    truthy = Task.from_record({"id": 1, "title": "x", "completed": "invalid"}, now_ts=NOW, rng=rng)
    falsy = Task.from_record({"id": 1, "title": "x", "completed": 0}, now_ts=NOW, rng=rng)
    assert truthy.completed is True
    assert falsy.completed is False


def test_from_record_tolerates_missing_id() -> None:
    task = Task.from_record({"id": None, "title": "Test", "completed": False, "userId": 1})
    assert task.id is None
    assert task.kind is TaskKind.PLAIN


def test_backdating_is_pinned_by_injected_rng() -> None:
    task = Task.from_record({"id": 1, "title": "x"}, now_ts=NOW, rng=FixedDaysRandom(3))
    assert task.created_at == NOW - 3 * DAY_SECONDS


def test_backdating_stays_within_thirteen_days() -> None:
    rng = random.Random(1234)
    for _ in range(200):
        task = Task.from_record({"id": 1, "title": "x"}, now_ts=NOW, rng=rng)
        days = (NOW - task.created_at) / DAY_SECONDS
        assert days == int(days)
        assert 0 <= days <= 13


def test_plain_overdue_rule() -> None:
    assert is_overdue(_task(created_days_ago=8), NOW) is True
    assert is_overdue(_task(created_days_ago=7), NOW) is False
    assert is_overdue(_task(created_days_ago=8, completed=True), NOW) is False
    assert is_overdue(_task(created_days_ago=0), NOW) is False


def test_toggle_flips_completed() -> None:
    task = _task()
    task.toggle()
    assert task.completed is True
    assert task.status(NOW) == "Completed"
    task.toggle()
    assert task.status(NOW) == "Pending"


def test_priority_defaults_and_due_date_rule() -> None:
    record = {"id": 3, "title": "Ship it", "completed": False, "userId": 2}
    task = Task.priority_from_record(record, now_ts=NOW, rng=FixedDaysRandom(0))
    assert task.is_priority
    assert task.priority == "medium"
    assert task.due_at is None

    late = Task.priority_from_record(record, priority="high", due_at=NOW - 60, now_ts=NOW)
    early = Task.priority_from_record(record, priority="high", due_at=NOW + 60, now_ts=NOW)
    assert late.is_overdue(NOW) is True
    assert early.is_overdue(NOW) is False


def test_priority_due_date_shadows_creation_rule() -> None:
    # created 10 days ago would be overdue by the plain rule, but the due date is in the future
    task = _task(created_days_ago=10, kind=TaskKind.PRIORITY, priority="high", due_at=NOW + DAY_SECONDS)
    assert is_overdue(task, NOW) is False

    # without a due date the plain rule applies
    task.due_at = None
    assert is_overdue(task, NOW) is True


def test_priority_status_strings() -> None:
    pending = _task(kind=TaskKind.PRIORITY, priority="high", due_at=NOW + 60)
    overdue = _task(kind=TaskKind.PRIORITY, priority="low", due_at=NOW - 60)
    done = _task(completed=True, kind=TaskKind.PRIORITY, priority="high", due_at=NOW - 60)

    assert task_status(pending, NOW) == "Pending [high]"
    assert task_status(overdue, NOW) == "Pending [low] (Overdue)"
    assert task_status(done, NOW) == "Completed [high]"
    assert task_status(overdue, NOW).startswith("Pending")


def test_priority_accepts_any_label_and_bad_due_date() -> None:
    record = {"id": 1, "title": "Test", "completed": False, "userId": 1}
    task = Task.priority_from_record(record, priority="invalid", due_at="invalid-date", now_ts=NOW)
    assert task.priority == "invalid"
    assert task.due_at is None


def test_parse_due_at_formats() -> None:
    assert parse_due_at(None) is None
    assert parse_due_at(NOW) == NOW
    assert parse_due_at("2023-11-14T22:13:20.000Z") == NOW
    assert parse_due_at(datetime.fromtimestamp(NOW, tz=timezone.utc)) == NOW


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
def test_parse_due_at_date_only_is_utc_midnight(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TZ", "EST+05")
    time.tzset()
    try:
        assert parse_due_at("2023-11-14") == 1_699_920_000.0
        # a date-time without offset is local time
        assert parse_due_at("2023-11-14T00:00:00") == 1_699_920_000.0 + 5 * 60 * 60
    finally:
        monkeypatch.undo()
        time.tzset()


def test_to_line_states() -> None:
    assert _task(id=5, user_id=2, title="Walk").to_line(NOW) == "#5 [User 2] Pending — Walk"
    assert _task(id=5, user_id=2, title="Walk", completed=True).to_line(NOW) == "#5 [User 2] Completed — Walk"
    assert _task(created_days_ago=9, id=5, user_id=2, title="Walk").to_line(NOW) == "#5 [User 2] Overdue — Walk"

    prio = _task(id=10, user_id=1, title="Pay", kind=TaskKind.PRIORITY, priority="high", due_at=NOW - 1)
    assert prio.to_line(NOW) == "#10 [User 1] Pending [high] (Overdue) — Pay"


@pytest.mark.parametrize(
    ("done", "total", "expected"),
    [(0, 0, 0), (1, 3, 33), (2, 3, 67), (1, 2, 50), (1, 8, 13), (3, 3, 100)],
)
def test_completion_rate(done: int, total: int, expected: int) -> None:
    user = User(id=1, name="A")
    for i in range(total):
        user.add_task(_task(id=i, completed=i < done))
    assert user.completion_rate() == expected


def test_user_tasks_by_status_filters_by_prefix() -> None:
    user = User(id=1)
    a = _task(id=1, completed=True)
    b = _task(id=2)
    c = _task(id=3, kind=TaskKind.PRIORITY, priority="high", due_at=NOW + 60)
    for t in (a, b, c):
        user.add_task(t)

    assert user.tasks_by_status(now_ts=NOW) == [a]
    assert user.tasks_by_status("Pending", now_ts=NOW) == [b, c]


def test_user_from_record_and_label() -> None:
    user = User.from_record({"id": 1, "name": "Leanne Graham", "username": "Bret", "phone": "x"})
    assert user.label() == "Leanne Graham (@Bret)"
    assert user.email is None
    assert user.tasks == []

    anon = User.from_record({"id": 5, "name": None, "email": "test@example.com"})
    assert anon.name is None
    assert anon.label() == "Unknown (@user5)"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(1, 1), ("1", 1), (" 7 ", 7), (3.0, 3), ("2.0", 2), ("abc", None), (None, None), ("1.5", None)],
)
def test_coerce_id(raw, expected) -> None:
    assert coerce_id(raw) == expected
