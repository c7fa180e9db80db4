# tests/conftest.py

from __future__ import annotations

import asyncio
import time
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_browser.core.state import AppState
from todo_browser.tasks.task_manager import TaskManager

from .fakes import FakeTodoSource, FixedDaysRandom, todo

# Real "now" so rendering (which reads the wall clock) agrees with the manager's clock.
NOW = time.time()


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's .env.
    """
    return SimpleNamespace(
        app_name="todo-browser-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        api_base_url="https://api.test",
        http_timeout_seconds=1.0,
        use_cache=True,
        list_limit=50,
        demo_seed=None,
    )


@pytest.fixture()
def raw_users() -> list[dict]:
    return [
        {"id": 1, "name": "Leanne Graham", "username": "Bret", "email": "leanne@example.com"},
        {"id": 2, "name": "Ervin Howell", "username": "Antonette", "email": "ervin@example.com"},
        {
            "id": 3,
            "name": "Clementine Bauch",
            "username": "Samantha",
            "email": "clementine@example.com",
            "address": {"city": "McKenziehaven"},
        },
    ]


@pytest.fixture()
def raw_todos() -> list[dict]:
    """
    Completion rates: user 1 -> 33%, user 2 -> 0%, user 3 -> 50%.
    Task 7 belongs to no loaded user; id 10 becomes a priority task; id 5 does not exist.
    """
    return [
        todo(1, 1, "delectus aut autem", completed=True),
        todo(2, 1, "quis ut nam facilis et officia qui"),
        todo(3, 1, "fugiat veniam minus"),
        todo(4, 2, "Buy milk and eggs"),
        todo(6, 3, "Prepare quarterly report", completed=True),
        todo(7, 99, "orphaned task without owner"),
        todo(8, 2, "Schedule dentist appointment"),
        todo(10, 3, "Review quarterly budget"),
    ]


@pytest.fixture()
def source(raw_users: list[dict], raw_todos: list[dict]) -> FakeTodoSource:
    return FakeTodoSource(users=raw_users, todos=raw_todos)


@pytest.fixture()
def manager(source: FakeTodoSource) -> TaskManager:
    """Unloaded manager with a pinned clock and zero-day backdating."""
    return TaskManager(source, clock=lambda: NOW, rng=FixedDaysRandom(0))


@pytest.fixture()
def loaded_manager(manager: TaskManager) -> TaskManager:
    asyncio.run(manager.load())
    return manager


@pytest.fixture()
def state(settings: SimpleNamespace, source: FakeTodoSource, loaded_manager: TaskManager) -> AppState:
    """AppState wired with the fake source and an already loaded manager."""
    return AppState(settings=settings, api=source, manager=loaded_manager)
