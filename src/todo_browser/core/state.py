# src/todo_browser/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..api.client import APIClient
from ..tasks.task_manager import TaskManager


@dataclass
class AppState:
    # Store Settings on the state for easy access from command handlers.
    settings: object

    api: APIClient
    manager: TaskManager
