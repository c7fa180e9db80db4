# src/todo_browser/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- creates the process-wide response cache,
- wires the API client and task manager into AppState,
- runs the initial load.
"""

from __future__ import annotations

import asyncio
import logging
import random

from ..api.client import APIClient, ResponseCache
from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_manager import TaskManager

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, api: APIClient | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the API client) injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if api is None:
        api = APIClient.from_settings(settings, cache=ResponseCache())

    seed = getattr(settings, "demo_seed", None)
    rng = random.Random(seed) if seed is not None else None

    return AppState(
        settings=settings,
        api=api,
        manager=TaskManager(api, rng=rng),
    )


def load_state(state: AppState, *, use_cache: bool | None = None) -> None:
    """Run a load on a fresh event loop. Raises LoadError on failure."""
    if use_cache is None:
        use_cache = bool(getattr(state.settings, "use_cache", True))
    logger.info("Loading users and todos from %s (cache=%s)...", getattr(state.api, "base_url", "?"), use_cache)
    asyncio.run(state.manager.load(use_cache=use_cache))
