# src/todo_browser/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads users/todos once, then runs the
interactive menu in the main thread.
"""

from __future__ import annotations

import logging
import sys

from ..config import get_settings
from ..errors import LoadError
from ..logging_setup import setup_logging
from .bootstrap import create_initial_state, load_state
from .console import run_console_loop

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    try:
        load_state(state)
    except LoadError as e:
        logger.error("Failed to load data: %s", e)
        return 1

    try:
        run_console_loop(state)
    finally:
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
