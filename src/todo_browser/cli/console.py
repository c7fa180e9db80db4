# src/todo_browser/cli/console.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..errors import TodoBrowserError
from .commands import registry as command_registry

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("q", "quit", "exit", "/q", "/quit", "/exit")

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _header(title: str, out: OutputFn) -> None:
    out(f"\n=== {title} ===\n")


def run_console_loop(
    state: AppState,
    *,
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
) -> None:
    """
    Interactive menu over the loaded TaskManager. The header and menu are
    redrawn before every prompt.

    input_fn/output_fn are injectable so the loop can be driven from tests.
    """
    logger.info("Console started.")
    app_name = str(getattr(state.settings, "app_name", "todo-browser"))
    menu = command_registry.build_help()

    while True:
        _header(app_name, output_fn)
        output_fn(menu)
        try:
            user_input = input_fn("\nSelect an option: ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            output_fn("")
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input, ask=input_fn)
        except TodoBrowserError as e:
            reply = f"Error: {e}"
        except (EOFError, KeyboardInterrupt):
            logger.info("Console input closed while prompting, exiting.")
            break
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            output_fn(reply)

    output_fn("\nGoodbye")
    logger.info("Console finished.")
