# src/todo_browser/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from ..core.state import AppState
from ..errors import LoadError, TaskNotFoundError
from ..tasks.task_manager import LeaderboardRow
from ..tasks.task_models import Task
from ..tasks.task_processor import TaskStatistics
from .bootstrap import load_state

CommandHandler = Callable[[AppState, list[str]], str]
CommandPrompter = Callable[[str], str]

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50


class CommandRegistry:
    """Menu command registry used by the console loop (1..9, help, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._aliases: dict[str, list[str]] = {}
        self._prompts: dict[CommandHandler, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        prompt: str | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        self._aliases[key] = [a.lower() for a in aliases]
        for alias in aliases:
            self._handlers[alias.lower()] = handler
        if prompt:
            self._prompts[handler] = prompt

    def handle(
        self,
        state: AppState,
        line: str,
        ask: CommandPrompter | None = None,
    ) -> str | None:
        """
        Handle "command args" (a leading "/" is optional).
        Returns a reply string or None for an empty line.

        Commands registered with a prompt ask for their arguments via `ask`
        when none were given on the line (e.g. "2" then "Enter userId").
        """
        text = line.strip()
        if text.startswith("/"):
            text = text[1:]

        parts = text.split()
        if not parts:
            return None

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Invalid option: {name}. Use help to list available commands."

        prompt = self._prompts.get(handler)
        if not args and prompt and ask is not None:
            args = ask(prompt).split()

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            keys = ", ".join([*self._aliases[name], name])
            lines.append(f"  [{keys}] {help_text}")
        lines.append("  [q, quit, exit] Quit")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def _list_limit(state: AppState) -> int:
    return int(getattr(state.settings, "list_limit", DEFAULT_LIST_LIMIT) or DEFAULT_LIST_LIMIT)


def format_tasks(tasks: Sequence[Task], limit: int = DEFAULT_LIST_LIMIT) -> str:
    if not tasks:
        return "No tasks found."

    lines = [t.to_line() for t in tasks[:limit]]
    if len(tasks) > limit:
        lines.append("")
        lines.append(f"... and {len(tasks) - limit} more")
    return "\n".join(lines)


def format_statistics(stats: TaskStatistics) -> str:
    return (
        f"Total: {stats.total_tasks}\n"
        f"Completed: {stats.completed_tasks}\n"
        f"Pending: {stats.pending_tasks}\n"
        f"Overdue: {stats.overdue_tasks}\n"
        f"Unique users: {stats.unique_users}"
    )


def format_leaderboard(rows: Sequence[LeaderboardRow]) -> str:
    if not rows:
        return "No users."
    return "\n".join(f"#{r.id} {r.name} (@{r.username}) - {r.completion_rate}%" for r in rows)


def format_tags(tags: Iterable[str]) -> str:
    items = sorted(tags)
    if not items:
        return "No tags detected."
    return ",".join(items)


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_all(state: AppState, args: list[str]) -> str:
    return "=== All Tasks ===\n" + format_tasks(state.manager.all_tasks(), _list_limit(state))


def cmd_user(state: AppState, args: list[str]) -> str:
    """
    user <id>  -> tasks of one user
    """
    if not args:
        return "Usage: user <userId>"
    user_id = args[0]
    tasks = state.manager.tasks_by_user(user_id)
    return (
        "=== Tasks by User ===\n"
        f"User: {state.manager.get_user_label(user_id)}\n\n"
        + format_tasks(tasks, _list_limit(state))
    )


def cmd_stats(state: AppState, args: list[str]) -> str:
    return "=== Statistics ===\n" + format_statistics(state.manager.statistics())


def cmd_completed(state: AppState, args: list[str]) -> str:
    return "=== Completed Tasks ===\n" + format_tasks(state.manager.completed_tasks(), _list_limit(state))


def cmd_pending(state: AppState, args: list[str]) -> str:
    return "=== Pending Tasks ===\n" + format_tasks(state.manager.pending_tasks(), _list_limit(state))


def cmd_search(state: AppState, args: list[str]) -> str:
    """
    search <kw> [kw ...]  -> tasks whose title contains every keyword
    """
    results = state.manager.search(*args)
    return (
        "=== Search Tasks ===\n"
        f"Found {len(results)} result(s) for: {','.join(args)}\n\n"
        + format_tasks(results, _list_limit(state))
    )


def cmd_leaders(state: AppState, args: list[str]) -> str:
    return "=== Leaderboard (Completion %) ===\n" + format_leaderboard(state.manager.users_leaderboard())


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: toggle <taskId>"
    try:
        task = state.manager.toggle_task(args[0])
    except TaskNotFoundError as e:
        return f"Error: {e}"
    return f"Toggled: {task.to_line()}"


def cmd_tags(state: AppState, args: list[str]) -> str:
    return "=== Unique Tags ===\n" + format_tags(state.manager.tags())


def cmd_reload(state: AppState, args: list[str]) -> str:
    state.api.clear_cache()
    try:
        load_state(state, use_cache=False)
    except LoadError as e:
        return f"Error: {e}"
    stats = state.manager.statistics()
    return f"Reloaded {stats.total_tasks} tasks for {len(state.manager.all_users())} users."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("all", cmd_all, help_text="List ALL tasks.", aliases=["1"])
registry.register(
    "user",
    cmd_user,
    help_text="List tasks by USER: user <id>.",
    aliases=["2"],
    prompt="Enter userId (1-10): ",
)
registry.register("stats", cmd_stats, help_text="Show STATS.", aliases=["3"])
registry.register("completed", cmd_completed, help_text="Filter tasks (Completed).", aliases=["4"])
registry.register("pending", cmd_pending, help_text="Filter tasks (Pending).", aliases=["5"])
registry.register(
    "search",
    cmd_search,
    help_text="Search tasks by keyword(s).",
    aliases=["6"],
    prompt="Enter keyword(s) separated by spaces: ",
)
registry.register("leaders", cmd_leaders, help_text="Show leaderboard (by completion %).", aliases=["7"])
registry.register(
    "toggle",
    cmd_toggle,
    help_text="Toggle a task's completion: toggle <id>.",
    aliases=["8"],
    prompt="Enter taskId to toggle: ",
)
registry.register("tags", cmd_tags, help_text='Show unique "tags".', aliases=["9"])
registry.register("reload", cmd_reload, help_text="Clear the cache and fetch fresh data.", aliases=["r"])
