# src/todo_browser/errors.py

"""Exception types shared by the API client, the task manager and the CLI."""

from __future__ import annotations


class TodoBrowserError(RuntimeError):
    """Base class for errors raised by todo_browser itself."""


class DataNotLoadedError(TodoBrowserError):
    """A query was made before TaskManager.load() succeeded."""

    def __init__(self, message: str = "Data not loaded. Call load() first") -> None:
        super().__init__(message)


class TaskNotFoundError(TodoBrowserError, LookupError):
    def __init__(self, task_id: object) -> None:
        super().__init__(f"Task #{task_id} not found")
        self.task_id = task_id


class LoadError(TodoBrowserError):
    """Upstream failure while loading users/todos. The cause is chained."""


# ---- API client ----


class ApiError(TodoBrowserError):
    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class NetworkError(ApiError):
    pass


class HttpStatusError(ApiError):
    def __init__(self, path: str, status: int) -> None:
        super().__init__(f"HTTP {status} while fetching {path}", path=path)
        self.status = status


class PayloadDecodeError(ApiError):
    pass
