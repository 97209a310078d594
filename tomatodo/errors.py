"""Exception hierarchy for Tomatodo."""

from __future__ import annotations


class TomatodoError(Exception):
    """Base exception for Tomatodo."""


class InvalidPreferencesError(TomatodoError, ValueError):
    """Raised when preferences fall outside their allowed ranges."""

    def __init__(self, problems: dict[str, str]) -> None:
        self.problems = dict(problems)
        detail = ", ".join(f"{k}: {v}" for k, v in self.problems.items())
        super().__init__(f"invalid preferences ({detail})")


class ApiError(TomatodoError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class AuthenticationError(ApiError):
    """Raised on 401/403: no session cookie, or an expired one."""


class TodoNotFoundError(TomatodoError, LookupError):
    """Raised when a to-do id does not exist for the current user."""

    def __init__(self, todo_id: int | str) -> None:
        self.todo_id = todo_id
        super().__init__(f"todo {todo_id!r} not found")
