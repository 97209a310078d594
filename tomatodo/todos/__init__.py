"""To-do list: local SQLite or authenticated backend."""

from __future__ import annotations

from ..api.client import ApiClient
from .base import Todo, TodoStore
from .local import LocalTodoStore
from .remote import RemoteTodoStore


def select_todo_store(
    authenticated: bool,
    *,
    client: ApiClient | None = None,
) -> TodoStore:
    """Backend store when signed in, local database otherwise."""
    if authenticated:
        if client is None:
            raise ValueError("an ApiClient is required when authenticated")
        return RemoteTodoStore(client)
    return LocalTodoStore()


__all__ = [
    "Todo",
    "TodoStore",
    "LocalTodoStore",
    "RemoteTodoStore",
    "select_todo_store",
]
