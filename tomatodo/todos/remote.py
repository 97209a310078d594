"""To-dos kept by the backend for the signed-in user."""

from __future__ import annotations

from ..api.client import ApiClient
from ..errors import ApiError, TodoNotFoundError
from .base import Todo, TodoStore, clean_text


class RemoteTodoStore(TodoStore):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def list(self) -> list[Todo]:
        return [Todo.from_api(row) for row in self._client.list_todos()]

    def add(self, text: str) -> Todo:
        return Todo.from_api(self._client.add_todo(clean_text(text)))

    def update(self, todo: Todo) -> Todo:
        text = clean_text(todo.text)
        try:
            self._client.update_todo(todo.id, text, todo.completed)
        except ApiError as exc:
            if exc.status_code == 404:
                raise TodoNotFoundError(todo.id) from exc
            raise
        return Todo(todo.id, text, todo.completed, todo.created_at)

    def delete(self, todo_id: int) -> None:
        try:
            self._client.delete_todo(todo_id)
        except ApiError as exc:
            if exc.status_code == 404:
                raise TodoNotFoundError(todo_id) from exc
            raise
