"""To-dos kept in the local SQLite database while signed out."""

from __future__ import annotations

from datetime import timezone

from ..database.db import get_session
from ..database.models import TodoRecord
from ..errors import TodoNotFoundError
from .base import Todo, TodoStore, clean_text


class LocalTodoStore(TodoStore):

    def list(self) -> list[Todo]:
        with get_session() as db:
            records = db.query(TodoRecord).order_by(TodoRecord.id).all()
            return [_to_todo(r) for r in records]

    def get(self, todo_id: int) -> Todo:
        with get_session() as db:
            record = db.get(TodoRecord, todo_id)
            if record is None:
                raise TodoNotFoundError(todo_id)
            return _to_todo(record)

    def add(self, text: str) -> Todo:
        with get_session() as db:
            record = TodoRecord(text=clean_text(text), completed=False)
            db.add(record)
            db.flush()
            return _to_todo(record)

    def update(self, todo: Todo) -> Todo:
        with get_session() as db:
            record = db.get(TodoRecord, todo.id)
            if record is None:
                raise TodoNotFoundError(todo.id)
            record.text = clean_text(todo.text)
            record.completed = todo.completed
            db.flush()
            return _to_todo(record)

    def delete(self, todo_id: int) -> None:
        with get_session() as db:
            record = db.get(TodoRecord, todo_id)
            if record is None:
                raise TodoNotFoundError(todo_id)
            db.delete(record)


def _to_todo(record: TodoRecord) -> Todo:
    created = record.created_at
    # SQLite drops tzinfo on the way back.
    if created is not None and created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return Todo(
        id=record.id,
        text=record.text,
        completed=bool(record.completed),
        created_at=created,
    )
