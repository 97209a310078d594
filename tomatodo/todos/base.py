"""To-do item and store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

from ..errors import TodoNotFoundError


@dataclass(frozen=True)
class Todo:
    id: int
    text: str
    completed: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Todo:
        """Parse a backend row.

        Listed rows carry ``created_at``; a freshly created one carries
        ``createdAt``.  ``completed`` comes back as 0/1.
        """
        raw_created = data.get("created_at") or data.get("createdAt")
        return cls(
            id=int(data["id"]),
            text=str(data["text"]),
            completed=bool(data.get("completed")),
            created_at=_parse_timestamp(raw_created),
        )


class TodoStore(ABC):
    """Where to-dos live: local SQLite or the signed-in backend."""

    @abstractmethod
    def list(self) -> list[Todo]:
        ...

    @abstractmethod
    def add(self, text: str) -> Todo:
        ...

    @abstractmethod
    def update(self, todo: Todo) -> Todo:
        ...

    @abstractmethod
    def delete(self, todo_id: int) -> None:
        ...

    def get(self, todo_id: int) -> Todo:
        for todo in self.list():
            if todo.id == todo_id:
                return todo
        raise TodoNotFoundError(todo_id)

    def toggle(self, todo_id: int) -> Todo:
        """Flip ``completed`` on one item."""
        todo = self.get(todo_id)
        return self.update(replace(todo, completed=not todo.completed))


def clean_text(text: str) -> str:
    """Strip *text*; blank input is rejected."""
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValueError("todo text must not be blank")
    return cleaned


def _parse_timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    # JavaScript's toISOString() ends in "Z".
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
