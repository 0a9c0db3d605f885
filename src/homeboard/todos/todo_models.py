# src/homeboard/todos/todo_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

DEFAULT_CATEGORY = "일반"
DEFAULT_CATEGORIES: tuple[str, ...] = ("일반", "업무", "개인")


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, raw: str | Priority | None) -> Priority:
        """Accept enum values, case-insensitive names and None (-> MEDIUM)."""
        if raw is None:
            return cls.MEDIUM
        if isinstance(raw, Priority):
            return raw
        return cls(str(raw).strip().lower())


def priority_rank(priority: Priority) -> int:
    match priority:
        case Priority.HIGH:
            return 3
        case Priority.MEDIUM:
            return 2
        case Priority.LOW:
            return 1
    raise ValueError(f"unknown priority: {priority!r}")


def priority_label(priority: Priority) -> str:
    match priority:
        case Priority.HIGH:
            return "높음"
        case Priority.MEDIUM:
            return "중간"
        case Priority.LOW:
            return "낮음"
    raise ValueError(f"unknown priority: {priority!r}")


def priority_color(priority: Priority) -> str:
    match priority:
        case Priority.HIGH:
            return "#f85149"
        case Priority.MEDIUM:
            return "#f7b955"
        case Priority.LOW:
            return "#3fb950"
    raise ValueError(f"unknown priority: {priority!r}")


class StatusFilter(StrEnum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class SortOption(StrEnum):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRIORITY = "priority"


def _parse_id(raw: Any) -> int:
    # Stored as a decimal string; plain ints are accepted too. Floats and bools are not.
    if isinstance(raw, bool):
        raise TypeError("todo id must be an integer or a decimal string")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw)
    raise ValueError(f"invalid todo id: {raw!r}")


@dataclass(frozen=True, slots=True)
class TodoItem:
    """
    A single to-do record.

    id is the creation timestamp in milliseconds, bumped past the previous id when two
    items land in the same millisecond; ordering by id is ordering by creation.
    """

    id: int
    text: str
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    category: str = DEFAULT_CATEGORY
    due_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        # Same JSON shape the browser dashboard kept in localStorage.
        return {
            "id": str(self.id),
            "text": self.text,
            "completed": self.completed,
            "priority": self.priority.value,
            "category": self.category,
            "dueDate": self.due_date,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> TodoItem:
        """Raises KeyError/ValueError/TypeError on a malformed record."""
        text = raw["text"]
        if not isinstance(text, str) or not text.strip():
            raise ValueError("todo text must be a non-empty string")
        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise TypeError("todo completed flag must be a boolean")
        due = raw.get("dueDate")
        return cls(
            id=_parse_id(raw["id"]),
            text=text,
            completed=completed,
            priority=Priority.parse(raw.get("priority")),
            category=str(raw.get("category") or DEFAULT_CATEGORY),
            due_date=str(due) if due else None,
        )
