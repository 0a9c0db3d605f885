# src/homeboard/todos/todo_ops.py

"""
Pure list operations over TodoItem records.

Every function returns a new list and leaves its input untouched.
A missing id is a no-op, never an error.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import replace

from .todo_models import DEFAULT_CATEGORY, Priority, TodoItem


def next_todo_id(todos: Sequence[TodoItem], now_ms: int | None = None) -> int:
    """Timestamp-derived id that is still strictly greater than every existing id."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    last = max((t.id for t in todos), default=0)
    return max(int(now_ms), last + 1)


def add_todo(
    todos: Sequence[TodoItem],
    text: str,
    priority: Priority = Priority.MEDIUM,
    category: str | None = None,
    due_date: str | None = None,
    *,
    now_ms: int | None = None,
) -> list[TodoItem]:
    if not text or not text.strip():
        return list(todos)

    item = TodoItem(
        id=next_todo_id(todos, now_ms),
        text=text,
        completed=False,
        priority=priority,
        category=(category or "").strip() or DEFAULT_CATEGORY,
        due_date=due_date or None,
    )
    return [item, *todos]


def toggle_todo(todos: Sequence[TodoItem], todo_id: int) -> list[TodoItem]:
    return [replace(t, completed=not t.completed) if t.id == todo_id else t for t in todos]


def delete_todo(todos: Sequence[TodoItem], todo_id: int) -> list[TodoItem]:
    return [t for t in todos if t.id != todo_id]


def set_priority(todos: Sequence[TodoItem], todo_id: int, priority: Priority) -> list[TodoItem]:
    return [replace(t, priority=priority) if t.id == todo_id else t for t in todos]


def clear_completed(todos: Sequence[TodoItem]) -> list[TodoItem]:
    return [t for t in todos if not t.completed]


def add_category(categories: Sequence[str], name: str) -> list[str]:
    """Append a category; empty names and duplicates are no-ops."""
    name = (name or "").strip()
    if not name or name in categories:
        return list(categories)
    return [*categories, name]
