# src/homeboard/todos/todo_store.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..storage.persistence import PersistenceAdapter
from . import todo_ops
from .todo_models import DEFAULT_CATEGORIES, Priority, TodoItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TodoStats:
    total: int
    completed: int

    @property
    def active(self) -> int:
        return self.total - self.completed


class TodoStore:
    """
    Stateful to-do list + category set with write-through persistence.

    Mutations go through the pure functions in todo_ops; the resulting list replaces
    the current one and is saved right away. A failed save is logged by the adapter
    and does not undo the in-memory change.
    """

    def __init__(self, persistence: PersistenceAdapter) -> None:
        self._persistence = persistence
        self._todos: list[TodoItem] = []
        self._categories: list[str] = []
        self._hydrated = False

    def hydrate(self) -> None:
        """Load once from persistence; absent data falls back to defaults."""
        if self._hydrated:
            return
        self._todos = self._persistence.load_todos() or []
        stored = self._persistence.load_categories()
        self._categories = stored if stored else list(DEFAULT_CATEGORIES)
        self._hydrated = True
        logger.info(
            "TodoStore hydrated todos=%d categories=%d", len(self._todos), len(self._categories)
        )

    # ---- read side ----

    @property
    def todos(self) -> list[TodoItem]:
        return list(self._todos)

    @property
    def categories(self) -> list[str]:
        return list(self._categories)

    def get(self, todo_id: int) -> TodoItem | None:
        for t in self._todos:
            if t.id == todo_id:
                return t
        return None

    def stats(self) -> TodoStats:
        return TodoStats(
            total=len(self._todos),
            completed=sum(1 for t in self._todos if t.completed),
        )

    # ---- mutations ----

    def _commit(self, todos: list[TodoItem]) -> list[TodoItem]:
        self._todos = todos
        self._persistence.save_todos(self._todos)
        return self.todos

    def add(
        self,
        text: str,
        priority: Priority = Priority.MEDIUM,
        category: str | None = None,
        due_date: str | None = None,
    ) -> list[TodoItem]:
        updated = todo_ops.add_todo(self._todos, text, priority, category, due_date)
        if len(updated) == len(self._todos):
            logger.debug("Ignoring add with empty text")
            return self.todos
        logger.debug("Todo added id=%s priority=%s", updated[0].id, updated[0].priority.value)
        return self._commit(updated)

    def toggle_complete(self, todo_id: int) -> list[TodoItem]:
        if self.get(todo_id) is None:
            return self.todos
        return self._commit(todo_ops.toggle_todo(self._todos, todo_id))

    def delete(self, todo_id: int) -> list[TodoItem]:
        if self.get(todo_id) is None:
            return self.todos
        return self._commit(todo_ops.delete_todo(self._todos, todo_id))

    def set_priority(self, todo_id: int, priority: Priority) -> list[TodoItem]:
        if self.get(todo_id) is None:
            return self.todos
        return self._commit(todo_ops.set_priority(self._todos, todo_id, priority))

    def clear_completed(self) -> list[TodoItem]:
        updated = todo_ops.clear_completed(self._todos)
        removed = len(self._todos) - len(updated)
        if removed:
            logger.info("Cleared %d completed todos", removed)
        return self._commit(updated)

    def add_category(self, name: str) -> list[str]:
        updated = todo_ops.add_category(self._categories, name)
        if len(updated) != len(self._categories):
            self._categories = updated
            self._persistence.save_categories(self._categories)
        return self.categories
