# src/homeboard/todos/todo_view.py

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .todo_models import SortOption, StatusFilter, TodoItem, priority_rank


@dataclass(frozen=True, slots=True)
class FilterState:
    """
    UI filter controls.

    show_completed and status_filter are separate controls; both may hide completed
    items and they are applied as independent predicates.
    """

    search_text: str = ""
    status_filter: StatusFilter = StatusFilter.ALL
    category: str | None = None
    show_completed: bool = True


def project_todos(
    todos: Sequence[TodoItem],
    filters: FilterState | None = None,
    sort: SortOption = SortOption.NEWEST,
) -> list[TodoItem]:
    """
    Build the list to render: search -> category -> show_completed -> status -> sort.

    Returns a new list; the input sequence is never reordered.
    """
    f = filters or FilterState()
    result = list(todos)

    needle = f.search_text.lower()
    if needle:
        result = [t for t in result if needle in t.text.lower()]

    if f.category:
        result = [t for t in result if t.category == f.category]

    if not f.show_completed:
        result = [t for t in result if not t.completed]

    if f.status_filter == StatusFilter.ACTIVE:
        result = [t for t in result if not t.completed]
    elif f.status_filter == StatusFilter.COMPLETED:
        result = [t for t in result if t.completed]

    if sort == SortOption.NEWEST:
        result.sort(key=lambda t: t.id, reverse=True)
    elif sort == SortOption.OLDEST:
        result.sort(key=lambda t: t.id)
    elif sort == SortOption.PRIORITY:
        # list.sort is stable: equal priorities keep their filtered order.
        result.sort(key=lambda t: priority_rank(t.priority), reverse=True)

    return result
