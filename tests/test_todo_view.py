# tests/test_todo_view.py

from __future__ import annotations

from homeboard.todos.todo_models import Priority, SortOption, StatusFilter, TodoItem
from homeboard.todos.todo_view import FilterState, project_todos


def _item(
    id: int,
    text: str = "task",
    *,
    completed: bool = False,
    priority: Priority = Priority.MEDIUM,
    category: str = "일반",
) -> TodoItem:
    return TodoItem(id=id, text=text, completed=completed, priority=priority, category=category)


def test_category_filter_selects_exact_match() -> None:
    todos = [
        _item(3, "a", category="일반"),
        _item(2, "b", category="업무"),
        _item(1, "c", category="일반"),
    ]
    view = project_todos(todos, FilterState(category="업무"))
    assert [t.id for t in view] == [2]


def test_search_is_case_insensitive_substring() -> None:
    todos = [_item(2, "Buy MILK"), _item(1, "call mom")]

    assert [t.id for t in project_todos(todos, FilterState(search_text="milk"))] == [2]
    assert [t.id for t in project_todos(todos, FilterState(search_text=""))] == [2, 1]


def test_status_filter_and_show_completed_are_independent() -> None:
    todos = [_item(3, completed=True), _item(2), _item(1, completed=True)]

    assert [t.id for t in project_todos(todos, FilterState(status_filter=StatusFilter.ACTIVE))] == [2]
    assert [t.id for t in project_todos(todos, FilterState(status_filter=StatusFilter.COMPLETED))] == [3, 1]
    assert [t.id for t in project_todos(todos, FilterState(show_completed=False))] == [2]
    # Hidden completed items stay hidden even when the status filter asks for them.
    assert project_todos(
        todos, FilterState(show_completed=False, status_filter=StatusFilter.COMPLETED)
    ) == []


def test_sort_newest_and_oldest_by_id() -> None:
    todos = [_item(2), _item(5), _item(1)]

    assert [t.id for t in project_todos(todos, sort=SortOption.NEWEST)] == [5, 2, 1]
    assert [t.id for t in project_todos(todos, sort=SortOption.OLDEST)] == [1, 2, 5]


def test_priority_sort_is_stable() -> None:
    todos = [
        _item(6, priority=Priority.LOW),
        _item(5, priority=Priority.MEDIUM),
        _item(4, priority=Priority.HIGH),
        _item(3, priority=Priority.MEDIUM),
        _item(2, priority=Priority.HIGH),
        _item(1, priority=Priority.LOW),
    ]
    view = project_todos(todos, sort=SortOption.PRIORITY)
    assert [t.id for t in view] == [4, 2, 5, 3, 6, 1]


def test_projection_does_not_reorder_input() -> None:
    todos = [_item(1), _item(3), _item(2)]
    snapshot = list(todos)

    project_todos(todos, FilterState(search_text="task"), SortOption.NEWEST)
    assert todos == snapshot
