# tests/test_todo_store.py

from __future__ import annotations

from homeboard.storage.kv_store import MemoryKeyValueStore
from homeboard.storage.persistence import CATEGORIES_KEY, TODOS_KEY, PersistenceAdapter
from homeboard.todos.todo_models import DEFAULT_CATEGORIES, Priority
from homeboard.todos.todo_store import TodoStore

from .fakes import BrokenKeyValueStore


def _store(kv=None) -> tuple[TodoStore, PersistenceAdapter]:
    adapter = PersistenceAdapter(kv if kv is not None else MemoryKeyValueStore())
    store = TodoStore(adapter)
    store.hydrate()
    return store, adapter


def test_hydrate_defaults_when_store_is_empty() -> None:
    store, _ = _store()
    assert store.todos == []
    assert store.categories == list(DEFAULT_CATEGORIES)


def test_every_mutation_writes_through() -> None:
    store, adapter = _store()

    store.add("buy milk", Priority.HIGH, "일반")
    item = store.todos[0]
    assert adapter.load_todos() == store.todos

    store.toggle_complete(item.id)
    assert adapter.load_todos()[0].completed is True

    store.set_priority(item.id, Priority.LOW)
    assert adapter.load_todos()[0].priority == Priority.LOW

    store.delete(item.id)
    assert adapter.load_todos() == []


def test_empty_add_is_noop_and_not_persisted() -> None:
    kv = MemoryKeyValueStore()
    store, _ = _store(kv)

    store.add("   ")
    assert store.todos == []
    assert kv.get(TODOS_KEY) is None


def test_scenario_add_toggle_clear() -> None:
    store, adapter = _store()

    store.add("buy milk", Priority.HIGH, "일반")
    assert len(store.todos) == 1
    assert store.todos[0].completed is False

    store.toggle_complete(store.todos[0].id)
    assert store.todos[0].completed is True
    assert store.stats().completed == 1

    store.clear_completed()
    assert store.todos == []
    assert adapter.load_todos() == []


def test_missing_id_is_benign() -> None:
    store, _ = _store()
    store.add("x")
    before = store.todos

    assert store.toggle_complete(424242) == before
    assert store.delete(424242) == before
    assert store.set_priority(424242, Priority.HIGH) == before


def test_categories_grow_and_persist() -> None:
    kv = MemoryKeyValueStore()
    store, adapter = _store(kv)

    store.add_category("공부")
    store.add_category("공부")
    store.add_category("  ")
    assert store.categories == [*DEFAULT_CATEGORIES, "공부"]
    assert adapter.load_categories() == store.categories


def test_task_keeps_category_not_in_set() -> None:
    store, _ = _store()
    store.add("trip", category="여행")
    assert store.todos[0].category == "여행"
    assert "여행" not in store.categories


def test_hydrate_restores_previous_session() -> None:
    kv = MemoryKeyValueStore()
    first, _ = _store(kv)
    first.add("a")
    first.add("b")
    first.add_category("공부")

    second, _ = _store(kv)
    assert second.todos == first.todos
    assert second.categories == first.categories


def test_write_failure_keeps_in_memory_state() -> None:
    kv = BrokenKeyValueStore({CATEGORIES_KEY: '["일반"]'})
    store, _ = _store(kv)

    store.add("still here")
    assert [t.text for t in store.todos] == ["still here"]
    assert kv.write_attempts == 1
