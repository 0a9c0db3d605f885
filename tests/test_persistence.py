# tests/test_persistence.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from homeboard.storage.kv_store import MemoryKeyValueStore, SQLiteKeyValueStore
from homeboard.storage.persistence import (
    CATEGORIES_KEY,
    TODOS_KEY,
    WORD_HISTORY_KEY,
    PersistenceAdapter,
)
from homeboard.todos import todo_ops
from homeboard.todos.todo_models import Priority

from .fakes import BrokenKeyValueStore


def test_round_trip_todos_categories_and_history(tmp_path: Path) -> None:
    adapter = PersistenceAdapter(SQLiteKeyValueStore(tmp_path / "kv.sqlite3"))

    todos = todo_ops.add_todo([], "buy milk", Priority.HIGH, "일반", "2025-01-31", now_ms=10)
    todos = todo_ops.add_todo(todos, "write report", Priority.LOW, "업무", now_ms=11)
    todos = todo_ops.toggle_todo(todos, 10)
    categories = ["일반", "업무", "개인", "공부"]
    history = ["world", "hello"]

    assert adapter.save_todos(todos)
    assert adapter.save_categories(categories)
    assert adapter.save_word_history(history)

    # A fresh adapter over the same file sees the same data.
    reopened = PersistenceAdapter(SQLiteKeyValueStore(tmp_path / "kv.sqlite3"))
    assert reopened.load_todos() == todos
    assert reopened.load_categories() == categories
    assert reopened.load_word_history() == history


def test_generic_round_trip(persistence: PersistenceAdapter) -> None:
    value = {"a": [1, 2, {"b": None}], "한글": True}
    assert persistence.save("blob", value)
    assert persistence.load("blob") == value


def test_missing_key_is_absent(persistence: PersistenceAdapter) -> None:
    assert persistence.load("nope") is None
    assert persistence.load_todos() is None
    assert persistence.load_categories() is None
    assert persistence.load_word_history() is None


def test_malformed_json_is_absent_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    kv = MemoryKeyValueStore({TODOS_KEY: "{not json", CATEGORIES_KEY: '{"x": 1}'})
    adapter = PersistenceAdapter(kv)

    with caplog.at_level(logging.WARNING):
        assert adapter.load_todos() is None
        assert adapter.load_categories() is None
    assert any("Malformed JSON" in r.getMessage() for r in caplog.records)


def test_malformed_todo_records_are_skipped() -> None:
    raw = (
        '[{"id": "1", "text": "ok", "completed": false, "priority": "high", "category": "일반", "dueDate": null},'
        ' {"id": "x", "text": "bad id"},'
        ' {"id": "2", "text": "   "},'
        ' {"id": "3", "text": "bad prio", "priority": "urgent"},'
        ' {"id": "1", "text": "duplicate id"},'
        ' "not a dict"]'
    )
    adapter = PersistenceAdapter(MemoryKeyValueStore({TODOS_KEY: raw}))
    todos = adapter.load_todos()

    assert todos is not None
    assert [(t.id, t.text, t.priority) for t in todos] == [(1, "ok", Priority.HIGH)]


def test_todo_records_with_wrong_field_types_are_skipped() -> None:
    raw = (
        '[{"id": "1", "text": "string flag", "completed": "false"},'
        ' {"id": "2", "text": "numeric flag", "completed": 0},'
        ' {"id": 3.7, "text": "float id"},'
        ' {"id": true, "text": "bool id"},'
        ' {"id": 4, "text": "int id", "completed": true},'
        ' {"id": "5", "text": "no flag"}]'
    )
    adapter = PersistenceAdapter(MemoryKeyValueStore({TODOS_KEY: raw}))
    todos = adapter.load_todos()

    assert todos is not None
    assert [(t.id, t.completed) for t in todos] == [(4, True), (5, False)]


def test_save_failure_is_swallowed_and_reported(caplog: pytest.LogCaptureFixture) -> None:
    kv = BrokenKeyValueStore()
    adapter = PersistenceAdapter(kv)

    with caplog.at_level(logging.WARNING):
        assert adapter.save_categories(["일반"]) is False
    assert kv.write_attempts == 1
    assert any("write failed" in r.getMessage() for r in caplog.records)


def test_word_history_cap_applies_on_save_and_load() -> None:
    kv = MemoryKeyValueStore()
    adapter = PersistenceAdapter(kv, word_history_cap=3)

    adapter.save_word_history(["a", "b", "c", "d", "e"])
    assert kv.get(WORD_HISTORY_KEY) == '["a", "b", "c"]'

    kv.set(WORD_HISTORY_KEY, '["a", "b", "c", "d", 5, ""]')
    assert adapter.load_word_history() == ["a", "b", "c"]


def test_persisted_todo_shape_matches_dashboard_storage(persistence: PersistenceAdapter, kv) -> None:
    todos = todo_ops.add_todo([], "x", now_ms=1700000000000)
    persistence.save_todos(todos)

    stored = persistence.load(TODOS_KEY)
    assert stored == [
        {
            "id": "1700000000000",
            "text": "x",
            "completed": False,
            "priority": "medium",
            "category": "일반",
            "dueDate": None,
        }
    ]
