# src/homeboard/storage/persistence.py

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from ..core.ports import KeyValueStore
from ..todos.todo_models import TodoItem

logger = logging.getLogger(__name__)

TODOS_KEY = "todos"
CATEGORIES_KEY = "todoCategories"
WORD_HISTORY_KEY = "vocabHistory"

WORD_HISTORY_CAP = 20


class PersistenceAdapter:
    """
    The only read/write path to the durable key-value store.

    Best-effort by contract:
    - load() never raises: a missing or malformed entry is "absent" (None).
    - save() never raises: failures are logged and reported as False; the caller's
      in-memory state stays the source of truth for the session.

    The typed helpers own the JSON shape of each collection.
    """

    def __init__(self, kv: KeyValueStore, *, word_history_cap: int = WORD_HISTORY_CAP) -> None:
        self._kv = kv
        self._word_history_cap = max(1, int(word_history_cap))

    # ---- generic ----

    def load(self, key: str) -> Any | None:
        try:
            raw = self._kv.get(key)
        except Exception:
            logger.warning("Persistence read failed key=%s", key, exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Malformed JSON in store key=%s; treating as absent", key)
            return None

    def save(self, key: str, value: Any) -> bool:
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            logger.exception("Failed to JSON-encode value for key=%s", key)
            return False
        try:
            self._kv.set(key, payload)
        except Exception:
            logger.warning("Persistence write failed key=%s", key, exc_info=True)
            return False
        logger.debug("Persisted key=%s bytes=%d", key, len(payload))
        return True

    # ---- todos ----

    def load_todos(self) -> list[TodoItem] | None:
        data = self.load(TODOS_KEY)
        if data is None:
            return None
        if not isinstance(data, list):
            logger.warning("Stored todos are not a list; ignoring")
            return None

        out: list[TodoItem] = []
        seen: set[int] = set()
        for raw in data:
            if not isinstance(raw, dict):
                continue
            try:
                item = TodoItem.from_dict(raw)
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed todo record: %r", raw)
                continue
            if item.id in seen:
                logger.warning("Skipping todo with duplicate id=%s", item.id)
                continue
            seen.add(item.id)
            out.append(item)
        return out

    def save_todos(self, todos: Sequence[TodoItem]) -> bool:
        return self.save(TODOS_KEY, [t.to_dict() for t in todos])

    # ---- categories ----

    def load_categories(self) -> list[str] | None:
        data = self.load(CATEGORIES_KEY)
        if data is None:
            return None
        if not isinstance(data, list):
            logger.warning("Stored categories are not a list; ignoring")
            return None

        out: list[str] = []
        for c in data:
            if isinstance(c, str) and c.strip() and c not in out:
                out.append(c)
        return out

    def save_categories(self, categories: Sequence[str]) -> bool:
        return self.save(CATEGORIES_KEY, list(categories))

    # ---- word history ----

    def load_word_history(self) -> list[str] | None:
        data = self.load(WORD_HISTORY_KEY)
        if data is None:
            return None
        if not isinstance(data, list):
            logger.warning("Stored word history is not a list; ignoring")
            return None
        terms = [w for w in data if isinstance(w, str) and w.strip()]
        return terms[: self._word_history_cap]

    def save_word_history(self, terms: Sequence[str]) -> bool:
        return self.save(WORD_HISTORY_KEY, list(terms)[: self._word_history_cap])
