# src/homeboard/core/state.py

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any, TypeVar

from ..speech.client import SpeechClient
from ..storage.persistence import PersistenceAdapter
from ..todos.todo_models import SortOption
from ..todos.todo_store import TodoStore
from ..todos.todo_view import FilterState
from ..vocab.controller import VocabFetchController
from ..weather.poller import WeatherBackgroundRunner, WeatherBoard

T = TypeVar("T")


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    persistence: PersistenceAdapter
    todos: TodoStore
    vocab: VocabFetchController
    speech: SpeechClient
    weather_board: WeatherBoard

    # UI controls; the projected to-do view is recomputed from these on every render.
    filters: FilterState = field(default_factory=FilterState)
    sort: SortOption = SortOption.NEWEST
    vocab_language: str = "english"
    clock_24h: bool = True

    weather_runner: WeatherBackgroundRunner | None = None
    # One event loop for the console's async calls; AsyncOpenAI's pool is bound to it.
    aio: asyncio.Runner | None = None

    def run_async(self, coro: Coroutine[Any, Any, T]) -> T:
        if self.aio is None:
            self.aio = asyncio.Runner()
        return self.aio.run(coro)

    def close(self) -> None:
        if self.aio is not None:
            self.aio.close()
            self.aio = None
        self.speech.close()
