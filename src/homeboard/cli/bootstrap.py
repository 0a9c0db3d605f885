# src/homeboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (storage/todos/vocab/speech/weather),
- hydrates persisted collections.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStore, VocabGenerator
from ..core.state import AppState
from ..speech.client import SpeechClient
from ..storage.kv_store import SQLiteKeyValueStore
from ..storage.persistence import PersistenceAdapter
from ..todos.todo_store import TodoStore
from ..vocab.controller import VocabFetchController
from ..vocab.generator import OfflineVocabGenerator, OpenAIVocabGenerator
from ..weather.client import WeatherClient
from ..weather.poller import WeatherBoard, start_weather_in_background

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.kv_db_path.parent.mkdir(parents=True, exist_ok=True)


def build_vocab_generator(settings, persistence: PersistenceAdapter | None = None) -> VocabGenerator:
    """Real LLM generator when an API key is configured, offline demo list otherwise."""
    if getattr(settings, "openai_api_key", None):
        return OpenAIVocabGenerator(settings)
    logger.info("No LLM API key configured; vocabulary uses the offline word list.")
    recent = persistence.load_word_history if persistence is not None else None
    return OfflineVocabGenerator(recent=recent)


def create_initial_state(
    *,
    settings=None,
    kv: KeyValueStore | None = None,
    generator: VocabGenerator | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings/kv/generator injectable makes the app easier to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        _ensure_local_dirs(settings)
        kv = SQLiteKeyValueStore(settings.kv_db_path)

    persistence = PersistenceAdapter(kv, word_history_cap=settings.vocab_history_size)

    todos = TodoStore(persistence)
    todos.hydrate()

    vocab = VocabFetchController(
        generator or build_vocab_generator(settings, persistence),
        persistence,
        history_cap=settings.vocab_history_size,
        max_retries=settings.vocab_max_retries,
        timeout_seconds=settings.vocab_timeout_seconds,
    )

    return AppState(
        settings=settings,
        persistence=persistence,
        todos=todos,
        vocab=vocab,
        speech=SpeechClient(settings),
        weather_board=WeatherBoard(),
        vocab_language=settings.vocab_language,
        clock_24h=settings.clock_24h,
    )


def start_weather(state: AppState) -> None:
    settings = state.settings
    if not getattr(settings, "weather_api_key", None):
        logger.info("Weather disabled (no HOMEBOARD_WEATHER_API_KEY).")
        state.weather_board.publish_error("Weather API key is not set.")
        return
    state.weather_runner = start_weather_in_background(
        WeatherClient(settings),
        state.weather_board,
        city=settings.weather_city,
        interval_seconds=settings.weather_poll_seconds,
    )
