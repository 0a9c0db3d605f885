# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from homeboard.cli.bootstrap import create_initial_state
from homeboard.core.state import AppState
from homeboard.storage.kv_store import MemoryKeyValueStore
from homeboard.storage.persistence import PersistenceAdapter

from .fakes import FakeVocabGenerator


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's .env.
    """
    return SimpleNamespace(
        app_name="homeboard-test",
        data_dir=tmp_path,
        kv_db_path=tmp_path / "storage.sqlite3",
        openai_api_key=None,
        openai_base_url="https://example.invalid/v1",
        vocab_model="test-model",
        vocab_temperature=0.7,
        vocab_language="english",
        vocab_timeout_seconds=2.0,
        vocab_max_retries=5,
        vocab_history_size=20,
        weather_api_key=None,
        weather_base_url="https://weather.invalid/data/2.5/weather",
        weather_city="Seoul",
        weather_units="metric",
        weather_lang="kr",
        weather_poll_seconds=1800.0,
        tts_base_url="https://tts.invalid/translate_tts",
        tts_default_lang="th",
        http_timeout_seconds=2.0,
        clock_timezone="Asia/Seoul",
        clock_24h=True,
    )


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def persistence(kv: MemoryKeyValueStore) -> PersistenceAdapter:
    return PersistenceAdapter(kv)


@pytest.fixture()
def generator() -> FakeVocabGenerator:
    return FakeVocabGenerator(["hello", "world", "again"])


@pytest.fixture()
def state(settings: SimpleNamespace, kv: MemoryKeyValueStore, generator: FakeVocabGenerator):
    """AppState wired with an in-memory store and a scripted vocabulary generator."""
    st: AppState = create_initial_state(settings=settings, kv=kv, generator=generator)
    yield st
    st.close()
