# src/homeboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage/LLM/HTTP providers swappable and makes testing easier.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..speech.client import SpeechResult
    from ..vocab.vocab_models import VocabWord
    from ..weather.client import WeatherReport


class KeyValueStore(Protocol):
    """
    Durable string-keyed store (the dashboard's "local storage").

    get() returns None for a missing key. set() may raise when the backend is full
    or unavailable; callers go through PersistenceAdapter, which absorbs that.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class VocabGenerator(Protocol):
    """Remote generator of a random word pair for the given primary language."""

    async def fetch(self, primary_language: str) -> VocabWord: ...


class WeatherProvider(Protocol):
    async def fetch(self, city: str) -> WeatherReport: ...
    async def aclose(self) -> None: ...


class SpeechProvider(Protocol):
    def fetch(self, text: str, lang: str) -> SpeechResult: ...
