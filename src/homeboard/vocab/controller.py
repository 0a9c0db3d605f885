# src/homeboard/vocab/controller.py

from __future__ import annotations

"""
Vocabulary fetch controller.

Idle -> Fetching -> {Accepted, Rejected-Retry, Failed}

- Only one fetch is in flight; a request arriving meanwhile is dropped (IGNORED).
- A word already in the rolling history is rejected and re-requested right away,
  up to max_retries extra calls; past that the fetch ends as EXHAUSTED.
- Each remote call is bounded by timeout_seconds.
- Accepted words are prepended to the history, which is then persisted.
"""

import asyncio
import logging
from enum import StrEnum

from ..core.ports import VocabGenerator
from ..storage.persistence import WORD_HISTORY_CAP, PersistenceAdapter
from .generator import VocabGeneratorError, friendly_error_message
from .vocab_models import FetchOutcome, FetchStatus, VocabWord
from .word_history import WordHistory

logger = logging.getLogger(__name__)


class ControllerState(StrEnum):
    IDLE = "idle"
    FETCHING = "fetching"


class VocabFetchController:
    def __init__(
        self,
        generator: VocabGenerator,
        persistence: PersistenceAdapter,
        *,
        history_cap: int = WORD_HISTORY_CAP,
        max_retries: int = 5,
        timeout_seconds: float | None = 20.0,
    ) -> None:
        self._generator = generator
        self._persistence = persistence
        self._max_retries = max(0, int(max_retries))
        self._timeout = float(timeout_seconds) if timeout_seconds else None
        self.state = ControllerState.IDLE
        self.history = WordHistory(persistence.load_word_history() or [], cap=history_cap)
        logger.info("Vocab history loaded: %d words", len(self.history))

    @property
    def busy(self) -> bool:
        return self.state == ControllerState.FETCHING

    async def _call_generator(self, primary_language: str) -> VocabWord:
        if self._timeout is None:
            return await self._generator.fetch(primary_language)
        return await asyncio.wait_for(self._generator.fetch(primary_language), self._timeout)

    async def fetch(self, primary_language: str = "english") -> FetchOutcome:
        if self.state == ControllerState.FETCHING:
            logger.debug("Vocab fetch ignored: already fetching")
            return FetchOutcome(status=FetchStatus.IGNORED)

        self.state = ControllerState.FETCHING
        attempts = 0
        try:
            while attempts <= self._max_retries:
                attempts += 1
                try:
                    word = await self._call_generator(primary_language)
                except TimeoutError:
                    logger.info("Vocab fetch timed out after %.1fs", self._timeout or 0.0)
                    return FetchOutcome(
                        status=FetchStatus.FAILED,
                        error="단어를 가져오는 요청이 시간 초과되었습니다. 다시 시도해주세요.",
                        attempts=attempts,
                    )
                except VocabGeneratorError as e:
                    logger.info("Vocab fetch failed: %s", e)
                    return FetchOutcome(
                        status=FetchStatus.FAILED,
                        error=friendly_error_message(e),
                        attempts=attempts,
                    )
                except Exception:
                    logger.exception("Vocab generator crashed")
                    return FetchOutcome(
                        status=FetchStatus.FAILED,
                        error="단어를 가져오는데 문제가 발생했습니다. 다시 시도해주세요.",
                        attempts=attempts,
                    )

                if word.primary in self.history:
                    logger.debug("Vocab duplicate %r (attempt %d), retrying", word.primary, attempts)
                    continue

                self.history.push(word.primary)
                self._persistence.save_word_history(self.history.to_list())
                logger.info("Vocab accepted %r after %d attempt(s)", word.primary, attempts)
                return FetchOutcome(status=FetchStatus.ACCEPTED, word=word, attempts=attempts)

            logger.warning("Vocab fetch exhausted after %d duplicate results", attempts)
            return FetchOutcome(
                status=FetchStatus.EXHAUSTED,
                error="최근에 본 단어만 반환되었습니다. 잠시 후 다시 시도해주세요.",
                attempts=attempts,
            )
        finally:
            self.state = ControllerState.IDLE
