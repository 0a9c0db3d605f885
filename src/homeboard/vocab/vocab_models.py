# src/homeboard/vocab/vocab_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

# primary language -> language code used by the speech endpoint
LANGUAGE_CODES: dict[str, str] = {
    "english": "en",
    "thai": "th",
}


def language_code_for(primary_language: str) -> str:
    try:
        return LANGUAGE_CODES[primary_language]
    except KeyError:
        raise ValueError(
            f"unsupported primary language: {primary_language!r} "
            f"(expected one of {', '.join(LANGUAGE_CODES)})"
        ) from None


@dataclass(frozen=True, slots=True)
class VocabWord:
    primary: str
    translation: str
    language_code: str


class FetchStatus(StrEnum):
    ACCEPTED = "accepted"
    FAILED = "failed"
    # Every attempt returned a recently seen word.
    EXHAUSTED = "exhausted"
    # Another fetch was already in flight.
    IGNORED = "ignored"


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    status: FetchStatus
    word: VocabWord | None = None
    error: str | None = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.status == FetchStatus.ACCEPTED
