# src/homeboard/vocab/generator.py

from __future__ import annotations

import itertools
import json
import logging
from collections.abc import Callable, Iterable
from typing import Any

import httpx
import openai
from openai import AsyncOpenAI

from .vocab_models import VocabWord, language_code_for
from .word_history import normalize_term

logger = logging.getLogger(__name__)


class VocabGeneratorError(RuntimeError):
    """Remote generator failed: network, non-2xx, or an unusable payload."""


_SYSTEM_PROMPTS: dict[str, str] = {
    "english": (
        "당신은 영어 학습자를 위한 유용한 영어 단어나 표현과 그 한글 번역을 제공하는 도우미입니다. "
        "JSON 형식으로만 응답하세요."
    ),
    "thai": (
        "당신은 태국어 학습자를 위한 유용한 태국어 단어나 표현과 그 한글 번역을 제공하는 도우미입니다. "
        "JSON 형식으로만 응답하세요."
    ),
}

_USER_PROMPTS: dict[str, str] = {
    "english": (
        "유용한 영어 단어나 표현 하나를 랜덤하게 선택해서 알려주세요. "
        "실용적이고 일상생활이나 비즈니스에서 자주 쓰이는 것이 좋습니다. "
        '응답은 반드시 {"english": "영어 단어나 표현", "korean": "한글 번역"} 형태의 JSON 형식이어야 합니다.'
    ),
    "thai": (
        "유용한 태국어 단어나 표현 하나를 랜덤하게 선택해서 알려주세요. "
        "실용적이고 일상생활에서 자주 쓰이는 것이 좋습니다. "
        '응답은 반드시 {"thai": "태국어 단어나 표현", "korean": "한글 번역"} 형태의 JSON 형식이어야 합니다.'
    ),
}


def parse_vocab_payload(content: str | None, primary_language: str) -> VocabWord:
    """
    Turn the model's JSON text into a VocabWord.

    Accepts the language-named key ("english"/"thai") or a generic "primary" key,
    and "korean" or "translation" for the other side.
    """
    if not content or not content.strip():
        raise VocabGeneratorError("Generator returned an empty response.")
    try:
        data = json.loads(content)
    except ValueError as e:
        raise VocabGeneratorError("Generator returned invalid JSON.") from e
    if not isinstance(data, dict):
        raise VocabGeneratorError("Generator returned JSON that is not an object.")

    primary = data.get(primary_language) or data.get("primary")
    translation = data.get("korean") or data.get("translation")
    if not isinstance(primary, str) or not primary.strip():
        raise VocabGeneratorError(f"Generator response is missing the {primary_language} term.")
    if not isinstance(translation, str) or not translation.strip():
        raise VocabGeneratorError("Generator response is missing the translation.")

    return VocabWord(
        primary=primary.strip(),
        translation=translation.strip(),
        language_code=language_code_for(primary_language),
    )


def friendly_error_message(err: Exception) -> str:
    msg = str(err).strip() or "Vocabulary error."
    if "API key is not set" in msg:
        return (
            "Vocabulary generator is not configured (missing API key). "
            "Set HOMEBOARD_OPENAI_API_KEY in .env."
        )
    if "base URL is not set" in msg:
        return "Vocabulary generator is not configured (missing base URL). Set HOMEBOARD_OPENAI_BASE_URL in .env."
    return msg


class OpenAIVocabGenerator:
    """
    Word-pair generator backed by an OpenAI-compatible chat completion.

    IMPORTANT:
    - No secrets required at construction; the client is created lazily.
    - SDK retries are disabled: the fetch controller decides what gets retried.
    """

    def __init__(self, settings: Any, *, client: AsyncOpenAI | None = None) -> None:
        self._settings = settings
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is not None:
            return self._client

        api_key = getattr(self._settings, "openai_api_key", None)
        base_url = getattr(self._settings, "openai_base_url", "") or ""

        if not api_key or not str(api_key).strip():
            raise VocabGeneratorError("LLM API key is not set.")
        if not base_url.strip():
            raise VocabGeneratorError("LLM base URL is not set.")

        timeout_s = float(getattr(self._settings, "vocab_timeout_seconds", 20.0))
        self._client = AsyncOpenAI(
            base_url=str(base_url),
            api_key=str(api_key),
            timeout=httpx.Timeout(connect=5.0, read=timeout_s, write=10.0, pool=5.0),
            max_retries=0,
        )
        return self._client

    async def fetch(self, primary_language: str) -> VocabWord:
        if primary_language not in _USER_PROMPTS:
            raise VocabGeneratorError(f"Unsupported language: {primary_language}")

        client = self._get_client()
        model = str(getattr(self._settings, "vocab_model", "gpt-4o"))
        temperature = float(getattr(self._settings, "vocab_temperature", 0.7))

        logger.debug("Vocab: requesting word model=%s language=%s", model, primary_language)
        try:
            completion = await client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPTS[primary_language]},
                    {"role": "user", "content": _USER_PROMPTS[primary_language]},
                ],
                response_format={"type": "json_object"},
                temperature=temperature,
            )
        except openai.AuthenticationError as e:
            raise VocabGeneratorError("LLM authentication failed. Check HOMEBOARD_OPENAI_API_KEY.") from e
        except openai.RateLimitError as e:
            raise VocabGeneratorError("LLM is rate-limited. Try again later.") from e
        except (openai.APIConnectionError, openai.APITimeoutError) as e:
            raise VocabGeneratorError("LLM network/timeout error. Try again later.") from e
        except openai.APIError as e:
            raise VocabGeneratorError(f"LLM request failed ({e.__class__.__name__}).") from e

        try:
            content = completion.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise VocabGeneratorError("Generator returned no choices.") from e

        return parse_vocab_payload(content, primary_language)


# Each list is longer than the default word-history cap, so a full cycle always
# reaches a word that has already been evicted.
_OFFLINE_WORDS: dict[str, list[tuple[str, str]]] = {
    "english": [
        ("follow up", "후속 조치를 하다"),
        ("deadline", "마감일"),
        ("on the same page", "같은 생각을 하고 있는"),
        ("reschedule", "일정을 변경하다"),
        ("take a rain check", "다음 기회로 미루다"),
        ("heads-up", "미리 알림"),
        ("touch base", "잠깐 연락하다"),
        ("workload", "업무량"),
        ("run late", "늦어지다"),
        ("figure out", "알아내다"),
        ("get the hang of", "요령을 터득하다"),
        ("in charge of", "~을 담당하는"),
        ("look forward to", "~을 기대하다"),
        ("out of stock", "품절된"),
        ("by the way", "그런데"),
        ("catch up", "밀린 것을 따라잡다"),
        ("reasonable", "합리적인"),
        ("commute", "통근하다"),
        ("appointment", "약속, 예약"),
        ("errand", "심부름, 볼일"),
        ("on second thought", "다시 생각해 보니"),
        ("get along with", "~와 잘 지내다"),
        ("call it a day", "오늘은 여기까지 하다"),
        ("no big deal", "별일 아니다"),
        ("make it", "시간 맞춰 가다, 해내다"),
    ],
    "thai": [
        ("สวัสดี", "안녕하세요"),
        ("ขอบคุณ", "감사합니다"),
        ("อร่อย", "맛있다"),
        ("เท่าไหร่", "얼마예요"),
        ("ไม่เป็นไร", "괜찮아요"),
        ("ขอโทษ", "미안합니다"),
        ("ใช่", "네, 맞아요"),
        ("ไม่ใช่", "아니에요"),
        ("น้ำ", "물"),
        ("ข้าว", "밥"),
        ("ห้องน้ำ", "화장실"),
        ("อยู่ที่ไหน", "어디에 있어요?"),
        ("เผ็ด", "맵다"),
        ("ไม่เผ็ด", "안 맵게"),
        ("แพง", "비싸다"),
        ("ถูก", "싸다"),
        ("ลดได้ไหม", "깎아 줄 수 있어요?"),
        ("พรุ่งนี้", "내일"),
        ("วันนี้", "오늘"),
        ("เมื่อวาน", "어제"),
        ("สนุก", "재미있다"),
        ("เหนื่อย", "피곤하다"),
        ("ช้า ๆ", "천천히"),
        ("เข้าใจ", "이해하다"),
        ("ไม่เข้าใจ", "이해하지 못하다"),
    ],
}


class OfflineVocabGenerator:
    """
    Offline deterministic generator used for demos when no API key is configured.

    Cycles through a built-in word list per language. When `recent` is given it is
    called on every fetch and any term it returns is skipped, so a persisted word
    history left over from an earlier session does not stall the cycle.
    """

    def __init__(self, *, recent: Callable[[], Iterable[str] | None] | None = None) -> None:
        self._cycles = {lang: itertools.cycle(words) for lang, words in _OFFLINE_WORDS.items()}
        self._recent = recent

    def _recent_keys(self) -> set[str]:
        if self._recent is None:
            return set()
        return {normalize_term(t) for t in self._recent() or () if isinstance(t, str)}

    async def fetch(self, primary_language: str) -> VocabWord:
        cycle = self._cycles.get(primary_language)
        if cycle is None:
            raise VocabGeneratorError(f"Unsupported language: {primary_language}")

        recent = self._recent_keys()
        primary, translation = next(cycle)
        for _ in range(len(_OFFLINE_WORDS[primary_language]) - 1):
            if normalize_term(primary) not in recent:
                break
            primary, translation = next(cycle)

        return VocabWord(
            primary=primary,
            translation=translation,
            language_code=language_code_for(primary_language),
        )
