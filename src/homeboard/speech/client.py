# src/homeboard/speech/client.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/58.0.3029.110 Safari/537.36"
)

# Static pronunciation clips served when the TTS upstream is unreachable.
_FALLBACK_AUDIO: dict[str, str] = {
    "th": "https://ssl.gstatic.com/dictionary/static/pronunciation/2022-03-02/audio/th/สวัสดี.mp3",
    "en": "https://ssl.gstatic.com/dictionary/static/pronunciation/2022-03-02/audio/en/hello.mp3",
}


class SpeechError(RuntimeError):
    pass


def fallback_audio_url(lang: str) -> str:
    return _FALLBACK_AUDIO.get(lang, _FALLBACK_AUDIO["en"])


@dataclass(frozen=True, slots=True)
class SpeechResult:
    """Either synthesized audio bytes or a URL of a static fallback clip."""

    audio: bytes | None = None
    fallback_url: str | None = None
    content_type: str = "audio/mpeg"

    @property
    def is_fallback(self) -> bool:
        return self.audio is None


class SpeechClient:
    """
    Text-to-speech over the translate_tts endpoint.

    Upstream failure is not an error for the caller: it gets the per-language
    fallback clip instead (the page then plays that or uses local synthesis).
    """

    def __init__(self, settings: Any, *, http: httpx.Client | None = None) -> None:
        self._base_url = str(getattr(settings, "tts_base_url", "https://translate.google.com/translate_tts"))
        self._default_lang = str(getattr(settings, "tts_default_lang", "th") or "th")
        timeout_s = float(getattr(settings, "http_timeout_seconds", 10.0))
        self._http = http or httpx.Client(timeout=httpx.Timeout(timeout_s), follow_redirects=True)

    def close(self) -> None:
        self._http.close()

    def fetch(self, text: str, lang: str | None = None) -> SpeechResult:
        if not text or not text.strip():
            raise SpeechError("텍스트 파라미터가 필요합니다.")
        lang = (lang or self._default_lang).strip() or self._default_lang

        try:
            response = self._http.get(
                self._base_url,
                params={"ie": "UTF-8", "tl": lang, "client": "tw-ob", "q": text},
                headers={"User-Agent": _USER_AGENT},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("TTS request failed lang=%s (%s); using fallback clip", lang, e)
            return SpeechResult(fallback_url=fallback_audio_url(lang))

        logger.debug("TTS ok lang=%s bytes=%d", lang, len(response.content))
        return SpeechResult(
            audio=response.content,
            content_type=response.headers.get("content-type", "audio/mpeg"),
        )
