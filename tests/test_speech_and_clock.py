# tests/test_speech_and_clock.py

from __future__ import annotations

from datetime import UTC, datetime

import httpx
import pytest

from homeboard.clock import format_clock
from homeboard.speech.client import SpeechClient, SpeechError, fallback_audio_url


def _speech(settings, handler) -> SpeechClient:
    return SpeechClient(settings, http=httpx.Client(transport=httpx.MockTransport(handler)))


def test_speech_returns_audio_bytes(settings) -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        seen["ua"] = request.headers["user-agent"]
        return httpx.Response(200, content=b"ID3fake", headers={"content-type": "audio/mpeg"})

    client = _speech(settings, handler)
    result = client.fetch("สวัสดี", "th")
    client.close()

    assert result.audio == b"ID3fake"
    assert not result.is_fallback
    assert seen["tl"] == "th"
    assert seen["q"] == "สวัสดี"
    assert seen["client"] == "tw-ob"
    assert "Mozilla" in seen["ua"]


def test_speech_upstream_failure_uses_fallback_clip(settings) -> None:
    client = _speech(settings, lambda request: httpx.Response(503))
    result = client.fetch("hello", "en")
    client.close()

    assert result.is_fallback
    assert result.fallback_url == fallback_audio_url("en")


def test_speech_network_error_uses_default_language_fallback(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    client = _speech(settings, handler)
    result = client.fetch("hello")
    client.close()

    # settings.tts_default_lang is "th"
    assert result.fallback_url == fallback_audio_url("th")


def test_speech_requires_text(settings) -> None:
    client = _speech(settings, lambda request: httpx.Response(200))
    with pytest.raises(SpeechError):
        client.fetch("   ")
    client.close()


def test_clock_24h_in_seoul() -> None:
    face = format_clock(datetime(2024, 3, 1, 15, 4, 5, tzinfo=UTC), use_24h=True, tz="Asia/Seoul")
    assert (face.hours, face.minutes, face.seconds, face.ampm) == ("00", "04", "05", "")
    assert face.date == "2024-03-02"
    assert str(face) == "00:04:05"


def test_clock_12h_has_ampm() -> None:
    face = format_clock(datetime(2024, 3, 1, 5, 0, 0, tzinfo=UTC), use_24h=False, tz="Asia/Seoul")
    # 14:00 KST
    assert face.hours == "02"
    assert face.ampm == "오후"
    assert str(face) == "02:00:00 오후"
