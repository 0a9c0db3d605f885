# src/homeboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Every key has a HOMEBOARD_ prefixed env var; a few accept a legacy fallback name.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "HOMEBOARD"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    kv_db_path: Path

    # ---- Vocabulary (OpenAI-compatible LLM) ----
    openai_api_key: str | None
    openai_base_url: str
    vocab_model: str
    vocab_temperature: float
    vocab_language: str
    vocab_timeout_seconds: float
    vocab_max_retries: int
    vocab_history_size: int

    # ---- Weather ----
    weather_api_key: str | None
    weather_base_url: str
    weather_city: str
    weather_units: str
    weather_lang: str
    weather_poll_seconds: float

    # ---- Speech ----
    tts_base_url: str
    tts_default_lang: str

    # ---- HTTP ----
    http_timeout_seconds: float

    # ---- Clock ----
    clock_timezone: str
    clock_24h: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "homeboard") or "homeboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/homeboard"))
        kv_db_path = _env_path(_k("KV_DB_PATH"), data_dir / "storage.sqlite3")

        openai_api_key = _first_env(_k("OPENAI_API_KEY"), "OPENAI_API_KEY", default=None)
        openai_base_url = _env(_k("OPENAI_BASE_URL"), "https://api.openai.com/v1")
        vocab_model = _env(_k("VOCAB_MODEL"), "gpt-4o")
        vocab_temperature = _env_float(_k("VOCAB_TEMPERATURE"), 0.7)
        vocab_language = _env(_k("VOCAB_LANGUAGE"), "english").strip().lower() or "english"
        vocab_timeout_seconds = _env_float(_k("VOCAB_TIMEOUT_SECONDS"), 20.0)
        vocab_max_retries = max(0, _env_int(_k("VOCAB_MAX_RETRIES"), 5))
        vocab_history_size = max(1, _env_int(_k("VOCAB_HISTORY_SIZE"), 20))

        weather_api_key = _first_env(_k("WEATHER_API_KEY"), "OPENWEATHER_API_KEY", default=None)
        weather_base_url = _env(
            _k("WEATHER_BASE_URL"), "https://api.openweathermap.org/data/2.5/weather"
        )
        weather_city = _env(_k("WEATHER_CITY"), "Seoul")
        weather_units = _env(_k("WEATHER_UNITS"), "metric")
        weather_lang = _env(_k("WEATHER_LANG"), "kr")
        # Original dashboard refreshes every 30 minutes.
        weather_poll_seconds = _env_float(_k("WEATHER_POLL_SECONDS"), 30 * 60.0)

        tts_base_url = _env(_k("TTS_BASE_URL"), "https://translate.google.com/translate_tts")
        tts_default_lang = _env(_k("TTS_DEFAULT_LANG"), "th")

        http_timeout_seconds = _env_float(_k("HTTP_TIMEOUT_SECONDS"), 10.0)

        clock_timezone = _env(_k("CLOCK_TIMEZONE"), "Asia/Seoul")
        clock_24h = _env_bool(_k("CLOCK_24H"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            kv_db_path=kv_db_path,
            openai_api_key=openai_api_key,
            openai_base_url=openai_base_url,
            vocab_model=vocab_model,
            vocab_temperature=vocab_temperature,
            vocab_language=vocab_language,
            vocab_timeout_seconds=vocab_timeout_seconds,
            vocab_max_retries=vocab_max_retries,
            vocab_history_size=vocab_history_size,
            weather_api_key=weather_api_key,
            weather_base_url=weather_base_url,
            weather_city=weather_city,
            weather_units=weather_units,
            weather_lang=weather_lang,
            weather_poll_seconds=weather_poll_seconds,
            tts_base_url=tts_base_url,
            tts_default_lang=tts_default_lang,
            http_timeout_seconds=http_timeout_seconds,
            clock_timezone=clock_timezone,
            clock_24h=clock_24h,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
