# src/homeboard/weather/client.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# OpenWeatherMap description -> Korean label shown on the dashboard.
WEATHER_TRANSLATIONS: dict[str, str] = {
    "clear sky": "맑음",
    "few clouds": "구름 조금",
    "scattered clouds": "구름 조금",
    "broken clouds": "구름 많음",
    "shower rain": "소나기",
    "rain": "비",
    "thunderstorm": "천둥번개",
    "snow": "눈",
    "mist": "안개",
    "overcast clouds": "흐림",
    "light rain": "약한 비",
    "moderate rain": "중간 비",
    "heavy intensity rain": "강한 비",
    "very heavy rain": "매우 강한 비",
    "extreme rain": "극심한 비",
    "freezing rain": "얼어붙는 비",
    "light snow": "약한 눈",
    "heavy snow": "강한 눈",
    "sleet": "진눈깨비",
    "light shower snow": "약한 눈 소나기",
    "heavy shower snow": "강한 눈 소나기",
    "fog": "안개",
    "haze": "실안개",
}


class WeatherError(RuntimeError):
    pass


def translate_condition(description: str) -> str:
    return WEATHER_TRANSLATIONS.get(description.strip().lower(), description)


@dataclass(frozen=True, slots=True)
class WeatherReport:
    city: str
    temperature: float
    condition: str
    description: str
    humidity: int | None = None
    wind_speed: float | None = None
    feels_like: float | None = None
    icon: str | None = None

    @property
    def label(self) -> str:
        return translate_condition(self.description)


def parse_weather_payload(data: Any, city: str) -> WeatherReport:
    try:
        main = data["main"]
        weather0 = data["weather"][0]
        wind = data.get("wind") or {}
        return WeatherReport(
            city=str(data.get("name") or city),
            temperature=float(main["temp"]),
            condition=str(weather0["main"]),
            description=str(weather0.get("description", "")),
            humidity=int(main["humidity"]) if main.get("humidity") is not None else None,
            wind_speed=float(wind["speed"]) if wind.get("speed") is not None else None,
            feels_like=float(main["feels_like"]) if main.get("feels_like") is not None else None,
            icon=weather0.get("icon"),
        )
    except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
        raise WeatherError("날씨 응답 형식이 올바르지 않습니다.") from e


class WeatherClient:
    """Current-conditions client for the OpenWeatherMap 2.5 API."""

    def __init__(self, settings: Any, *, http: httpx.AsyncClient | None = None) -> None:
        self._api_key = getattr(settings, "weather_api_key", None)
        self._base_url = str(
            getattr(settings, "weather_base_url", "https://api.openweathermap.org/data/2.5/weather")
        )
        self._units = str(getattr(settings, "weather_units", "metric"))
        self._lang = str(getattr(settings, "weather_lang", "kr"))
        timeout_s = float(getattr(settings, "http_timeout_seconds", 10.0))
        self._http = http or httpx.AsyncClient(timeout=httpx.Timeout(timeout_s))

    async def aclose(self) -> None:
        await self._http.aclose()

    async def fetch(self, city: str) -> WeatherReport:
        if not self._api_key:
            raise WeatherError("Weather API key is not set. Set HOMEBOARD_WEATHER_API_KEY in .env.")

        try:
            response = await self._http.get(
                self._base_url,
                params={"q": city, "appid": self._api_key, "units": self._units, "lang": self._lang},
            )
        except httpx.HTTPError as e:
            raise WeatherError("날씨 서버에 연결할 수 없습니다.") from e

        if response.status_code >= 400:
            logger.warning("Weather API error status=%s body=%s", response.status_code, response.text[:200])
            raise WeatherError(f"날씨 데이터를 가져오는데 실패했습니다: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise WeatherError("날씨 응답 형식이 올바르지 않습니다.") from e

        report = parse_weather_payload(data, city)
        logger.debug("Weather city=%s temp=%.1f %s", report.city, report.temperature, report.description)
        return report
