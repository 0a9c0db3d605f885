# src/homeboard/weather/poller.py

from __future__ import annotations

"""
Weather poller.

A small polling loop that fetches current conditions on a fixed interval and
publishes the latest result (or the latest error) to a thread-safe WeatherBoard.
The console reads the board; it never waits on the network.
"""

import asyncio
import contextlib
import logging
import threading
import time
from dataclasses import dataclass

from ..core.ports import WeatherProvider
from .client import WeatherReport

logger = logging.getLogger(__name__)

RETRY_HINT = "날씨 정보를 불러오지 못했습니다. /weather refresh 로 다시 시도하세요."


@dataclass(frozen=True, slots=True)
class WeatherSnapshot:
    report: WeatherReport | None
    error: str | None
    updated_at: float | None

    @property
    def retry_hint(self) -> str | None:
        return RETRY_HINT if self.error else None


class WeatherBoard:
    """Latest weather result shared between the poller thread and the console."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._report: WeatherReport | None = None
        self._error: str | None = None
        self._updated_at: float | None = None

    def publish(self, report: WeatherReport) -> None:
        with self._lock:
            self._report = report
            self._error = None
            self._updated_at = time.time()

    def publish_error(self, message: str) -> None:
        # Keep the last good report visible next to the error.
        with self._lock:
            self._error = message
            self._updated_at = time.time()

    def snapshot(self) -> WeatherSnapshot:
        with self._lock:
            return WeatherSnapshot(report=self._report, error=self._error, updated_at=self._updated_at)


async def refresh_weather(provider: WeatherProvider, board: WeatherBoard, city: str) -> bool:
    try:
        report = await provider.fetch(city)
    except Exception as e:
        logger.warning("Weather fetch failed city=%s: %s", city, e)
        board.publish_error(str(e) or "weather error")
        return False
    board.publish(report)
    logger.info("Weather updated city=%s temp=%.1f", report.city, report.temperature)
    return True


async def run_weather_poller(
    provider: WeatherProvider,
    board: WeatherBoard,
    *,
    city: str,
    interval_seconds: float = 1800.0,
    stop_event: asyncio.Event | None = None,
) -> None:
    """
    Fetch immediately, then every interval_seconds until stop_event is set.

    Without a stop_event, cancel the coroutine/task to stop it.
    """
    sleep_s = max(0.01, float(interval_seconds))
    stop = stop_event or asyncio.Event()

    while not stop.is_set():
        await refresh_weather(provider, board, city)
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(stop.wait(), timeout=sleep_s)


@dataclass
class WeatherBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event
    provider: WeatherProvider
    board: WeatherBoard
    city: str

    def refresh(self, timeout: float = 15.0) -> bool:
        """Run one fetch on the poller's loop (the HTTP client is bound to it) and wait."""
        fut = asyncio.run_coroutine_threadsafe(
            refresh_weather(self.provider, self.board, self.city), self.loop
        )
        try:
            return bool(fut.result(timeout=timeout))
        except TimeoutError:
            fut.cancel()
            self.board.publish_error("날씨 요청 시간이 초과되었습니다.")
            return False

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except Exception:
            logger.debug("Failed to signal weather poller stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_weather_in_background(
    provider: WeatherProvider,
    board: WeatherBoard,
    *,
    city: str,
    interval_seconds: float,
) -> WeatherBackgroundRunner | None:
    """
    Run the poller in a daemon thread with its own event loop, so the blocking
    console input() loop can run in the main thread.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(
                run_weather_poller(
                    provider, board, city=city, interval_seconds=interval_seconds, stop_event=stop_event
                )
            )
        finally:
            try:
                loop.run_until_complete(provider.aclose())
            except Exception:
                logger.warning("Failed to close weather provider.", exc_info=True)
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="weather-poller", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Weather thread did not initialize properly.")
        return None

    logger.info("Weather poller started city=%s interval=%.0fs", city, interval_seconds)
    return WeatherBackgroundRunner(
        thread=t, loop=loop, stop_event=stop_event, provider=provider, board=board, city=city
    )
