# src/homeboard/clock.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from zoneinfo import ZoneInfo


@dataclass(frozen=True, slots=True)
class ClockFace:
    hours: str
    minutes: str
    seconds: str
    ampm: str = ""
    date: str = ""

    def __str__(self) -> str:
        t = f"{self.hours}:{self.minutes}:{self.seconds}"
        return f"{t} {self.ampm}" if self.ampm else t


def format_clock(
    now: datetime | None = None,
    *,
    use_24h: bool = True,
    tz: str = "Asia/Seoul",
) -> ClockFace:
    """Split the current time in `tz` into display segments (AM/PM only in 12h mode)."""
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    local = now.astimezone(ZoneInfo(tz))

    if use_24h:
        hours = f"{local.hour:02d}"
        ampm = ""
    else:
        h12 = local.hour % 12 or 12
        hours = f"{h12:02d}"
        ampm = "오전" if local.hour < 12 else "오후"

    return ClockFace(
        hours=hours,
        minutes=f"{local.minute:02d}",
        seconds=f"{local.second:02d}",
        ampm=ampm,
        date=local.strftime("%Y-%m-%d"),
    )
