# src/homeboard/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Request-level DEBUG/INFO from the weather, speech and LLM clients.
_CHATTY_HTTP_LOGGERS = ("httpx", "httpcore", "openai")


class _ConsoleNoiseFilter(logging.Filter):
    """Keep the shared prompt line readable: dashboard records pass, others only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("homeboard."):
            # The poller runs in a background thread; its INFO lines would interleave with input().
            if name.startswith("homeboard.weather."):
                return record.levelno >= logging.WARNING
            return True

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/homeboard",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Route logs to stderr (filtered) and to `<log_dir>/homeboard.log` (everything at file_level).

    Routine weather polling and third-party records below ERROR only reach the file.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "homeboard.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)

    for name in _CHATTY_HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
