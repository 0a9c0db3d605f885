# src/homeboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts:
- the weather poller in a background thread (when an API key is configured),
- the console dashboard in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, start_weather
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    runner = state.weather_runner
    if runner is not None:
        try:
            runner.stop()
            runner.join(timeout=10.0)
        except Exception:
            logger.debug("Weather poller stop failed.", exc_info=True)

    try:
        state.close()
    except Exception:
        logger.debug("State close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)
    start_weather(state)

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
