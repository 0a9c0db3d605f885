# src/homeboard/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from datetime import datetime

from ..cli.commands import format_todo_line, registry as command_registry, render_todo_view
from ..clock import format_clock
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _rewrite_prev_line(line: str) -> None:
    """
    Replace the last terminal line with `line`.
    Best-effort: if not a TTY, just print a new line.
    """
    try:
        if sys.stdout.isatty():
            sys.stdout.write("\033[1A\033[2K\r")
            sys.stdout.write(line + "\n")
            sys.stdout.flush()
        else:
            print(line)
    except OSError:
        print(line)


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _banner(state: AppState) -> str:
    face = format_clock(
        use_24h=state.clock_24h,
        tz=str(getattr(state.settings, "clock_timezone", "Asia/Seoul")),
    )
    app_name = str(getattr(state.settings, "app_name", "homeboard"))
    return f"{app_name} | {face.date} {face}\n{render_todo_view(state)}"


def handle_line(state: AppState, line: str, emit=None) -> str | None:
    """
    One console input -> one reply.

    Slash-lines go to the command registry; any other text is added as a task with
    default priority/category, like pressing Enter in the dashboard's input box.
    """
    line = line.strip()
    if not line:
        return None

    try:
        cmd_response = command_registry.handle(state, line, emit=emit)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."

    if cmd_response is not None:
        return cmd_response

    items = state.todos.add(line)
    return f"Added: {format_todo_line(items[0])}"


def run_console_loop(state: AppState) -> None:
    logger.info("Console dashboard started.")
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    print(_banner(state))

    def emit(text: str) -> None:
        # Immediate user-visible feedback for long operations (e.g., vocabulary fetch)
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(">>> ").strip()
            _rewrite_prev_line(f"[{_ts_local()}] >>> {user_input}")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input, emit=emit)
        if reply is not None:
            print(f"[{_ts_local()}] {reply}\n")

    logger.info("Console dashboard finished.")
