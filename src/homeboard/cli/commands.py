# src/homeboard/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
import re
from collections.abc import Callable
from dataclasses import replace
from typing import cast

from ..clock import format_clock
from ..core.state import AppState
from ..speech.client import SpeechError
from ..todos.todo_models import (
    Priority,
    SortOption,
    StatusFilter,
    TodoItem,
    priority_label,
)
from ..todos.todo_view import FilterState, project_todos
from ..vocab.vocab_models import LANGUAGE_CODES, FetchStatus

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_DUE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class CommandRegistry:
    """Simple slash-command registry used by the console dashboard (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def format_todo_line(item: TodoItem) -> str:
    mark = "x" if item.completed else " "
    due = f" (마감일: {item.due_date})" if item.due_date else ""
    return f"[{mark}] {item.id} [{priority_label(item.priority)}] #{item.category} {item.text}{due}"


def render_todo_view(state: AppState) -> str:
    view = project_todos(state.todos.todos, state.filters, state.sort)
    stats = state.todos.stats()
    header = f"할 일 목록 ({stats.completed}/{stats.total} 완료)"
    if not view:
        return f"{header}\n  (no tasks)"
    return "\n".join([header, *(f"  {format_todo_line(t)}" for t in view)])


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    f = state.filters
    llm = "ON" if getattr(state.settings, "openai_api_key", None) else "OFFLINE word list"
    return (
        "Status:\n"
        f"  Vocabulary: {llm} (language={state.vocab_language}, history={len(state.vocab.history)})\n"
        f"  Weather city: {getattr(state.settings, 'weather_city', '?')}\n"
        f"  Filter: status={f.status_filter.value} category={f.category or '-'} "
        f"show_completed={'on' if f.show_completed else 'off'} search={f.search_text!r}\n"
        f"  Sort: {state.sort.value}"
    )


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <text> [!high|!medium|!low] [#category] [@YYYY-MM-DD]
    """
    priority = Priority.MEDIUM
    category: str | None = None
    due: str | None = None
    words: list[str] = []

    for tok in args:
        if tok.startswith("!") and len(tok) > 1:
            try:
                priority = Priority.parse(tok[1:])
                continue
            except ValueError:
                pass
        if tok.startswith("#") and len(tok) > 1:
            category = tok[1:]
            continue
        if tok.startswith("@") and _DUE_RE.match(tok[1:]):
            due = tok[1:]
            continue
        words.append(tok)

    text = " ".join(words)
    if not text.strip():
        return "Usage: /add <text> [!high|!medium|!low] [#category] [@YYYY-MM-DD]"

    items = state.todos.add(text, priority, category, due)
    return f"Added: {format_todo_line(items[0])}"


def cmd_done(state: AppState, args: list[str]) -> str:
    todo_id = _parse_id(args)
    if todo_id is None:
        return "Usage: /done <id>"
    state.todos.toggle_complete(todo_id)
    item = state.todos.get(todo_id)
    if item is None:
        return f"No task with id {todo_id}."
    return format_todo_line(item)


def cmd_delete(state: AppState, args: list[str]) -> str:
    todo_id = _parse_id(args)
    if todo_id is None:
        return "Usage: /del <id>"
    if state.todos.get(todo_id) is None:
        return f"No task with id {todo_id}."
    state.todos.delete(todo_id)
    return f"Deleted task {todo_id}."


def cmd_priority(state: AppState, args: list[str]) -> str:
    todo_id = _parse_id(args)
    if todo_id is None or len(args) < 2:
        return "Usage: /prio <id> <high|medium|low>"
    try:
        priority = Priority.parse(args[1])
    except ValueError:
        return "Usage: /prio <id> <high|medium|low>"
    state.todos.set_priority(todo_id, priority)
    item = state.todos.get(todo_id)
    if item is None:
        return f"No task with id {todo_id}."
    return format_todo_line(item)


def cmd_clear(state: AppState, args: list[str]) -> str:
    before = state.todos.stats().completed
    state.todos.clear_completed()
    return f"Cleared {before} completed task(s)."


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_todo_view(state)


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter all|active|completed
    /filter cat <name>|none
    /filter done on|off      (show/hide completed tasks)
    /filter reset
    """
    usage = "Usage: /filter all|active|completed | /filter cat <name>|none | /filter done on|off | /filter reset"
    if not args:
        return usage

    sub = args[0].lower()
    if sub in {s.value for s in StatusFilter}:
        state.filters = replace(state.filters, status_filter=StatusFilter(sub))
    elif sub in ("cat", "category"):
        name = " ".join(args[1:]).strip()
        state.filters = replace(state.filters, category=None if name.lower() in ("", "none", "all") else name)
    elif sub == "done" and len(args) > 1 and args[1].lower() in ("on", "off"):
        state.filters = replace(state.filters, show_completed=args[1].lower() == "on")
    elif sub == "reset":
        state.filters = FilterState()
    else:
        return usage
    return render_todo_view(state)


def cmd_sort(state: AppState, args: list[str]) -> str:
    try:
        state.sort = SortOption(args[0].lower()) if args else SortOption.NEWEST
    except ValueError:
        return "Usage: /sort newest|oldest|priority"
    return render_todo_view(state)


def cmd_search(state: AppState, args: list[str]) -> str:
    state.filters = replace(state.filters, search_text=" ".join(args))
    return render_todo_view(state)


def cmd_category(state: AppState, args: list[str]) -> str:
    name = " ".join(args).strip()
    before = state.todos.categories
    cats = state.todos.add_category(name) if name else before
    listing = ", ".join(cats)
    if name and len(cats) == len(before):
        return f"Category already exists: {name}\nCategories: {listing}"
    return f"Categories: {listing}"


def cmd_word(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    language = args[0].lower() if args else state.vocab_language
    if language not in LANGUAGE_CODES:
        return f"Usage: /word [{'|'.join(LANGUAGE_CODES)}]"
    state.vocab_language = language

    if emit:
        with contextlib.suppress(Exception):
            emit("[VOCAB] 로딩 중...")

    outcome = state.run_async(state.vocab.fetch(language))
    if outcome.status == FetchStatus.ACCEPTED and outcome.word is not None:
        w = outcome.word
        return f"{language}: {w.primary}\n한글: {w.translation}\n(/say {w.primary} {w.language_code})"
    if outcome.status == FetchStatus.IGNORED:
        return "A word is already being fetched."
    return outcome.error or "단어를 가져오는데 문제가 발생했습니다. 다시 시도해주세요."


def cmd_say(state: AppState, args: list[str]) -> str:
    """/say <text> [lang]  (lang: en, th, ...)"""
    if not args:
        return "Usage: /say <text> [en|th]"
    lang: str | None = None
    if len(args) > 1 and args[-1].lower() in LANGUAGE_CODES.values():
        lang = args[-1].lower()
        args = args[:-1]
    try:
        result = state.speech.fetch(" ".join(args), lang)
    except SpeechError as e:
        return str(e)

    if result.audio is None:
        return f"TTS unavailable; fallback clip: {result.fallback_url}"

    out = state.settings.data_dir / "speech.mp3"
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(result.audio)
    except OSError:
        logger.exception("Failed to write speech audio to %s", out)
        return "Failed to save audio."
    return f"Saved {len(result.audio)} bytes of audio to {out}"


def cmd_weather(state: AppState, args: list[str]) -> str:
    if args and args[0].lower() in ("refresh", "retry"):
        if state.weather_runner is None:
            return "Weather is not running (set HOMEBOARD_WEATHER_API_KEY)."
        state.weather_runner.refresh()

    snap = state.weather_board.snapshot()
    lines: list[str] = []
    r = snap.report
    if r is not None:
        lines.append(f"{r.city}: {r.temperature:.1f}°C {r.label}")
        if r.humidity is not None:
            lines.append(f"  습도: {r.humidity}%")
        if r.wind_speed is not None:
            lines.append(f"  풍속: {r.wind_speed}m/s")
    if snap.error:
        lines.append(f"[WEATHER] {snap.error}")
        if snap.retry_hint:
            lines.append(snap.retry_hint)
    return "\n".join(lines) if lines else "Weather: loading..."


def cmd_time(state: AppState, args: list[str]) -> str:
    if args and args[0] in ("12", "24"):
        state.clock_24h = args[0] == "24"
    face = format_clock(
        use_24h=state.clock_24h,
        tz=str(getattr(state.settings, "clock_timezone", "Asia/Seoul")),
    )
    return f"{face.date} {face}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show current settings and view controls.")
registry.register(
    "add", cmd_add, help_text="Add a task: /add <text> [!high|!low] [#category] [@YYYY-MM-DD]."
)
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <id>.", aliases=["rm"])
registry.register("prio", cmd_priority, help_text="Set priority: /prio <id> <high|medium|low>.")
registry.register("clear", cmd_clear, help_text="Remove all completed tasks.")
registry.register("list", cmd_list, help_text="Show the filtered/sorted task list.", aliases=["ls"])
registry.register(
    "filter", cmd_filter, help_text="Filter: all|active|completed | cat <name>|none | done on|off | reset."
)
registry.register("sort", cmd_sort, help_text="Sort: newest|oldest|priority.")
registry.register("search", cmd_search, help_text="Search task text (no args clears).")
registry.register("cat", cmd_category, help_text="List categories or add one: /cat [name].")
registry.register("word", cmd_word, help_text="Fetch a vocabulary word: /word [english|thai].")
registry.register("say", cmd_say, help_text="Fetch pronunciation audio: /say <text> [en|th].")
registry.register("weather", cmd_weather, help_text="Show weather (/weather refresh to retry).")
registry.register("time", cmd_time, help_text="Show the clock (/time 12|24 switches format).")
