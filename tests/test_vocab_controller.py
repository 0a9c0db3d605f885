# tests/test_vocab_controller.py

from __future__ import annotations

import asyncio

import pytest

from homeboard.storage.kv_store import MemoryKeyValueStore
from homeboard.storage.persistence import PersistenceAdapter
from homeboard.vocab.controller import ControllerState, VocabFetchController
from homeboard.vocab.vocab_models import FetchStatus
from homeboard.vocab.word_history import WordHistory

from .fakes import FailingGenerator, FakeVocabGenerator


def _controller(generator, history: list[str] | None = None, **kwargs) -> tuple[VocabFetchController, PersistenceAdapter]:
    adapter = PersistenceAdapter(MemoryKeyValueStore())
    if history is not None:
        adapter.save_word_history(history)
    return VocabFetchController(generator, adapter, **kwargs), adapter


def test_word_history_caps_and_evicts_oldest_first() -> None:
    h = WordHistory(cap=20)
    for i in range(30):
        h.push(f"w{i}")
        assert len(h) <= 20

    assert h.to_list() == [f"w{i}" for i in range(29, 9, -1)]


def test_word_history_membership_ignores_case_and_spacing() -> None:
    h = WordHistory(["Hello World"])
    assert "hello  world" in h
    assert " HELLO WORLD " in h
    assert "hello" not in h

    h.push("hello world")
    assert h.to_list() == ["hello world"]


@pytest.mark.asyncio
async def test_accepts_novel_word_and_persists_history() -> None:
    gen = FakeVocabGenerator(["hello"])
    ctrl, adapter = _controller(gen)

    outcome = await ctrl.fetch("english")

    assert outcome.status == FetchStatus.ACCEPTED
    assert outcome.word is not None and outcome.word.primary == "hello"
    assert outcome.word.language_code == "en"
    assert adapter.load_word_history() == ["hello"]
    assert ctrl.state == ControllerState.IDLE


@pytest.mark.asyncio
async def test_duplicate_triggers_automatic_retry() -> None:
    gen = FakeVocabGenerator(["hello", "world"])
    ctrl, adapter = _controller(gen, history=["hello"])

    outcome = await ctrl.fetch("english")

    assert len(gen.calls) == 2
    assert outcome.status == FetchStatus.ACCEPTED
    assert outcome.word is not None and outcome.word.primary == "world"
    assert outcome.attempts == 2
    assert adapter.load_word_history() == ["world", "hello"]


@pytest.mark.asyncio
async def test_retries_are_bounded() -> None:
    gen = FakeVocabGenerator(["hello"])
    ctrl, adapter = _controller(gen, history=["hello"], max_retries=5)

    outcome = await ctrl.fetch("english")

    assert outcome.status == FetchStatus.EXHAUSTED
    assert outcome.error
    assert len(gen.calls) == 6
    assert adapter.load_word_history() == ["hello"]
    assert ctrl.state == ControllerState.IDLE


@pytest.mark.asyncio
async def test_remote_failure_leaves_history_untouched() -> None:
    ctrl, adapter = _controller(FailingGenerator(), history=["a"])

    outcome = await ctrl.fetch("english")

    assert outcome.status == FetchStatus.FAILED
    assert outcome.error == "boom"
    assert adapter.load_word_history() == ["a"]
    assert not ctrl.busy


@pytest.mark.asyncio
async def test_concurrent_request_is_ignored() -> None:
    gen = FakeVocabGenerator(["hello"], delay=0.05)
    ctrl, _ = _controller(gen)

    first = asyncio.create_task(ctrl.fetch("english"))
    await asyncio.sleep(0)
    assert ctrl.busy
    second = await ctrl.fetch("english")
    first_outcome = await first

    assert second.status == FetchStatus.IGNORED
    assert first_outcome.status == FetchStatus.ACCEPTED
    assert len(gen.calls) == 1

    # Back to idle: the next request goes through.
    gen.script.append("next")
    third = await ctrl.fetch("english")
    assert third.status == FetchStatus.ACCEPTED


@pytest.mark.asyncio
async def test_hanging_generator_times_out() -> None:
    gen = FakeVocabGenerator(["hello"], delay=1.0)
    ctrl, adapter = _controller(gen, timeout_seconds=0.05)

    outcome = await ctrl.fetch("english")

    assert outcome.status == FetchStatus.FAILED
    assert adapter.load_word_history() is None
    assert ctrl.state == ControllerState.IDLE


@pytest.mark.asyncio
async def test_history_never_exceeds_cap_across_many_fetches() -> None:
    words = [f"w{i}" for i in range(25)]
    gen = FakeVocabGenerator(words)
    ctrl, adapter = _controller(gen)

    for _ in words:
        assert (await ctrl.fetch("english")).status == FetchStatus.ACCEPTED

    stored = adapter.load_word_history()
    assert stored is not None and len(stored) == 20
    assert stored[0] == "w24"
    assert stored[-1] == "w5"
