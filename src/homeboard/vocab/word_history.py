# src/homeboard/vocab/word_history.py

from __future__ import annotations

from collections.abc import Iterable, Iterator


def normalize_term(term: str) -> str:
    return " ".join(term.split()).casefold()


class WordHistory:
    """
    Bounded most-recent-first log of vocabulary terms.

    Membership is case- and whitespace-insensitive so "Hello" and " hello " count as
    the same word. Once the cap is exceeded the oldest entries are dropped.
    """

    def __init__(self, terms: Iterable[str] = (), *, cap: int = 20) -> None:
        self.cap = max(1, int(cap))
        self._terms: list[str] = []
        for t in terms:
            if not t or not t.strip() or t in self:
                continue
            self._terms.append(t)
            if len(self._terms) >= self.cap:
                break

    def __contains__(self, term: object) -> bool:
        if not isinstance(term, str):
            return False
        key = normalize_term(term)
        return any(normalize_term(t) == key for t in self._terms)

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[str]:
        return iter(self._terms)

    def push(self, term: str) -> None:
        """Prepend term (moving it to the front if already present) and enforce the cap."""
        key = normalize_term(term)
        self._terms = [t for t in self._terms if normalize_term(t) != key]
        self._terms.insert(0, term)
        del self._terms[self.cap :]

    def to_list(self) -> list[str]:
        return list(self._terms)
