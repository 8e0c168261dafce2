"""Collect phrase matches across several finders."""
from __future__ import annotations

from typing import Iterable, Sequence

from . import DictionarySet, PhraseMatch, Token
from .matching import NameFinder, PhraseMatcher
from .tokenize import tokenize

__all__ = ["SpanCollector", "finders_for"]


def finders_for(dictionaries: DictionarySet) -> tuple[NameFinder, ...]:
    """Build one phrase matcher per dictionary, preserving load order."""

    return tuple(PhraseMatcher(dictionary) for dictionary in dictionaries)


class SpanCollector:
    """Union of matches from independent finders.

    Matches from different categories may overlap and are all kept; finders
    are assumed to cover disjoint categories.
    """

    def __init__(self, finders: Iterable[NameFinder]) -> None:
        self._finders = tuple(finders)

    @property
    def finders(self) -> tuple[NameFinder, ...]:
        return self._finders

    def collect(self, tokens: Sequence[Token]) -> tuple[PhraseMatch, ...]:
        combined: list[PhraseMatch] = []
        for finder in self._finders:
            combined.extend(finder.match(tokens))
        # sorted() is stable, so equal start offsets keep finder order.
        return tuple(sorted(combined, key=lambda match: match.start_offset))

    def collect_text(self, text: str) -> tuple[PhraseMatch, ...]:
        return self.collect(tokenize(text))
