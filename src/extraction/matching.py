"""Phrase matching over token sequences."""
from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from . import Dictionary, PhraseMatch, Token

__all__ = ["NameFinder", "PhraseMatcher"]


@runtime_checkable
class NameFinder(Protocol):
    """Finds category-tagged spans in a token sequence."""

    category: str

    def match(self, tokens: Sequence[Token]) -> tuple[PhraseMatch, ...]:
        ...


class PhraseMatcher:
    """Greedy longest-match-first lookup of dictionary phrases.

    At each token position the longest dictionary phrase that matches is
    taken and scanning resumes after it, so matches produced by one matcher
    never overlap.
    """

    def __init__(self, dictionary: Dictionary) -> None:
        self._dictionary = dictionary
        self._max_length = dictionary.max_phrase_length

    @property
    def category(self) -> str:
        return self._dictionary.category

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    def match(self, tokens: Sequence[Token]) -> tuple[PhraseMatch, ...]:
        words = tuple(token.text for token in tokens)
        total = len(words)
        matches: list[PhraseMatch] = []
        index = 0
        while index < total:
            length = self._longest_match_at(words, index)
            if length == 0:
                index += 1
                continue
            end = index + length
            matches.append(
                PhraseMatch(
                    category=self.category,
                    text=" ".join(words[index:end]),
                    start_offset=tokens[index].start_offset,
                    end_offset=tokens[end - 1].end_offset,
                    token_start=index,
                    token_end=end,
                )
            )
            index = end
        return tuple(matches)

    def _longest_match_at(self, words: tuple[str, ...], index: int) -> int:
        upper = min(self._max_length, len(words) - index)
        for length in range(upper, 0, -1):
            if self._dictionary.contains(words[index : index + length]):
                return length
        return 0

    def __repr__(self) -> str:
        return f"PhraseMatcher(category={self.category!r}, phrases={len(self._dictionary)})"
