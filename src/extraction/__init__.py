"""Core data models for dictionary-based term extraction."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

__all__ = [
    "Token",
    "Dictionary",
    "DictionarySet",
    "PhraseMatch",
]


@dataclass(frozen=True, slots=True)
class Token:
    """A token and its character span within the source text."""

    text: str
    start_offset: int
    end_offset: int


@dataclass(frozen=True, slots=True)
class Dictionary:
    """A fixed set of multi-token phrases associated with one category."""

    category: str
    phrases: frozenset[tuple[str, ...]]
    case_sensitive: bool = True

    def __post_init__(self) -> None:
        if not self.category:
            raise ValueError("category is required for Dictionary")
        normalized = frozenset(
            tuple(self._fold(token) for token in phrase) for phrase in self.phrases if phrase
        )
        object.__setattr__(self, "phrases", normalized)

    @classmethod
    def from_phrases(
        cls,
        category: str,
        phrases: Iterable[Iterable[str]],
        *,
        case_sensitive: bool = True,
    ) -> "Dictionary":
        return cls(
            category=category,
            phrases=frozenset(tuple(phrase) for phrase in phrases),
            case_sensitive=case_sensitive,
        )

    @property
    def max_phrase_length(self) -> int:
        return max((len(phrase) for phrase in self.phrases), default=0)

    def contains(self, tokens: tuple[str, ...]) -> bool:
        """Return True when the token sequence is a phrase of this dictionary."""

        return tuple(self._fold(token) for token in tokens) in self.phrases

    def merged_with(self, other: "Dictionary") -> "Dictionary":
        if other.category != self.category:
            raise ValueError(
                f"Cannot merge dictionary '{other.category}' into '{self.category}'"
            )
        return Dictionary(
            category=self.category,
            phrases=self.phrases | other.phrases,
            case_sensitive=self.case_sensitive,
        )

    def _fold(self, token: str) -> str:
        return token if self.case_sensitive else token.casefold()

    def __len__(self) -> int:
        return len(self.phrases)


@dataclass(frozen=True, slots=True)
class DictionarySet:
    """Immutable category to dictionary mapping, in load order."""

    dictionaries: Mapping[str, Dictionary] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "dictionaries", dict(self.dictionaries))

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self.dictionaries)

    def get(self, category: str) -> Dictionary | None:
        return self.dictionaries.get(category)

    def merged_with(self, other: "DictionarySet") -> "DictionarySet":
        merged = dict(self.dictionaries)
        for category, dictionary in other.dictionaries.items():
            existing = self.get(category)
            merged[category] = dictionary if existing is None else existing.merged_with(dictionary)
        return DictionarySet(merged)

    def __iter__(self):
        return iter(self.dictionaries.values())

    def __len__(self) -> int:
        return len(self.dictionaries)


@dataclass(frozen=True, slots=True)
class PhraseMatch:
    """A dictionary phrase found in a text, with its character span."""

    category: str
    text: str
    start_offset: int
    end_offset: int
    token_start: int = 0
    token_end: int = 0

    def __post_init__(self) -> None:
        if self.start_offset >= self.end_offset:
            raise ValueError("PhraseMatch start_offset must precede end_offset")

    @property
    def span(self) -> tuple[int, int]:
        return (self.start_offset, self.end_offset)
