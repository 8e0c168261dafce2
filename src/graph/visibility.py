"""Translate source visibility descriptors into graph visibilities."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .base import Visibility


@runtime_checkable
class VisibilityTranslator(Protocol):
    def to_visibility(self, source: str | None) -> Visibility:
        ...


class DirectVisibilityTranslator:
    """Uses the source descriptor verbatim as the visibility expression."""

    def to_visibility(self, source: str | None) -> Visibility:
        return Visibility((source or "").strip())


__all__ = ["DirectVisibilityTranslator", "VisibilityTranslator"]
