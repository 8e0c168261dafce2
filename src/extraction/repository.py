"""User-maintained dictionary entries kept alongside the file dictionaries."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any

from . import Dictionary, DictionarySet
from .tokenize import tokenize_phrase

_REPOSITORY_VERSION = 1


@dataclass(slots=True)
class DictionaryEntry:
    entry_id: str
    tokens: str
    concept: str
    resolved_name: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry_id": self.entry_id,
            "tokens": self.tokens,
            "concept": self.concept,
            "resolved_name": self.resolved_name,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "DictionaryEntry":
        created_at = datetime.fromisoformat(payload["created_at"])
        return cls(
            entry_id=payload["entry_id"],
            tokens=payload["tokens"],
            concept=payload["concept"],
            resolved_name=payload.get("resolved_name"),
            created_at=created_at,
        )


class DictionaryEntryRepository:
    """In-memory store of dictionary entries with optional JSON persistence."""

    def __init__(self, storage_path: Path | None = None) -> None:
        self._storage_path = Path(storage_path) if storage_path is not None else None
        self._entries: dict[str, DictionaryEntry] = {}
        self._lock = Lock()
        if self._storage_path is not None and self._storage_path.exists():
            self._load()

    def save_entry(
        self,
        tokens: str,
        concept: str,
        *,
        resolved_name: str | None = None,
        entry_id: str | None = None,
    ) -> DictionaryEntry:
        if not tokens.strip():
            raise ValueError("tokens are required for a dictionary entry")
        if not concept.strip():
            raise ValueError("concept is required for a dictionary entry")
        entry = DictionaryEntry(
            entry_id=entry_id or uuid.uuid4().hex,
            tokens=tokens.strip(),
            concept=concept.strip(),
            resolved_name=resolved_name,
        )
        with self._lock:
            self._entries[entry.entry_id] = entry
            self._write()
        return entry

    def delete(self, entry_id: str) -> bool:
        with self._lock:
            removed = self._entries.pop(entry_id, None) is not None
            if removed:
                self._write()
        return removed

    def find_all(self) -> tuple[DictionaryEntry, ...]:
        with self._lock:
            return tuple(self._entries.values())

    def find_by_concept(self, concept: str) -> tuple[DictionaryEntry, ...]:
        return tuple(entry for entry in self.find_all() if entry.concept == concept)

    def to_dictionaries(self, *, case_sensitive: bool = True) -> DictionarySet:
        """Group entries by concept into dictionaries."""

        grouped: dict[str, list[tuple[str, ...]]] = {}
        for entry in self.find_all():
            phrase = tokenize_phrase(entry.tokens)
            if phrase:
                grouped.setdefault(entry.concept, []).append(phrase)
        return DictionarySet(
            {
                concept: Dictionary.from_phrases(concept, phrases, case_sensitive=case_sensitive)
                for concept, phrases in grouped.items()
            }
        )

    def _load(self) -> None:
        assert self._storage_path is not None
        payload = json.loads(self._storage_path.read_text(encoding="utf-8"))
        for item in payload.get("entries", []):
            entry = DictionaryEntry.from_dict(item)
            self._entries[entry.entry_id] = entry

    def _write(self) -> None:
        if self._storage_path is None:
            return
        payload = {
            "version": _REPOSITORY_VERSION,
            "entries": [entry.to_dict() for entry in self._entries.values()],
        }
        self._storage_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._storage_path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        tmp_path.replace(self._storage_path)


__all__ = ["DictionaryEntry", "DictionaryEntryRepository"]
