"""Dictionary resource loading."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import yaml

from . import Dictionary, DictionarySet
from .tokenize import tokenize_phrase

__all__ = [
    "DICTIONARY_SUFFIXES",
    "ResourceLoadError",
    "discover_dictionary_files",
    "load_dictionaries",
    "load_dictionary_file",
]

logger = logging.getLogger(__name__)

DICTIONARY_SUFFIXES = (".dict", ".txt", ".yaml", ".yml")
_YAML_SUFFIXES = {".yaml", ".yml"}
_COMMENT_PREFIX = "#"


class ResourceLoadError(RuntimeError):
    """Raised when a dictionary resource is missing, unreadable, or malformed."""


def discover_dictionary_files(path_prefix: Path) -> tuple[Path, ...]:
    """Return the dictionary files stored directly under ``path_prefix``."""

    root = Path(path_prefix).expanduser()
    if not root.is_dir():
        raise ResourceLoadError(f"Dictionary directory '{root}' does not exist")
    files = [
        candidate
        for candidate in root.iterdir()
        if candidate.is_file() and candidate.suffix.lower() in DICTIONARY_SUFFIXES
    ]
    return tuple(sorted(files))


def load_dictionaries(
    paths: Iterable[Path],
    *,
    case_sensitive: bool = True,
) -> DictionarySet:
    """Load every dictionary file and merge categories that appear more than once."""

    dictionary_set = DictionarySet()
    for path in paths:
        dictionary_set = dictionary_set.merged_with(
            load_dictionary_file(Path(path), case_sensitive=case_sensitive)
        )
    return dictionary_set


def load_dictionary_file(path: Path, *, case_sensitive: bool = True) -> DictionarySet:
    """Load a single dictionary resource.

    Plain files hold one phrase per line and take their category from the file
    stem. YAML files hold a mapping of category to a list of phrases.
    """

    resolved = path.expanduser()
    if not resolved.is_file():
        raise ResourceLoadError(f"Dictionary file '{resolved}' does not exist")
    try:
        raw = resolved.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ResourceLoadError(f"Dictionary file '{resolved}' is not valid UTF-8") from exc
    except OSError as exc:
        raise ResourceLoadError(f"Dictionary file '{resolved}' could not be read: {exc}") from exc

    if resolved.suffix.lower() in _YAML_SUFFIXES:
        groups = _parse_yaml_groups(raw, resolved)
    else:
        groups = {resolved.stem: _parse_phrase_lines(raw.splitlines())}

    dictionaries: dict[str, Dictionary] = {}
    for category, phrases in groups.items():
        tokenized = [tokenize_phrase(phrase) for phrase in phrases]
        tokenized = [tokens for tokens in tokenized if tokens]
        dictionaries[category] = Dictionary.from_phrases(
            category, tokenized, case_sensitive=case_sensitive
        )
        logger.info(
            "Loaded %s phrases for category '%s' from %s",
            len(dictionaries[category]),
            category,
            resolved,
        )
    return DictionarySet(dictionaries)


def _parse_phrase_lines(lines: Iterable[str]) -> list[str]:
    phrases: list[str] = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith(_COMMENT_PREFIX):
            continue
        phrases.append(stripped)
    return phrases


def _parse_yaml_groups(raw: str, path: Path) -> Mapping[str, Sequence[str]]:
    try:
        data: Any = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ResourceLoadError(f"Dictionary file '{path}' is not valid YAML: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ResourceLoadError(f"Dictionary file '{path}' must be a mapping at the top level.")

    groups: dict[str, list[str]] = {}
    for key, value in data.items():
        category = str(key).strip()
        if not category:
            continue
        if isinstance(value, str) or not isinstance(value, (list, tuple)):
            raise ResourceLoadError(
                f"Dictionary category '{category}' in '{path}' must be a list of phrases."
            )
        if not all(isinstance(item, str) for item in value):
            raise ResourceLoadError(
                f"Dictionary category '{category}' in '{path}' must only contain strings."
            )
        groups[category] = _parse_phrase_lines(value)
    return groups
