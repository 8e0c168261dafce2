"""Configuration helpers for the dictionary extractor."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from src import paths

_DEFAULT_CONFIG_PATH = paths.get_config_file()
_SECTION = "dictionary_extractor"

# Flat keys understood for compatibility with property-style configuration files.
ONTOLOGY_IRI_PERSON = "ontology.iri.person"
ONTOLOGY_IRI_LOCATION = "ontology.iri.location"
ONTOLOGY_IRI_ORGANIZATION = "ontology.iri.organization"
ONTOLOGY_IRI_ARTIFACT_HAS_ENTITY = "ontology.iri.artifactHasEntity"
PATH_PREFIX_CONFIG = "termextraction.dictionary.pathPrefix"

_FLAT_CATEGORY_KEYS = {
    ONTOLOGY_IRI_PERSON: "person",
    ONTOLOGY_IRI_LOCATION: "location",
    ONTOLOGY_IRI_ORGANIZATION: "organization",
}
_RELATION_KEY = "artifact_has_entity"


@dataclass(slots=True)
class DictionaryWorkerConfig:
    """Settings consumed by the dictionary extractor worker."""

    path_prefix: Path | None = None
    case_sensitive: bool = True
    concept_iris: Mapping[str, str] = field(default_factory=dict)
    artifact_has_entity_iri: str | None = None

    @classmethod
    def default(cls) -> "DictionaryWorkerConfig":
        return cls(path_prefix=paths.get_dictionary_root())

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        *,
        base_path: Path | None = None,
    ) -> "DictionaryWorkerConfig":
        section = mapping.get(_SECTION, mapping)
        if not isinstance(section, Mapping):
            raise ValueError(f"Configuration for '{_SECTION}' must be a mapping.")

        prefix_value = section.get("path_prefix", mapping.get(PATH_PREFIX_CONFIG))
        path_prefix = _resolve_prefix(prefix_value, base=base_path)

        ontology = section.get("ontology") or {}
        if not isinstance(ontology, Mapping):
            raise ValueError("Ontology configuration must be a mapping of category to IRI.")
        concept_iris = {
            str(key).strip(): str(value).strip()
            for key, value in ontology.items()
            if str(key).strip() and value is not None and str(value).strip()
        }
        for flat_key, category in _FLAT_CATEGORY_KEYS.items():
            flat_value = mapping.get(flat_key)
            if flat_value:
                concept_iris.setdefault(category, str(flat_value).strip())

        relation_iri = concept_iris.pop(_RELATION_KEY, None) or mapping.get(
            ONTOLOGY_IRI_ARTIFACT_HAS_ENTITY
        )

        return cls(
            path_prefix=path_prefix,
            case_sensitive=_coerce_bool(section.get("case_sensitive", True)),
            concept_iris=concept_iris,
            artifact_has_entity_iri=str(relation_iri).strip() if relation_iri else None,
        )

    def to_mapping(self) -> dict[str, Any]:
        ontology: dict[str, str] = dict(self.concept_iris)
        if self.artifact_has_entity_iri:
            ontology[_RELATION_KEY] = self.artifact_has_entity_iri
        return {
            _SECTION: {
                "path_prefix": str(self.path_prefix) if self.path_prefix is not None else None,
                "case_sensitive": self.case_sensitive,
                "ontology": ontology,
            }
        }


def load_worker_config(config_path: Path | None) -> DictionaryWorkerConfig:
    """Load worker configuration from YAML or fall back to defaults."""

    if config_path is not None:
        resolved = Path(config_path).expanduser()
        if not resolved.exists():
            raise FileNotFoundError(f"Extraction config '{resolved}' does not exist")
        data = _load_yaml(resolved)
        return DictionaryWorkerConfig.from_mapping(data, base_path=resolved.parent)

    if _DEFAULT_CONFIG_PATH.exists():
        data = _load_yaml(_DEFAULT_CONFIG_PATH)
        return DictionaryWorkerConfig.from_mapping(data, base_path=_DEFAULT_CONFIG_PATH.parent)

    return DictionaryWorkerConfig.default()


def _load_yaml(path: Path) -> Mapping[str, Any]:
    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Extraction config must be a mapping at the top level.")
    return data


def _resolve_prefix(value: Any, *, base: Path | None) -> Path | None:
    if value is None:
        return None
    if isinstance(value, Path):
        candidate = value
    else:
        text = str(value).strip()
        if not text:
            return None
        if text.startswith("file:"):
            text = "/" + text[len("file:") :].lstrip("/")
        candidate = Path(text)
    candidate = candidate.expanduser()
    if candidate.is_absolute() or base is None:
        return candidate
    return (base / candidate).resolve()


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in {"0", "false", "no", "off"}
    return bool(value)


__all__ = [
    "DictionaryWorkerConfig",
    "ONTOLOGY_IRI_ARTIFACT_HAS_ENTITY",
    "ONTOLOGY_IRI_LOCATION",
    "ONTOLOGY_IRI_ORGANIZATION",
    "ONTOLOGY_IRI_PERSON",
    "PATH_PREFIX_CONFIG",
    "load_worker_config",
]
