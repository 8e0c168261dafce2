"""Tests for dictionary extractor configuration helpers."""
from __future__ import annotations

from pathlib import Path

import pytest

from src.extraction.config import (
    ONTOLOGY_IRI_ARTIFACT_HAS_ENTITY,
    ONTOLOGY_IRI_PERSON,
    PATH_PREFIX_CONFIG,
    DictionaryWorkerConfig,
    load_worker_config,
)


def test_load_worker_config_reads_nested_section(tmp_path: Path) -> None:
    config_path = tmp_path / "extraction.yaml"
    config_path.write_text(
        "dictionary_extractor:\n"
        "  path_prefix: dictionaries\n"
        "  case_sensitive: 'no'\n"
        "  ontology:\n"
        "    person: http://example.org/test#person\n"
        "    artifact_has_entity: http://example.org/test#artifactHasEntity\n",
        encoding="utf-8",
    )

    config = load_worker_config(config_path)

    assert config.path_prefix == (tmp_path / "dictionaries").resolve()
    assert config.case_sensitive is False
    assert config.concept_iris == {"person": "http://example.org/test#person"}
    assert config.artifact_has_entity_iri == "http://example.org/test#artifactHasEntity"


def test_load_worker_config_rejects_non_mapping(tmp_path: Path) -> None:
    config_path = tmp_path / "invalid.yaml"
    config_path.write_text("- not a mapping\n- another entry\n", encoding="utf-8")

    with pytest.raises(ValueError, match="must be a mapping"):
        load_worker_config(config_path)


def test_load_worker_config_missing_explicit_path(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_worker_config(tmp_path / "missing.yaml")


def test_from_mapping_accepts_flat_keys(tmp_path: Path) -> None:
    config = DictionaryWorkerConfig.from_mapping(
        {
            ONTOLOGY_IRI_PERSON: "http://example.org/test#person",
            ONTOLOGY_IRI_ARTIFACT_HAS_ENTITY: "http://example.org/test#artifactHasEntity",
            PATH_PREFIX_CONFIG: f"file:///{tmp_path}",
        }
    )

    assert config.path_prefix == tmp_path
    assert config.concept_iris["person"] == "http://example.org/test#person"
    assert config.artifact_has_entity_iri == "http://example.org/test#artifactHasEntity"
    assert config.case_sensitive is True


def test_to_mapping_round_trips(tmp_path: Path) -> None:
    expected = DictionaryWorkerConfig(
        path_prefix=tmp_path,
        case_sensitive=False,
        concept_iris={"location": "http://example.org/test#location"},
        artifact_has_entity_iri="http://example.org/test#has",
    )

    assert DictionaryWorkerConfig.from_mapping(expected.to_mapping()) == expected


def test_from_mapping_rejects_non_mapping_ontology() -> None:
    with pytest.raises(ValueError, match="Ontology"):
        DictionaryWorkerConfig.from_mapping({"dictionary_extractor": {"ontology": ["person"]}})
