"""Tests for the term-mention writer."""
from __future__ import annotations

import pytest

from src.extraction import PhraseMatch
from src.graph import (
    Authorizations,
    Direction,
    DirectVisibilityTranslator,
    Edge,
    InMemoryGraph,
    StoreWriteError,
    Vertex,
)
from src.graph import properties
from src.workers.mentions import TermMentionWriter, term_mention_id, term_mention_span

AUTHORIZATIONS = Authorizations.of(properties.TERM_MENTION_VISIBILITY)


@pytest.fixture()
def graph() -> InMemoryGraph:
    graph = InMemoryGraph()
    graph.prepare_vertex("doc").set_property("text", "none").save()
    return graph


def _source(graph: InMemoryGraph) -> Vertex:
    vertex = graph.get_vertex("doc", Authorizations())
    assert vertex is not None
    return vertex


def _mentions(graph: InMemoryGraph) -> list[Vertex]:
    return graph.get_vertices(
        "doc", Direction.OUT, properties.TERM_MENTION_LABEL_HAS_TERM_MENTION, AUTHORIZATIONS
    )


def test_write_creates_vertices_and_edges(graph: InMemoryGraph) -> None:
    writer = TermMentionWriter(graph, DirectVisibilityTranslator())
    matches = [
        PhraseMatch("person", "Bob Robertson", 63, 76),
        PhraseMatch("location", "Boston , MA", 91, 101),
    ]

    result = writer.write(
        _source(graph),
        matches,
        authorizations=AUTHORIZATIONS,
        property_key="",
        property_name="text",
        concept_iris={"person": "http://example.org/test#person"},
        relation_iri="http://example.org/test#artifactHasEntity",
    )

    assert result.count == 2
    mentions = {vertex.get_property_value(properties.TITLE): vertex for vertex in _mentions(graph)}
    bob = mentions["Bob Robertson"]
    assert term_mention_span(bob) == (63, 76)
    assert bob.get_property_value(properties.CONCEPT_TYPE) == "person"
    assert bob.get_property_value(properties.CONCEPT_IRI) == "http://example.org/test#person"
    assert bob.get_property_value(properties.TERM_MENTION_PROPERTY_NAME) == "text"
    assert bob.visibility.expression == properties.TERM_MENTION_VISIBILITY
    assert mentions["Boston , MA"].get_property(properties.CONCEPT_IRI) is None

    edges = graph.get_edges("doc", Direction.OUT, properties.TERM_MENTION_LABEL_HAS_TERM_MENTION, AUTHORIZATIONS)
    assert {edge.properties[properties.RELATION_IRI] for edge in edges} == {
        "http://example.org/test#artifactHasEntity"
    }


def test_mentions_are_hidden_without_term_mention_authorization(graph: InMemoryGraph) -> None:
    writer = TermMentionWriter(graph, DirectVisibilityTranslator())
    writer.write(_source(graph), [PhraseMatch("person", "Bob", 0, 3)], authorizations=Authorizations())

    visible = graph.get_vertices(
        "doc", Direction.OUT, properties.TERM_MENTION_LABEL_HAS_TERM_MENTION, Authorizations()
    )
    assert visible == []
    assert len(_mentions(graph)) == 1


def test_write_twice_does_not_duplicate(graph: InMemoryGraph) -> None:
    writer = TermMentionWriter(graph, DirectVisibilityTranslator())
    matches = [PhraseMatch("person", "Bob Robertson", 63, 76)]

    first = writer.write(_source(graph), matches, authorizations=AUTHORIZATIONS)
    second = writer.write(_source(graph), matches, authorizations=AUTHORIZATIONS)

    assert first.count == 1
    assert second.count == 0
    assert second.skipped == 1
    assert len(_mentions(graph)) == 1


def test_write_skips_repeated_span_within_batch(graph: InMemoryGraph) -> None:
    writer = TermMentionWriter(graph, DirectVisibilityTranslator())
    matches = [
        PhraseMatch("location", "Washington", 0, 10),
        PhraseMatch("person", "Washington", 0, 10),
    ]

    result = writer.write(_source(graph), matches, authorizations=AUTHORIZATIONS)

    assert result.count == 1
    assert result.created[0].get_property_value(properties.CONCEPT_TYPE) == "location"


def test_write_applies_source_visibility(graph: InMemoryGraph) -> None:
    writer = TermMentionWriter(graph, DirectVisibilityTranslator())

    result = writer.write(
        _source(graph),
        [PhraseMatch("person", "Bob", 0, 3)],
        authorizations=AUTHORIZATIONS,
        visibility_source="secret",
    )

    assert result.created[0].visibility.labels == frozenset({"secret", "termMention"})
    assert _mentions(graph) == []
    assert len(
        graph.get_vertices(
            "doc",
            Direction.OUT,
            properties.TERM_MENTION_LABEL_HAS_TERM_MENTION,
            Authorizations.of("secret", "termMention"),
        )
    ) == 1


class _FailingGraph(InMemoryGraph):
    def save_batch(self, vertices: list[Vertex], edges: list[Edge]) -> None:
        raise StoreWriteError("store offline")


def test_write_propagates_store_errors() -> None:
    graph = _FailingGraph()
    writer = TermMentionWriter(graph, DirectVisibilityTranslator())

    with pytest.raises(StoreWriteError, match="offline"):
        writer.write(Vertex("doc"), [PhraseMatch("person", "Bob", 0, 3)], authorizations=AUTHORIZATIONS)


def test_write_without_matches_touches_nothing(graph: InMemoryGraph) -> None:
    writer = TermMentionWriter(graph, DirectVisibilityTranslator())

    result = writer.write(_source(graph), [], authorizations=AUTHORIZATIONS)

    assert result.count == 0
    assert graph.vertex_count() == 1


def test_write_skips_mention_hidden_by_earlier_visibility(graph: InMemoryGraph) -> None:
    writer = TermMentionWriter(graph, DirectVisibilityTranslator())
    matches = [PhraseMatch("person", "Bob", 0, 3)]

    first = writer.write(
        _source(graph), matches, authorizations=AUTHORIZATIONS, visibility_source="secret"
    )
    second = writer.write(_source(graph), matches, authorizations=AUTHORIZATIONS)

    assert first.count == 1
    assert second.count == 0
    assert second.skipped == 1
    assert graph.vertex_count() == 2
    assert graph.has_vertex(term_mention_id("doc", "", 0, 3))
