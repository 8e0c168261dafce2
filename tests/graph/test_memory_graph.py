"""Tests for the in-memory property graph."""
from __future__ import annotations

import pytest

from src.graph import (
    Authorizations,
    Direction,
    DirectVisibilityTranslator,
    Edge,
    InMemoryGraph,
    StoreWriteError,
    Vertex,
    Visibility,
)


def test_visibility_combines_labels() -> None:
    visibility = Visibility("").and_("termMention")
    assert visibility.expression == "termMention"
    assert Visibility("secret").and_("termMention").labels == frozenset({"secret", "termMention"})


def test_authorizations_require_every_label() -> None:
    authorizations = Authorizations.of("termMention")

    assert authorizations.can_read(Visibility(""))
    assert authorizations.can_read(Visibility("termMention"))
    assert not authorizations.can_read(Visibility("secret&termMention"))


def test_direct_translator_passes_source_through() -> None:
    translator = DirectVisibilityTranslator()
    assert translator.to_visibility(None) == Visibility("")
    assert translator.to_visibility(" secret ") == Visibility("secret")


def test_prepare_vertex_and_read_back() -> None:
    graph = InMemoryGraph()
    graph.prepare_vertex("v1").set_property("text", "none").save(Authorizations())

    vertex = graph.get_vertex("v1", Authorizations())

    assert vertex is not None
    assert vertex.get_property_value("text") == "none"


def test_get_vertices_follows_edges_and_hides_unreadable() -> None:
    graph = InMemoryGraph()
    source = Vertex("doc")
    public = Vertex("public")
    hidden = Vertex("hidden", visibility=Visibility("secret"))
    graph.save_batch(
        [source, public, hidden],
        [
            Edge("e1", "doc", "public", "mentions"),
            Edge("e2", "doc", "hidden", "mentions"),
            Edge("e3", "public", "doc", "cites"),
        ],
    )

    outgoing = graph.get_vertices("doc", Direction.OUT, "mentions", Authorizations())
    assert [vertex.vertex_id for vertex in outgoing] == ["public"]

    with_secret = graph.get_vertices("doc", Direction.OUT, "mentions", Authorizations.of("secret"))
    assert {vertex.vertex_id for vertex in with_secret} == {"public", "hidden"}

    incoming = graph.get_vertices("doc", Direction.IN, None, Authorizations())
    assert [vertex.vertex_id for vertex in incoming] == ["public"]


def test_save_batch_is_all_or_nothing() -> None:
    graph = InMemoryGraph()
    graph.save_batch([Vertex("doc")], [])

    with pytest.raises(StoreWriteError, match="missing vertex"):
        graph.save_batch([Vertex("mention")], [Edge("e1", "doc", "ghost", "mentions")])

    assert graph.get_vertex("mention", Authorizations()) is None
    assert graph.vertex_count() == 1
    assert graph.edge_count() == 0


def test_save_batch_rejects_visibility_change() -> None:
    graph = InMemoryGraph()
    graph.save_batch([Vertex("doc")], [])

    with pytest.raises(StoreWriteError, match="different visibility"):
        graph.save_batch([Vertex("doc", visibility=Visibility("secret"))], [])


def test_reads_return_copies_of_stored_vertices() -> None:
    graph = InMemoryGraph()
    saved = graph.prepare_vertex("doc").set_property("text", "none").save()
    saved.set_property("text", "changed")

    vertex = graph.get_vertex("doc", Authorizations())
    assert vertex is not None
    vertex.set_property("title", "local only")

    stored = graph.get_vertex("doc", Authorizations())
    assert stored is not None
    assert stored.get_property_value("text") == "none"
    assert stored.get_property("title") is None


def test_save_batch_merges_properties_into_existing_vertex() -> None:
    graph = InMemoryGraph()
    graph.save_batch([Vertex("doc").set_property("text", "none")], [])
    before = graph.get_vertex("doc", Authorizations())

    graph.save_batch([Vertex("doc").set_property("title", "Doc")], [])

    after = graph.get_vertex("doc", Authorizations())
    assert after is not None and before is not None
    assert after.get_property_value("text") == "none"
    assert after.get_property_value("title") == "Doc"
    assert before.get_property("title") is None


def test_has_vertex_ignores_visibility() -> None:
    graph = InMemoryGraph()
    graph.save_batch([Vertex("hidden", visibility=Visibility("secret"))], [])

    assert graph.get_vertex("hidden", Authorizations()) is None
    assert graph.has_vertex("hidden")
    assert not graph.has_vertex("missing")
