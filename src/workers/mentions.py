"""Persist phrase matches as term-mention vertices."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Protocol, Sequence, runtime_checkable

from src.extraction import PhraseMatch
from src.graph import (
    Authorizations,
    Direction,
    Edge,
    GraphStore,
    Vertex,
    VisibilityTranslator,
)
from src.graph import properties

logger = logging.getLogger(__name__)

DEFAULT_PROCESS = "dictionary-extractor"


@runtime_checkable
class TermMentionFilter(Protocol):
    """Post-processing hook applied to the mentions created for a document."""

    def apply(
        self,
        source_vertex: Vertex,
        mentions: Sequence[Vertex],
        authorizations: Authorizations,
    ) -> None:
        ...


@dataclass(frozen=True, slots=True)
class TermMentionWriteResult:
    """Outcome of writing the mentions for one document."""

    created: tuple[Vertex, ...]
    skipped: int

    @property
    def count(self) -> int:
        return len(self.created)


def term_mention_id(source_id: str, property_key: str, start: int, end: int) -> str:
    return f"TM_{source_id}-{property_key}-{start}-{end}"


def term_mention_span(vertex: Vertex) -> tuple[int, int] | None:
    start = vertex.get_property_value(properties.TERM_MENTION_START_OFFSET)
    end = vertex.get_property_value(properties.TERM_MENTION_END_OFFSET)
    if start is None or end is None:
        return None
    return (int(start), int(end))


class TermMentionWriter:
    """Translates phrase matches into term-mention vertices and edges.

    A source vertex never receives two mentions with the same offset range;
    a match is skipped when its mention id already exists in the store, even
    one hidden from the caller, or when its span repeats within the batch. All new data is handed to the
    store in a single batch.
    """

    def __init__(
        self,
        graph: GraphStore,
        visibility_translator: VisibilityTranslator,
        *,
        process: str = DEFAULT_PROCESS,
    ) -> None:
        self._graph = graph
        self._visibility_translator = visibility_translator
        self._process = process

    def write(
        self,
        source_vertex: Vertex,
        matches: Iterable[PhraseMatch],
        *,
        authorizations: Authorizations,
        property_key: str = "",
        property_name: str = "",
        visibility_source: str | None = None,
        concept_iris: Mapping[str, str] | None = None,
        relation_iri: str | None = None,
    ) -> TermMentionWriteResult:
        visibility = self._visibility_translator.to_visibility(visibility_source).and_(
            properties.TERM_MENTION_VISIBILITY
        )
        read_authorizations = Authorizations(authorizations.labels | visibility.labels)
        seen = self.existing_spans(source_vertex, read_authorizations)
        iris = dict(concept_iris or {})

        vertices: list[Vertex] = []
        edges: list[Edge] = []
        skipped = 0
        for match in matches:
            mention_id = term_mention_id(
                source_vertex.vertex_id, property_key, match.start_offset, match.end_offset
            )
            # Mentions hidden from these authorizations still occupy their id.
            if match.span in seen or self._graph.has_vertex(mention_id):
                skipped += 1
                logger.debug(
                    "Skipping duplicate term mention %r at %s-%s on %s",
                    match.text,
                    match.start_offset,
                    match.end_offset,
                    source_vertex.vertex_id,
                )
                continue
            seen.add(match.span)

            mention = Vertex(vertex_id=mention_id, visibility=visibility)
            mention.set_property(properties.TITLE, match.text, visibility)
            mention.set_property(properties.TERM_MENTION_START_OFFSET, match.start_offset, visibility)
            mention.set_property(properties.TERM_MENTION_END_OFFSET, match.end_offset, visibility)
            mention.set_property(properties.CONCEPT_TYPE, match.category, visibility)
            mention.set_property(properties.TERM_MENTION_PROPERTY_KEY, property_key, visibility)
            mention.set_property(properties.TERM_MENTION_PROPERTY_NAME, property_name, visibility)
            mention.set_property(properties.TERM_MENTION_PROCESS, self._process, visibility)
            concept_iri = iris.get(match.category)
            if concept_iri:
                mention.set_property(properties.CONCEPT_IRI, concept_iri, visibility)
            vertices.append(mention)

            edge_properties = {properties.RELATION_IRI: relation_iri} if relation_iri else {}
            edges.append(
                Edge(
                    edge_id=f"{source_vertex.vertex_id}_{properties.TERM_MENTION_LABEL_HAS_TERM_MENTION}_{mention_id}",
                    out_vertex_id=source_vertex.vertex_id,
                    in_vertex_id=mention_id,
                    label=properties.TERM_MENTION_LABEL_HAS_TERM_MENTION,
                    visibility=visibility,
                    properties=edge_properties,
                )
            )

        if vertices:
            self._graph.save_batch(vertices, edges)
            self._graph.flush()
        logger.info(
            "Wrote %s term mentions for %s (%s duplicates skipped)",
            len(vertices),
            source_vertex.vertex_id,
            skipped,
        )
        return TermMentionWriteResult(created=tuple(vertices), skipped=skipped)

    def existing_spans(
        self,
        source_vertex: Vertex,
        authorizations: Authorizations,
    ) -> set[tuple[int, int]]:
        linked = self._graph.get_vertices(
            source_vertex.vertex_id,
            Direction.OUT,
            properties.TERM_MENTION_LABEL_HAS_TERM_MENTION,
            authorizations,
        )
        spans: set[tuple[int, int]] = set()
        for vertex in linked:
            span = term_mention_span(vertex)
            if span is not None:
                spans.add(span)
        return spans


__all__ = [
    "DEFAULT_PROCESS",
    "TermMentionFilter",
    "TermMentionWriteResult",
    "TermMentionWriter",
    "term_mention_id",
    "term_mention_span",
]
