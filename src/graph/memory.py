"""In-memory property graph used by workers, the CLI, and tests."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Sequence

from .base import (
    Authorizations,
    Direction,
    Edge,
    StoreWriteError,
    Vertex,
    Visibility,
)

logger = logging.getLogger(__name__)


class VertexBuilder:
    """Accumulates properties for a vertex before saving it."""

    def __init__(self, graph: "InMemoryGraph", vertex_id: str, visibility: Visibility) -> None:
        self._graph = graph
        self._vertex = Vertex(vertex_id=vertex_id, visibility=visibility)

    def set_property(
        self,
        name: str,
        value: Any,
        visibility: Visibility | None = None,
        *,
        key: str = "",
    ) -> "VertexBuilder":
        self._vertex.set_property(name, value, visibility, key=key)
        return self

    def save(self, authorizations: Authorizations | None = None) -> Vertex:
        self._graph.save_batch([self._vertex], [])
        return Vertex(self._vertex.vertex_id, self._vertex.visibility, dict(self._vertex.properties))


class InMemoryGraph:
    """Thread-safe dictionary-backed graph.

    ``save_batch`` validates the entire batch before applying it so callers
    never observe a partially written batch.
    """

    def __init__(self) -> None:
        self._vertices: dict[str, Vertex] = {}
        self._edges: dict[str, Edge] = {}
        self._lock = Lock()
        self._pending_flush = 0

    def prepare_vertex(self, vertex_id: str, visibility: Visibility | None = None) -> VertexBuilder:
        return VertexBuilder(self, vertex_id, visibility or Visibility())

    def get_vertex(self, vertex_id: str, authorizations: Authorizations) -> Vertex | None:
        with self._lock:
            vertex = self._vertices.get(vertex_id)
            if vertex is None or not authorizations.can_read(vertex.visibility):
                return None
            return Vertex(vertex.vertex_id, vertex.visibility, dict(vertex.properties))

    def has_vertex(self, vertex_id: str) -> bool:
        with self._lock:
            return vertex_id in self._vertices

    def get_edges(
        self,
        vertex_id: str,
        direction: Direction,
        label: str | None,
        authorizations: Authorizations,
    ) -> list[Edge]:
        with self._lock:
            edges = list(self._edges.values())
        matched: list[Edge] = []
        for edge in edges:
            if label is not None and edge.label != label:
                continue
            if not authorizations.can_read(edge.visibility):
                continue
            outgoing = edge.out_vertex_id == vertex_id
            incoming = edge.in_vertex_id == vertex_id
            if direction is Direction.OUT and outgoing:
                matched.append(edge)
            elif direction is Direction.IN and incoming:
                matched.append(edge)
            elif direction is Direction.BOTH and (outgoing or incoming):
                matched.append(edge)
        return matched

    def get_vertices(
        self,
        vertex_id: str,
        direction: Direction,
        label: str | None,
        authorizations: Authorizations,
    ) -> list[Vertex]:
        vertices: list[Vertex] = []
        for edge in self.get_edges(vertex_id, direction, label, authorizations):
            other_id = edge.in_vertex_id if edge.out_vertex_id == vertex_id else edge.out_vertex_id
            other = self.get_vertex(other_id, authorizations)
            if other is not None:
                vertices.append(other)
        return vertices

    def vertex_count(self) -> int:
        with self._lock:
            return len(self._vertices)

    def edge_count(self) -> int:
        with self._lock:
            return len(self._edges)

    def save_batch(self, vertices: Sequence[Vertex], edges: Sequence[Edge]) -> None:
        with self._lock:
            staged_vertices: dict[str, Vertex] = {}
            for vertex in vertices:
                if not vertex.vertex_id:
                    raise StoreWriteError("Vertex id is required")
                existing = staged_vertices.get(vertex.vertex_id) or self._vertices.get(vertex.vertex_id)
                if existing is not None and existing.visibility != vertex.visibility:
                    raise StoreWriteError(
                        f"Vertex '{vertex.vertex_id}' already exists with a different visibility"
                    )
                staged_vertices[vertex.vertex_id] = Vertex(
                    vertex_id=vertex.vertex_id,
                    visibility=vertex.visibility,
                    properties=dict(vertex.properties),
                )

            staged_edges: dict[str, Edge] = {}
            for edge in edges:
                if edge.edge_id in self._edges and self._edges[edge.edge_id] != edge:
                    raise StoreWriteError(f"Edge '{edge.edge_id}' already exists")
                for endpoint in (edge.out_vertex_id, edge.in_vertex_id):
                    if endpoint not in staged_vertices and endpoint not in self._vertices:
                        raise StoreWriteError(
                            f"Edge '{edge.edge_id}' references missing vertex '{endpoint}'"
                        )
                staged_edges[edge.edge_id] = edge

            for vertex_id, vertex in staged_vertices.items():
                existing = self._vertices.get(vertex_id)
                if existing is not None:
                    vertex = Vertex(
                        vertex_id,
                        existing.visibility,
                        {**existing.properties, **vertex.properties},
                    )
                self._vertices[vertex_id] = vertex
            self._edges.update(staged_edges)
            self._pending_flush += len(staged_vertices) + len(staged_edges)

    def flush(self) -> None:
        with self._lock:
            pending, self._pending_flush = self._pending_flush, 0
        if pending:
            logger.debug("Flushed %s graph mutations", pending)
