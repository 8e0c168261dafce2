"""Core property-graph primitives and data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Protocol, Sequence

_LABEL_SEPARATOR = "&"


class StoreWriteError(RuntimeError):
    """Raised when the graph store rejects a mutation."""


class Direction(str, Enum):
    OUT = "out"
    IN = "in"
    BOTH = "both"


@dataclass(frozen=True, slots=True)
class Visibility:
    """Access-control expression attached to graph data.

    The expression is a conjunction of labels joined with ``&``; an empty
    expression is readable by everyone.
    """

    expression: str = ""

    def __post_init__(self) -> None:
        labels = [label.strip() for label in self.expression.split(_LABEL_SEPARATOR)]
        object.__setattr__(self, "expression", _LABEL_SEPARATOR.join(label for label in labels if label))

    @property
    def labels(self) -> frozenset[str]:
        if not self.expression:
            return frozenset()
        return frozenset(self.expression.split(_LABEL_SEPARATOR))

    def and_(self, *labels: str) -> "Visibility":
        combined = [self.expression, *labels]
        return Visibility(_LABEL_SEPARATOR.join(part for part in combined if part))


@dataclass(frozen=True, slots=True)
class Authorizations:
    """Set of visibility labels a reader may see."""

    labels: frozenset[str] = frozenset()

    @classmethod
    def of(cls, *labels: str) -> "Authorizations":
        return cls(frozenset(label for label in labels if label))

    def can_read(self, visibility: Visibility) -> bool:
        return visibility.labels <= self.labels


@dataclass(frozen=True, slots=True)
class Property:
    name: str
    value: Any
    visibility: Visibility = field(default_factory=Visibility)
    key: str = ""


@dataclass(slots=True)
class Vertex:
    vertex_id: str
    visibility: Visibility = field(default_factory=Visibility)
    properties: dict[tuple[str, str], Property] = field(default_factory=dict)

    def set_property(
        self,
        name: str,
        value: Any,
        visibility: Visibility | None = None,
        *,
        key: str = "",
    ) -> "Vertex":
        self.properties[(key, name)] = Property(
            name=name,
            value=value,
            visibility=visibility or Visibility(),
            key=key,
        )
        return self

    def get_property(self, name: str, key: str | None = None) -> Property | None:
        if key is not None:
            return self.properties.get((key, name))
        for prop in self.properties.values():
            if prop.name == name:
                return prop
        return None

    def get_property_value(self, name: str, default: Any = None) -> Any:
        prop = self.get_property(name)
        return default if prop is None else prop.value


@dataclass(frozen=True, slots=True)
class Edge:
    edge_id: str
    out_vertex_id: str
    in_vertex_id: str
    label: str
    visibility: Visibility = field(default_factory=Visibility)
    properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", dict(self.properties))


class GraphStore(Protocol):
    """Contract the extraction workers rely on."""

    def get_vertex(self, vertex_id: str, authorizations: Authorizations) -> Vertex | None:
        ...

    def get_vertices(
        self,
        vertex_id: str,
        direction: Direction,
        label: str | None,
        authorizations: Authorizations,
    ) -> list[Vertex]:
        ...

    def has_vertex(self, vertex_id: str) -> bool:
        """Existence check that ignores visibility."""
        ...

    def save_batch(self, vertices: Sequence[Vertex], edges: Sequence[Edge]) -> None:
        ...

    def flush(self) -> None:
        ...
