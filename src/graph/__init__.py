"""Property graph primitives used to persist term mentions."""

from .base import (
    Authorizations,
    Direction,
    Edge,
    GraphStore,
    Property,
    StoreWriteError,
    Vertex,
    Visibility,
)
from .memory import InMemoryGraph, VertexBuilder
from .visibility import DirectVisibilityTranslator, VisibilityTranslator

__all__ = [
    "Authorizations",
    "Direction",
    "DirectVisibilityTranslator",
    "Edge",
    "GraphStore",
    "InMemoryGraph",
    "Property",
    "StoreWriteError",
    "Vertex",
    "VertexBuilder",
    "Visibility",
    "VisibilityTranslator",
]
