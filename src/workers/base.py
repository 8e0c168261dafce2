"""Graph property worker interfaces and data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Any, Mapping, Sequence

from src.graph import Authorizations, Property, Vertex

from .mentions import TermMentionFilter


class EncodingError(RuntimeError):
    """Raised when a document stream cannot be decoded as text."""


class WorkerStateError(RuntimeError):
    """Raised when a worker is used before it has been prepared."""


class WorkerState(str, Enum):
    UNPREPARED = "unprepared"
    PREPARED = "prepared"


@dataclass(frozen=True, slots=True)
class GraphPropertyWorkData:
    """The element and property a worker invocation operates on."""

    element: Vertex
    prop: Property | None = None
    visibility_source: str | None = None

    @property
    def property_key(self) -> str:
        return self.prop.key if self.prop is not None else ""

    @property
    def property_name(self) -> str:
        return self.prop.name if self.prop is not None else ""

    def resolved_visibility_source(self) -> str:
        """Visibility descriptor for derived data, defaulting to the element's."""

        if self.visibility_source is not None:
            return self.visibility_source
        return self.element.visibility.expression


@dataclass(frozen=True, slots=True)
class GraphPropertyWorkerPrepareData:
    """Collaborators and configuration handed to a worker once at startup."""

    config: Mapping[str, Any] = field(default_factory=dict)
    term_mention_filters: Sequence[TermMentionFilter] = ()
    authorizations: Authorizations = field(default_factory=Authorizations)
    user: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "config", dict(self.config))
        object.__setattr__(self, "term_mention_filters", tuple(self.term_mention_filters))


class GraphPropertyWorker:
    """Base class for workers that derive graph data from element properties."""

    def __init__(self) -> None:
        self._state = WorkerState.UNPREPARED
        self._prepare_data: GraphPropertyWorkerPrepareData | None = None

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def prepare_data(self) -> GraphPropertyWorkerPrepareData:
        if self._prepare_data is None:
            raise WorkerStateError(f"{type(self).__name__} has not been prepared")
        return self._prepare_data

    def prepare(self, prepare_data: GraphPropertyWorkerPrepareData) -> None:
        self._prepare_data = prepare_data
        self._state = WorkerState.PREPARED

    def execute(self, stream: IO[bytes], work_data: GraphPropertyWorkData) -> Any:
        raise NotImplementedError

    def is_handled(self, element: Vertex, prop: Property | None) -> bool:
        return prop is not None

    def _mark_unprepared(self) -> None:
        self._state = WorkerState.UNPREPARED
        self._prepare_data = None

    def _require_prepared(self) -> None:
        if self._state is not WorkerState.PREPARED:
            raise WorkerStateError(f"{type(self).__name__} must be prepared before execute")

    @staticmethod
    def read_text(stream: IO[bytes], *, encoding: str = "utf-8") -> str:
        data = stream.read()
        if isinstance(data, str):
            return data
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as exc:
            raise EncodingError(f"Document is not valid {encoding}: {exc}") from exc
