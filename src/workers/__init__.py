"""Graph property workers that derive term mentions from document text."""

from .mentions import (
    TermMentionFilter,
    TermMentionWriteResult,
    TermMentionWriter,
)
from .base import (
    EncodingError,
    GraphPropertyWorkData,
    GraphPropertyWorker,
    GraphPropertyWorkerPrepareData,
    WorkerState,
    WorkerStateError,
)
from .dictionary import DictionaryExtractorWorker

__all__ = [
    "DictionaryExtractorWorker",
    "EncodingError",
    "GraphPropertyWorkData",
    "GraphPropertyWorker",
    "GraphPropertyWorkerPrepareData",
    "TermMentionFilter",
    "TermMentionWriteResult",
    "TermMentionWriter",
    "WorkerState",
    "WorkerStateError",
]
