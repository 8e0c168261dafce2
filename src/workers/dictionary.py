"""Dictionary-backed term extraction worker."""

from __future__ import annotations

import logging
from typing import IO

from src.extraction import DictionarySet
from src.extraction.config import DictionaryWorkerConfig
from src.extraction.dictionaries import (
    ResourceLoadError,
    discover_dictionary_files,
    load_dictionaries,
)
from src.extraction.matching import NameFinder
from src.extraction.repository import DictionaryEntryRepository
from src.extraction.spans import SpanCollector, finders_for
from src.extraction.tokenize import tokenize
from src.graph import GraphStore, Property, Vertex, VisibilityTranslator
from src.graph import properties

from .base import (
    GraphPropertyWorkData,
    GraphPropertyWorker,
    GraphPropertyWorkerPrepareData,
)
from .mentions import TermMentionWriter, TermMentionWriteResult

logger = logging.getLogger(__name__)


class DictionaryExtractorWorker(GraphPropertyWorker):
    """Recognizes dictionary phrases in text properties and links term mentions.

    Dictionaries are loaded once in :meth:`prepare` and only read afterwards,
    so one prepared worker may serve concurrent ``execute`` calls for
    different documents.
    """

    def __init__(
        self,
        graph: GraphStore,
        visibility_translator: VisibilityTranslator,
        *,
        dictionary_entry_repository: DictionaryEntryRepository | None = None,
    ) -> None:
        super().__init__()
        self._graph = graph
        self._visibility_translator = visibility_translator
        self._repository = dictionary_entry_repository
        self._config = DictionaryWorkerConfig()
        self._collector = SpanCollector(())
        self._writer = TermMentionWriter(graph, visibility_translator)

    @property
    def config(self) -> DictionaryWorkerConfig:
        return self._config

    @property
    def finders(self) -> tuple[NameFinder, ...]:
        return self._collector.finders

    def prepare(self, prepare_data: GraphPropertyWorkerPrepareData) -> None:
        self._mark_unprepared()
        try:
            config = DictionaryWorkerConfig.from_mapping(prepare_data.config)
            finders = tuple(self.load_finders(config))
        except (ResourceLoadError, ValueError):
            self._collector = SpanCollector(())
            raise
        self._config = config
        self._collector = SpanCollector(finders)
        logger.info(
            "Prepared dictionary extractor with %s finders: %s",
            len(finders),
            ", ".join(finder.category for finder in finders) or "<none>",
        )
        super().prepare(prepare_data)

    def load_finders(self, config: DictionaryWorkerConfig) -> list[NameFinder]:
        """Build finders from the dictionary files and repository entries."""

        dictionaries = DictionarySet()
        if config.path_prefix is not None:
            files = discover_dictionary_files(config.path_prefix)
            if not files:
                logger.warning("No dictionary files found under %s", config.path_prefix)
            dictionaries = load_dictionaries(files, case_sensitive=config.case_sensitive)
        elif self._repository is None:
            logger.warning("No dictionary path prefix configured; nothing will be extracted")
        if self._repository is not None:
            dictionaries = dictionaries.merged_with(
                self._repository.to_dictionaries(case_sensitive=config.case_sensitive)
            )
        return list(finders_for(dictionaries))

    def is_handled(self, element: Vertex, prop: Property | None) -> bool:
        if prop is None:
            return False
        return prop.name == properties.TEXT or isinstance(prop.value, str)

    def execute(self, stream: IO[bytes], work_data: GraphPropertyWorkData) -> TermMentionWriteResult:
        self._require_prepared()
        text = self.read_text(stream)
        tokens = tokenize(text)
        matches = self._collector.collect(tokens)
        logger.debug(
            "Found %s phrase matches in %s tokens of %s",
            len(matches),
            len(tokens),
            work_data.element.vertex_id,
        )

        prepare_data = self.prepare_data
        result = self._writer.write(
            work_data.element,
            matches,
            authorizations=prepare_data.authorizations,
            property_key=work_data.property_key,
            property_name=work_data.property_name,
            visibility_source=work_data.resolved_visibility_source(),
            concept_iris=self._config.concept_iris,
            relation_iri=self._config.artifact_has_entity_iri,
        )
        for mention_filter in prepare_data.term_mention_filters:
            mention_filter.apply(work_data.element, result.created, prepare_data.authorizations)
        return result


__all__ = ["DictionaryExtractorWorker"]
