"""Property names and edge labels shared by term-mention producers and readers."""

from __future__ import annotations

TITLE = "title"
TEXT = "text"

TERM_MENTION_START_OFFSET = "term_mention_start_offset"
TERM_MENTION_END_OFFSET = "term_mention_end_offset"
TERM_MENTION_PROPERTY_KEY = "term_mention_property_key"
TERM_MENTION_PROPERTY_NAME = "term_mention_property_name"
TERM_MENTION_PROCESS = "term_mention_process"
CONCEPT_TYPE = "concept_type"
CONCEPT_IRI = "concept_iri"

TERM_MENTION_LABEL_HAS_TERM_MENTION = "has-term-mention"
RELATION_IRI = "relation_iri"

# Label AND-ed onto every term mention; readers need it in their authorizations.
TERM_MENTION_VISIBILITY = "termMention"

__all__ = [
    "CONCEPT_IRI",
    "CONCEPT_TYPE",
    "RELATION_IRI",
    "TERM_MENTION_END_OFFSET",
    "TERM_MENTION_LABEL_HAS_TERM_MENTION",
    "TERM_MENTION_PROCESS",
    "TERM_MENTION_PROPERTY_KEY",
    "TERM_MENTION_PROPERTY_NAME",
    "TERM_MENTION_START_OFFSET",
    "TERM_MENTION_VISIBILITY",
    "TEXT",
    "TITLE",
]
