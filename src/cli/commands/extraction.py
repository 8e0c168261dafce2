"""CLI commands for dictionary term-mention extraction."""

from __future__ import annotations

import argparse
import io
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from src.extraction.config import load_worker_config
from src.extraction.dictionaries import ResourceLoadError
from src.graph import Authorizations, DirectVisibilityTranslator, InMemoryGraph, StoreWriteError
from src.graph import properties
from src.workers import (
    DictionaryExtractorWorker,
    EncodingError,
    GraphPropertyWorkData,
    GraphPropertyWorkerPrepareData,
)

OUTPUT_TEXT = "text"
OUTPUT_JSON = "json"
DEFAULT_DOCUMENT_ID = "document"


def register_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add the extraction subcommand to the main CLI parser."""
    parser = subparsers.add_parser(
        "extract",
        description="Recognize dictionary phrases in a document and print the term mentions.",
        help="Recognize dictionary phrases in a document.",
    )
    _add_arguments(parser)
    parser.set_defaults(func=extract_cli, command="extract")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Recognize dictionary phrases in a document and print the term mentions.",
        prog="python -m main extract",
    )
    _add_arguments(parser)
    return parser


def _add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="UTF-8 text file to scan.",
    )
    parser.add_argument(
        "--dictionaries",
        type=Path,
        help="Directory of dictionary files (overrides the configured path prefix).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to an extraction YAML config (default: config/dictionary_extraction.yaml when present).",
    )
    parser.add_argument(
        "--document-id",
        default=DEFAULT_DOCUMENT_ID,
        help="Vertex id used for the source document.",
    )
    parser.add_argument(
        "--output-format",
        choices=[OUTPUT_TEXT, OUTPUT_JSON],
        default=OUTPUT_TEXT,
        help="Output format: friendly text or JSON.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )


def extract_cli(args: argparse.Namespace) -> int:
    """Run the dictionary extractor over one document held in an in-memory graph."""

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_worker_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    if args.dictionaries is not None:
        config = replace(config, path_prefix=args.dictionaries)

    graph = InMemoryGraph()
    authorizations = Authorizations.of(properties.TERM_MENTION_VISIBILITY)
    worker = DictionaryExtractorWorker(graph, DirectVisibilityTranslator())
    try:
        worker.prepare(
            GraphPropertyWorkerPrepareData(
                config=config.to_mapping(),
                authorizations=authorizations,
            )
        )
    except ResourceLoadError as exc:
        print(f"Initialization error: {exc}", file=sys.stderr)
        return 1

    try:
        raw = args.input.read_bytes()
    except OSError as exc:
        print(f"Could not read {args.input}: {exc}", file=sys.stderr)
        return 1

    vertex = (
        graph.prepare_vertex(args.document_id)
        .set_property(properties.TEXT, raw.decode("utf-8", errors="replace"))
        .save(authorizations)
    )
    work_data = GraphPropertyWorkData(vertex, vertex.get_property(properties.TEXT))

    try:
        result = worker.execute(io.BytesIO(raw), work_data)
    except (EncodingError, StoreWriteError) as exc:
        print(f"Extraction failed: {exc}", file=sys.stderr)
        return 1

    mentions = [
        {
            "id": mention.vertex_id,
            "title": mention.get_property_value(properties.TITLE),
            "category": mention.get_property_value(properties.CONCEPT_TYPE),
            "start_offset": mention.get_property_value(properties.TERM_MENTION_START_OFFSET),
            "end_offset": mention.get_property_value(properties.TERM_MENTION_END_OFFSET),
        }
        for mention in result.created
    ]

    if args.output_format == OUTPUT_JSON:
        payload = {
            "document_id": args.document_id,
            "source_path": str(args.input),
            "mention_count": result.count,
            "mentions": mentions,
        }
        print(json.dumps(payload, indent=2))
        return 0

    if not mentions:
        print("No term mentions found.")
        return 0
    for mention in mentions:
        print(
            f"{mention['start_offset']:>6}-{mention['end_offset']:<6} "
            f"{mention['category']:<14} {mention['title']}"
        )
    print(f"{result.count} term mentions written.")
    return 0
