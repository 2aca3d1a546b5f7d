from __future__ import annotations

"""JSON artifact persistence shared by the corpus indexer and the search engine."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, TypeVar

from pine_assist.rag.types import DocChunk, ExampleScript, FunctionReference, SearchIndex

logger = logging.getLogger(__name__)

DOC_CHUNKS_FILE = "docs-chunks.json"
REFERENCES_FILE = "reference-functions.json"
EXAMPLES_FILE = "example-scripts.json"
INDEX_FILE = "bm25-index.json"

T = TypeVar("T")


class ArtifactError(RuntimeError):
    """Raised when artifacts cannot be written."""
    pass


@dataclass(frozen=True)
class CorpusArtifacts:
    """The three document collections plus the BM25 index over them."""
    doc_chunks: list[DocChunk] = field(default_factory=list)
    references: list[FunctionReference] = field(default_factory=list)
    examples: list[ExampleScript] = field(default_factory=list)
    index: SearchIndex = field(default_factory=SearchIndex)

    def stats(self) -> dict[str, int | float]:
        return {
            "total_docs": self.index.total_docs,
            "doc_chunks": len(self.doc_chunks),
            "references": len(self.references),
            "examples": len(self.examples),
            "unique_terms": len(self.index.idf),
            "avg_dl": self.index.avg_dl,
        }


def write_artifacts(artifacts: CorpusArtifacts, output_dir: Path) -> None:
    """Write all four artifacts, replacing any previous build."""
    payloads: list[tuple[str, Any, int | None]] = [
        (DOC_CHUNKS_FILE, [chunk.to_dict() for chunk in artifacts.doc_chunks], 2),
        (REFERENCES_FILE, [ref.to_dict() for ref in artifacts.references], 2),
        (EXAMPLES_FILE, [example.to_dict() for example in artifacts.examples], 2),
        (INDEX_FILE, artifacts.index.to_dict(), None),
    ]
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for filename, payload, indent in payloads:
            (output_dir / filename).write_text(
                json.dumps(payload, indent=indent, ensure_ascii=False),
                encoding="utf-8",
            )
    except OSError as exc:
        raise ArtifactError(f"Unable to write artifacts to {output_dir}: {exc}") from exc
    logger.info("artifacts_written", extra={"output_dir": str(output_dir), **artifacts.stats()})


def _read_json(path: Path) -> Any | None:
    if not path.is_file():
        logger.warning("artifact_missing", extra={"path": str(path)})
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning(
            "artifact_unreadable",
            extra={"path": str(path), "detail": type(exc).__name__},
        )
        return None


def _load_collection(path: Path, parse: Callable[[dict[str, Any]], T]) -> list[T]:
    data = _read_json(path)
    if not isinstance(data, list):
        return []
    items: list[T] = []
    for entry in data:
        if not isinstance(entry, dict):
            continue
        try:
            items.append(parse(entry))
        except (KeyError, TypeError, ValueError):
            logger.debug("artifact_entry_skipped", extra={"path": str(path)})
    return items


def load_artifacts(data_dir: Path) -> CorpusArtifacts:
    """Read the artifacts; missing or malformed files load as empty."""
    index_data = _read_json(data_dir / INDEX_FILE)
    index = SearchIndex()
    if isinstance(index_data, dict):
        try:
            index = SearchIndex.from_dict(index_data)
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning("artifact_index_malformed", extra={"path": str(data_dir / INDEX_FILE)})
    return CorpusArtifacts(
        doc_chunks=_load_collection(data_dir / DOC_CHUNKS_FILE, DocChunk.from_dict),
        references=_load_collection(data_dir / REFERENCES_FILE, FunctionReference.from_dict),
        examples=_load_collection(data_dir / EXAMPLES_FILE, ExampleScript.from_dict),
        index=index,
    )
