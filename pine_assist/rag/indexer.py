from __future__ import annotations

"""Offline corpus build: docs and example scripts into typed collections plus a BM25 index."""

import logging
from pathlib import Path

from pine_assist.loaders.markdown import load_doc_chunks
from pine_assist.loaders.references import load_function_refs
from pine_assist.loaders.scripts import load_example_scripts
from pine_assist.rag.artifacts import CorpusArtifacts, write_artifacts
from pine_assist.rag.bm25 import build_search_index
from pine_assist.rag.tokenizer import tokenize
from pine_assist.rag.types import (
    DocChunk,
    ExampleScript,
    FunctionReference,
    IndexedDocument,
    SearchIndex,
)

logger = logging.getLogger(__name__)

EXAMPLE_INDEX_CHARS = 1000


def _doc_terms(chunk: DocChunk) -> list[str]:
    return tokenize(" ".join([chunk.title, chunk.content, *chunk.keywords]))


def _reference_terms(ref: FunctionReference) -> list[str]:
    return tokenize(
        " ".join(
            [ref.function, ref.signature, ref.description, ref.returns, ref.example, *ref.keywords]
        )
    )


def _example_terms(example: ExampleScript) -> list[str]:
    return tokenize(
        " ".join([example.title, example.category, example.code[:EXAMPLE_INDEX_CHARS], *example.keywords])
    )


def index_collections(
    doc_chunks: list[DocChunk],
    references: list[FunctionReference],
    examples: list[ExampleScript],
) -> SearchIndex:
    """Tokenize each document's salient text and compute corpus statistics."""
    documents = [IndexedDocument(id=chunk.id, terms=_doc_terms(chunk)) for chunk in doc_chunks]
    documents.extend(IndexedDocument(id=ref.id, terms=_reference_terms(ref)) for ref in references)
    documents.extend(IndexedDocument(id=example.id, terms=_example_terms(example)) for example in examples)
    return build_search_index(documents)


def build_corpus(docs_root: Path, scripts_root: Path) -> CorpusArtifacts:
    """Build all collections and the index from raw source trees."""
    doc_chunks = load_doc_chunks(docs_root)
    references = load_function_refs(docs_root)
    examples = load_example_scripts(scripts_root)
    index = index_collections(doc_chunks, references, examples)
    if index.is_empty:
        logger.warning(
            "corpus_empty",
            extra={"docs_root": str(docs_root), "scripts_root": str(scripts_root)},
        )
    return CorpusArtifacts(
        doc_chunks=doc_chunks,
        references=references,
        examples=examples,
        index=index,
    )


def rebuild(docs_root: Path, scripts_root: Path, output_dir: Path) -> CorpusArtifacts:
    """Build the corpus and replace the artifacts in ``output_dir``."""
    artifacts = build_corpus(docs_root, scripts_root)
    write_artifacts(artifacts, output_dir)
    logger.info("corpus_build_completed", extra=artifacts.stats())
    return artifacts
