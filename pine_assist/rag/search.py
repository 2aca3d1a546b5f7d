from __future__ import annotations

"""Category-capped BM25 retrieval over the built Pine Script corpus."""

import logging
import threading
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from pine_assist.app.settings import settings
from pine_assist.rag.artifacts import CorpusArtifacts, load_artifacts
from pine_assist.rag.bm25 import score_bm25
from pine_assist.rag.tokenizer import extract_function_mentions, tokenize
from pine_assist.rag.types import (
    DocChunk,
    ExampleScript,
    FunctionReference,
    RagResult,
    SearchIndex,
    SearchOptions,
)

logger = logging.getLogger(__name__)


def render_content(document: DocChunk | FunctionReference | ExampleScript) -> str:
    """Render a document the way it is placed into a generation prompt."""
    if isinstance(document, DocChunk):
        return f"### {document.title}\n{document.content}"
    if isinstance(document, FunctionReference):
        content = f"**{document.function}** — {document.description}"
        if document.returns:
            content += f"\nReturns: {document.returns}"
        if document.example:
            content += f"\nExample:\n```pine\n{document.example}\n```"
        return content
    return f"// {document.title} ({document.category})\n{document.code}"


@dataclass(frozen=True)
class LoadedCorpus:
    """Artifacts paired with their id lookup; replaced as a whole on reload."""
    artifacts: CorpusArtifacts
    lookup: dict[str, DocChunk | FunctionReference | ExampleScript]


@dataclass
class RagSearchEngine:
    """Read-only search over corpus artifacts with an explicit load lifecycle.

    Artifacts are read once on first use (or on ``load()``) and kept until
    ``reload()`` is called. Loading is guarded by a lock so concurrent first
    searches share one load. Each search works on a single ``LoadedCorpus``
    so a concurrent reload never mixes two corpora in one result list.
    """
    data_dir: Path
    k1: float = 1.5
    b: float = 0.75
    function_boost: float = 1.5
    _corpus: LoadedCorpus | None = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @classmethod
    def from_artifacts(cls, artifacts: CorpusArtifacts, **kwargs: float) -> RagSearchEngine:
        """Create an engine around in-memory artifacts (no disk access)."""
        engine = cls(data_dir=Path("."), **kwargs)
        engine._install(artifacts)
        return engine

    @property
    def loaded(self) -> bool:
        return self._corpus is not None

    def load(self) -> CorpusArtifacts:
        """Load artifacts if they are not loaded yet and return them."""
        return self._current().artifacts

    def reload(self) -> CorpusArtifacts:
        """Discard cached artifacts and read them again from disk."""
        with self._lock:
            return self._install(load_artifacts(self.data_dir)).artifacts

    def _current(self) -> LoadedCorpus:
        corpus = self._corpus
        if corpus is not None:
            return corpus
        with self._lock:
            if self._corpus is None:
                return self._install(load_artifacts(self.data_dir))
            return self._corpus

    def _install(self, artifacts: CorpusArtifacts) -> LoadedCorpus:
        lookup: dict[str, DocChunk | FunctionReference | ExampleScript] = {}
        for document in (*artifacts.doc_chunks, *artifacts.references, *artifacts.examples):
            lookup[document.id] = document
        corpus = LoadedCorpus(artifacts=artifacts, lookup=lookup)
        self._corpus = corpus
        if artifacts.index.is_empty:
            logger.warning("rag_index_empty", extra={"data_dir": str(self.data_dir)})
        else:
            logger.info("rag_index_loaded", extra=artifacts.stats())
        return corpus

    def stats(self) -> dict[str, int | float | bool]:
        """Index statistics; ``loaded`` reports whether artifacts were already in memory."""
        was_loaded = self.loaded
        artifacts = self.load()
        return {**artifacts.stats(), "loaded": was_loaded}

    def score_documents(self, query: str) -> list[tuple[str, float]]:
        """Return ``(id, score)`` pairs with positive score, best first.

        Equal scores keep index order (doc chunks, references, examples).
        """
        return self._rank(self._current().artifacts.index, query)

    def _rank(self, index: SearchIndex, query: str) -> list[tuple[str, float]]:
        if index.is_empty:
            return []
        query_terms = tokenize(query)
        mention_terms = [term for mention in extract_function_mentions(query) for term in tokenize(mention)]

        scored: list[tuple[str, float]] = []
        for document in index.documents:
            score = score_bm25(query_terms, document.terms, index.idf, index.avg_dl, k1=self.k1, b=self.b)
            if mention_terms:
                doc_terms = set(document.terms)
                for term in mention_terms:
                    if term in doc_terms:
                        score *= self.function_boost
            if score > 0:
                scored.append((document.id, score))
        return sorted(scored, key=lambda item: item[1], reverse=True)

    def search(self, query: str, options: SearchOptions | None = None) -> list[RagResult]:
        """Rank documents and emit them under independent per-category caps."""
        options = options or SearchOptions()
        caps = {
            "documentation": options.max_docs,
            "reference": options.max_refs,
            "example": options.max_examples,
        }
        counts = dict.fromkeys(caps, 0)
        results: list[RagResult] = []
        corpus = self._current()

        for doc_id, score in self._rank(corpus.artifacts.index, query):
            if all(counts[kind] >= cap for kind, cap in caps.items()):
                break
            document = corpus.lookup.get(doc_id)
            if document is None:
                continue
            if counts[document.type] >= caps[document.type]:
                continue
            results.append(
                RagResult(id=doc_id, type=document.type, score=score, content=render_content(document))
            )
            counts[document.type] += 1

        logger.info(
            "rag_search_completed",
            extra={"query_length": len(query), "result_count": len(results), **counts},
        )
        return results


@lru_cache
def get_default_engine() -> RagSearchEngine:
    """Process-wide engine configured from settings."""
    return RagSearchEngine(
        data_dir=Path(settings.rag_data_dir),
        k1=settings.bm25_k1,
        b=settings.bm25_b,
        function_boost=settings.function_boost,
    )


def reset_default_engine() -> None:
    get_default_engine.cache_clear()


def search_rag(
    query: str,
    options: SearchOptions | None = None,
    engine: RagSearchEngine | None = None,
) -> list[RagResult]:
    """Search the corpus; returns ``[]`` when no index has been built."""
    if options is None:
        options = SearchOptions(
            max_docs=settings.rag_max_docs,
            max_refs=settings.rag_max_refs,
            max_examples=settings.rag_max_examples,
        )
    return (engine or get_default_engine()).search(query, options)
