from __future__ import annotations

from pine_assist.rag.search import RagSearchEngine, get_default_engine, reset_default_engine
from pine_assist.rag.types import SearchOptions
from pine_assist.app.settings import settings


def get_search_engine() -> RagSearchEngine:
    return get_default_engine()


def reset_search_engine_cache() -> None:
    reset_default_engine()


def build_search_options(
    max_docs: int | None = None,
    max_refs: int | None = None,
    max_examples: int | None = None,
) -> SearchOptions:
    return SearchOptions(
        max_docs=settings.rag_max_docs if max_docs is None else max_docs,
        max_refs=settings.rag_max_refs if max_refs is None else max_refs,
        max_examples=settings.rag_max_examples if max_examples is None else max_examples,
    )
