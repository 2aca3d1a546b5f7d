from __future__ import annotations

"""BM25 scoring and corpus statistics."""

import math
from collections import Counter
from typing import Iterable

from pine_assist.rag.types import IndexedDocument, SearchIndex


def score_bm25(
    query_terms: Iterable[str],
    doc_terms: list[str],
    idf: dict[str, float],
    avg_dl: float,
    k1: float = 1.5,
    b: float = 0.75,
) -> float:
    """Score a document's term list against query terms.

    Terms missing from the document contribute nothing, terms missing from
    ``idf`` contribute with weight 0. Each distinct query term is counted once.
    """
    dl = len(doc_terms)
    if dl == 0:
        return 0.0
    tf = Counter(doc_terms)
    length_ratio = dl / avg_dl if avg_dl > 0 else 1.0
    norm = k1 * (1 - b + b * length_ratio)
    score = 0.0
    for term in dict.fromkeys(query_terms):
        term_freq = tf.get(term, 0)
        if term_freq == 0:
            continue
        score += idf.get(term, 0.0) * (term_freq * (k1 + 1)) / (term_freq + norm)
    return score


def compute_idf(documents: list[IndexedDocument]) -> dict[str, float]:
    """Compute ``ln((N - df + 0.5) / (df + 0.5) + 1)`` for every term."""
    total = len(documents)
    if total == 0:
        return {}
    df: Counter[str] = Counter()
    for document in documents:
        df.update(set(document.terms))
    return {
        term: math.log((total - count + 0.5) / (count + 0.5) + 1)
        for term, count in df.items()
    }


def build_search_index(documents: list[IndexedDocument]) -> SearchIndex:
    """Build the index; an empty corpus yields an index flagged as empty."""
    total = len(documents)
    if total == 0:
        return SearchIndex()
    avg_dl = sum(len(document.terms) for document in documents) / total
    return SearchIndex(
        documents=list(documents),
        idf=compute_idf(documents),
        avg_dl=avg_dl,
        total_docs=total,
    )
