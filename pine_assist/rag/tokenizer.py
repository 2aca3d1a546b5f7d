from __future__ import annotations

"""Shared term normalization for indexing and querying."""

import re

from pine_assist.rag.keywords import NAMESPACED_CALL_RE

_NON_TERM_RE = re.compile(r"[^a-z0-9_.]")
_STANDALONE_MENTION_RE = re.compile(
    r"\b(?:plot|hline|fill|bgcolor|barcolor|plotshape|indicator|strategy|alert)\b"
)


def tokenize(text: str) -> list[str]:
    """Lowercase, keep `[a-z0-9_.]` runs and drop single-character tokens.

    Dotted identifiers such as ``ta.sma`` survive as one token.
    """
    cleaned = _NON_TERM_RE.sub(" ", text.lower())
    return [token for token in cleaned.split() if len(token) > 1]


def extract_function_mentions(query: str) -> list[str]:
    """Return literal function references found in a raw query."""
    mentions = NAMESPACED_CALL_RE.findall(query)
    mentions.extend(_STANDALONE_MENTION_RE.findall(query))
    return mentions
