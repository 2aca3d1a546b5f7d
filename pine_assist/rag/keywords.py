from __future__ import annotations

"""Keyword extraction for indexed Pine Script documentation and code."""

import re

KNOWN_NAMESPACES = (
    "ta",
    "math",
    "str",
    "array",
    "matrix",
    "map",
    "request",
    "ticker",
    "timeframe",
    "chart",
    "runtime",
    "log",
    "strategy",
    "input",
    "color",
    "plot",
    "hline",
    "fill",
    "indicator",
    "label",
    "line",
    "box",
    "table",
)

# Matched as case-insensitive substrings anywhere in the text.
PINE_KEYWORDS = (
    "indicator",
    "strategy",
    "overlay",
    "input",
    "plot",
    "hline",
    "fill",
    "bgcolor",
    "barcolor",
    "alert",
    "alertcondition",
    "var",
    "varip",
    "series",
    "simple",
    "const",
    "export",
    "import",
    "method",
    "type",
    "switch",
    "for",
    "while",
    "if",
    "else",
)

# Built-ins detected as exact calls in example scripts.
STANDALONE_BUILTINS = (
    "plot",
    "hline",
    "fill",
    "bgcolor",
    "barcolor",
    "plotshape",
    "plotchar",
    "plotarrow",
    "plotcandle",
    "alert",
    "alertcondition",
)

_DOTTED_IDENTIFIER_RE = re.compile(r"\b[a-z_]+\.[a-z_]+(?:\(\))?")
NAMESPACED_CALL_RE = re.compile(r"\b(?:" + "|".join(KNOWN_NAMESPACES) + r")\.\w+")


def extract_keywords(text: str) -> list[str]:
    """Collect dotted identifiers, namespaced members and language keywords."""
    keywords: dict[str, None] = {}
    for identifier in _DOTTED_IDENTIFIER_RE.findall(text):
        keywords[identifier.replace("()", "")] = None
    for member in NAMESPACED_CALL_RE.findall(text):
        keywords[member] = None
    lowered = text.lower()
    for keyword in PINE_KEYWORDS:
        if keyword in lowered:
            keywords[keyword] = None
    return list(keywords)


def unique(values: list[str]) -> list[str]:
    """Deduplicate while keeping first-seen order."""
    return list(dict.fromkeys(value for value in values if value))
