from __future__ import annotations

"""Deprecated and nonexistent API usage for Pine Script v6."""

import re
from dataclasses import dataclass

from pine_assist.validator.types import PineVersion, ValidationResult, is_comment


@dataclass(frozen=True)
class DeprecatedPattern:
    pattern: re.Pattern[str]
    rule: str
    message: str
    suggestion: str


# Ordered; every matching pattern on a line yields its own finding.
DEPRECATED_V6: tuple[DeprecatedPattern, ...] = (
    DeprecatedPattern(
        # bare security( but not request.security(
        pattern=re.compile(r"(?<!\w\.)\bsecurity\s*\("),
        rule="deprecated-security",
        message="security() is deprecated in v6",
        suggestion="Use request.security() instead",
    ),
    DeprecatedPattern(
        pattern=re.compile(r"\bstudy\s*\("),
        rule="deprecated-study",
        message="study() is deprecated in v6",
        suggestion="Use indicator() instead",
    ),
    DeprecatedPattern(
        pattern=re.compile(r"\btransp\s*="),
        rule="deprecated-transp",
        message="transp parameter is deprecated in v6",
        suggestion="Use color.new(color, transparency) instead",
    ),
    DeprecatedPattern(
        pattern=re.compile(r"\biff\s*\("),
        rule="deprecated-iff",
        message="iff() is deprecated in v6",
        suggestion="Use ternary operator: condition ? valueIfTrue : valueIfFalse",
    ),
    DeprecatedPattern(
        pattern=re.compile(r"plot\.style_dashed"),
        rule="nonexistent-style-dashed",
        message="plot.style_dashed does not exist in PineScript",
        suggestion="Use plot.style_line with linewidth parameter for visual distinction",
    ),
    DeprecatedPattern(
        pattern=re.compile(r"\binput\.(?:integer|resolution|symbol)\s*\("),
        rule="deprecated-input-type",
        message="Deprecated input function",
        suggestion="Use input.int(), input.timeframe(), input.symbol() instead",
    ),
    DeprecatedPattern(
        pattern=re.compile(r"(?<!\w\.)\btostring\s*\("),
        rule="deprecated-tostring",
        message="tostring() is deprecated in v6",
        suggestion="Use str.tostring() instead",
    ),
    DeprecatedPattern(
        pattern=re.compile(r"(?<!\w\.)\btonumber\s*\("),
        rule="deprecated-tonumber",
        message="tonumber() is deprecated in v6",
        suggestion="Use str.tonumber() instead",
    ),
)


def check_deprecated(code: str, version: PineVersion = "v6") -> list[ValidationResult]:
    if version != "v6":
        return []
    results: list[ValidationResult] = []
    for idx, line in enumerate(code.split("\n")):
        if is_comment(line):
            continue
        for entry in DEPRECATED_V6:
            if entry.pattern.search(line):
                results.append(
                    ValidationResult(
                        rule=entry.rule,
                        status="error",
                        message=entry.message,
                        line=idx + 1,
                        suggestion=entry.suggestion,
                    )
                )
    return results
