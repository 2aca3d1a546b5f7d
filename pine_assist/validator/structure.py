from __future__ import annotations

"""Structural checks: version annotation, declaration, balanced delimiters."""

import re

from pine_assist.validator.types import PineVersion, ValidationResult, is_comment

VERSION_MARKER = "//@version="

_INDICATOR_RE = re.compile(r"\bindicator\s*\(")
_STRATEGY_RE = re.compile(r"\bstrategy\s*\(")
_LIBRARY_RE = re.compile(r"\blibrary\s*\(")
_INLINE_COMMENT_RE = re.compile(r"//.*$")
_UNESCAPED_QUOTE_RE = re.compile(r'(?<!\\)"')


def _check_balance(code: str, opening: str, closing: str, rule: str, label: str) -> ValidationResult | None:
    opened = code.count(opening)
    closed = code.count(closing)
    if opened == closed:
        return None
    return ValidationResult(
        rule=rule,
        status="error",
        message=f"Unbalanced {label}: {opened} opening, {closed} closing",
    )


def check_structure(code: str, version: PineVersion | None = None) -> list[ValidationResult]:
    lines = code.split("\n")
    first_non_empty = next((idx for idx, line in enumerate(lines) if line.strip()), None)
    if first_non_empty is None:
        return [ValidationResult(rule="empty-script", status="error", message="Script is empty")]

    results: list[ValidationResult] = []
    if not lines[first_non_empty].strip().startswith(VERSION_MARKER):
        results.append(
            ValidationResult(
                rule="missing-version",
                status="error",
                message=f"{VERSION_MARKER} annotation must be the first non-empty line",
                line=first_non_empty + 1,
                suggestion=f"Add {VERSION_MARKER}{(version or 'v6').lstrip('v')} as the first line",
            )
        )

    has_indicator = bool(_INDICATOR_RE.search(code))
    has_strategy = bool(_STRATEGY_RE.search(code))
    has_library = bool(_LIBRARY_RE.search(code))
    if not (has_indicator or has_strategy or has_library):
        results.append(
            ValidationResult(
                rule="missing-declaration",
                status="error",
                message="Script must have an indicator(), strategy(), or library() declaration",
                suggestion='Add indicator("My Script") after the version annotation',
            )
        )
    if has_indicator and has_strategy:
        results.append(
            ValidationResult(
                rule="dual-declaration",
                status="error",
                message="Script cannot be both indicator() and strategy()",
                suggestion="Remove one of the declarations",
            )
        )

    for finding in (
        _check_balance(code, "(", ")", "unbalanced-parens", "parentheses"),
        _check_balance(code, "[", "]", "unbalanced-brackets", "brackets"),
    ):
        if finding is not None:
            results.append(finding)

    for idx, line in enumerate(lines):
        if is_comment(line):
            continue
        stripped = _INLINE_COMMENT_RE.sub("", line)
        if len(_UNESCAPED_QUOTE_RE.findall(stripped)) % 2 != 0:
            results.append(
                ValidationResult(
                    rule="unbalanced-string",
                    status="error",
                    message="Unbalanced string quotes",
                    line=idx + 1,
                )
            )

    if not results:
        results.append(ValidationResult(rule="structure", status="pass", message="Script structure is valid"))
    return results
