from __future__ import annotations

"""Type rules introduced by Pine Script v6."""

import re

from pine_assist.validator.types import PineVersion, ValidationResult, is_comment

_BOOL_NA_RE = re.compile(r"\bbool\s+\w+\s*=\s*na\b")
_BOOL_NA_CAST_RE = re.compile(r"bool\s*\(\s*na\s*\)")
_INT_NA_RE = re.compile(r"\bint\s+\w+\s*=\s*na\b")
_INT_NA_CAST_RE = re.compile(r"int\s*\(\s*na\s*\)")
_HLINE_ASSIGN_RE = re.compile(r"(\w+)\s*=\s*hline\s*\(")
_PLOT_ASSIGN_RE = re.compile(r"(\w+)\s*=\s*plot\s*\(")
_FILL_CALL_RE = re.compile(r"\bfill\s*\(\s*(\w+)\s*,\s*(\w+)")
_NUMERIC_INPUT_RE = re.compile(r"input\.(?:int|float)\s*\(")
_DEF_KWARG_RE = re.compile(r"\bdef\s*=")
_DEFVAL_KWARG_RE = re.compile(r"\bdefval\s*=")


def _na_cast_findings(idx: int, line: str) -> list[ValidationResult]:
    findings: list[ValidationResult] = []
    if _BOOL_NA_RE.search(line) and not _BOOL_NA_CAST_RE.search(line):
        findings.append(
            ValidationResult(
                rule="bool-na-cast",
                status="error",
                message="Cannot assign na to bool without explicit cast in v6",
                line=idx + 1,
                suggestion="Use bool(na) instead of plain na",
            )
        )
    # int/na is tolerated by the compiler, hence only a warning.
    if _INT_NA_RE.search(line) and not _INT_NA_CAST_RE.search(line):
        findings.append(
            ValidationResult(
                rule="int-na-cast",
                status="warn",
                message="Assigning na to int may need explicit cast in v6",
                line=idx + 1,
                suggestion="Use int(na) for clarity",
            )
        )
    return findings


def _collect_plot_handles(lines: list[str]) -> tuple[set[str], set[str]]:
    hline_vars: set[str] = set()
    plot_vars: set[str] = set()
    for line in lines:
        if is_comment(line):
            continue
        hline_match = _HLINE_ASSIGN_RE.search(line)
        if hline_match:
            hline_vars.add(hline_match.group(1))
        plot_match = _PLOT_ASSIGN_RE.search(line)
        if plot_match:
            plot_vars.add(plot_match.group(1))
    return hline_vars, plot_vars


def check_v6_specific(code: str, version: PineVersion = "v6") -> list[ValidationResult]:
    if version != "v6":
        return []
    lines = code.split("\n")
    results: list[ValidationResult] = []

    for idx, line in enumerate(lines):
        if is_comment(line):
            continue
        results.extend(_na_cast_findings(idx, line))

    hline_vars, plot_vars = _collect_plot_handles(lines)
    for idx, line in enumerate(lines):
        if is_comment(line):
            continue
        fill_match = _FILL_CALL_RE.search(line)
        if not fill_match:
            continue
        first, second = fill_match.groups()
        mixed = (first in hline_vars and second in plot_vars) or (
            first in plot_vars and second in hline_vars
        )
        if mixed:
            results.append(
                ValidationResult(
                    rule="fill-mixed-types",
                    status="error",
                    message="fill() cannot mix hline and plot references",
                    line=idx + 1,
                    suggestion="Both arguments to fill() must be the same type (both plot or both hline)",
                )
            )

    for idx, line in enumerate(lines):
        if is_comment(line):
            continue
        if (
            _NUMERIC_INPUT_RE.search(line)
            and _DEF_KWARG_RE.search(line)
            and not _DEFVAL_KWARG_RE.search(line)
        ):
            results.append(
                ValidationResult(
                    rule="input-def-param",
                    status="error",
                    message="input.int()/input.float() uses defval, not def",
                    line=idx + 1,
                    suggestion="Change def= to defval=",
                )
            )
    return results
