from __future__ import annotations

"""Platform limits on plot count, request calls and script size."""

import re

from pine_assist.validator.types import PineVersion, ValidationResult

PLOT_LIMIT = 64
PLOT_WARNING = 50
REQUEST_LIMIT = 40
REQUEST_WARNING = 30
SIZE_WARNING_CHARS = 50_000

_PLOT_CALL_RE = re.compile(
    r"\b(?:plot|plotshape|plotchar|plotarrow|plotcandle|plotbar|hline|fill|bgcolor|barcolor)\s*\("
)
_REQUEST_CALL_RE = re.compile(r"\brequest\.\w+\s*\(")


def _count_finding(
    count: int,
    limit: int,
    warning: int,
    kind: str,
    exceeded_hint: str,
    warning_hint: str,
) -> ValidationResult | None:
    if count > limit:
        return ValidationResult(
            rule=f"{kind}-limit-exceeded",
            status="error",
            message=f"{count} {kind} calls exceed TradingView limit of {limit}",
            suggestion=exceeded_hint,
        )
    if count > warning:
        return ValidationResult(
            rule=f"{kind}-limit-warning",
            status="warn",
            message=f"{count} {kind} calls approaching TradingView limit of {limit}",
            suggestion=warning_hint,
        )
    return None


def check_limits(code: str, version: PineVersion | None = None) -> list[ValidationResult]:
    results: list[ValidationResult] = []

    plot_finding = _count_finding(
        len(_PLOT_CALL_RE.findall(code)),
        PLOT_LIMIT,
        PLOT_WARNING,
        "plot",
        "Reduce the number of plot/hline/fill/bgcolor calls",
        "Consider reducing plot calls to stay safely under the limit",
    )
    if plot_finding is not None:
        results.append(plot_finding)

    request_finding = _count_finding(
        len(_REQUEST_CALL_RE.findall(code)),
        REQUEST_LIMIT,
        REQUEST_WARNING,
        "request",
        "Reduce the number of request.security() and other request.* calls",
        "Consider reducing request.* calls to stay safely under the limit",
    )
    if request_finding is not None:
        results.append(request_finding)

    if len(code) > SIZE_WARNING_CHARS:
        results.append(
            ValidationResult(
                rule="script-size-warning",
                status="warn",
                message=(
                    f"Script is {round(len(code) / 1000)}K characters and may approach "
                    "TradingView compilation limits"
                ),
                suggestion="Consider splitting into a library + indicator pattern",
            )
        )
    return results
