from __future__ import annotations

"""Validation finding type shared by every rule module."""

from dataclasses import dataclass
from typing import Any, Literal

PineVersion = Literal["v5", "v6"]
ValidationStatus = Literal["pass", "warn", "error"]

COMMENT_PREFIX = "//"


@dataclass(frozen=True)
class ValidationResult:
    """Single finding; ``line`` is 1-based when present."""
    rule: str
    status: ValidationStatus
    message: str
    line: int | None = None
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"rule": self.rule, "status": self.status, "message": self.message}
        if self.line is not None:
            data["line"] = self.line
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


def is_comment(line: str) -> bool:
    return line.strip().startswith(COMMENT_PREFIX)


def summarize_results(results: list[ValidationResult]) -> dict[str, int]:
    """Count findings per status."""
    summary = {"errors": 0, "warnings": 0, "passed": 0}
    for result in results:
        if result.status == "error":
            summary["errors"] += 1
        elif result.status == "warn":
            summary["warnings"] += 1
        else:
            summary["passed"] += 1
    return summary
