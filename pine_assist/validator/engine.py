from __future__ import annotations

"""Entry point composing all rule modules into one ordered finding list."""

from typing import Callable

from pine_assist.validator.deprecated import check_deprecated
from pine_assist.validator.limits import check_limits
from pine_assist.validator.structure import check_structure
from pine_assist.validator.types import PineVersion, ValidationResult
from pine_assist.validator.v6_specific import check_v6_specific

RuleModule = Callable[[str, PineVersion], list[ValidationResult]]

RULE_MODULES: tuple[RuleModule, ...] = (
    check_structure,
    check_deprecated,
    check_v6_specific,
    check_limits,
)


def validate_pine_script(code: str, version: PineVersion = "v6") -> list[ValidationResult]:
    """Run every rule module in order; blank input yields no findings."""
    if not code.strip():
        return []
    results: list[ValidationResult] = []
    for rule_module in RULE_MODULES:
        results.extend(rule_module(code, version))
    return results
