from __future__ import annotations

from pine_assist.validator.engine import RULE_MODULES, validate_pine_script
from pine_assist.validator.types import summarize_results


def test_blank_input_returns_no_findings() -> None:
    assert validate_pine_script("") == []
    assert validate_pine_script("  \n ") == []


def test_broken_snippet_reports_all_structure_errors() -> None:
    results = validate_pine_script("plot(close")
    errors = {result.rule for result in results if result.status == "error"}

    assert {"missing-version", "missing-declaration", "unbalanced-parens"} <= errors


def test_results_follow_rule_module_order() -> None:
    results = validate_pine_script('study("X")\nbool ok = na\nplot(close)')
    rules = [result.rule for result in results]

    assert rules.index("missing-version") < rules.index("deprecated-study") < rules.index("bool-na-cast")


def test_v5_skips_version_specific_modules() -> None:
    results = validate_pine_script('//@version=5\nstudy("X")\nbool ok = na', "v5")
    rules = {result.rule for result in results}

    assert "deprecated-study" not in rules
    assert "bool-na-cast" not in rules


def test_valid_script_summary() -> None:
    results = validate_pine_script('//@version=6\nindicator("X")\nplot(close)')

    assert [result.rule for result in results] == ["structure"]
    assert summarize_results(results) == {"errors": 0, "warnings": 0, "passed": 1}
    assert results[0].to_dict() == {
        "rule": "structure",
        "status": "pass",
        "message": "Script structure is valid",
    }


def test_rule_modules_are_registered_in_order() -> None:
    assert [module.__name__ for module in RULE_MODULES] == [
        "check_structure",
        "check_deprecated",
        "check_v6_specific",
        "check_limits",
    ]
