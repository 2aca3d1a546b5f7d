from __future__ import annotations

from pine_assist.validator.deprecated import check_deprecated


def test_study_flagged_in_v6_only() -> None:
    results = check_deprecated('study("X")', "v6")

    assert len(results) == 1
    assert results[0].rule == "deprecated-study"
    assert results[0].status == "error"
    assert results[0].line == 1
    assert check_deprecated('study("X")', "v5") == []


def test_namespaced_replacements_are_not_flagged() -> None:
    code = (
        'htf = request.security(syminfo.tickerid, "D", close)\n'
        "label_text = str.tostring(close)\n"
        'value = str.tonumber("1")'
    )
    assert check_deprecated(code, "v6") == []


def test_bare_calls_are_flagged() -> None:
    code = (
        'htf = security(syminfo.tickerid, "D", close)\n'
        "label_text = tostring(close)\n"
        'value = tonumber("1")'
    )
    rules = [(result.rule, result.line) for result in check_deprecated(code, "v6")]

    assert rules == [
        ("deprecated-security", 1),
        ("deprecated-tostring", 2),
        ("deprecated-tonumber", 3),
    ]


def test_multiple_patterns_on_one_line_all_reported() -> None:
    results = check_deprecated("plot(iff(up, 1, 0), transp=50, style=plot.style_dashed)", "v6")

    assert {result.rule for result in results} == {
        "deprecated-transp",
        "deprecated-iff",
        "nonexistent-style-dashed",
    }
    assert all(result.line == 1 for result in results)


def test_deprecated_input_types_and_comments() -> None:
    code = '// study("old")\nlen = input.integer(14)\nres = input.resolution("D")'
    results = check_deprecated(code, "v6")

    assert [(result.rule, result.line) for result in results] == [
        ("deprecated-input-type", 2),
        ("deprecated-input-type", 3),
    ]
