from __future__ import annotations

from pine_assist.validator.limits import check_limits


def test_exactly_64_plot_calls_warns_without_exceeding() -> None:
    results = check_limits("plot(close)\n" * 64)
    rules = [result.rule for result in results]

    assert "plot-limit-exceeded" not in rules
    assert rules == ["plot-limit-warning"]
    assert "64" in results[0].message


def test_65_plot_calls_is_an_error() -> None:
    results = check_limits("plot(close)\n" * 65)

    assert len(results) == 1
    assert results[0].rule == "plot-limit-exceeded"
    assert results[0].status == "error"
    assert "65" in results[0].message


def test_55_plot_family_calls_is_a_warning() -> None:
    code = "plotshape(cond)\n" * 20 + "hline(50)\n" * 20 + "bgcolor(color.red)\n" * 15
    results = check_limits(code)

    assert len(results) == 1
    assert results[0].rule == "plot-limit-warning"
    assert results[0].status == "warn"
    assert "55" in results[0].message


def test_request_call_thresholds() -> None:
    exceeded = check_limits('request.security("AAPL", "D", close)\n' * 41)
    warning = check_limits('request.security("AAPL", "D", close)\n' * 35)

    assert [result.rule for result in exceeded] == ["request-limit-exceeded"]
    assert [result.rule for result in warning] == ["request-limit-warning"]
    assert check_limits('request.security("AAPL", "D", close)\n' * 30) == []


def test_large_script_warns() -> None:
    results = check_limits("a" * 50_001)

    assert [result.rule for result in results] == ["script-size-warning"]
    assert "50K" in results[0].message


def test_all_limit_checks_can_fire_together() -> None:
    code = "plot(close)\n" * 65 + "request.financial(x)\n" * 41 + "//" + "x" * 50_000
    rules = [result.rule for result in check_limits(code)]

    assert rules == ["plot-limit-exceeded", "request-limit-exceeded", "script-size-warning"]
