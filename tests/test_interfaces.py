# parity/tests/test_interfaces.py
from __future__ import annotations

import pytest

import parity.comparators.identity_comparator  # noqa: F401  (registers "csv")
import parity.comparators.text_comparator  # noqa: F401  (registers "text")
from parity.comparators import registry
from parity.interfaces import CompareMode, ComparisonConfigError
from parity.reporting.summary import assemble_summary


# CompareMode.parse: tolerant of case, dashes and enum instances.
@pytest.mark.parametrize(
    "raw, mode",
    [
        ("FAIL-FAST", CompareMode.FAIL_FAST),
        ("thorough", CompareMode.THOROUGH),
        (" Diff ", CompareMode.DIFF),
        (CompareMode.DIFF, CompareMode.DIFF),
    ],
)
def test_compare_mode_parse(raw, mode):
    assert CompareMode.parse(raw) is mode


# Unknown modes list the allowed values.
def test_compare_mode_unknown():
    with pytest.raises(ComparisonConfigError) as exc:
        CompareMode.parse("lenient")
    assert "fail_fast" in str(exc.value)


# Configuration errors are ValueErrors.
def test_config_error_is_value_error():
    assert issubclass(ComparisonConfigError, ValueError)


# Both comparators self-register; unknown names are configuration errors.
def test_registry():
    assert {"text", "csv"} <= set(registry.names())
    assert registry.get(" TEXT ") is registry.get("text")
    with pytest.raises(ComparisonConfigError):
        registry.create("xml")
    with pytest.raises(ValueError):
        registry.register("  ", object)


# assemble_summary: DIFF passes, any mismatch or error fails the run.
def test_assemble_summary():
    results = {
        "a": {"kind": "text", "mode": "diff", "result": "DIFF", "message": "m", "counts": {"matched": 1}},
        "b": {"kind": "csv", "result": "MATCH", "message": "ok", "counts": {}},
    }
    summary = assemble_summary(compare_results=results, artifacts={"a": {"text": "a.txt"}})
    assert summary["overall"] == "MATCH"
    assert summary["comparisons"]["a"]["reports"] == {"text": "a.txt"}
    assert summary["state_counts"] == {"MATCH": 1, "MISMATCH": 0, "DIFF": 1, "TOTAL": 2}

    failed = assemble_summary(compare_results=results, errors={"c": "boom"})
    assert failed["overall"] == "MISMATCH"
    assert failed["comparisons"]["c"] == {"result": "MISMATCH", "message": "boom", "error": True}
