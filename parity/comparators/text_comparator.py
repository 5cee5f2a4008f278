# parity/comparators/text_comparator.py
from __future__ import annotations
from typing import Any, Dict, Optional

from parity import logging as slog
from parity.comparators.aligner import LineAligner
from parity.comparators.interface import Comparator, CompareResult
from parity.comparators.precheck import fast_compare, is_blank
from parity.comparators.registry import register
from parity.ingest import split_lines
from parity.interfaces import CompareMode, OutcomeKind, Verdict
from parity.reporting.outcomes import FileOutcome, LineOutcome
from parity.reporting.report import ComparisonReport

NO_DIFF = "No diff found"


def _counts(report: ComparisonReport) -> Dict[str, int]:
    return {
        "matched": report.match_count,
        "mismatched": report.mismatch_count,
        "missing": report.count(OutcomeKind.MISSING),
        "added": report.count(OutcomeKind.ADDED),
        "file": len(report.file_outcomes),
    }


def compare_text(
    expected: Optional[str],
    actual: Optional[str],
    mode: Any = CompareMode.THOROUGH,
    *,
    log_matches: bool = False,
    section: str = "text",
) -> CompareResult:
    """
    Compare two resolved text bodies.

    Blank input on either side short-circuits to a single content-empty
    outcome. Identical content short-circuits on the precheck. Everything
    else goes through the line pass. FAIL_FAST and THOROUGH give a
    MATCH/MISMATCH verdict; DIFF always completes and gives the transcript.
    """
    mode = CompareMode.parse(mode)
    report = ComparisonReport()
    matched = False
    completed = True

    if is_blank(expected) or is_blank(actual):
        e_lines = 0 if is_blank(expected) else len(split_lines(expected))
        a_lines = 0 if is_blank(actual) else len(split_lines(actual))
        report.add_file(FileOutcome.content_empty(e_lines, a_lines))
        message = report.file_outcomes[-1].message
    elif fast_compare(expected, actual, report):
        matched = True
        message = report.file_outcomes[-1].message
        # identical content: account every line as matched without aligning
        for i, line in enumerate(split_lines(expected)):
            report.add_line(LineOutcome.matched(i + 1, line), record=log_matches)
    else:
        aligner = LineAligner(report, fail_fast=(mode == CompareMode.FAIL_FAST), log_matches=log_matches)
        completed = aligner.align(split_lines(expected), split_lines(actual))
        message = "EXPECTED and ACTUAL differ. " + report.statistics()
        if not completed:
            message = "EXPECTED and ACTUAL differ (stopped at first mismatch)."

    if mode == CompareMode.DIFF:
        verdict = Verdict.DIFF
        diff = report.show_diffs() if report.has_findings and not matched else NO_DIFF
    else:
        verdict = Verdict.MATCH if matched else Verdict.MISMATCH
        diff = report.show_diffs()

    slog.log_verdict(section, verdict.value, message)
    return {
        "section": section,
        "kind": "text",
        "mode": mode.value,
        "result": verdict.value,
        "message": message,
        "counts": _counts(report),
        "diff": diff,
        "report": report,
    }


class TextComparator(Comparator):
    """Line-by-line text comparison (precheck, alignment, classification)."""

    def compare(self, *, section: str, metadata: Dict[str, Any], expected: Any, actual: Any) -> CompareResult:
        meta = metadata or {}
        return compare_text(
            expected,
            actual,
            meta.get("mode") or CompareMode.THOROUGH,
            log_matches=bool(meta.get("log_matches", False)),
            section=section,
        )


# Self-register as the "text" comparator
register("text", TextComparator)
