# parity/comparators/precheck.py
from __future__ import annotations
from typing import Optional

from parity.ingest import split_lines
from parity.reporting.outcomes import FileOutcome
from parity.reporting.report import ComparisonReport


def is_blank(content: Optional[str]) -> bool:
    return content is None or not content.strip()


def fast_compare(expected: str, actual: str, report: ComparisonReport) -> bool:
    """
    Cheap whole-content comparison.

    Returns True (and records "content matched exactly") when both sides are
    identical. Otherwise records a size and/or line-count discrepancy, when
    present, and returns False so the caller goes on to the line pass.
    """
    if expected == actual:
        report.add_file(FileOutcome.matched_exactly())
        return True

    expected_size = len(expected.encode("utf-8"))
    actual_size = len(actual.encode("utf-8"))
    if expected_size != actual_size:
        report.add_file(FileOutcome.size_diff(expected_size, actual_size))

    expected_lines = len(split_lines(expected))
    actual_lines = len(split_lines(actual))
    if expected_lines != actual_lines:
        report.add_file(FileOutcome.line_count_diff(expected_lines, actual_lines))

    return False
