# parity/comparators/aligner.py
from __future__ import annotations
from typing import Optional, Sequence

from parity import logging as slog
from parity.comparators.classifier import classify, delete_whitespace, edit_distance, simple_match
from parity.interfaces import OutcomeKind
from parity.reporting.outcomes import LineOutcome
from parity.reporting.report import ComparisonReport


def scan_for_match(match_to: Optional[str], match_from: Sequence[str], start: int) -> int:
    """Index of the first line at or after `start` that simple-matches `match_to`, else -1."""
    for i in range(max(start, 0), len(match_from)):
        if simple_match(match_to, match_from[i]):
            return i
    return -1


class LineAligner:
    """
    Two-cursor walk over EXPECTED and ACTUAL lines.

    Each step either classifies the current pair (both cursors advance),
    finds the EXPECTED line further down ACTUAL (the lines skipped over are
    ADDED, only the ACTUAL cursor moves), finds the ACTUAL line further down
    EXPECTED (skipped lines are MISSING, only the EXPECTED cursor moves), or
    falls back to edit distance. Cursors never move backwards, and every
    input line lands in exactly one outcome unless fail-fast stops the walk.
    """

    def __init__(self, report: ComparisonReport, *, fail_fast: bool = False, log_matches: bool = False):
        self.report = report
        self.fail_fast = fail_fast
        self.log_matches = log_matches
        self._baseline = report.mismatch_count

    def _add(self, outcome: LineOutcome) -> None:
        if outcome.kind == OutcomeKind.MATCHED:
            self.report.add_line(outcome, record=self.log_matches)
            return
        slog.log_outcome(outcome.kind.value, outcome.expected_line, outcome.note)
        self.report.add_line(outcome)

    def _should_stop(self) -> bool:
        return self.fail_fast and self.report.mismatch_count > self._baseline

    def align(self, expected: Sequence[str], actual: Sequence[str]) -> bool:
        """Populate the report. Returns False when fail-fast cut the walk short."""
        n, m = len(expected), len(actual)
        slog.log_debug(f"aligning {n} EXPECTED line(s) against {m} ACTUAL line(s)")

        e = a = 0
        while e < n:
            if self._should_stop():
                return False

            pos = e + 1
            if a >= m:
                self._add(LineOutcome.missing(pos, expected[e]))
                e += 1
                continue

            e_row, a_row = expected[e], actual[a]

            found = classify(e_row, a_row)
            if found is not None:
                if found.kind == OutcomeKind.MATCHED:
                    outcome = LineOutcome.matched(pos, e_row, found.note)
                else:
                    outcome = LineOutcome.mismatch(pos, found.note, e_row, a_row)
                self._add(outcome.realigned(pos, a + 1))
                e += 1
                a += 1
                continue

            # EXPECTED line shows up later in ACTUAL: everything before it was added
            k = scan_for_match(e_row, actual, a)
            if k > a:
                for j in range(a, k):
                    self._add(LineOutcome.added(j + 1, actual[j]))
                a = k
                continue

            # ACTUAL line shows up later in EXPECTED: everything before it is missing
            k = scan_for_match(a_row, expected, e)
            if k > e:
                for j in range(e, k):
                    self._add(LineOutcome.missing(j + 1, expected[j]))
                e = k
                continue

            distance = edit_distance(delete_whitespace(e_row.strip()), delete_whitespace(a_row.strip()))
            note, extras = distance.describe()
            self._add(LineOutcome.mismatch(pos, note, e_row, a_row, extras).realigned(pos, a + 1))
            e += 1
            a += 1

        while a < m:
            if self._should_stop():
                return False
            self._add(LineOutcome.added(a + 1, actual[a]))
            a += 1

        return True
