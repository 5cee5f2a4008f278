# parity/tests/test_text_comparator.py
from __future__ import annotations

import pytest
from utility import kinds, text_of

from parity.comparators.precheck import fast_compare, is_blank
from parity.comparators.registry import create
from parity.comparators.text_comparator import NO_DIFF, TextComparator, compare_text
from parity.interfaces import CompareMode, ComparisonConfigError, OutcomeKind
from parity.reporting.report import ComparisonReport


# fast_compare: identical content short-circuits with a single file-level outcome.
def test_fast_compare_identical(report: ComparisonReport):
    assert fast_compare("a\nb\n", "a\nb\n", report) is True
    assert [o.message for o in report.file_outcomes] == ["content matched exactly"]


# fast_compare: size and line-count differences are both reported.
def test_fast_compare_size_and_line_count(report: ComparisonReport):
    assert fast_compare("a\nb\n", "a\nb\nc\n", report) is False
    messages = [o.message for o in report.file_outcomes]
    assert messages == ["EXPECTED and ACTUAL sizes are different", "number of lines are different"]
    size, lines = report.file_outcomes
    assert (size.expected, size.actual) == ("4 bytes", "6 bytes")
    assert (lines.expected, lines.actual) == ("2 lines", "3 lines")


# fast_compare: same shape but different content records nothing and defers.
def test_fast_compare_same_shape(report: ComparisonReport):
    assert fast_compare("ab", "AB", report) is False
    assert report.file_outcomes == []


# fast_compare: sizes are UTF-8 byte lengths.
def test_fast_compare_counts_bytes(report: ComparisonReport):
    fast_compare("é", "e", report)
    assert report.file_outcomes[0].expected == "2 bytes"


# is_blank: None, empty and whitespace-only are blank.
@pytest.mark.parametrize("content, blank", [(None, True), ("", True), (" \n\t", True), (" x ", False)])
def test_is_blank(content, blank):
    assert is_blank(content) is blank


# Identical content: MATCH verdict, every line counted as matched.
def test_identical_content_matches():
    res = compare_text(text_of("x", "y", "z"), text_of("x", "y", "z"))
    rep = res["report"]
    assert res["result"] == "MATCH"
    assert res["message"] == "content matched exactly"
    assert rep.match_count == 3
    assert rep.mismatch_count == 0
    assert rep.match_percent == 1
    assert rep.line_outcomes == []


# Missing line end-to-end: one MISSING for "y" at line 2, no mismatch on "z".
def test_missing_line_end_to_end():
    res = compare_text(text_of("x", "y", "z"), text_of("x", "z"))
    rep = res["report"]
    assert res["result"] == "MISMATCH"
    assert kinds(rep) == [OutcomeKind.MISSING]
    assert rep.line_outcomes[0].expected == "y"
    assert rep.line_outcomes[0].expected_line == 2
    assert res["counts"]["missing"] == 1
    assert res["counts"]["matched"] == 2


# Fail-fast: line 1 matches, the case mismatch on line 2 is the only outcome.
def test_fail_fast_single_outcome():
    res = compare_text("x\ny", "x\nY", CompareMode.FAIL_FAST)
    rep = res["report"]
    assert res["result"] == "MISMATCH"
    assert len(rep.line_outcomes) == 1
    (o,) = rep.line_outcomes
    assert o.expected_line == 2
    assert "letter case" in o.note
    assert "stopped at first mismatch" in res["message"]


# Fail-fast keeps the file-level facts gathered before the line pass.
def test_fail_fast_keeps_file_outcomes():
    res = compare_text("a\nb\nc", "a\nB", "fail_fast")
    rep = res["report"]
    assert [o.message for o in rep.file_outcomes] == [
        "EXPECTED and ACTUAL sizes are different",
        "number of lines are different",
    ]
    assert len(rep.line_outcomes) == 1


# Thorough: the full pass runs and the verdict is MISMATCH.
def test_thorough_completes_pass():
    res = compare_text("a\nb\nc", "A\nb\nx", "thorough")
    rep = res["report"]
    assert res["result"] == "MISMATCH"
    assert rep.match_count == 1
    assert rep.mismatch_count == 2
    assert [o.expected_line for o in rep.line_outcomes] == [1, 3]


# Only a trailing newline differs: all lines match, the content still does not.
def test_trailing_newline_only():
    res = compare_text("a\nb\n", "a\nb")
    assert res["result"] == "MISMATCH"
    assert res["report"].mismatch_count == 0
    assert res["report"].match_count == 2


# CRLF and LF line endings split the same way.
def test_crlf_lines_align():
    res = compare_text("a\r\nb\r\n", "a\nb\n")
    rep = res["report"]
    assert rep.match_count == 2
    assert rep.line_outcomes == []


# DIFF mode: transcript instead of a verdict.
def test_diff_mode_transcript():
    res = compare_text("x\ny", "x\nz", CompareMode.DIFF)
    assert res["result"] == "DIFF"
    assert res["diff"] == "   2|  MISMATCH|[y]\r\n"


# DIFF mode: ADDED lines show the ACTUAL text; realigned lines name the ACTUAL position.
def test_diff_mode_added_and_moved():
    res = compare_text("a\nc", "a\nb\nC", "diff")
    assert res["diff"] == (
        "   2|     ADDED|[b]|missing in EXPECTED\r\n"
        "   2|  MISMATCH|[c]|ACTUAL moved to line 3\r\n"
    )


# DIFF mode on identical content.
def test_diff_mode_no_diff():
    res = compare_text("same", "same", CompareMode.DIFF)
    assert res["result"] == "DIFF"
    assert res["diff"] == NO_DIFF


# Blank input on both sides: one file-level outcome, no line pass, no crash.
@pytest.mark.parametrize("mode", list(CompareMode))
def test_blank_both_sides(mode):
    res = compare_text("", "   \n", mode)
    rep = res["report"]
    assert len(rep.file_outcomes) == 1
    assert rep.file_outcomes[0].message == "BOTH EXPECTED and ACTUAL content is empty/blank"
    assert rep.line_outcomes == []
    assert rep.match_count == rep.mismatch_count == 0


# Blank on one side names that side and the other side's line count.
def test_blank_actual():
    res = compare_text("a\nb", None)
    (o,) = res["report"].file_outcomes
    assert o.message == "ACTUAL content is empty/blank"
    assert (o.expected, o.actual) == ("2 lines", "0 line")
    assert res["result"] == "MISMATCH"


# log_matches stores matched lines with the perfect-match note.
def test_log_matches():
    res = compare_text("a\nb", "a\nB", log_matches=True)
    rep = res["report"]
    assert kinds(rep) == [OutcomeKind.MATCHED, OutcomeKind.MISMATCH]
    assert rep.line_outcomes[0].note == "perfect match"


# Unknown modes are configuration errors.
def test_unknown_mode():
    with pytest.raises(ComparisonConfigError):
        compare_text("a", "b", "sometimes")


# The "text" comparator is registered and reads its options from metadata.
def test_registered_text_comparator():
    comparator = create("text")
    assert isinstance(comparator, TextComparator)
    res = comparator.compare(section="greeting", metadata={"mode": "fail_fast"}, expected="hi\nyou", actual="hi\nYOU")
    assert res["section"] == "greeting"
    assert res["mode"] == "fail_fast"
    assert res["kind"] == "text"
    assert res["result"] == "MISMATCH"
