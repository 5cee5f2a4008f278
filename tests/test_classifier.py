# parity/tests/test_classifier.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

import pytest

from parity.comparators.classifier import (
    NOTE_CASE,
    NOTE_PERFECT,
    NOTE_SPACES,
    NOTE_SPACES_CASE,
    NOTE_TRIM,
    EditDistance,
    classify,
    delete_whitespace,
    edit_distance,
    simple_match,
)
from parity.interfaces import OutcomeKind


# One classification case: a line pair and the note the cascade must settle on.
@dataclass(frozen=True)
class CascadeCase:
    label: str
    expected: str
    actual: str
    note: Optional[str]


# Standardized assertion message prefix for classifier tests.
def _msg(label: str, text: str) -> str:
    return f"[CLASSIFY][{label}] {text}"


CASES: List[CascadeCase] = [
    CascadeCase("exact", "same line", "same line", NOTE_PERFECT),
    CascadeCase("letter-case", "Hello World", "hello world", NOTE_CASE),
    CascadeCase("trim", "  value", "value", NOTE_TRIM),
    CascadeCase("trim-trailing-tab", "value\t", "value", NOTE_TRIM),
    CascadeCase("extra-spaces", "a   b", "a b", NOTE_SPACES),
    CascadeCase("spaces-and-case", " A b", "a B ", NOTE_SPACES_CASE),
    CascadeCase("no-cheap-cause", "abc", "xyz", None),
]


# Each pair stops at the first cascade step that explains it.
@pytest.mark.parametrize("case", CASES, ids=lambda c: c.label)
def test_cascade_precedence(case: CascadeCase):
    found = classify(case.expected, case.actual)
    if case.note is None:
        assert found is None, _msg(case.label, f"expected no classification, got {found}")
        return
    assert found is not None, _msg(case.label, "cascade found nothing")
    assert found.note == case.note, _msg(case.label, f"note was {found.note!r}")
    want = OutcomeKind.MATCHED if case.note == NOTE_PERFECT else OutcomeKind.MISMATCH
    assert found.kind == want, _msg(case.label, f"kind was {found.kind}")


# Letter case alone must never fall through to whitespace or edit-distance notes.
def test_letter_case_is_reported_as_letter_case():
    found = classify("Hello World", "hello world")
    assert found.kind == OutcomeKind.MISMATCH
    assert "letter case" in found.note
    assert "spaces" not in found.note


# Whitespace collapse is reported as extra spaces, not case and not edit distance.
def test_whitespace_collapse_is_reported_as_extra_spaces():
    found = classify("a   b", "a b")
    assert found.kind == OutcomeKind.MISMATCH
    assert "extra spaces" in found.note
    assert "letter case" not in found.note


# delete_whitespace: removes every whitespace character, tolerates None.
def test_delete_whitespace():
    assert delete_whitespace(" a \t b c ") == "abc"
    assert delete_whitespace(None) == ""


# simple_match: exact or equal ignoring whitespace and case.
def test_simple_match():
    assert simple_match("a b", "AB")
    assert simple_match("x", "x")
    assert simple_match(None, "")
    assert not simple_match("x", "y")


# edit_distance: counts of the operations in one optimal alignment.
@pytest.mark.parametrize(
    "expected, actual, want",
    [
        ("abc", "abd", EditDistance(1, 0, 0, 1)),
        ("abc", "abxc", EditDistance(1, 1, 0, 0)),
        ("abcd", "abd", EditDistance(1, 0, 1, 0)),
        ("", "ab", EditDistance(2, 2, 0, 0)),
        ("ab", "", EditDistance(2, 0, 2, 0)),
        ("kitten", "sitting", EditDistance(3, 1, 0, 2)),
        ("same", "same", EditDistance(0, 0, 0, 0)),
    ],
)
def test_edit_distance(expected: str, actual: str, want: EditDistance):
    got = edit_distance(expected, actual)
    assert got == want
    assert got.inserts + got.deletes + got.substitutes == got.distance


# describe: note carries the distance, extras only list non-zero operations.
def test_edit_distance_describe():
    note, extras = EditDistance(2, 1, 0, 1).describe()
    assert note == "2 mismatch(s) found in this line: "
    assert extras == ("1 added", "1 replaced")

    _, none = EditDistance(0, 0, 0, 0).describe()
    assert none == ()
