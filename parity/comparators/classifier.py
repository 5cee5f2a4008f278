# parity/comparators/classifier.py
"""
Why do two lines differ?

The cascade is checked cheapest-first and the first hit wins:

  1. exact equality                                 -> MATCHED
  2. case-insensitive equality                      -> letter case
  3. equal after trimming surrounding whitespace    -> leading/trailing spaces
  4. equal after deleting all whitespace            -> extra spaces
  5. (4) compared case-insensitively                -> extra spaces and letter cases

Anything else is left to the aligner (rescan) and finally to `edit_distance`.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from parity.interfaces import OutcomeKind

_WS = re.compile(r"\s+")

NOTE_PERFECT = "perfect match"
NOTE_CASE = "mismatch due to letter case"
NOTE_TRIM = "mismatch due to leading/trailing spaces"
NOTE_SPACES = "mismatch due to extra spaces"
NOTE_SPACES_CASE = "mismatch due to extra spaces and letter cases"


@dataclass(frozen=True)
class Classification:
    kind: OutcomeKind
    note: str


@dataclass(frozen=True)
class EditDistance:
    distance: int
    inserts: int
    deletes: int
    substitutes: int

    def describe(self) -> Tuple[str, Tuple[str, ...]]:
        """(note, extra notes) for a line whose only explanation is character-level divergence."""
        extras: List[str] = []
        if self.inserts > 0:
            extras.append(f"{self.inserts} added")
        if self.deletes > 0:
            extras.append(f"{self.deletes} removed")
        if self.substitutes > 0:
            extras.append(f"{self.substitutes} replaced")
        return f"{self.distance} mismatch(s) found in this line: ", tuple(extras)


def delete_whitespace(text: Optional[str]) -> str:
    return _WS.sub("", text or "")


def classify(expected: str, actual: str) -> Optional[Classification]:
    """Run the equality cascade on one pair. None means no cheap explanation was found."""
    if expected == actual:
        return Classification(OutcomeKind.MATCHED, NOTE_PERFECT)

    if expected.casefold() == actual.casefold():
        return Classification(OutcomeKind.MISMATCH, NOTE_CASE)

    e_trimmed = expected.strip()
    a_trimmed = actual.strip()
    if e_trimmed == a_trimmed:
        return Classification(OutcomeKind.MISMATCH, NOTE_TRIM)

    e_norm = delete_whitespace(e_trimmed)
    a_norm = delete_whitespace(a_trimmed)
    if e_norm == a_norm:
        return Classification(OutcomeKind.MISMATCH, NOTE_SPACES)

    if e_norm.casefold() == a_norm.casefold():
        return Classification(OutcomeKind.MISMATCH, NOTE_SPACES_CASE)

    return None


def simple_match(expected: Optional[str], actual: Optional[str]) -> bool:
    """Counterpart test used while rescanning: exact, or equal ignoring whitespace and case."""
    expected = expected or ""
    actual = actual or ""
    return expected == actual or delete_whitespace(expected).casefold() == delete_whitespace(actual).casefold()


def edit_distance(expected: str, actual: str) -> EditDistance:
    """
    Levenshtein distance with the operation mix of one optimal alignment.

    Inserts are characters only in ACTUAL, deletes only in EXPECTED. When
    walking back through the cost matrix, equal characters are consumed first,
    then deletes, then inserts, then substitutions, so the mix is stable for a
    given pair.
    """
    n, m = len(expected), len(actual)
    if n == 0 or m == 0:
        return EditDistance(max(n, m), m, n, 0)

    # cost[i][j]: distance between expected[:i] and actual[:j]
    cost = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n + 1):
        cost[i][0] = i
    for j in range(m + 1):
        cost[0][j] = j
    for i in range(1, n + 1):
        ei = expected[i - 1]
        row, prev = cost[i], cost[i - 1]
        for j in range(1, m + 1):
            sub = prev[j - 1] + (0 if ei == actual[j - 1] else 1)
            row[j] = min(prev[j] + 1, row[j - 1] + 1, sub)

    inserts = deletes = substitutes = 0
    i, j = n, m
    while i > 0 or j > 0:
        here = cost[i][j]
        if i > 0 and j > 0 and expected[i - 1] == actual[j - 1] and cost[i - 1][j - 1] == here:
            i -= 1
            j -= 1
        elif i > 0 and cost[i - 1][j] + 1 == here:
            deletes += 1
            i -= 1
        elif j > 0 and cost[i][j - 1] + 1 == here:
            inserts += 1
            j -= 1
        else:
            substitutes += 1
            i -= 1
            j -= 1

    return EditDistance(cost[n][m], inserts, deletes, substitutes)
