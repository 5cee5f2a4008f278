# parity/reporting/outcomes.py
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from parity.interfaces import OutcomeKind

MISSING = "***** MISSING"


def _or_missing(text: Optional[str]) -> str:
    return MISSING if text is None else text


@dataclass(frozen=True)
class LineOutcome:
    """
    Classified result for one EXPECTED/ACTUAL line pair.

    Built once through the factory classmethods and never mutated; realignment
    produces a new instance. Absent text is the MISSING sentinel, never None.
    """
    expected_line: int
    actual_line: int
    kind: OutcomeKind
    note: str
    expected: str = MISSING
    actual: str = MISSING
    extra_notes: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def matched(cls, line: int, content: str, note: str = "") -> "LineOutcome":
        return cls(line, line, OutcomeKind.MATCHED, note or "perfect match",
                   _or_missing(content), _or_missing(content))

    @classmethod
    def mismatch(cls, line: int, note: str, expected: Optional[str], actual: Optional[str],
                 extra_notes: Tuple[str, ...] = ()) -> "LineOutcome":
        return cls(line, line, OutcomeKind.MISMATCH, note,
                   _or_missing(expected), _or_missing(actual), tuple(n for n in extra_notes if n))

    @classmethod
    def missing(cls, line: int, expected: str) -> "LineOutcome":
        return cls(line, line, OutcomeKind.MISSING, "missing line in ACTUAL", _or_missing(expected), MISSING)

    @classmethod
    def added(cls, line: int, actual: str) -> "LineOutcome":
        return cls(line, line, OutcomeKind.ADDED, "extra line found in ACTUAL", MISSING, _or_missing(actual))

    def realigned(self, expected_line: int, actual_line: int) -> "LineOutcome":
        if expected_line == actual_line:
            return self
        return replace(
            self,
            expected_line=expected_line,
            actual_line=actual_line,
            extra_notes=self.extra_notes + (f"(EXPECTED line {expected_line}, ACTUAL line {actual_line})",),
        )

    @property
    def is_realigned(self) -> bool:
        return self.expected_line != self.actual_line

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape used by the `details` array; the kind tag is deliberately left out."""
        return {
            "expected-line": self.expected_line,
            "expected": self.expected,
            "actual-line": self.actual_line,
            "actual": self.actual,
            "message": self.note,
            "additionalMessages": list(self.extra_notes),
        }


@dataclass(frozen=True)
class FileOutcome:
    """Whole-content fact (size, line count, emptiness) that does not touch the line counters."""
    message: str
    expected: str = ""
    actual: str = ""
    extra_notes: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def matched_exactly(cls, what: str = "content") -> "FileOutcome":
        return cls(f"{what} matched exactly")

    @classmethod
    def size_diff(cls, expected: int, actual: int) -> "FileOutcome":
        return cls("EXPECTED and ACTUAL sizes are different", f"{expected} bytes", f"{actual} bytes")

    @classmethod
    def line_count_diff(cls, expected: int, actual: int) -> "FileOutcome":
        return cls("number of lines are different", _lines(expected), _lines(actual))

    @classmethod
    def content_empty(cls, expected: int, actual: int) -> "FileOutcome":
        if expected < 1 and actual < 1:
            side = "BOTH EXPECTED and ACTUAL"
        elif expected < 1:
            side = "EXPECTED"
        else:
            side = "ACTUAL"
        return cls(f"{side} content is empty/blank", _lines(expected), _lines(actual))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message.strip(),
            "actual": self.actual.strip(),
            "expected": self.expected.strip(),
        }


def _lines(count: int) -> str:
    return f"{count} line{'s' if count > 1 else ''}"
