# parity/comparators/interface.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, TypedDict


class CompareResult(TypedDict, total=False):
    section: str
    kind: str                 # comparator name ("text", "csv")
    mode: str
    result: str               # Verdict value
    message: str
    counts: Dict[str, int]
    diff: str                 # condensed transcript (text comparisons)
    report: Any               # ComparisonReport or CsvComparisonResult


class Comparator(ABC):
    """
    Stable comparator interface.
    Implementations are pure functions of their inputs: each call builds its own report.
    """

    @abstractmethod
    def compare(
        self,
        *,
        section: str,
        metadata: Dict[str, Any],
        expected: Any,
        actual: Any
    ) -> CompareResult:
        """
        Return a normalized CompareResult (see TypedDict).
        `metadata` carries the comparator-specific options of the comparison profile.
        """
        ...
