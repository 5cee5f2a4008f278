# parity/interfaces.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class CompareMode(Enum):
    """Invocation policy for text comparison."""
    FAIL_FAST = "fail_fast"
    THOROUGH = "thorough"
    DIFF = "diff"

    @classmethod
    def parse(cls, value) -> "CompareMode":
        if isinstance(value, CompareMode):
            return value
        key = str(value or "").strip().lower().replace("-", "_")
        for mode in cls:
            if mode.value == key:
                return mode
        raise ComparisonConfigError(
            f"Unknown comparison mode '{value}'. Allowed: {[m.value for m in cls]}"
        )


class OutcomeKind(Enum):
    MATCHED = "MATCHED"
    MISMATCH = "MISMATCH"
    MISSING = "MISSING"
    ADDED = "ADDED"


class Verdict(Enum):
    MATCH = "MATCH"
    MISMATCH = "MISMATCH"
    DIFF = "DIFF"


class ComparisonConfigError(ValueError):
    """Invalid comparison input or configuration (never retried, never partially processed)."""


@dataclass(frozen=True)
class Dataset:
    """
    Parsed tabular content: header list plus records positionally aligned to it.
    Records are never mutated by the comparators.
    """
    headers: List[str] = field(default_factory=list)
    records: List[List[str]] = field(default_factory=list)

    @property
    def is_blank(self) -> bool:
        return not self.headers or not self.records

    def __len__(self) -> int:
        return len(self.records)
