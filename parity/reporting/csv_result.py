# parity/reporting/csv_result.py
from __future__ import annotations
import csv
import io
from typing import Any, Dict, List, Optional, Sequence, Set

from parity.reporting.formatting import EOL, ascii_table, format_percent
from parity.reporting.html import render_discrepancy_table
from parity.reporting.outcomes import FileOutcome

DEFAULT_MISMATCHED_LABEL = "MISMATCHED FIELD"
DEFAULT_EXPECTED_LABEL = "EXPECTED"
DEFAULT_ACTUAL_LABEL = "ACTUAL"

REPORT_FORMATS = ("text", "csv", "csv_quoted", "html")


class CsvComparisonResult:
    """
    Outcome of an identity-keyed comparison of two record sets.

    Each discrepancy row is the display-field values followed by three
    columns: the field in conflict (or a record-missing marker), the
    EXPECTED value and the ACTUAL value. Every discrepancy adds its identity
    to `failed_identities`; several field conflicts on one record count once.

    The result is read-only once the comparator returns it; rendered reports
    are memoized.
    """

    def __init__(
        self,
        *,
        expected_headers: Sequence[str],
        actual_headers: Sequence[str],
        identity_fields: Sequence[str],
        display_fields: Sequence[str],
        expected_row_count: int = 0,
        actual_row_count: int = 0,
        mismatched_label: Optional[str] = None,
        expected_label: Optional[str] = None,
        actual_label: Optional[str] = None,
    ) -> None:
        self.expected_headers: List[str] = list(expected_headers or [])
        self.actual_headers: List[str] = list(actual_headers or [])
        self.identity_fields: List[str] = list(identity_fields or [])
        self.display_fields: List[str] = list(display_fields or [])
        self.expected_row_count = int(expected_row_count)
        self.actual_row_count = int(actual_row_count)
        self.mismatched_label = (mismatched_label or "").strip() or DEFAULT_MISMATCHED_LABEL
        self.expected_label = (expected_label or "").strip() or DEFAULT_EXPECTED_LABEL
        self.actual_label = (actual_label or "").strip() or DEFAULT_ACTUAL_LABEL

        self.discrepancies: List[List[str]] = []
        self.failed_identities: Set[str] = set()
        self.file_outcomes: List[FileOutcome] = []
        self._rendered: Dict[str, str] = {}

    # --------------------------- accumulation (comparator only) ---------------------------

    # `shown` holds one value per display field, taken from whichever side has the record

    def add_mismatched(self, identity: str, shown: Sequence[str], field: str, expected: str, actual: str) -> None:
        self._add(identity, shown, field, expected, actual)

    def add_missing_expected(self, identity: str, shown: Sequence[str]) -> None:
        self._add(identity, shown, f"RECORD MISSING in '{self.expected_label}'", "", identity)

    def add_missing_actual(self, identity: str, shown: Sequence[str]) -> None:
        self._add(identity, shown, f"RECORD MISSING in '{self.actual_label}'", identity, "")

    def add_file(self, outcome: FileOutcome) -> None:
        self.file_outcomes.append(outcome)
        self._rendered.clear()

    def _add(self, identity: str, shown: Sequence[str], field: str, expected: str, actual: str) -> None:
        self.failed_identities.add(identity)
        row = [shown[i] if i < len(shown) else "" for i in range(len(self.display_fields))]
        row.extend([field, expected, actual])
        self.discrepancies.append(row)
        self._rendered.clear()

    # --------------------------- derived ---------------------------

    @property
    def fail_count(self) -> int:
        return len(self.failed_identities)

    @property
    def success_rate(self) -> float:
        if not self.failed_identities:
            return 1.0
        if self.actual_row_count <= 0 or self.expected_row_count <= 0:
            return 0.0
        return (self.expected_row_count - len(self.failed_identities)) / float(self.expected_row_count)

    @property
    def is_empty(self) -> bool:
        return bool(self.file_outcomes) and not self.discrepancies

    @property
    def report_headers(self) -> List[str]:
        return self.display_fields + [self.mismatched_label, self.expected_label, self.actual_label]

    # --------------------------- renderings ---------------------------

    def report(self, fmt: str) -> str:
        key = (fmt or "").strip().lower()
        if key not in REPORT_FORMATS:
            raise ValueError(f"Unsupported report format '{fmt}'. Allowed: {list(REPORT_FORMATS)}")
        if key not in self._rendered:
            if key == "text":
                self._rendered[key] = ascii_table(self.report_headers, self.discrepancies)
            elif key == "html":
                self._rendered[key] = render_discrepancy_table(self.report_headers, self.discrepancies)
            else:
                self._rendered[key] = self._to_csv(quoted=(key == "csv_quoted"))
        return self._rendered[key]

    def report_as_text(self) -> str:
        return self.report("text")

    def report_as_csv(self) -> str:
        return self.report("csv")

    def report_as_csv_with_quotes(self) -> str:
        return self.report("csv_quoted")

    def report_as_html(self) -> str:
        return self.report("html")

    def _to_csv(self, *, quoted: bool) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, quoting=csv.QUOTE_ALL if quoted else csv.QUOTE_MINIMAL, lineterminator=EOL)
        writer.writerow(self.report_headers)
        writer.writerows(self.discrepancies)
        return buf.getvalue()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expected_headers": list(self.expected_headers),
            "actual_headers": list(self.actual_headers),
            "identity_fields": list(self.identity_fields),
            "display_fields": list(self.display_fields),
            "report_headers": self.report_headers,
            "discrepancies": [list(d) for d in self.discrepancies],
            "failed_identities": sorted(self.failed_identities),
            "fail_count": self.fail_count,
            "expected_row_count": self.expected_row_count,
            "actual_row_count": self.actual_row_count,
            "success_rate": self.success_rate,
            "summary": [o.to_dict() for o in self.file_outcomes],
        }

    def describe(self) -> str:
        ready = "READY" if self.discrepancies and self.failed_identities else "none"
        return (
            f"expected_headers={self.expected_headers}\n"
            f"actual_headers={self.actual_headers}\n"
            f"display_fields={self.display_fields}\n"
            f"identity_fields={self.identity_fields}\n"
            f"failed_identities=<{self.fail_count} found>\n"
            f"expected_row_count={self.expected_row_count}\n"
            f"actual_row_count={self.actual_row_count}\n"
            f"success_rate={format_percent(self.success_rate)}\n"
            f"reports=<{ready}>\n"
        )

    def __str__(self) -> str:
        return self.describe()
