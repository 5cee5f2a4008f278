# parity/reporting/report.py
from __future__ import annotations
import csv
import io
import json
from typing import Any, Dict, List, Optional

from parity.interfaces import OutcomeKind
from parity.reporting.formatting import (
    EOL,
    POWERED_BY,
    format_percent,
    left_pad,
    right_now,
    right_pad,
)
from parity.reporting.html import render_comparison_report
from parity.reporting.outcomes import MISSING, FileOutcome, LineOutcome

# message / E-A flag / line number / content
LINE_COLUMNS = (40, 2, 5, 50)
FILE_COLUMNS = (40, 2, 50)
FOOTER_HEADER = 10
CATEGORY_HEADER = 18


class ComparisonReport:
    """
    Accumulates the outcomes of one text comparison.

    Counters move only through `add_line`, so `match_count`/`mismatch_count`
    always agree with what was classified. File-level outcomes never touch
    the counters. MATCHED lines may be counted without being stored when the
    caller is not logging matches.
    """

    def __init__(self) -> None:
        self.file_outcomes: List[FileOutcome] = []
        self.line_outcomes: List[LineOutcome] = []
        self.match_count = 0
        self.mismatch_count = 0

    # --------------------------- accumulation ---------------------------

    def add_file(self, outcome: FileOutcome) -> None:
        self.file_outcomes.append(outcome)

    def add_line(self, outcome: LineOutcome, *, record: bool = True) -> None:
        if outcome.kind == OutcomeKind.MATCHED:
            self.match_count += 1
        else:
            self.mismatch_count += 1
        if record:
            self.line_outcomes.append(outcome)

    # --------------------------- derived ---------------------------

    @property
    def has_findings(self) -> bool:
        return bool(self.line_outcomes or self.file_outcomes)

    @property
    def match_percent(self) -> float:
        if self.mismatch_count == 0:
            return 1.0
        return self.match_count / float(self.match_count + self.mismatch_count)

    @property
    def mismatch_percent(self) -> float:
        if self.mismatch_count == 0:
            return 0.0
        return self.mismatch_count / float(self.match_count + self.mismatch_count)

    def count(self, kind: OutcomeKind) -> int:
        return sum(1 for o in self.line_outcomes if o.kind == kind)

    def statistics(self) -> str:
        return (f"Lines matched: {self.match_count}, "
                f"Lines mismatched: {self.mismatch_count}. "
                f"Match percentage: {format_percent(self.match_percent)}")

    # --------------------------- condensed transcript ---------------------------

    def show_diffs(self) -> str:
        """
        One line per recorded outcome:
          `  12|  MISMATCH|[expected text]|ACTUAL moved to line 14`
        ADDED lines show the ACTUAL text instead. Without line outcomes the
        file-level messages are listed.
        """
        out: List[str] = []
        if self.line_outcomes:
            for o in self.line_outcomes:
                if o.kind == OutcomeKind.ADDED:
                    message = f"[{o.actual}]|missing in EXPECTED"
                else:
                    message = f"[{o.expected}]"
                if o.is_realigned:
                    message += f"|ACTUAL moved to line {o.actual_line}"
                out.append(f"{left_pad(o.expected_line, 4)}|{left_pad(o.kind.value, 10)}|{message}{EOL}")
        else:
            out.extend(f"{o.message}{EOL}" for o in self.file_outcomes)
        return "".join(out)

    # --------------------------- plain text ---------------------------

    def to_plain_text(self) -> str:
        line_mode = bool(self.line_outcomes)
        widths = LINE_COLUMNS if line_mode else FILE_COLUMNS

        def col(index: int, value: Any) -> str:
            if isinstance(value, int):
                return left_pad(value, widths[index]) + " "
            return right_pad(value or "", widths[index]) + " "

        def data(index: int, value: str) -> str:
            value = value or ""
            if value != MISSING:
                value = f"[{value}]"
            return right_pad(value, widths[index]) + " "

        def note(index: int, value: str) -> str:
            return col(index, "  " + (value or ""))

        def row(first: str, flag: str, line: Any, content: str, *, wrap: bool) -> str:
            cells = [first, col(1, flag)]
            if line_mode:
                cells.append(col(2, line))
            last = len(widths) - 1
            cells.append(data(last, content) if wrap else col(last, content))
            return "".join(cells) + EOL

        def block(message: str, extras, e_line: Any, expected: str, a_line: Any, actual: str, wrap: bool) -> str:
            first_extra = extras[0] if extras else ""
            buf = [row(col(0, message), "E", e_line, expected, wrap=wrap),
                   row(note(0, first_extra), "A", a_line, actual, wrap=wrap)]
            for extra in extras[1:]:
                buf.append(note(0, extra) + "".join(col(i, "") for i in range(1, len(widths))) + EOL)
            buf.append("-" * (sum(w + 1 for w in widths) - 1) + " " + EOL)
            return "".join(buf)

        out: List[str] = []
        if line_mode:
            out.append(right_pad("MATCH", widths[0]) + " EA LINE# CONTENT" + EOL)
        else:
            out.append(right_pad("MATCH", widths[0]) + " EA CONTENT" + EOL)
        out.append(" ".join("=" * w for w in widths) + " " + EOL)

        for o in self.file_outcomes:
            out.append(block(o.message, list(o.extra_notes), "", o.expected, "", o.actual, wrap=False))
        for o in self.line_outcomes:
            out.append(block(o.note, list(o.extra_notes), o.expected_line, o.expected,
                             o.actual_line, o.actual, wrap=True))

        out.append(EOL)
        out.append(right_pad("Legend:", FOOTER_HEADER) + "E=EXPECTED, A=ACTUAL" + EOL)
        if self.match_count or self.mismatch_count:
            pad = " " * FOOTER_HEADER
            out.append(right_pad("Summary:", FOOTER_HEADER)
                       + right_pad("Lines matched: ", CATEGORY_HEADER) + str(self.match_count) + EOL)
            out.append(pad + right_pad("Lines mismatched: ", CATEGORY_HEADER) + str(self.mismatch_count) + EOL)
            out.append(pad + right_pad("Match percentage: ", CATEGORY_HEADER)
                       + format_percent(self.match_percent) + EOL)

        out.append(EOL)
        out.append(f"***** generated on {right_now()}{EOL}")
        out.append(f"***** powered by   {POWERED_BY}{EOL}")
        return "".join(out)

    # --------------------------- JSON ---------------------------

    def to_dict(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {}
        if self.file_outcomes:
            doc["summary"] = [o.to_dict() for o in self.file_outcomes]
        if self.line_outcomes:
            doc["details"] = [o.to_dict() for o in self.line_outcomes]
        if self.match_count or self.mismatch_count:
            doc["statistics"] = self.statistics()
        doc["generated-on"] = right_now()
        doc["powered-by"] = POWERED_BY
        return doc

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # --------------------------- CSV / HTML ---------------------------

    def to_csv(self, quoted: bool = False) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, quoting=csv.QUOTE_ALL if quoted else csv.QUOTE_MINIMAL, lineterminator=EOL)
        writer.writerow(["kind", "message", "expected-line", "expected", "actual-line", "actual", "notes"])
        for f in self.file_outcomes:
            writer.writerow(["FILE", f.message, "", f.expected, "", f.actual, "; ".join(f.extra_notes)])
        for o in self.line_outcomes:
            writer.writerow([o.kind.value, o.note, o.expected_line, o.expected,
                             o.actual_line, o.actual, "; ".join(o.extra_notes)])
        return buf.getvalue()

    def to_html(self, title: str = "Content comparison") -> str:
        return render_comparison_report(self, title=title)
