# parity/reporting/html.py
from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Sequence

from dominate import document, tags
from dominate.util import raw

from parity.reporting.formatting import POWERED_BY, format_percent

if TYPE_CHECKING:
    from parity.reporting.report import ComparisonReport

_STYLE = """
body { font-family: sans-serif; font-size: 13px; margin: 16px; }
table.report-table, table.compare-extended-result-table { border-collapse: collapse; margin: 8px 0; }
table.report-table th, table.report-table td,
table.compare-extended-result-table th, table.compare-extended-result-table td {
  border: 1px solid #bbb; padding: 2px 6px; text-align: left; vertical-align: top; }
td.content { font-family: monospace; white-space: pre; }
tr.matched td { background: #eaf6ee; }
tr.mismatch td { background: #fdf3dd; }
tr.missing td { background: #fbe3e3; }
tr.added td { background: #e3ecfb; }
.kpi { display: inline-block; margin-right: 24px; }
.kpi-title { color: #666; }
.kpi-value { font-size: 18px; font-weight: bold; }
"""

_KIND_TITLES = {
    "MATCHED": "Lines matched",
    "MISMATCH": "Lines that differ",
    "MISSING": "Lines missing in ACTUAL",
    "ADDED": "Lines missing in EXPECTED",
}


def render_table_block(headers: Sequence[str], rows: Sequence[Sequence[Any]], *,
                       css_class: str = "report-table", row_classes: Sequence[str] | None = None,
                       content_columns: Sequence[int] = ()):
    """
    Render a plain table wrapped in a container div.
    Cells that are already dominate nodes are embedded as-is, everything else is str()'d (and escaped).
    Columns listed in `content_columns` keep their whitespace (monospace, pre).
    """
    container = tags.div(_class="table-container")

    with container:
        t = tags.table(_class=css_class)
        with t:
            with tags.thead():
                with tags.tr():
                    for h in headers:
                        tags.th(str(h))

            with tags.tbody():
                for i, r in enumerate(rows or []):
                    cells = r if isinstance(r, (list, tuple)) else [r]
                    tr_kwargs: Dict[str, str] = {}
                    if row_classes and i < len(row_classes) and row_classes[i]:
                        tr_kwargs["_class"] = row_classes[i]
                    with tags.tr(**tr_kwargs):
                        for j, c in enumerate(cells):
                            td_kwargs = {"_class": "content"} if j in content_columns else {}
                            if hasattr(c, "render"):
                                tags.td(c, **td_kwargs)
                            else:
                                tags.td("" if c is None else str(c), **td_kwargs)
    return container


def render_discrepancy_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    """Tabular-comparison discrepancies as a standalone HTML table fragment."""
    block = render_table_block(headers, rows, css_class="compare-extended-result-table")
    return block.render()


def fast_summary(report: "ComparisonReport") -> str:
    return (f"Lines matched: {report.match_count}. "
            f"Lines mismatched: {report.mismatch_count}. "
            f"Match percentage: {format_percent(report.match_percent)}.")


def _render_kpis(report: "ComparisonReport") -> None:
    with tags.div(_class="kpi-row"):
        for title, value in (
            ("Matched", str(report.match_count)),
            ("Mismatched", str(report.mismatch_count)),
            ("Match percentage", format_percent(report.match_percent)),
            ("Mismatch percentage", format_percent(report.mismatch_percent)),
        ):
            with tags.div(_class="kpi"):
                tags.div(title, _class="kpi-title")
                tags.div(value, _class="kpi-value")


def _line_rows(report: "ComparisonReport") -> tuple[List[List[Any]], List[str]]:
    rows: List[List[Any]] = []
    classes: List[str] = []
    for o in report.line_outcomes:
        notes = "; ".join(o.extra_notes)
        rows.append([
            o.expected_line,
            o.actual_line,
            o.kind.value,
            o.note + (f" {notes}" if notes else ""),
            o.expected,
            o.actual,
        ])
        classes.append(o.kind.value.lower())
    return rows, classes


def render_comparison_report(report: "ComparisonReport", *, title: str = "Content comparison") -> str:
    """Full standalone HTML page for a line-by-line comparison report."""
    doc = document(title=title)
    with doc.head:
        tags.meta(charset="utf-8")
        tags.style(raw(_STYLE))

    with doc:
        tags.h1(title)
        tags.p("Generated on: " + datetime.now().strftime("%Y-%m-%d %H:%M:%S"))

        if report.file_outcomes:
            tags.h2("Content summary")
            render_table_block(
                ["Message", "Expected", "Actual"],
                [[f.message, f.expected, f.actual] for f in report.file_outcomes],
            )

        if report.match_count or report.mismatch_count:
            tags.h2("Statistics")
            tags.p(fast_summary(report))
            _render_kpis(report)

        if report.line_outcomes:
            tags.h2("Details")
            kinds = sorted({o.kind.value for o in report.line_outcomes})
            tags.p(", ".join(f"{_KIND_TITLES[k]}: {sum(1 for o in report.line_outcomes if o.kind.value == k)}"
                             for k in kinds))
            rows, classes = _line_rows(report)
            render_table_block(
                ["E#", "A#", "Kind", "Message", "Expected", "Actual"],
                rows,
                row_classes=classes,
                content_columns=(4, 5),
            )

        tags.hr()
        tags.p(f"E=EXPECTED, A=ACTUAL. Powered by {POWERED_BY}.")

    return str(doc)
