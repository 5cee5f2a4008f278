# parity/reporting/summary.py
from __future__ import annotations
from typing import Any, Dict

from parity.interfaces import Verdict
from parity.reporting.formatting import POWERED_BY, right_now


def _passed(result: str) -> bool:
    # DIFF runs only produce a transcript, they never fail a run
    return result in (Verdict.MATCH.value, Verdict.DIFF.value)


def assemble_summary(
    *,
    compare_results: Dict[str, Dict[str, Any]],
    artifacts: Dict[str, Dict[str, str]] | None = None,
    errors: Dict[str, str] | None = None,
) -> Dict[str, Any]:
    """Build the run-level summary JSON written next to the per-comparison reports."""

    comparisons_out: Dict[str, Any] = {}
    state_counts = {v.value: 0 for v in Verdict}
    overall = Verdict.MATCH.value

    for name, res in (compare_results or {}).items():
        result = str(res.get("result") or Verdict.MISMATCH.value)
        state_counts[result] = state_counts.get(result, 0) + 1
        if not _passed(result):
            overall = Verdict.MISMATCH.value

        comparisons_out[name] = {
            "type": res.get("kind"),
            "mode": res.get("mode"),
            "result": result,
            "message": res.get("message", ""),
            "counts": dict(res.get("counts") or {}),
            "reports": dict((artifacts or {}).get(name) or {}),
        }

    for name, message in (errors or {}).items():
        state_counts[Verdict.MISMATCH.value] += 1
        overall = Verdict.MISMATCH.value
        comparisons_out[name] = {
            "result": Verdict.MISMATCH.value,
            "message": message,
            "error": True,
        }

    return {
        "overall": overall,
        "state_counts": {**state_counts, "TOTAL": len(comparisons_out)},
        "comparisons": comparisons_out,
        "generated-on": right_now(),
        "powered-by": POWERED_BY,
    }
