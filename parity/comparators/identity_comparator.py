# parity/comparators/identity_comparator.py
from __future__ import annotations
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from parity import logging as slog
from parity.comparators.interface import Comparator, CompareResult
from parity.comparators.registry import register
from parity.ingest import parse_csv
from parity.interfaces import ComparisonConfigError, Dataset, Verdict
from parity.reporting.csv_result import CsvComparisonResult
from parity.reporting.formatting import format_percent
from parity.reporting.outcomes import FileOutcome

DEFAULT_IDENTITY_SEPARATOR = "^"

# plain ASCII decimal notation only: no nan/inf, no underscores, no other digit scripts
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


@dataclass
class IdentityJoinOptions:
    """
    How two record sets are joined and compared.

    All field-level options (`display`, `ignore`, `match_*`) and the keys of
    `match` name EXPECTED columns; the values of `match` name ACTUAL columns.
    """
    expected_identity: List[str]
    actual_identity: List[str]
    match: Optional[Dict[str, str]] = None
    display: List[str] = field(default_factory=list)
    ignore: List[str] = field(default_factory=list)
    match_as_number: List[str] = field(default_factory=list)
    match_case_insensitive: List[str] = field(default_factory=list)
    match_auto_trim: List[str] = field(default_factory=list)
    identity_separator: str = DEFAULT_IDENTITY_SEPARATOR
    mismatched_label: Optional[str] = None
    expected_label: Optional[str] = None
    actual_label: Optional[str] = None

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "IdentityJoinOptions":
        """Build options from a profile's `csv` block."""
        cfg = cfg or {}
        labels = cfg.get("labels") or {}
        match = cfg.get("match")
        if match is not None and not isinstance(match, Mapping):
            raise ComparisonConfigError("csv.match must map EXPECTED field names to ACTUAL field names.")
        separator = cfg.get("identity_separator")
        return cls(
            expected_identity=_as_list(cfg.get("expected_identity")),
            actual_identity=_as_list(cfg.get("actual_identity")),
            match={str(k).strip(): str(v).strip() for k, v in match.items()} if match else None,
            display=_as_list(cfg.get("display")),
            ignore=_as_list(cfg.get("ignore")),
            match_as_number=_as_list(cfg.get("match_as_number")),
            match_case_insensitive=_as_list(cfg.get("match_case_insensitive")),
            match_auto_trim=_as_list(cfg.get("match_auto_trim")),
            identity_separator=DEFAULT_IDENTITY_SEPARATOR if separator is None else str(separator),
            mismatched_label=labels.get("mismatched"),
            expected_label=labels.get("expected"),
            actual_label=labels.get("actual"),
        )


def _column(headers: Sequence[str], name: str, side: str, role: str) -> int:
    if name not in headers:
        raise ComparisonConfigError(f"{role} '{name}' not found in {side} headers {list(headers)}")
    return headers.index(name)


def _cell(record: Sequence[str], idx: int) -> str:
    # ragged records are padded with empty cells
    return record[idx] if 0 <= idx < len(record) else ""


def _as_number(value: str) -> Optional[float]:
    text = value.strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    number = float(text)
    return number if math.isfinite(number) else None


class IdentityJoinComparator(Comparator):
    """
    Sort-merge join of two record sets on a composite identity key.

    The key of a record is its identity-column values joined with the
    separator. Both sides are sorted by key (plain string order, so numeric
    keys need zero padding to sort numerically), then walked with two cursors:
    equal keys have their mapped fields compared, a smaller EXPECTED key is a
    record missing in ACTUAL, a smaller ACTUAL key is a record missing in
    EXPECTED.
    """

    # --------------------------- validation ---------------------------

    def _mapping(self, expected: Dataset, opts: IdentityJoinOptions) -> List[Tuple[str, str]]:
        if opts.match:
            pairs = list(opts.match.items())
        else:
            # same names on both sides, except identity columns follow their counterparts
            renamed: Dict[str, str] = {}
            if len(opts.expected_identity) == len(opts.actual_identity):
                renamed = dict(zip(opts.expected_identity, opts.actual_identity))
            pairs = [(h, renamed.get(h, h)) for h in expected.headers]
        ignored = set(opts.ignore)
        return [(e, a) for e, a in pairs if e not in ignored]

    def _validate(self, expected: Dataset, actual: Dataset, opts: IdentityJoinOptions) -> List[Tuple[str, str]]:
        for name in opts.expected_identity:
            _column(expected.headers, name, "EXPECTED", "identity column")
        for name in opts.actual_identity:
            _column(actual.headers, name, "ACTUAL", "identity column")

        for option in ("display", "ignore", "match_as_number", "match_case_insensitive", "match_auto_trim"):
            for name in getattr(opts, option):
                _column(expected.headers, name, "EXPECTED", f"{option} field")

        mapping = self._mapping(expected, opts)
        for e_name, a_name in mapping:
            _column(expected.headers, e_name, "EXPECTED", "mapped field")
            _column(actual.headers, a_name, "ACTUAL", "mapped field")
        return mapping

    # --------------------------- comparison ---------------------------

    def _values_equal(self, name: str, expected: str, actual: str, opts: IdentityJoinOptions) -> bool:
        if name in opts.match_auto_trim:
            expected, actual = expected.strip(), actual.strip()
        if expected == actual:
            return True
        if name in opts.match_as_number:
            e_num, a_num = _as_number(expected), _as_number(actual)
            if e_num is not None and a_num is not None:
                return e_num == a_num
        if name in opts.match_case_insensitive:
            return expected.casefold() == actual.casefold()
        return expected == actual

    def _keyed(self, data: Dataset, identity: Sequence[str], separator: str) -> List[Tuple[str, List[str]]]:
        idx = [data.headers.index(name) for name in identity]
        keyed = [(separator.join(_cell(r, i) for i in idx), r) for r in data.records]
        keyed.sort(key=lambda pair: pair[0])
        return keyed

    def compare_datasets(self, expected: Dataset, actual: Dataset, options: IdentityJoinOptions) -> CsvComparisonResult:
        opts = options
        if not opts.expected_identity:
            raise ComparisonConfigError("No identity columns given for EXPECTED.")
        if not opts.actual_identity:
            raise ComparisonConfigError("No identity columns given for ACTUAL.")

        display = list(opts.display) or list(opts.expected_identity)
        result = CsvComparisonResult(
            expected_headers=expected.headers,
            actual_headers=actual.headers,
            identity_fields=opts.expected_identity,
            display_fields=display,
            expected_row_count=len(expected.records),
            actual_row_count=len(actual.records),
            mismatched_label=opts.mismatched_label,
            expected_label=opts.expected_label,
            actual_label=opts.actual_label,
        )

        if expected.is_blank or actual.is_blank:
            result.add_file(FileOutcome.content_empty(len(expected.records), len(actual.records)))
            slog.log_warn(f"{result.file_outcomes[-1].message}; nothing to join.")
            return result

        mapping = self._validate(expected, actual, opts)
        to_actual = dict(mapping)

        e_display = [expected.headers.index(d) for d in display]
        a_display = [actual.headers.index(to_actual[d]) if to_actual.get(d) in actual.headers else -1
                     for d in display]
        field_idx = [(e, expected.headers.index(e), actual.headers.index(a)) for e, a in mapping]

        sep = opts.identity_separator
        e_rows = self._keyed(expected, opts.expected_identity, sep)
        a_rows = self._keyed(actual, opts.actual_identity, sep)
        slog.log_debug(f"joining {len(e_rows)} EXPECTED and {len(a_rows)} ACTUAL record(s) "
                       f"on {opts.expected_identity} / {opts.actual_identity}")

        i = j = 0
        while i < len(e_rows) or j < len(a_rows):
            if j >= len(a_rows):
                key, rec = e_rows[i]
                result.add_missing_actual(key, [_cell(rec, k) for k in e_display])
                i += 1
                continue
            if i >= len(e_rows):
                key, rec = a_rows[j]
                result.add_missing_expected(key, [_cell(rec, k) for k in a_display])
                j += 1
                continue

            e_key, e_rec = e_rows[i]
            a_key, a_rec = a_rows[j]
            if e_key == a_key:
                shown = [_cell(e_rec, k) for k in e_display]
                for name, ek, ak in field_idx:
                    e_val, a_val = _cell(e_rec, ek), _cell(a_rec, ak)
                    if not self._values_equal(name, e_val, a_val, opts):
                        result.add_mismatched(e_key, shown, name, e_val, a_val)
                i += 1
                j += 1
            elif e_key > a_key:
                result.add_missing_expected(a_key, [_cell(a_rec, k) for k in a_display])
                j += 1
            else:
                result.add_missing_actual(e_key, [_cell(e_rec, k) for k in e_display])
                i += 1

        slog.log_debug(f"{len(result.discrepancies)} discrepancy row(s), {result.fail_count} failed identit(ies)")
        return result

    def compare(self, *, section: str, metadata: Dict[str, Any], expected: Any, actual: Any) -> CompareResult:
        meta = metadata or {}
        delimiter = meta.get("delimiter") or ","
        if not isinstance(expected, Dataset):
            expected = parse_csv(expected, delimiter)
        if not isinstance(actual, Dataset):
            actual = parse_csv(actual, delimiter)

        res = self.compare_datasets(expected, actual, IdentityJoinOptions.from_mapping(meta))

        if res.file_outcomes:
            verdict, message = Verdict.MISMATCH, res.file_outcomes[-1].message
        elif res.discrepancies:
            verdict = Verdict.MISMATCH
            message = (f"{res.fail_count} of {res.expected_row_count} record(s) failed. "
                       f"Success rate: {format_percent(res.success_rate)}")
        else:
            verdict, message = Verdict.MATCH, f"all {res.expected_row_count} record(s) matched"

        slog.log_verdict(section, verdict.value, message)
        return {
            "section": section,
            "kind": "csv",
            "result": verdict.value,
            "message": message,
            "counts": {
                "expected_rows": res.expected_row_count,
                "actual_rows": res.actual_row_count,
                "failed": res.fail_count,
                "discrepancies": len(res.discrepancies),
            },
            "diff": res.report_as_text() if res.discrepancies else "",
            "report": res,
        }


# Self-register as the "csv" comparator
register("csv", IdentityJoinComparator)
