#!/usr/bin/env python3
import sys
import argparse
import json
import os
from typing import Any, Dict, List, Optional

from parity.profileloader import ProfileLoader
from parity.ingest import ContentResolver
from parity.interfaces import CompareMode, ComparisonConfigError
from parity import logging as slog

from parity.comparators.registry import create as create_comparator
import parity.comparators.text_comparator
import parity.comparators.identity_comparator

from parity.reporting.csv_result import CsvComparisonResult
from parity.reporting.summary import assemble_summary

_EXTENSIONS = {"text": "txt", "json": "json", "html": "html", "csv": "csv"}


def _load_profile(path: str):
    slog.log_step("Loading profile:", path)
    loader = ProfileLoader(path)
    profile = loader.load()
    slog.log_ok(f"Profile loaded with {len(profile)} comparison(s).")
    return profile, loader.base_dir


def _adhoc_profile(args) -> Dict[str, Dict[str, Any]]:
    identity = [c.strip() for c in (args.identity or "").split(",") if c.strip()]
    return {
        "adhoc": {
            "type": args.type,
            "expected": args.expected,
            "actual": args.actual,
            "text": {"mode": CompareMode.parse(args.mode).value, "log_matches": args.log_matches},
            "csv": {"expected_identity": identity, "actual_identity": identity, "delimiter": ","},
            "report": {"formats": ["text", "json"], "output_dir": "results"},
        }
    }


def _render(report: Any, fmt: str, title: str) -> str:
    if isinstance(report, CsvComparisonResult):
        if fmt == "json":
            return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
        return report.report({"text": "text", "html": "html", "csv": "csv"}[fmt])
    if fmt == "text":
        return report.to_plain_text()
    if fmt == "json":
        return report.to_json()
    if fmt == "html":
        return report.to_html(title=title)
    return report.to_csv()


def _write_reports(name: str, res: Dict[str, Any], formats: List[str], output_dir: str) -> Dict[str, str]:
    os.makedirs(output_dir, exist_ok=True)
    written: Dict[str, str] = {}
    for fmt in formats:
        path = os.path.join(output_dir, f"{name}.{_EXTENSIONS[fmt]}")
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(_render(res["report"], fmt, f"Comparison: {name}"))
        written[fmt] = path
    if res.get("mode") == CompareMode.DIFF.value:
        path = os.path.join(output_dir, f"{name}.diff.txt")
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(res.get("diff") or "")
        written["diff"] = path
    for fmt, path in written.items():
        slog.log_debug(f"    {fmt}: {path}")
    return written


def _output_dir(args, report_cfg: Dict[str, Any], base_dir: str) -> str:
    if args.output_dir:
        return args.output_dir
    # profile paths are relative to the profile, like its inputs
    return os.path.join(base_dir, report_cfg.get("output_dir") or "results")


def _preview(res: Dict[str, Any], limit: int) -> None:
    if limit <= 0:
        return
    lines = [ln for ln in (res.get("diff") or "").splitlines() if ln.strip()]
    for ln in lines[:limit]:
        slog.log_info(f"       {ln}")
    if len(lines) > limit:
        slog.log_info(f"       ... {len(lines) - limit} more")


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Compare EXPECTED and ACTUAL content (text line-by-line or CSV by identity)."
    )
    p.add_argument("-p", "--profile", help="Path to a YAML comparison profile")
    p.add_argument("-e", "--expected", help="Ad-hoc EXPECTED file path or literal content")
    p.add_argument("-a", "--actual", help="Ad-hoc ACTUAL file path or literal content")
    p.add_argument("-m", "--mode", default=CompareMode.THOROUGH.value,
                   help="Ad-hoc text mode: fail_fast | thorough | diff (default: thorough)")
    p.add_argument("-t", "--type", default="text", choices=["text", "csv"],
                   help="Ad-hoc comparison type (default: text)")
    p.add_argument("--identity", help="Ad-hoc CSV identity columns, comma-separated (both sides)")
    p.add_argument("--log-matches", action="store_true",
                   help="Ad-hoc: list matched lines in the report too")
    p.add_argument("-o", "--output-dir", default=None,
                   help="Write reports and summary.json here (overrides the profile's report.output_dir, "
                        "which is relative to the profile; summary.json goes to the first comparison's)")
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="Increase log verbosity (-v, -vv)")
    p.add_argument("--log-file", default=None, help="Also log to this file")
    p.add_argument("--print-diffs", type=int, default=3, metavar="N",
                   help="Print up to N transcript lines per comparison (default: 3, 0 to disable)")

    args = p.parse_args(argv)
    slog.setup_logging(args.verbose, args.log_file)

    if args.profile:
        profile, base_dir = _load_profile(args.profile)
    elif args.expected is not None and args.actual is not None:
        profile, base_dir = _adhoc_profile(args), os.getcwd()
    else:
        p.error("either --profile or both --expected and --actual are required")

    resolver = ContentResolver(base_dir)
    all_results: Dict[str, Dict[str, Any]] = {}
    artifacts: Dict[str, Dict[str, str]] = {}
    errors: Dict[str, str] = {}
    summary_dir: Optional[str] = None

    for name, cfg in profile.items():
        ctype = cfg["type"]
        report_cfg = cfg.get("report") or {}
        output_dir = _output_dir(args, report_cfg, base_dir)
        if summary_dir is None:
            summary_dir = output_dir
        slog.log_step("Comparing:", f"[{name}] type={ctype}")
        try:
            expected = resolver.resolve(cfg["expected"], what=f"{name} EXPECTED")
            actual = resolver.resolve(cfg["actual"], what=f"{name} ACTUAL")
            comparator = create_comparator(ctype)
            res = comparator.compare(
                section=name,
                metadata=cfg.get(ctype) or {},
                expected=expected,
                actual=actual,
            )
        except (OSError, UnicodeDecodeError, ComparisonConfigError) as e:
            slog.log_err(f"[{name}] {e}")
            errors[name] = str(e)
            continue

        _preview(res, args.print_diffs)

        artifacts[name] = _write_reports(name, res, report_cfg.get("formats") or [], output_dir)
        all_results[name] = res

    summary = assemble_summary(compare_results=all_results, artifacts=artifacts, errors=errors)

    summary_dir = summary_dir or _output_dir(args, {}, base_dir)
    os.makedirs(summary_dir, exist_ok=True)
    summary_path = os.path.join(summary_dir, "summary.json")
    slog.log_step("Writing summary JSON:", summary_path)
    with open(summary_path, "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2, ensure_ascii=False)

    if summary["overall"] == "MATCH":
        slog.log_ok("Done. All comparisons matched.")
        return 0
    slog.log_warn("Done. At least one comparison did not match.")
    return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        from parity import logging as slog
        slog.log_err(f"Error: {e}")
        sys.exit(1)
