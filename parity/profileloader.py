# parity/profileloader.py
from __future__ import annotations
import os
from copy import deepcopy
from typing import Any, Dict, List

import yaml

from parity import logging as slog
from parity.interfaces import CompareMode, ComparisonConfigError

_SUPPORTED_PROFILE_VERSIONS = {"1.0"}
_COMPARISON_TYPES = {"text", "csv"}
_REPORT_FORMATS = {"text", "json", "html", "csv"}

_BUILTIN_DEFAULTS: Dict[str, Any] = {
    "text": {"mode": CompareMode.THOROUGH.value, "log_matches": False},
    "csv": {
        "delimiter": ",",
        "identity_separator": "^",
        "labels": {"mismatched": None, "expected": None, "actual": None},
    },
    "report": {"formats": ["text", "json"], "output_dir": "results"},
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge dicts with 'explicit null clears default' semantics."""
    out = deepcopy(base) if base else {}
    for k, v in (override or {}).items():
        if v is None:
            out[k] = None
        elif isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


class ProfileLoader:
    """
    Loads a YAML comparison profile:
      profile_version: "1.0"
      defaults: { text: {...}, csv: {...}, report: {...} }
      comparisons:
        <name>:
          type: text | csv
          expected: <path or literal>
          actual:   <path or literal>
          text:   { mode: fail_fast | thorough | diff, log_matches }
          csv:    { expected_identity, actual_identity, display, match, ignore,
                    match_as_number, match_case_insensitive, match_auto_trim,
                    identity_separator, delimiter, labels }
          report: { formats: [text, json, html, csv], output_dir }

    Notes:
      - defaults are merged under every comparison; an explicit null clears a default.
      - relative `expected`/`actual` paths are resolved against the profile's directory
        (see `base_dir`).
      - report.formats accepts a list or a comma-separated string.
    """

    def __init__(self, yaml_path: str, *, strict: bool = True):
        self.yaml_path = yaml_path
        self.strict = strict

    @property
    def base_dir(self) -> str:
        return os.path.dirname(os.path.abspath(self.yaml_path))

    def _warn_or_raise(self, msg: str, *, fatal: bool = False) -> None:
        if fatal or self.strict:
            slog.log_err(msg)
            raise ComparisonConfigError(msg)
        slog.log_warn(msg)

    def _parse_formats(self, raw: Any, name: str) -> List[str]:
        if raw is None:
            return []
        if isinstance(raw, str):
            raw = raw.split(",")
        if not isinstance(raw, list):
            self._warn_or_raise(f"Comparison '{name}': report.formats must be a list or string.", fatal=True)

        out: List[str] = []
        for item in raw:
            fmt = str(item or "").strip().lower()
            if not fmt:
                continue
            if fmt not in _REPORT_FORMATS:
                self._warn_or_raise(
                    f"Comparison '{name}': unknown report format '{fmt}'. Allowed: {sorted(_REPORT_FORMATS)}",
                    fatal=True,
                )
            if fmt not in out:
                out.append(fmt)
        return out

    def _check_identity(self, csv_cfg: Dict[str, Any], name: str) -> None:
        for side in ("expected_identity", "actual_identity"):
            value = csv_cfg.get(side)
            if isinstance(value, str):
                value = [v for v in value.split(",") if v.strip()]
            if not value:
                self._warn_or_raise(f"Comparison '{name}': csv.{side} must list at least one column.", fatal=True)

    def _check_unknown_keys(self, cfg: Dict[str, Any], name: str) -> None:
        known = {"type", "expected", "actual", "text", "csv", "report"}
        for key in cfg:
            if key not in known:
                self._warn_or_raise(f"Comparison '{name}': unknown key '{key}' ignored.", fatal=False)

    def load(self) -> Dict[str, Dict[str, Any]]:
        with open(self.yaml_path, "r", encoding="utf-8") as f:
            try:
                raw = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                self._warn_or_raise(f"Invalid YAML in {self.yaml_path}: {e}", fatal=True)

        if not isinstance(raw, dict):
            self._warn_or_raise("Profile root must be a mapping.", fatal=True)

        version = str(raw.get("profile_version", "")).strip()
        if version not in _SUPPORTED_PROFILE_VERSIONS:
            self._warn_or_raise(
                f"Unsupported or missing profile_version '{version}'. Supported: {sorted(_SUPPORTED_PROFILE_VERSIONS)}",
                fatal=True,
            )

        defaults = _deep_merge(_BUILTIN_DEFAULTS, raw.get("defaults") or {})
        comparisons_raw = raw.get("comparisons") or {}
        if not isinstance(comparisons_raw, dict) or not comparisons_raw:
            self._warn_or_raise("No comparisons defined.", fatal=True)

        out: Dict[str, Dict[str, Any]] = {}

        for name, cfg in comparisons_raw.items():
            if not isinstance(cfg, dict):
                self._warn_or_raise(f"Comparison '{name}' must be a mapping.", fatal=True)
            self._check_unknown_keys(cfg, name)

            ctype = str(cfg.get("type") or "text").strip().lower()
            if ctype not in _COMPARISON_TYPES:
                self._warn_or_raise(
                    f"Comparison '{name}': unknown type '{ctype}'. Allowed: {sorted(_COMPARISON_TYPES)}",
                    fatal=True,
                )

            for side in ("expected", "actual"):
                if cfg.get(side) is None:
                    self._warn_or_raise(f"Comparison '{name}': '{side}' is required.", fatal=True)

            merged: Dict[str, Any] = {}
            for bucket in ("text", "csv", "report"):
                merged[bucket] = _deep_merge(defaults.get(bucket) or {}, cfg.get(bucket) or {})

            # --- text ---
            text_cfg = merged["text"]
            text_cfg["mode"] = CompareMode.parse(text_cfg.get("mode") or CompareMode.THOROUGH.value).value
            text_cfg["log_matches"] = bool(text_cfg.get("log_matches", False))

            # --- csv ---
            if ctype == "csv":
                self._check_identity(merged["csv"], name)

            # --- report ---
            report_cfg = merged["report"]
            report_cfg["formats"] = self._parse_formats(report_cfg.get("formats"), name)
            report_cfg["output_dir"] = report_cfg.get("output_dir") or "results"

            out[name] = {
                "type": ctype,
                "expected": cfg["expected"],
                "actual": cfg["actual"],
                **merged,
            }

        slog.log_debug(f"profile {self.yaml_path}: {len(out)} comparison(s)")
        return out
