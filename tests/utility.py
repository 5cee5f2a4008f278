# parity/tests/utility.py
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from parity.interfaces import Dataset, OutcomeKind
from parity.reporting.report import ComparisonReport


# -------------------------
# Content builders
# -------------------------

# Joins lines into text with a trailing newline, the way most files end.
def text_of(*lines: str) -> str:
    return "\n".join(lines) + "\n"


# Builds a Dataset from a header row and records (all cells as given).
def dataset(headers: Sequence[str], *records: Sequence[str]) -> Dataset:
    return Dataset(headers=list(headers), records=[list(r) for r in records])


# Renders rows as CSV text (no quoting; test cells never contain commas).
def csv_text(headers: Sequence[str], *records: Sequence[str]) -> str:
    return "\n".join(",".join(r) for r in [headers, *records]) + "\n"


# -------------------------
# Report inspection
# -------------------------

# Kinds of all recorded line outcomes, in order.
def kinds(report: ComparisonReport) -> List[OutcomeKind]:
    return [o.kind for o in report.line_outcomes]


# Recorded line outcomes of one kind.
def outcomes_of(report: ComparisonReport, kind: OutcomeKind) -> List[Any]:
    return [o for o in report.line_outcomes if o.kind == kind]


# -------------------------
# Files
# -------------------------

# Writes text to tmp_path/name (UTF-8, newlines kept as given) and returns the path.
def write_file(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode("utf-8"))
    return path


# Dumps a profile mapping to tmp_path/profile.yml.
def write_profile(tmp_path: Path, profile: Dict[str, Any], name: str = "profile.yml") -> Path:
    return write_file(tmp_path, name, yaml.safe_dump(profile, sort_keys=False))


# Loads a JSON file into a dict (fails if the root isn't a mapping).
def load_json(path: Path) -> Dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise AssertionError(f"JSON did not parse into dict: {path}")
    return data


# Loads a YAML file into a dict.
def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}
