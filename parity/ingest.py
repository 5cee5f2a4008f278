# parity/ingest.py
from __future__ import annotations
import csv
import io
import os
from typing import List, Optional

from parity import logging as slog
from parity.interfaces import ComparisonConfigError, Dataset


def split_lines(text: Optional[str]) -> List[str]:
    """
    Split content into lines, keeping empty lines.
    CRLF is folded to LF first; a trailing newline does not produce a trailing empty line.
    """
    if not text:
        return []
    lines = text.replace("\r\n", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class ContentResolver:
    """
    Turn a comparison input reference into text.

    A reference naming a readable file is read as UTF-8 (relative paths are
    resolved against `base_dir`); anything else is taken as literal content.
    Read/decode failures propagate to the caller.
    """

    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = base_dir

    def _candidate(self, ref: str) -> Optional[str]:
        if "\n" in ref or not ref.strip():
            return None
        path = ref if os.path.isabs(ref) or not self.base_dir else os.path.join(self.base_dir, ref)
        return path if os.path.isfile(path) else None

    def resolve(self, ref: Optional[str], *, what: str = "content") -> str:
        if ref is None:
            raise ComparisonConfigError(f"No {what} given: a file path or literal content is required.")
        ref = str(ref)
        path = self._candidate(ref)
        if path is None:
            slog.log_debug(f"{what}: using literal content ({len(ref)} chars)")
            return ref
        slog.log_debug(f"{what}: reading {path}")
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()


def resolve_content(ref: Optional[str], *, base_dir: Optional[str] = None, what: str = "content") -> str:
    return ContentResolver(base_dir).resolve(ref, what=what)


def parse_csv(text: Optional[str], delimiter: str = ",") -> Dataset:
    """
    Parse delimited text: first row is the header list, the rest are records.
    Fully blank rows are skipped. Blank input yields an empty Dataset.
    """
    if not text or not text.strip():
        return Dataset()

    if not delimiter or len(delimiter) != 1:
        raise ComparisonConfigError(f"CSV delimiter must be a single character, got '{delimiter}'.")

    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    rows = [row for row in reader if any(cell.strip() for cell in row)]
    if not rows:
        return Dataset()

    headers = [h.strip() for h in rows[0]]
    records = [list(r) for r in rows[1:]]
    slog.log_debug(f"parsed {len(records)} record(s) with {len(headers)} column(s)")
    return Dataset(headers=headers, records=records)
