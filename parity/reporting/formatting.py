# parity/reporting/formatting.py
from __future__ import annotations
from datetime import datetime
from typing import Any, List, Sequence

EOL = "\r\n"
POWERED_BY = "parity 0.4.0"


def format_percent(value: float) -> str:
    """0.8333 -> '83.33%'. Always two fractional digits."""
    return f"{float(value):.2%}"


def right_pad(text: Any, width: int) -> str:
    return ("" if text is None else str(text)).ljust(width)


def left_pad(text: Any, width: int) -> str:
    return ("" if text is None else str(text)).rjust(width)


def right_now() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def ascii_table(headers: Sequence[str], rows: Sequence[Sequence[Any]], *, eol: str = "\n") -> str:
    """
    Render rows as a boxed fixed-width table:
      - each column is as wide as its longest cell (header included) plus one
      - a dashed rule separates header and every row
      - cells beyond the header count are ignored, missing cells render empty
    """
    headers = [str(h) for h in headers or []]
    widths: List[int] = [len(h) + 1 for h in headers]
    for row in rows or []:
        for i in range(len(widths)):
            cell = row[i] if i < len(row) else ""
            widths[i] = max(widths[i], len(str(cell)) + 1)

    rule = "-" * (1 + sum(w + 1 for w in widths)) + eol
    out = [rule]
    if headers:
        out.append("|" + "".join(right_pad(h, widths[i]) + "|" for i, h in enumerate(headers)) + eol)
        out.append(rule)
    for row in rows or []:
        cells = [row[i] if i < len(row) else "" for i in range(len(widths))]
        out.append("|" + "".join(right_pad(c, widths[i]) + "|" for i, c in enumerate(cells)) + eol)
        out.append(rule)
    return "".join(out)
