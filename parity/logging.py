# parity/logging.py
from __future__ import annotations
import logging as _logging
import os
import sys
from typing import Optional

_ANSI = {
    "reset": "\x1b[0m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "red": "\x1b[31m",
    "cyan": "\x1b[36m",
    "gray": "\x1b[90m",
}

# verbosity (-v count) -> level; anything above the last entry is DEBUG
_LEVELS = (_logging.WARNING, _logging.INFO, _logging.DEBUG)

_VERDICT_COLORS = {"MATCH": "green", "MISMATCH": "red", "DIFF": "cyan"}

_COLOR_ENABLED: bool = False
_LOGGER = _logging.getLogger("parity.compare")


def _supports_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty() and (os.environ.get("TERM") not in (None, "dumb"))


def c(text: str, color: str) -> str:
    if not _COLOR_ENABLED:
        return text
    return f"{_ANSI.get(color, '')}{text}{_ANSI['reset']}"


def setup_logging(verbosity: int = 0, log_file: Optional[str] = None, *, color: Optional[bool] = None) -> None:
    """
    Console logging on stdout, plus an optional plain log file with timestamps.
    Verbosity: 0→WARNING, 1→INFO, 2+→DEBUG. Colour follows the terminal unless forced.
    Calling it again replaces the previous handlers.
    """
    global _COLOR_ENABLED
    _COLOR_ENABLED = _supports_color() if color is None else color

    level = _LEVELS[min(max(verbosity, 0), len(_LEVELS) - 1)]

    for h in list(_LOGGER.handlers):
        _LOGGER.removeHandler(h)
        h.close()
    _LOGGER.setLevel(level)
    _LOGGER.propagate = False

    console = _logging.StreamHandler(stream=sys.stdout)
    console.setLevel(level)
    console.setFormatter(_logging.Formatter("%(message)s"))
    _LOGGER.addHandler(console)

    if log_file:
        fh = _logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(_logging.Formatter("%(asctime)s %(levelname)-7s %(message)s"))
        _LOGGER.addHandler(fh)


def log_info(msg: str) -> None:
    _LOGGER.info(msg)


def log_debug(msg: str) -> None:
    _LOGGER.debug(msg)


def log_warn(msg: str) -> None:
    _LOGGER.warning(f"{c('⚠', 'yellow')} {msg}")


def log_err(msg: str) -> None:
    _LOGGER.error(f"{c('✖', 'red')} {msg}")


def log_ok(msg: str) -> None:
    _LOGGER.info(f"{c('✓', 'green')} {msg}")


def log_step(label: str, value: str = "") -> None:
    arrow = c("→", "cyan")
    gray = c(value, "gray") if value else ""
    _LOGGER.info(f"{arrow} {label}{(' ' + gray) if gray else ''}")


def log_verdict(name: str, verdict: str, detail: str = "") -> None:
    """One line per finished comparison, coloured by verdict."""
    tag = c(f"[{verdict}]", _VERDICT_COLORS.get(verdict, "yellow"))
    _LOGGER.info(f"    {tag} {name}{(': ' + detail) if detail else ''}")


def log_outcome(kind: str, line: int, note: str) -> None:
    # only built when DEBUG is on; the aligner calls this per non-matched line
    if _LOGGER.isEnabledFor(_logging.DEBUG):
        _LOGGER.debug(f"      {kind:>8} @ {line:>5}  {note}")
