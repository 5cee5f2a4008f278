# parity/comparators/registry.py
from __future__ import annotations
from typing import Dict, List, Type

from parity.interfaces import ComparisonConfigError
from .interface import Comparator

_COMPARATORS: Dict[str, Type[Comparator]] = {}


def _key(name: str) -> str:
    return (name or "").strip().lower()


def register(name: str, cls: Type[Comparator]) -> None:
    key = _key(name)
    if not key:
        raise ValueError("Comparator name must be non-empty")
    _COMPARATORS[key] = cls


def get(name: str) -> Type[Comparator] | None:
    return _COMPARATORS.get(_key(name))


def names() -> List[str]:
    return sorted(_COMPARATORS)


def create(name: str) -> Comparator:
    """Instantiate the comparator registered under `name`."""
    cls = get(name)
    if cls is None:
        raise ComparisonConfigError(f"Unknown comparison type '{name}'. Available: {names()}")
    return cls()
