"""Predicate slot of a Filter.

Type aliases via typing.TypeAlias.
Predicate: takes a graph element, returns True if it survives the filter.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

Predicate: TypeAlias = Callable[[object], bool]
PredicateSupplier: TypeAlias = Callable[[], Predicate]


def match_all(element: object) -> bool:
    """Neutral predicate: every element survives."""
    return True


@dataclass(frozen=True, slots=True)
class FixedPredicate:
    """Predicate used as-is on every access."""

    predicate: Predicate


@dataclass(frozen=True, slots=True)
class SuppliedPredicate:
    """Supplier invoked on every access to produce the current predicate."""

    supplier: PredicateSupplier


PredicateSlot: TypeAlias = FixedPredicate | SuppliedPredicate


def resolve_predicate(slot: PredicateSlot) -> Predicate:
    """Resolve a slot to the predicate it currently stands for."""
    match slot:
        case FixedPredicate(predicate=predicate):
            return predicate
        case SuppliedPredicate(supplier=supplier):
            return supplier()
        case _:
            raise TypeError(f"unknown predicate slot: {slot!r}")
