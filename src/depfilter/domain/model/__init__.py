"""Domain model: filters, preconditions, keys, dependency graph."""

from depfilter.domain.model.configuration import CollectionConfig
from depfilter.domain.model.filter import Filter
from depfilter.domain.model.filter_key import SEPARATOR, FilterKey
from depfilter.domain.model.graph import DiGraph, detect_cycle, ordered_closure
from depfilter.domain.model.precondition import (
    DynamicFilterPrecondition,
    FilterPrecondition,
    StaticFilterPrecondition,
)
from depfilter.domain.model.predicate import (
    FixedPredicate,
    Predicate,
    PredicateSupplier,
    SuppliedPredicate,
    match_all,
)
from depfilter.domain.model.snapshot import CollectionSnapshot, FilterInfo

__all__ = [
    "SEPARATOR",
    "CollectionConfig",
    "CollectionSnapshot",
    "DiGraph",
    "DynamicFilterPrecondition",
    "Filter",
    "FilterInfo",
    "FilterKey",
    "FilterPrecondition",
    "FixedPredicate",
    "Predicate",
    "PredicateSupplier",
    "StaticFilterPrecondition",
    "SuppliedPredicate",
    "detect_cycle",
    "match_all",
    "ordered_closure",
]
