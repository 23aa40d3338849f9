"""depfilter domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, dataclasses, graphlib, collections.abc
"""

from depfilter.domain.exceptions import (
    DepFilterError,
    FilterDependencyCycleError,
    FilterNotFoundError,
    FilterStateError,
    InvalidFilterDependenciesError,
    InvalidFilterKeyError,
)
from depfilter.domain.model import (
    CollectionConfig,
    CollectionSnapshot,
    DynamicFilterPrecondition,
    Filter,
    FilterInfo,
    FilterKey,
    FilterPrecondition,
    StaticFilterPrecondition,
    match_all,
)
from depfilter.domain.ports import FilterTarget

__all__ = [
    # Exceptions
    "DepFilterError",
    "FilterDependencyCycleError",
    "FilterNotFoundError",
    "FilterStateError",
    "InvalidFilterDependenciesError",
    "InvalidFilterKeyError",
    # Model
    "CollectionConfig",
    "CollectionSnapshot",
    "DynamicFilterPrecondition",
    "Filter",
    "FilterInfo",
    "FilterKey",
    "FilterPrecondition",
    "StaticFilterPrecondition",
    "match_all",
    # Ports
    "FilterTarget",
]
