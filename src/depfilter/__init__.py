"""depfilter - dependency-ordered boolean-gated filters over a graph-like object."""

import logging

__version__ = "0.1.0"

from depfilter.application import (
    FilterCollection,
    FilterGroup,
    build_filter_collection,
    build_filter_group,
)
from depfilter.domain import (
    CollectionConfig,
    DepFilterError,
    DynamicFilterPrecondition,
    Filter,
    FilterDependencyCycleError,
    FilterNotFoundError,
    FilterStateError,
    FilterTarget,
    InvalidFilterDependenciesError,
    InvalidFilterKeyError,
    StaticFilterPrecondition,
    match_all,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CollectionConfig",
    "DepFilterError",
    "DynamicFilterPrecondition",
    "Filter",
    "FilterCollection",
    "FilterDependencyCycleError",
    "FilterGroup",
    "FilterNotFoundError",
    "FilterStateError",
    "FilterTarget",
    "InvalidFilterDependenciesError",
    "InvalidFilterKeyError",
    "StaticFilterPrecondition",
    "__version__",
    "build_filter_collection",
    "build_filter_group",
    "match_all",
]
