"""Domain exceptions."""

from depfilter.domain.exceptions.base import DepFilterError
from depfilter.domain.exceptions.dependencies import (
    FilterDependencyCycleError,
    InvalidFilterDependenciesError,
)
from depfilter.domain.exceptions.lookup import FilterNotFoundError
from depfilter.domain.exceptions.validation import FilterStateError, InvalidFilterKeyError

__all__ = [
    "DepFilterError",
    "InvalidFilterDependenciesError",
    "FilterDependencyCycleError",
    "FilterNotFoundError",
    "InvalidFilterKeyError",
    "FilterStateError",
]
