"""Dependency declaration exceptions.

Raised while finalizing a FilterCollection (or, with cycle rejection
disabled, when an update reaches a cycle).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from depfilter.domain.exceptions.base import DepFilterError

if TYPE_CHECKING:
    from depfilter.domain.model.filter_key import FilterKey


class InvalidFilterDependenciesError(DepFilterError):
    """Declared dependent filter does not exist.

    Build-time contract check, construction must not proceed.

    Attributes:
        filter_key: Filter that declared the dependency
        dependent_key: Dependent that could not be resolved
    """

    def __init__(self, filter_key: FilterKey, dependent_key: FilterKey) -> None:
        # FAIL-FIRST: validate required parameters
        if filter_key is None:
            raise TypeError("filter_key must not be None")
        if dependent_key is None:
            raise TypeError("dependent_key must not be None")

        self.filter_key = filter_key
        self.dependent_key = dependent_key
        super().__init__(
            f"invalid filter dependencies: '{filter_key}' declares unknown dependent '{dependent_key}'"
        )


class FilterDependencyCycleError(DepFilterError):
    """Dependency declarations form a cycle.

    Attributes:
        cycle: Filters on the cycle in path order (each is a dependent of the previous)
    """

    def __init__(self, cycle: tuple[FilterKey, ...]) -> None:
        if not cycle:
            raise ValueError("FilterDependencyCycleError requires at least one filter")

        self.cycle = cycle
        path = " → ".join(str(key) for key in cycle)
        super().__init__(f"filter dependencies form a cycle: {path}")
