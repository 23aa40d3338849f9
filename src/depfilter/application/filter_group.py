"""FilterGroup: filters sharing one target object."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from depfilter.domain.exceptions.lookup import FilterNotFoundError
from depfilter.domain.model.filter_key import validate_key_segment
from depfilter.domain.model.predicate import match_all

if TYPE_CHECKING:
    from collections.abc import Iterator

    from depfilter.domain.model.filter import Filter
    from depfilter.domain.ports.target import FilterTarget

logger = logging.getLogger(__name__)


class FilterGroup:
    """Named collection of filters applied to one target object.

    Registering a second filter under an existing key replaces the first
    (last write wins).
    """

    def __init__(self, key: str, object_to_filter: FilterTarget) -> None:
        """Initialize group.

        Args:
            key: Group key, unique within a FilterCollection
            object_to_filter: Target receiving run_filter/apply_filters calls
        """
        if object_to_filter is None:
            raise TypeError("object_to_filter must not be None")

        self._key = validate_key_segment(key)
        self._object_to_filter = object_to_filter
        self._filters: dict[str, Filter] = {}

    @property
    def key(self) -> str:
        return self._key

    @property
    def object_to_filter(self) -> FilterTarget:
        return self._object_to_filter

    @property
    def filters(self) -> tuple[Filter, ...]:
        """Registered filters in registration order."""
        return tuple(self._filters.values())

    def __contains__(self, key: object) -> bool:
        return key in self._filters

    def __iter__(self) -> Iterator[Filter]:
        return iter(tuple(self._filters.values()))

    def __len__(self) -> int:
        return len(self._filters)

    def get_filter(self, key: str) -> Filter | None:
        """Lookup by filter key. None if absent."""
        return self._filters.get(key)

    def add_filter(self, filter_: Filter) -> None:
        """Assign this group's key to the filter and register it."""
        filter_.group_key = self._key
        if filter_.key in self._filters and self._filters[filter_.key] is not filter_:
            logger.warning("Filter '%s' replaced in group '%s'", filter_.key, self._key)
        self._filters[filter_.key] = filter_
        logger.debug("Registered filter '%s'", filter_.total_key)

    def run_filter(self, key: str) -> None:
        """Pass the currently resolved predicate of filter `key` to the target.

        Raises:
            FilterNotFoundError: No filter under key
        """
        filter_ = self._filters.get(key)
        if filter_ is None:
            raise FilterNotFoundError(f"{self._key}.{key}")
        self._object_to_filter.run_filter(filter_.filter, key)

    def init_filter(self, key: str) -> None:
        """Stage the match-all baseline for `key`."""
        self._object_to_filter.run_filter(match_all, key)

    def apply_filters(self) -> None:
        """Let the target commit everything staged since the last apply."""
        self._object_to_filter.apply_filters()

    def __repr__(self) -> str:
        return f"FilterGroup({self._key!r}, filters={len(self._filters)})"
