"""Fluent builders composing filters into groups and groups into a collection.

Usage:
    nodes = (
        build_filter_group("nodes", node_view)
        .add_dynamic_filter("visibility", match_all, is_static=True)
        .with_static_filter_precondition(True)
        .add_dynamic_filter("typeFilter", lambda: by_type, ["nodes.visibility"])
        .with_dynamic_filter_precondition(lambda: toggle.checked)
        .build()
    )
    collection = build_filter_collection().add_filter_group(nodes).build()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from depfilter.application.filter_collection import FilterCollection
from depfilter.application.filter_group import FilterGroup
from depfilter.domain.model.filter import Filter
from depfilter.domain.model.precondition import (
    DynamicFilterPrecondition,
    StaticFilterPrecondition,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from depfilter.domain.model.configuration import CollectionConfig
    from depfilter.domain.model.precondition import FilterPrecondition
    from depfilter.domain.model.predicate import Predicate
    from depfilter.domain.ports.target import FilterTarget


class FilterStage:
    """Pending filter waiting for its precondition.

    The filter is registered only once a precondition is chosen.
    """

    __slots__ = ("_builder", "_dependent_filter_keys", "_get_filter", "_is_static", "_key")

    def __init__(
        self,
        builder: FilterGroupBuilder,
        key: str,
        get_filter: Predicate | Callable[[], Predicate],
        dependent_filter_keys: Iterable[str],
        is_static: bool,
    ) -> None:
        self._builder = builder
        self._key = key
        self._get_filter = get_filter
        self._dependent_filter_keys = tuple(dependent_filter_keys)
        self._is_static = is_static

    def _register(self, precondition: FilterPrecondition) -> FilterGroupBuilder:
        self._builder.group.add_filter(
            Filter(
                self._key,
                precondition,
                self._get_filter,
                self._dependent_filter_keys,
                is_static=self._is_static,
            )
        )
        return self._builder

    def with_dynamic_filter_precondition(
        self, get_filter_is_enabled: Callable[[], bool]
    ) -> FilterGroupBuilder:
        """Gate the filter on a supplier read at every evaluation."""
        return self._register(DynamicFilterPrecondition(get_filter_is_enabled))

    def with_static_filter_precondition(self, filter_is_enabled: bool) -> FilterGroupBuilder:
        """Gate the filter on a fixed (assignable) value."""
        return self._register(StaticFilterPrecondition(filter_is_enabled))


class FilterGroupBuilder:
    """Builds one FilterGroup."""

    def __init__(self, key: str, object_to_filter: FilterTarget) -> None:
        self._group = FilterGroup(key, object_to_filter)

    @property
    def group(self) -> FilterGroup:
        return self._group

    def add_dynamic_filter(
        self,
        key: str,
        get_filter: Predicate | Callable[[], Predicate],
        dependent_filter_keys: Iterable[str] = (),
        is_static: bool = False,
    ) -> FilterStage:
        """Start a filter definition.

        Args:
            key: Filter key within the group
            get_filter: Predicate supplier, or the predicate when is_static
            dependent_filter_keys: Total keys re-run after this filter
            is_static: get_filter is the predicate itself

        Returns:
            Stage whose with_*_filter_precondition() registers the filter
        """
        return FilterStage(self, key, get_filter, dependent_filter_keys, is_static)

    def build(self) -> FilterGroup:
        return self._group


class FilterCollectionBuilder:
    """Collects groups, then finalizes the collection."""

    def __init__(self, config: CollectionConfig | None = None) -> None:
        self._collection = FilterCollection(config)

    def add_filter_group(self, filter_group: FilterGroup) -> Self:
        self._collection.add_filter_group(filter_group)
        return self

    def build(self) -> FilterCollection:
        """Run finish_creation() and return the collection.

        Raises:
            InvalidFilterDependenciesError: A dependent does not resolve
            FilterDependencyCycleError: Dependents form a cycle
        """
        self._collection.finish_creation()
        return self._collection


def build_filter_group(key: str, object_to_filter: FilterTarget) -> FilterGroupBuilder:
    """Start building a group filtering object_to_filter."""
    return FilterGroupBuilder(key, object_to_filter)


def build_filter_collection(config: CollectionConfig | None = None) -> FilterCollectionBuilder:
    """Start building a collection."""
    return FilterCollectionBuilder(config)
