"""FilterCollection: registry of filter groups with ordered re-evaluation.

Lifecycle:
1. add_filter_group() for every group
2. finish_creation(): validate dependents, reject cycles,
   stage the match-all baseline for every filter
3. update_filter(total_key) any number of times
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from depfilter.domain.exceptions.dependencies import (
    FilterDependencyCycleError,
    InvalidFilterDependenciesError,
)
from depfilter.domain.exceptions.lookup import FilterNotFoundError
from depfilter.domain.exceptions.validation import FilterStateError, InvalidFilterKeyError
from depfilter.domain.model.configuration import CollectionConfig
from depfilter.domain.model.filter_key import FilterKey
from depfilter.domain.model.graph import DiGraph, detect_cycle, ordered_closure
from depfilter.domain.model.snapshot import CollectionSnapshot, FilterInfo

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from depfilter.application.filter_group import FilterGroup
    from depfilter.domain.model.filter import Filter

logger = logging.getLogger(__name__)


class FilterCollection:
    """Top-level registry of FilterGroups.

    Registering a second group under an existing key replaces the first
    (last write wins). Groups can only be added before finish_creation().
    """

    def __init__(self, config: CollectionConfig | None = None) -> None:
        """Initialize collection.

        Args:
            config: Collection configuration. Uses defaults if None.
        """
        self._config = config or CollectionConfig()
        self._filter_groups: dict[str, FilterGroup] = {}
        self._finished = False

    @property
    def config(self) -> CollectionConfig:
        return self._config

    @property
    def groups(self) -> tuple[FilterGroup, ...]:
        return tuple(self._filter_groups.values())

    @property
    def is_finished(self) -> bool:
        return self._finished

    def add_filter_group(self, filter_group: FilterGroup) -> None:
        """Register group by its key.

        Raises:
            FilterStateError: Collection already finished
        """
        if self.is_finished:
            raise FilterStateError(
                f"cannot add group '{filter_group.key}' after finish_creation()"
            )
        if filter_group.key in self._filter_groups:
            logger.warning("Filter group '%s' replaced", filter_group.key)
        self._filter_groups[filter_group.key] = filter_group

    def _iter_filters(self) -> Iterator[Filter]:
        for group in self._filter_groups.values():
            yield from group

    def _lookup(self, filter_key: FilterKey) -> Filter | None:
        group = self._filter_groups.get(filter_key.group)
        if group is None:
            return None
        return group.get_filter(filter_key.name)

    def find_filter(self, total_key: str) -> Filter | None:
        """Lookup by "group.name". None if group or filter is absent.

        Raises:
            InvalidFilterKeyError: Malformed total key
        """
        return self._lookup(FilterKey.parse(total_key))

    def get_filter(self, total_key: str) -> Filter:
        """Lookup by "group.name".

        Raises:
            FilterNotFoundError: Group or filter is absent
        """
        try:
            filter_key = FilterKey.parse(total_key)
        except InvalidFilterKeyError as e:
            raise FilterNotFoundError(str(total_key) or "<empty>") from e

        filter_ = self._lookup(filter_key)
        if filter_ is None:
            raise FilterNotFoundError(total_key)
        return filter_

    def _dependency_graph(self, roots: Iterable[Filter]) -> DiGraph[FilterKey]:
        """Graph of roots and every filter reachable through their dependents.

        Follows the dependents declared right now, so declarations made after
        finish_creation() take part as well.

        Raises:
            InvalidFilterDependenciesError: A dependent does not resolve
        """
        edges: list[tuple[FilterKey, FilterKey]] = []
        nodes: list[FilterKey] = []
        seen: set[FilterKey] = set()
        stack = list(roots)
        while stack:
            filter_ = stack.pop()
            filter_key = filter_.filter_key
            if filter_key in seen:
                continue
            seen.add(filter_key)
            nodes.append(filter_key)
            for dependent_key in filter_.dependents:
                dependent = self._lookup(dependent_key)
                if dependent is None:
                    raise InvalidFilterDependenciesError(filter_key, dependent_key)
                edges.append((filter_key, dependent_key))
                stack.append(dependent)
        return DiGraph.from_edges(edges, extra_nodes=nodes)

    def finish_creation(self) -> None:
        """Validate dependency declarations and stage the baseline.

        Raises:
            InvalidFilterDependenciesError: A dependent does not resolve
            FilterDependencyCycleError: Dependents form a cycle (reject_cycles)
            FilterStateError: Called twice
        """
        if self._finished:
            raise FilterStateError("finish_creation() already called")

        graph = self._dependency_graph(self._iter_filters())

        if self._config.reject_cycles:
            cycle = detect_cycle(graph)
            if cycle:
                raise FilterDependencyCycleError(cycle)

        self._finished = True
        logger.debug(
            "Dependencies validated: %d filters, %d edges", graph.node_count, graph.edge_count
        )

        if self._config.initialize_baseline:
            self._init_filters()

    def _init_filters(self) -> None:
        count = 0
        for filter_ in self._iter_filters():
            self._filter_groups[filter_.group_key].init_filter(filter_.key)
            count += 1
        logger.debug("Baseline staged for %d filters", count)

    def dependency_order(self, total_key: str) -> tuple[Filter, ...]:
        """Filters update_filter(total_key) would re-run, in run order.

        Raises:
            FilterStateError: Collection not finished
            FilterNotFoundError: Unknown total key
            InvalidFilterDependenciesError: A reachable dependent does not resolve
            FilterDependencyCycleError: Closure contains a cycle
        """
        if not self._finished:
            raise FilterStateError("finish_creation() must be called first")
        start = self.get_filter(total_key)

        graph = self._dependency_graph([start])
        order = ordered_closure(graph, start.filter_key)
        if order is None:
            raise FilterDependencyCycleError(detect_cycle(graph))

        return tuple(self._lookup(key) for key in order)

    def update_filter(self, total_key: str) -> None:
        """Re-run the filter and its transitive dependents, then apply every group.

        Raises:
            FilterStateError: Collection not finished
            FilterNotFoundError: Unknown total key
            InvalidFilterDependenciesError: A reachable dependent does not resolve
            FilterDependencyCycleError: Closure contains a cycle
        """
        ordered = self.dependency_order(total_key)
        logger.debug(
            "Updating '%s': %s", total_key, ", ".join(f.total_key for f in ordered)
        )

        for filter_ in ordered:
            logger.debug("Re-running '%s'", filter_.total_key)
            self._filter_groups[filter_.group_key].run_filter(filter_.key)

        for group in self._filter_groups.values():
            logger.debug("Applying group '%s'", group.key)
            group.apply_filters()

    def describe(self) -> CollectionSnapshot:
        """Snapshot of every filter, sorted by total key.

        Reads each precondition once.
        """
        infos = [
            FilterInfo(
                total_key=filter_.total_key,
                group_key=filter_.group_key,
                key=filter_.key,
                enabled=filter_.filter_precondition.filter_is_enabled,
                is_static=filter_.is_static,
                dependent_keys=tuple(sorted(filter_.dependent_filter_keys)),
            )
            for filter_ in self._iter_filters()
        ]
        infos.sort(key=lambda info: (info.group_key, info.key))
        return CollectionSnapshot(
            filters=tuple(infos),
            group_count=len(self._filter_groups),
            finished=self.is_finished,
        )

    def __repr__(self) -> str:
        state = "finished" if self.is_finished else "building"
        return f"FilterCollection(groups={len(self._filter_groups)}, {state})"
