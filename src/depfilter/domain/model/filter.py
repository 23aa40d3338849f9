"""Filter: named, gated unit of filtering logic with declared dependents."""

from __future__ import annotations

from typing import TYPE_CHECKING

from depfilter.domain.exceptions.validation import FilterStateError
from depfilter.domain.model.filter_key import FilterKey, validate_key_segment
from depfilter.domain.model.predicate import (
    FixedPredicate,
    SuppliedPredicate,
    match_all,
    resolve_predicate,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from depfilter.domain.model.precondition import FilterPrecondition
    from depfilter.domain.model.predicate import Predicate, PredicateSlot


class Filter:
    """Filter owned by exactly one FilterGroup.

    The `filter` property resolves to `match_all` while the precondition is
    disabled. Disabled filters keep their place in the dependency graph.

    Attributes:
        key: Key within the owning group (no separator)
        group_key: Key of the owning group, None until registered
        filter_precondition: Gate deciding whether the predicate is used
    """

    __slots__ = ("_dependents", "_filter_precondition", "_group_key", "_key", "_predicate")

    def __init__(
        self,
        key: str,
        filter_precondition: FilterPrecondition,
        get_filter: Predicate | Callable[[], Predicate],
        dependent_filter_keys: Iterable[str | FilterKey] = (),
        *,
        is_static: bool = False,
    ) -> None:
        """Create filter.

        Args:
            key: Filter key, unique within its group
            filter_precondition: Gate for the predicate
            get_filter: Predicate (is_static=True) or predicate supplier
            dependent_filter_keys: Total keys of filters to re-run after this one
            is_static: Treat get_filter as the predicate itself

        Raises:
            InvalidFilterKeyError: Malformed key or dependent key
        """
        if filter_precondition is None:
            raise TypeError("filter_precondition must not be None")
        if not callable(get_filter):
            raise TypeError("get_filter must be callable")

        self._key = validate_key_segment(key)
        self._group_key: str | None = None
        self._filter_precondition = filter_precondition
        self._predicate: PredicateSlot = (
            FixedPredicate(get_filter) if is_static else SuppliedPredicate(get_filter)
        )
        # dict as insertion-ordered set
        self._dependents: dict[FilterKey, None] = {}
        for dependent in dependent_filter_keys:
            self.add_dependent_filter_key(dependent)

    @property
    def key(self) -> str:
        return self._key

    @property
    def group_key(self) -> str | None:
        return self._group_key

    @group_key.setter
    def group_key(self, value: str) -> None:
        """Assigned once by the owning group."""
        validate_key_segment(value)
        if self._group_key is not None and self._group_key != value:
            raise FilterStateError(
                f"filter '{self._key}' already belongs to group '{self._group_key}', "
                f"cannot move it to '{value}'"
            )
        self._group_key = value

    @property
    def filter_key(self) -> FilterKey:
        """Composite key. Requires group registration."""
        if self._group_key is None:
            raise FilterStateError(f"filter '{self._key}' is not registered in a group")
        return FilterKey(group=self._group_key, name=self._key)

    @property
    def total_key(self) -> str:
        return str(self.filter_key)

    @property
    def filter_precondition(self) -> FilterPrecondition:
        return self._filter_precondition

    @property
    def dependents(self) -> tuple[FilterKey, ...]:
        """Dependents in declaration order."""
        return tuple(self._dependents)

    @property
    def dependent_filter_keys(self) -> frozenset[str]:
        return frozenset(str(key) for key in self._dependents)

    def add_dependent_filter_key(self, filter_key: str | FilterKey) -> None:
        """Declare a dependent. Idempotent."""
        if not isinstance(filter_key, FilterKey):
            filter_key = FilterKey.parse(filter_key)
        self._dependents[filter_key] = None

    @property
    def is_static(self) -> bool:
        return isinstance(self._predicate, FixedPredicate)

    @property
    def filter(self) -> Predicate:
        """Currently effective predicate."""
        if not self._filter_precondition.filter_is_enabled:
            return match_all
        return resolve_predicate(self._predicate)

    @filter.setter
    def filter(self, value: Predicate) -> None:
        """Replace the predicate. Switches the filter to static mode for good."""
        if not callable(value):
            raise TypeError("filter must be callable")
        self._predicate = FixedPredicate(value)

    def __repr__(self) -> str:
        group = self._group_key if self._group_key is not None else "?"
        mode = "static" if self.is_static else "dynamic"
        return f"Filter({group}.{self._key}, {mode}, dependents={len(self._dependents)})"
