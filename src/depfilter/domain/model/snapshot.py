"""Read-only description of a FilterCollection for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FilterInfo:
    """State of one filter at the time of the snapshot.

    Attributes:
        total_key: "group.name"
        group_key: Owning group
        key: Key within the group
        enabled: Precondition value when the snapshot was taken
        is_static: Predicate is fixed rather than supplied
        dependent_keys: Total keys of dependents, sorted
    """

    total_key: str
    group_key: str
    key: str
    enabled: bool
    is_static: bool
    dependent_keys: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.total_key != f"{self.group_key}.{self.key}":
            raise ValueError(
                f"total_key '{self.total_key}' does not match '{self.group_key}.{self.key}'"
            )


@dataclass(frozen=True, slots=True)
class CollectionSnapshot:
    """All filters of a collection, sorted by total key.

    Attributes:
        filters: Per-filter state
        group_count: Number of registered groups
        finished: finish_creation() has completed
    """

    filters: tuple[FilterInfo, ...]
    group_count: int
    finished: bool

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.group_count < 0:
            raise ValueError(f"group_count must be >= 0, got {self.group_count}")

    @property
    def filter_count(self) -> int:
        return len(self.filters)

    @property
    def enabled_count(self) -> int:
        return sum(1 for info in self.filters if info.enabled)

    @property
    def edge_count(self) -> int:
        return sum(len(info.dependent_keys) for info in self.filters)
