"""FilterCollection configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CollectionConfig:
    """Collection configuration DTO.

    Immutable configuration object with FAIL-FIRST validation.
    All fields have defaults; defaults give the documented behavior.

    Attributes:
        reject_cycles: Check the dependency graph for cycles in
            finish_creation(). When False, a cycle is reported by the
            update_filter() call that reaches it.
        initialize_baseline: Run every filter once with the match-all
            predicate in finish_creation().
    """

    reject_cycles: bool = True
    initialize_baseline: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.reject_cycles, bool):
            raise TypeError(f"reject_cycles must be bool, got {type(self.reject_cycles).__name__}")
        if not isinstance(self.initialize_baseline, bool):
            raise TypeError(
                f"initialize_baseline must be bool, got {type(self.initialize_baseline).__name__}"
            )
