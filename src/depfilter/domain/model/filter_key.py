"""Composite filter identity: group key + filter key.

Serialized as "group.name" only at the public API boundary.
"""

from __future__ import annotations

from dataclasses import dataclass

from depfilter.domain.exceptions.validation import InvalidFilterKeyError

SEPARATOR = "."


def validate_key_segment(segment: str) -> str:
    """Check a single group or filter key. FAIL-FIRST.

    Args:
        segment: Group key or filter key

    Returns:
        The segment unchanged

    Raises:
        InvalidFilterKeyError: Not a string, empty, or contains the separator
    """
    if not isinstance(segment, str):
        raise InvalidFilterKeyError(repr(segment), "key must be a string")
    if not segment:
        raise InvalidFilterKeyError(segment, "key must not be empty")
    if SEPARATOR in segment:
        raise InvalidFilterKeyError(segment, f"key must not contain '{SEPARATOR}'")
    return segment


@dataclass(frozen=True, slots=True, order=True)
class FilterKey:
    """Globally unique filter identifier.

    Ordered by (group, name); the ordering is the tie-break
    used when sorting dependent filters.

    Attributes:
        group: Key of the owning FilterGroup
        name: Key of the filter within its group
    """

    group: str
    name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        validate_key_segment(self.group)
        validate_key_segment(self.name)

    def __str__(self) -> str:
        return f"{self.group}{SEPARATOR}{self.name}"

    @classmethod
    def parse(cls, total_key: str) -> FilterKey:
        """Parse "group.name" total key.

        Raises:
            InvalidFilterKeyError: Not exactly one separator or empty segment
        """
        if not isinstance(total_key, str):
            raise InvalidFilterKeyError(repr(total_key), "total key must be a string")
        parts = total_key.split(SEPARATOR)
        if len(parts) != 2:
            raise InvalidFilterKeyError(
                total_key, f"total key must contain exactly one '{SEPARATOR}'"
            )
        return cls(group=parts[0], name=parts[1])
