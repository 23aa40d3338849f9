"""Filter preconditions: boolean gates deciding whether a filter is active.

Two variants:
- DynamicFilterPrecondition: asks a supplier on every read (e.g. a UI toggle)
- StaticFilterPrecondition: holds an assignable bool
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class FilterPrecondition:
    """Capability contract: read-only `filter_is_enabled`.

    Not meant to be used directly.
    """

    __slots__ = ()

    @property
    def filter_is_enabled(self) -> bool:
        raise NotImplementedError("not implemented")


class DynamicFilterPrecondition(FilterPrecondition):
    """Re-evaluates its supplier on every read. No caching."""

    __slots__ = ("_get_filter_is_enabled",)

    def __init__(self, get_filter_is_enabled: Callable[[], bool]) -> None:
        if not callable(get_filter_is_enabled):
            raise TypeError("get_filter_is_enabled must be callable")
        self._get_filter_is_enabled = get_filter_is_enabled

    @property
    def filter_is_enabled(self) -> bool:
        return bool(self._get_filter_is_enabled())

    def __repr__(self) -> str:
        return f"DynamicFilterPrecondition({self._get_filter_is_enabled!r})"


class StaticFilterPrecondition(FilterPrecondition):
    """Returns the last assigned value."""

    __slots__ = ("_filter_is_enabled",)

    def __init__(self, filter_is_enabled: bool) -> None:
        self._filter_is_enabled = bool(filter_is_enabled)

    @property
    def filter_is_enabled(self) -> bool:
        return self._filter_is_enabled

    @filter_is_enabled.setter
    def filter_is_enabled(self, value: bool) -> None:
        self._filter_is_enabled = bool(value)

    def __repr__(self) -> str:
        return f"StaticFilterPrecondition({self._filter_is_enabled!r})"
