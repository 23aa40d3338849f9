"""Target object port.

The graph-like object a FilterGroup filters. Users provide it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from depfilter.domain.model.predicate import Predicate


class FilterTarget(Protocol):
    """Contract for objects filtered by a FilterGroup.

    Example:
        class NodeView:
            def __init__(self, nodes):
                self._nodes = nodes
                self._staged = {}
                self.visible = list(nodes)

            def run_filter(self, predicate, key):
                self._staged[key] = predicate

            def apply_filters(self):
                self.visible = [
                    n for n in self._nodes if all(p(n) for p in self._staged.values())
                ]
    """

    def run_filter(self, predicate: Predicate, key: str) -> None:
        """Stage predicate under key, replacing the previous one for that key."""
        ...

    def apply_filters(self) -> None:
        """Commit every predicate staged since the last commit."""
        ...
