"""Immutable directed graph of filter dependencies.

Edge a → b: b is a dependent of a and must be re-run after a.
Ordering and cycle detection use stdlib graphlib.TopologicalSorter.
"""

from __future__ import annotations

from dataclasses import dataclass
from graphlib import CycleError, TopologicalSorter
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class DiGraph(Generic[T]):
    """Immutable directed graph.

    Invariants (FAIL-FIRST):
    - forward[a] contains b ⟺ reverse[b] contains a
    - All nodes in edges must be in nodes set

    Attributes:
        forward: Node → dependents (outgoing edges)
        reverse: Node → prerequisites (incoming edges)
        nodes: All nodes in graph (including isolated)
    """

    forward: Mapping[T, frozenset[T]]
    reverse: Mapping[T, frozenset[T]]
    nodes: frozenset[T]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for node, successors in self.forward.items():
            if node not in self.nodes:
                raise ValueError(f"forward key '{node}' not in nodes")
            for succ in successors:
                if succ not in self.nodes:
                    raise ValueError(f"successor '{succ}' of '{node}' not in nodes")
                if node not in self.reverse.get(succ, frozenset()):
                    raise ValueError(
                        f"inconsistent: {node}→{succ} in forward but {node} not in reverse[{succ}]"
                    )

        for node, predecessors in self.reverse.items():
            if node not in self.nodes:
                raise ValueError(f"reverse key '{node}' not in nodes")
            for pred in predecessors:
                if pred not in self.nodes:
                    raise ValueError(f"predecessor '{pred}' of '{node}' not in nodes")
                if node not in self.forward.get(pred, frozenset()):
                    raise ValueError(
                        f"inconsistent: {pred}→{node} in reverse but {node} not in forward[{pred}]"
                    )

    def successors(self, node: T) -> frozenset[T]:
        """Get direct dependents (outgoing edges). O(1)."""
        return self.forward.get(node, frozenset())

    def predecessors(self, node: T) -> frozenset[T]:
        """Get direct prerequisites (incoming edges). O(1)."""
        return self.reverse.get(node, frozenset())

    @property
    def edge_count(self) -> int:
        return sum(len(succs) for succs in self.forward.values())

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def reachable_from(self, root: T) -> frozenset[T]:
        """All nodes reachable from root, root included.

        Raises:
            KeyError: root is not a node
        """
        if root not in self.nodes:
            raise KeyError(root)

        seen: set[T] = {root}
        stack = [root]
        while stack:
            node = stack.pop()
            for succ in self.successors(node):
                if succ not in seen:
                    seen.add(succ)
                    stack.append(succ)
        return frozenset(seen)

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[T, T]],
        extra_nodes: Iterable[T] | None = None,
    ) -> DiGraph[T]:
        """Build graph from (from, to) edge iterable.

        Time: O(E) where E is number of edges
        """
        forward: dict[T, set[T]] = {}
        reverse: dict[T, set[T]] = {}
        nodes: set[T] = set()

        for from_node, to_node in edges:
            nodes.add(from_node)
            nodes.add(to_node)
            forward.setdefault(from_node, set()).add(to_node)
            reverse.setdefault(to_node, set()).add(from_node)

        if extra_nodes is not None:
            nodes.update(extra_nodes)

        return cls(
            forward={k: frozenset(v) for k, v in forward.items()},
            reverse={k: frozenset(v) for k, v in reverse.items()},
            nodes=frozenset(nodes),
        )


# =============================================================================
# GRAPH ALGORITHMS - Using stdlib graphlib
# =============================================================================


def detect_cycle(graph: DiGraph[T]) -> tuple[T, ...]:
    """Find one cycle in the graph.

    Returns:
        Empty tuple if acyclic, else the nodes of one cycle in path order
        (first node not repeated at the end).

    Note:
        graphlib.TopologicalSorter only reports ONE cycle when several exist.
        Rejecting the graph needs only one.
    """
    if graph.node_count == 0:
        return ()

    # graphlib expects node -> predecessors
    ts: TopologicalSorter[T] = TopologicalSorter(
        {node: graph.predecessors(node) for node in graph.nodes}
    )
    try:
        ts.prepare()
    except CycleError as e:
        # e.args[1] is the path [a, b, ..., a]
        return tuple(e.args[1][:-1])
    return ()


def ordered_closure(graph: DiGraph[T], root: T) -> tuple[T, ...] | None:
    """Topological order of root and everything reachable from it.

    Kahn's algorithm restricted to edges inside the closure. Nodes that
    become ready together are emitted in ascending order, so T must be
    orderable.

    Returns:
        Nodes with every prerequisite before its dependents, root first.
        None if the closure contains a cycle.
    """
    closure = graph.reachable_from(root)
    ts: TopologicalSorter[T] = TopologicalSorter(
        {node: graph.predecessors(node) & closure for node in sorted(closure)}
    )
    try:
        ts.prepare()
    except CycleError:
        return None

    order: list[T] = []
    while ts.is_active():
        ready = sorted(ts.get_ready())
        order.extend(ready)
        ts.done(*ready)
    return tuple(order)
