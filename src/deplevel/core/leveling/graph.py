"""Dependency graph data structure, reference validation, and cycle detection.

The graph is an adjacency map: identity -> ``DepNode``. Nodes refer to their
dependencies by identity only, never by object reference, so the structure
stays trivially copyable even when the input describes an (invalid) cyclic
graph.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# DepNode: A vertex in the dependency graph
# ---------------------------------------------------------------------------


@dataclass
class DepNode:
    """A node keyed by identity.

    Attributes:
        identity: The node identity.
        dependencies: Direct dependency identities, in first-seen order with
            duplicates removed (a dict used as an ordered set).
        level: Assigned level after a successful resolve, ``None`` otherwise.
    """

    identity: Hashable
    dependencies: dict[Hashable, None] = field(default_factory=dict)
    level: int | None = None

    @classmethod
    def from_deps(cls, identity: Hashable, deps: Iterable[Hashable]) -> DepNode:
        return cls(identity=identity, dependencies=dict.fromkeys(deps))

    @property
    def is_root(self) -> bool:
        """True when the node declares no dependencies."""
        return not self.dependencies


# ---------------------------------------------------------------------------
# DependencyGraph
# ---------------------------------------------------------------------------


class DependencyGraph:
    """Map of identity -> ``DepNode`` in insertion order.

    Adding a node never validates its dependencies: they may refer to
    identities added later. ``missing_dependencies`` and ``find_cycle``
    perform the validation that resolution needs.

    Thread safety: This class is NOT thread-safe. External synchronization is
    required for concurrent access.
    """

    def __init__(self) -> None:
        self._nodes: dict[Hashable, DepNode] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, identity: object) -> bool:
        return identity in self._nodes

    def __iter__(self) -> Iterator[DepNode]:
        return iter(self._nodes.values())

    @property
    def node_count(self) -> int:
        """Return the number of nodes."""
        return len(self._nodes)

    @property
    def identities(self) -> list[Hashable]:
        """Return all identities in insertion order."""
        return list(self._nodes)

    def add_node(self, node: DepNode) -> None:
        """Add a node, replacing any node with the same identity.

        A replaced node keeps its original insertion position.
        """
        self._nodes[node.identity] = node

    def get_node(self, identity: Hashable) -> DepNode | None:
        """Return the node for *identity*, or None if it was never added."""
        return self._nodes.get(identity)

    def roots(self) -> list[Hashable]:
        """Return identities of nodes with no dependencies."""
        return [node.identity for node in self._nodes.values() if node.is_root]

    def dependents(self, identity: Hashable) -> list[Hashable]:
        """Return identities of nodes that directly depend on *identity*."""
        return [
            node.identity
            for node in self._nodes.values()
            if identity in node.dependencies
        ]

    def clear_levels(self) -> None:
        """Forget levels written by a previous resolve."""
        for node in self._nodes.values():
            node.level = None

    def missing_dependencies(self) -> list[tuple[Hashable, Hashable]]:
        """Return ``(item_id, missing_id)`` pairs for unknown references.

        Pairs are reported in node insertion order, then dependency order.
        """
        return [
            (node.identity, dep)
            for node in self._nodes.values()
            for dep in node.dependencies
            if dep not in self._nodes
        ]

    def find_cycle(self) -> list[Hashable] | None:
        """Find one circular dependency using iterative DFS coloring.

        Starts a traversal from every unvisited node in insertion order. A
        node is GRAY while it is on the current traversal stack and BLACK
        once all of its dependencies are explored; BLACK nodes are never
        traversed again, so detection is O(V + E).

        Dependencies on unknown identities are skipped; callers validate
        references first.

        Returns:
            The cycle as the stack slice from the revisited node to the
            node that closed the cycle (e.g. ``["A", "B", "C"]`` when
            A -> B -> C -> A), or None if the graph is acyclic.
        """
        WHITE, GRAY, BLACK = 0, 1, 2
        color: dict[Hashable, int] = dict.fromkeys(self._nodes, WHITE)

        for start in self._nodes:
            if color[start] != WHITE:
                continue

            # Each frame is (identity, iterator over its dependencies).
            path: list[Hashable] = [start]
            position: dict[Hashable, int] = {start: 0}
            stack = [(start, iter(self._nodes[start].dependencies))]
            color[start] = GRAY

            while stack:
                current, deps = stack[-1]
                for dep in deps:
                    state = color.get(dep)
                    if state is None or state == BLACK:
                        continue
                    if state == GRAY:
                        # Back edge: the cycle is the stack from dep to current.
                        return path[position[dep]:]
                    color[dep] = GRAY
                    position[dep] = len(path)
                    path.append(dep)
                    stack.append((dep, iter(self._nodes[dep].dependencies)))
                    break
                else:
                    color[current] = BLACK
                    stack.pop()
                    path.pop()
                    del position[current]

        return None
