"""Level assignment: longest-path distance from any root node.

    level(n) = 0                                   if n has no dependencies
    level(n) = 1 + max(level(d) for d in deps(n))  otherwise

Computed with an explicit work stack and a memo table, so each node is
evaluated once (O(V + E)) and long dependency chains never touch the
interpreter's recursion limit.
"""

from __future__ import annotations

from collections.abc import Hashable

from deplevel.core.leveling.graph import DependencyGraph


def assign_levels(graph: DependencyGraph) -> dict[Hashable, int]:
    """Compute the level of every node in *graph*.

    The graph must already be validated: every dependency identity exists
    and there are no cycles. Node ``level`` fields are neither read nor
    written; the caller decides whether to store the result.

    Args:
        graph: A validated, acyclic dependency graph.

    Returns:
        Mapping of identity -> level, in graph insertion order.
    """
    memo: dict[Hashable, int] = {}

    for start in graph.identities:
        if start in memo:
            continue
        stack = [start]
        while stack:
            current = stack[-1]
            if current in memo:
                stack.pop()
                continue
            deps = graph.get_node(current).dependencies
            pending = [d for d in deps if d not in memo]
            if pending:
                stack.extend(pending)
                continue
            memo[current] = 1 + max((memo[d] for d in deps), default=-1)
            stack.pop()

    # Re-key in insertion order; memo is filled in completion order.
    return {identity: memo[identity] for identity in graph.identities}
