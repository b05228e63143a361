"""Dependency resolver: accumulates items, then levels them in one pass.

Usage::

    resolver = DepResolver()
    resolver.add(items)          # any number of batches, in any order
    resolved = resolver.resolve()
    for group in resolved.iter_level():
        run_in_parallel(group.deps)

``resolve()`` is all-or-nothing. It first checks that every dependency
refers to an added identity, then that the graph is acyclic, and only then
assigns levels. On failure it raises a ``ResolveError`` and leaves the
resolver exactly as it was, so the caller can fix the input and try again.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable
from enum import Enum

from deplevel.core.leveling.graph import DependencyGraph, DepNode
from deplevel.core.leveling.item import DepItem
from deplevel.core.leveling.levels import assign_levels
from deplevel.core.leveling.result import ResolvedDeps
from deplevel.exceptions import CyclicDependency, DuplicateIdentity, UnknownDependency

logger = logging.getLogger(__name__)


class DuplicatePolicy(Enum):
    """What ``DepResolver.add`` does with an identity that is already present."""

    OVERWRITE = "overwrite"
    """Replace the earlier item (last add wins). The default."""

    ERROR = "error"
    """Raise ``DuplicateIdentity``."""


class DepResolver:
    """Builder that collects items and resolves them into levels.

    Thread safety: This class is NOT thread-safe. ``add`` and ``resolve``
    must not run concurrently on the same instance. The ``ResolvedDeps`` it
    returns is immutable and safe to share.

    Args:
        duplicates: Policy for items whose identity was already added.
    """

    def __init__(self, duplicates: DuplicatePolicy = DuplicatePolicy.OVERWRITE) -> None:
        self._graph = DependencyGraph()
        self._duplicates = DuplicatePolicy(duplicates)

    def __len__(self) -> int:
        return len(self._graph)

    def __contains__(self, identity: object) -> bool:
        return identity in self._graph

    @property
    def graph(self) -> DependencyGraph:
        """The underlying graph (read it, do not mutate it)."""
        return self._graph

    @property
    def duplicates(self) -> DuplicatePolicy:
        return self._duplicates

    def add(self, items: Iterable[DepItem]) -> DepResolver:
        """Add a batch of items.

        Dependencies are recorded verbatim and not validated here: they may
        name identities added by a later batch. Any levels written by a
        previous ``resolve()`` are cleared because the graph changed.

        Args:
            items: Objects exposing ``identity()`` and ``dependencies()``.

        Returns:
            This resolver, so calls can be chained.

        Raises:
            DuplicateIdentity: Under ``DuplicatePolicy.ERROR``, when an item's
                identity is already present. Items earlier in the batch stay
                added.
        """
        self._graph.clear_levels()
        count = 0
        for item in items:
            identity = item.identity()
            if identity in self._graph:
                if self._duplicates is DuplicatePolicy.ERROR:
                    raise DuplicateIdentity(identity)
                logger.warning("Overwriting item with duplicate identity %r", identity)
            self._graph.add_node(DepNode.from_deps(identity, item.dependencies()))
            count += 1
        logger.debug("Added %d items (%d total)", count, len(self._graph))
        return self

    def resolve(self) -> ResolvedDeps:
        """Validate the graph and assign a level to every item.

        Returns:
            An immutable ``ResolvedDeps``. An empty resolver yields an empty
            result.

        Raises:
            UnknownDependency: An item depends on an identity never added.
            CyclicDependency: The dependency graph contains a cycle.
        """
        missing = self._graph.missing_dependencies()
        if missing:
            item_id, missing_id = missing[0]
            raise UnknownDependency(item_id, missing_id)

        cycle = self._graph.find_cycle()
        if cycle is not None:
            raise CyclicDependency(cycle)

        levels = assign_levels(self._graph)
        # Only a complete, validated assignment is written back to the nodes.
        for identity, level in levels.items():
            self._graph.get_node(identity).level = level

        resolved = ResolvedDeps(levels)
        logger.debug(
            "Resolved %d items into %d levels", len(resolved), resolved.depth
        )
        return resolved

    def level_of(self, identity: Hashable) -> int | None:
        """Return the level stored by the last successful resolve.

        Returns None if the identity is unknown, was never resolved, or the
        graph changed since the last resolve.
        """
        node = self._graph.get_node(identity)
        return node.level if node else None
