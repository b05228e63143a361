"""Dependency leveling engine.

Builds a dependency graph from caller-supplied items, rejects unknown
references and cycles, and assigns each item a *level*: 0 for items without
dependencies, otherwise one more than the highest level among its direct
dependencies. Items on the same level never depend on each other.

All public names are re-exported here, so callers can write
``from deplevel.core.leveling import DepResolver``.

Example
-------
>>> from deplevel.core.leveling import DepResolver, items_from_mapping
>>> items = items_from_mapping({0: [], 1: [0], 2: [], 3: [], 4: [3], 5: [4]})
>>> resolved = DepResolver().add(items).resolve()
>>> resolved.sorted_by_level()
[0, 2, 3, 1, 4, 5]
>>> [(g.level, sorted(g.deps)) for g in resolved.iter_level()]
[(0, [0, 2, 3]), (1, [1, 4]), (2, [5])]
"""

from deplevel.core.leveling.graph import DependencyGraph, DepNode
from deplevel.core.leveling.item import DepItem, SimpleItem, items_from_mapping
from deplevel.core.leveling.levels import assign_levels
from deplevel.core.leveling.resolver import DepResolver, DuplicatePolicy
from deplevel.core.leveling.result import DepLevel, ResolvedDeps

__all__ = [
    "DepItem",
    "SimpleItem",
    "items_from_mapping",
    "DepNode",
    "DependencyGraph",
    "assign_levels",
    "DepLevel",
    "ResolvedDeps",
    "DepResolver",
    "DuplicatePolicy",
]
