"""Resolution result: immutable level assignment with ordered and grouped views.

``ResolvedDeps`` is produced once by a successful ``DepResolver.resolve()``
and never changes afterwards, so it can be shared between threads without
synchronization.

Two views answer the two questions the resolver exists for:

- ``sorted_by_level()``: a flat processing order where every identity comes
  after all of its dependencies.
- ``iter_level()``: one ``DepLevel`` group per level, ascending. Members of a
  group have no dependency relationship and may be processed in parallel;
  groups must be processed in order.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class DepLevel:
    """All identities assigned to one level.

    Attributes:
        level: The level number (0 for items without dependencies).
        deps: Identities at this level. A set: callers must not rely on
            iteration order within a level.
    """

    level: int
    deps: frozenset[Hashable]


class ResolvedDeps:
    """Immutable mapping of identity -> level with derived views.

    Invariant: ``level(n) == 0`` if ``n`` has no dependencies, else
    ``1 + max(level(d) for d in dependencies(n))``.

    Args:
        levels: Identity -> level, in the order identities were first added
            to the resolver. Copied on construction.
    """

    def __init__(self, levels: Mapping[Hashable, int]) -> None:
        self._levels: Mapping[Hashable, int] = MappingProxyType(dict(levels))
        by_level: dict[int, list[Hashable]] = {}
        for identity, level in self._levels.items():
            by_level.setdefault(level, []).append(identity)
        # Ascending level; insertion order preserved within each level.
        self._order: tuple[Hashable, ...] = tuple(
            identity for level in sorted(by_level) for identity in by_level[level]
        )
        self._members: dict[int, tuple[Hashable, ...]] = {
            level: tuple(by_level[level]) for level in sorted(by_level)
        }
        self._groups: Mapping[int, frozenset[Hashable]] = MappingProxyType(
            {level: frozenset(members) for level, members in self._members.items()}
        )

    def __repr__(self) -> str:
        return f"ResolvedDeps(items={len(self)}, depth={self.depth})"

    def __len__(self) -> int:
        return len(self._levels)

    def __contains__(self, identity: object) -> bool:
        return identity in self._levels

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._order)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResolvedDeps):
            return NotImplemented
        return dict(self._levels) == dict(other._levels)

    __hash__ = None  # type: ignore[assignment]

    @property
    def levels(self) -> Mapping[Hashable, int]:
        """Read-only identity -> level mapping."""
        return self._levels

    @property
    def depth(self) -> int:
        """Number of distinct levels (0 for an empty result)."""
        return len(self._groups)

    def level_of(self, identity: Hashable) -> int:
        """Return the level assigned to *identity*.

        Raises:
            KeyError: If *identity* was not part of the resolved graph.
        """
        return self._levels[identity]

    def sorted_by_level(self) -> list[Hashable]:
        """Return every identity ordered by ascending level.

        Within a level, identities keep the order in which they were first
        added, so identical input yields an identical sequence.
        """
        return list(self._order)

    def iter_level(self) -> Iterator[DepLevel]:
        """Iterate over ``DepLevel`` groups in ascending level order.

        Each call returns a new iterator; levels are never recomputed.
        """
        return (DepLevel(level, deps) for level, deps in self._groups.items())

    def raw_level(self) -> Mapping[int, frozenset[Hashable]]:
        """Return the read-only level -> identities mapping."""
        return self._groups

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly snapshot of the result.

        Identities inside each level are listed in insertion order so the
        output is deterministic.
        """
        return {
            "levels": [
                {
                    "level": level,
                    "items": list(members),
                }
                for level, members in self._members.items()
            ],
            "order": list(self._order),
        }
