"""deplevel exception hierarchy.

All public exceptions inherit from DepLevelError, giving callers a single
base class to catch when they want to handle any deplevel-specific failure
without swallowing unrelated errors.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable


class DepLevelError(Exception):
    """Base exception for all deplevel errors."""


class ManifestError(DepLevelError):
    """Raised when an item manifest cannot be read or parsed.

    Covers missing files, unsupported extensions, malformed JSON/YAML,
    and documents whose shape does not describe a set of items.
    """


class ResolveError(DepLevelError):
    """Raised when the dependency graph cannot be leveled.

    Covers references to identities that were never added, circular
    dependencies, and duplicate identities under the strict policy.
    """


class UnknownDependency(ResolveError):
    """An item declares a dependency on an identity absent from the graph.

    Attributes:
        item_id: Identity of the item declaring the dependency.
        missing_id: The dependency identity that was never added.
    """

    def __init__(self, item_id: Hashable, missing_id: Hashable) -> None:
        self.item_id = item_id
        self.missing_id = missing_id
        super().__init__(
            f"{item_id!r} depends on {missing_id!r}, which was never added"
        )


class CyclicDependency(ResolveError):
    """The dependency graph contains a cycle.

    Attributes:
        cycle: Identities forming the cycle, in traversal order. Each
            entry depends on the next one and the last depends on the
            first. A self-dependency yields a one-element tuple.
    """

    def __init__(self, cycle: Iterable[Hashable]) -> None:
        self.cycle = tuple(cycle)
        if not self.cycle:
            raise ValueError("a cycle needs at least one identity")
        path = " -> ".join(repr(i) for i in (*self.cycle, self.cycle[0]))
        super().__init__(f"circular dependency: {path}")


class DuplicateIdentity(ResolveError):
    """An item was added with an identity that is already in the graph.

    Only raised when the resolver uses ``DuplicatePolicy.ERROR``.

    Attributes:
        identity: The identity that was added twice.
    """

    def __init__(self, identity: Hashable) -> None:
        self.identity = identity
        super().__init__(f"identity {identity!r} was already added")
