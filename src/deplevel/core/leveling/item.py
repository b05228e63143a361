"""Item contract: the capability every resolver input must provide.

An item has a stable, hashable identity and declares the identities it
depends on. The resolver only reads these two values, once, when the item is
added; it never keeps a reference to the item itself.

Any object exposing ``identity()`` and ``dependencies()`` is accepted by
``DepResolver.add``. Subclassing ``DepItem`` is optional and mainly useful to
document intent and get a helpful ``TypeError`` for incomplete subclasses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass


class DepItem(ABC):
    """Abstract item with an identity and a list of dependency identities."""

    @abstractmethod
    def identity(self) -> Hashable:
        """Return the identity other items use to depend on this one."""

    @abstractmethod
    def dependencies(self) -> Iterable[Hashable]:
        """Return the identities this item depends on.

        Order is irrelevant and duplicates are ignored.
        """


@dataclass(frozen=True)
class SimpleItem(DepItem):
    """Plain item holding its identity and dependency identities.

    Attributes:
        id: The item identity (any hashable value).
        deps: Identities this item depends on.
    """

    id: Hashable
    deps: tuple[Hashable, ...] = ()

    def __post_init__(self) -> None:
        # Accept lists and other iterables; store as a tuple to stay hashable.
        object.__setattr__(self, "deps", tuple(self.deps))

    def identity(self) -> Hashable:
        return self.id

    def dependencies(self) -> tuple[Hashable, ...]:
        return self.deps


def items_from_mapping(
    mapping: Mapping[Hashable, Iterable[Hashable] | None],
) -> list[SimpleItem]:
    """Build items from an ``{identity: [dependencies...]}`` mapping.

    Items are returned in mapping order. A ``None`` dependency list is
    treated as empty.

    Example::

        items_from_mapping({"build": ["fetch"], "fetch": []})
    """
    return [SimpleItem(key, tuple(deps or ())) for key, deps in mapping.items()]
