"""Tests for DepResolver: batching, duplicate policy, failures, and snapshots.

Validates the add* -> resolve -> query* call sequence, the all-or-nothing
behaviour of resolve(), and the item contract (ABC or duck typing).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pytest

from deplevel.core.leveling import (
    DepItem,
    DepResolver,
    DuplicatePolicy,
    SimpleItem,
    items_from_mapping,
)
from deplevel.exceptions import (
    CyclicDependency,
    DepLevelError,
    DuplicateIdentity,
    ResolveError,
    UnknownDependency,
)


# ===========================================================================
# Helpers
# ===========================================================================


class Package(DepItem):
    """Caller-defined item type with a composite identity."""

    def __init__(self, name: str, version: str, requires: list[tuple[str, str]]):
        self.name = name
        self.version = version
        self.requires = requires

    def identity(self):
        return (self.name, self.version)

    def dependencies(self):
        return self.requires


@dataclass
class DuckItem:
    """Satisfies the contract without subclassing DepItem."""

    key: str
    needs: list[str]

    def identity(self) -> str:
        return self.key

    def dependencies(self) -> list[str]:
        return self.needs


# ===========================================================================
# Resolution
# ===========================================================================


class TestResolve:
    """Successful resolution across input shapes."""

    def test_canonical_scenario(self, canonical_items) -> None:
        resolved = DepResolver().add(canonical_items).resolve()
        assert dict(resolved.levels) == {0: 0, 2: 0, 3: 0, 1: 1, 4: 1, 5: 2}
        groups = [(g.level, set(g.deps)) for g in resolved.iter_level()]
        assert groups == [(0, {0, 2, 3}), (1, {1, 4}), (2, {5})]
        assert resolved.sorted_by_level() == [0, 2, 3, 1, 4, 5]

    def test_empty_resolver(self) -> None:
        resolved = DepResolver().resolve()
        assert len(resolved) == 0
        assert resolved.sorted_by_level() == []

    def test_batches_in_any_order(self) -> None:
        """A dependency may be added by a later batch."""
        resolver = DepResolver()
        resolver.add([SimpleItem("app", ["lib"])])
        resolver.add([SimpleItem("lib", [])])
        resolved = resolver.resolve()
        assert resolved.sorted_by_level() == ["lib", "app"]

    def test_add_accepts_generators(self) -> None:
        resolver = DepResolver().add(SimpleItem(i, []) for i in range(3))
        assert len(resolver) == 3

    def test_duplicate_dependencies_ignored(self) -> None:
        resolved = DepResolver().add(
            [SimpleItem("a", []), SimpleItem("b", ["a", "a", "a"])]
        ).resolve()
        assert resolved.level_of("b") == 1

    def test_custom_item_with_tuple_identity(self) -> None:
        items = [
            Package("core", "1.0", []),
            Package("http", "2.1", [("core", "1.0")]),
            Package("app", "0.3", [("http", "2.1"), ("core", "1.0")]),
        ]
        resolved = DepResolver().add(items).resolve()
        assert resolved.level_of(("app", "0.3")) == 2

    def test_duck_typed_items(self) -> None:
        resolved = DepResolver().add(
            [DuckItem("b", ["a"]), DuckItem("a", [])]
        ).resolve()
        assert resolved.sorted_by_level() == ["a", "b"]

    def test_incomplete_subclass_cannot_be_instantiated(self) -> None:
        class Broken(DepItem):
            def identity(self):
                return 1

        with pytest.raises(TypeError):
            Broken()  # type: ignore[abstract]

    def test_items_from_mapping(self) -> None:
        items = items_from_mapping({"x": None, "y": ["x"]})
        assert items == [SimpleItem("x", ()), SimpleItem("y", ("x",))]

    def test_levels_written_to_nodes_on_success(self, canonical_items) -> None:
        resolver = DepResolver().add(canonical_items)
        assert resolver.level_of(5) is None
        resolver.resolve()
        assert resolver.level_of(5) == 2
        assert resolver.level_of("unknown") is None

    def test_add_after_resolve_clears_levels(self, canonical_items) -> None:
        resolver = DepResolver().add(canonical_items)
        resolver.resolve()
        resolver.add([SimpleItem(6, [5])])
        assert resolver.level_of(5) is None
        assert resolver.resolve().level_of(6) == 3

    def test_resolve_is_idempotent(self, canonical_items) -> None:
        resolver = DepResolver().add(canonical_items)
        first = resolver.resolve()
        second = resolver.resolve()
        assert first == second
        assert first is not second
        assert first.sorted_by_level() == second.sorted_by_level()

    def test_result_unaffected_by_later_adds(self, canonical_items) -> None:
        resolver = DepResolver().add(canonical_items)
        snapshot = resolver.resolve()
        resolver.add([SimpleItem(0, [2])])
        assert snapshot.level_of(1) == 1
        assert resolver.resolve().level_of(1) == 2


# ===========================================================================
# Failures
# ===========================================================================


class TestResolveFailures:
    """Unknown references and cycles are raised; nothing partial leaks."""

    def test_unknown_dependency(self) -> None:
        resolver = DepResolver().add([SimpleItem("app", ["db"])])
        with pytest.raises(UnknownDependency) as exc_info:
            resolver.resolve()
        assert exc_info.value.item_id == "app"
        assert exc_info.value.missing_id == "db"
        assert "'app'" in str(exc_info.value)
        assert "'db'" in str(exc_info.value)

    def test_unknown_dependency_reported_before_cycle(self) -> None:
        resolver = DepResolver().add(
            [SimpleItem("a", ["b"]), SimpleItem("b", ["a", "ghost"])]
        )
        with pytest.raises(UnknownDependency):
            resolver.resolve()

    def test_self_loop(self) -> None:
        resolver = DepResolver().add([SimpleItem("solo", ["solo"])])
        with pytest.raises(CyclicDependency) as exc_info:
            resolver.resolve()
        assert exc_info.value.cycle == ("solo",)

    def test_cycle_carries_members(self) -> None:
        resolver = DepResolver().add(
            [
                SimpleItem("root", []),
                SimpleItem("a", ["root", "b"]),
                SimpleItem("b", ["c"]),
                SimpleItem("c", ["a"]),
            ]
        )
        with pytest.raises(CyclicDependency) as exc_info:
            resolver.resolve()
        assert exc_info.value.cycle == ("a", "b", "c")
        assert "'a' -> 'b' -> 'c' -> 'a'" in str(exc_info.value)

    def test_empty_cycle_rejected(self) -> None:
        with pytest.raises(ValueError):
            CyclicDependency(())

    def test_errors_share_base_classes(self) -> None:
        assert issubclass(UnknownDependency, ResolveError)
        assert issubclass(CyclicDependency, ResolveError)
        assert issubclass(DuplicateIdentity, ResolveError)
        assert issubclass(ResolveError, DepLevelError)

    def test_failed_resolve_writes_no_levels(self) -> None:
        resolver = DepResolver().add(
            [SimpleItem("a", []), SimpleItem("b", ["a"]), SimpleItem("c", ["c"])]
        )
        with pytest.raises(CyclicDependency):
            resolver.resolve()
        assert resolver.level_of("a") is None
        assert resolver.level_of("b") is None

    def test_resolvable_again_after_fix(self) -> None:
        resolver = DepResolver().add([SimpleItem("app", ["db"])])
        with pytest.raises(UnknownDependency):
            resolver.resolve()
        resolver.add([SimpleItem("db", [])])
        assert resolver.resolve().sorted_by_level() == ["db", "app"]

    def test_cycle_broken_by_overwrite(self) -> None:
        resolver = DepResolver().add([SimpleItem("a", ["b"]), SimpleItem("b", ["a"])])
        with pytest.raises(CyclicDependency):
            resolver.resolve()
        resolver.add([SimpleItem("b", [])])
        assert resolver.resolve().level_of("a") == 1


# ===========================================================================
# Duplicate identities
# ===========================================================================


class TestDuplicatePolicy:
    def test_default_is_overwrite(self) -> None:
        assert DepResolver().duplicates is DuplicatePolicy.OVERWRITE

    def test_policy_accepts_value_string(self) -> None:
        assert DepResolver("error").duplicates is DuplicatePolicy.ERROR

    def test_overwrite_last_add_wins(self) -> None:
        resolver = DepResolver().add(
            [SimpleItem("a", []), SimpleItem("b", []), SimpleItem("a", ["b"])]
        )
        assert len(resolver) == 2
        resolved = resolver.resolve()
        assert resolved.level_of("a") == 1
        # The overwritten item keeps its first-added position.
        assert resolver.graph.identities == ["a", "b"]

    def test_overwrite_logs_warning(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="deplevel"):
            DepResolver().add([SimpleItem("a", []), SimpleItem("a", [])])
        assert "duplicate identity 'a'" in caplog.text

    def test_error_policy_raises(self) -> None:
        resolver = DepResolver(duplicates=DuplicatePolicy.ERROR)
        resolver.add([SimpleItem("a", [])])
        with pytest.raises(DuplicateIdentity) as exc_info:
            resolver.add([SimpleItem("b", []), SimpleItem("a", ["b"])])
        assert exc_info.value.identity == "a"
        # Items before the duplicate stay added; the duplicate does not.
        assert "b" in resolver
        assert list(resolver.graph.get_node("a").dependencies) == []

    def test_error_policy_within_one_batch(self) -> None:
        resolver = DepResolver(duplicates=DuplicatePolicy.ERROR)
        with pytest.raises(DuplicateIdentity):
            resolver.add([SimpleItem(1, []), SimpleItem(1, [])])


class TestLogging:
    def test_debug_records(self, caplog, canonical_items) -> None:
        with caplog.at_level(logging.DEBUG, logger="deplevel"):
            DepResolver().add(canonical_items).resolve()
        assert "Added 6 items" in caplog.text
        assert "Resolved 6 items into 3 levels" in caplog.text
