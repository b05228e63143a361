"""Shared fixtures for deplevel tests."""

import pytest

from deplevel.core.leveling import SimpleItem


@pytest.fixture
def canonical_items() -> list[SimpleItem]:
    """Six items: two independent chains plus one isolated root.

    0 <- 1, 3 <- 4 <- 5, and 2 on its own.
    """
    return [
        SimpleItem(0, []),
        SimpleItem(1, [0]),
        SimpleItem(2, []),
        SimpleItem(3, []),
        SimpleItem(4, [3]),
        SimpleItem(5, [4]),
    ]
