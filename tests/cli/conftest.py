"""Shared fixtures for CLI tests.

Provides helpers that write temporary manifests: a clean one, one with a
cycle, one with an unknown dependency, one with a duplicate identity, and
a malformed one.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def canonical_manifest(tmp_path: Path) -> Path:
    """Create a YAML manifest with the two-chain example.

    Levels: 0 -> {0, 2, 3}, 1 -> {1, 4}, 2 -> {5}.
    """
    manifest = tmp_path / "tasks.yaml"
    manifest.write_text(
        "items:\n"
        "  0: []\n"
        "  1: [0]\n"
        "  2: []\n"
        "  3: []\n"
        "  4: [3]\n"
        "  5: [4]\n"
    )
    return manifest


@pytest.fixture
def cyclic_manifest(tmp_path: Path) -> Path:
    """Create a JSON manifest where build -> test -> build."""
    manifest = tmp_path / "cyclic.json"
    manifest.write_text(json.dumps({"build": ["test"], "test": ["build"]}))
    return manifest


@pytest.fixture
def unknown_dep_manifest(tmp_path: Path) -> Path:
    """Create a JSON manifest whose only item depends on a missing one."""
    manifest = tmp_path / "unknown.json"
    manifest.write_text(json.dumps([{"id": "deploy", "deps": ["build"]}]))
    return manifest


@pytest.fixture
def duplicate_manifest(tmp_path: Path) -> Path:
    """Create a list-form manifest that declares ``lint`` twice."""
    manifest = tmp_path / "duplicate.json"
    manifest.write_text(json.dumps([
        {"id": "lint"},
        {"id": "fmt"},
        {"id": "lint", "deps": ["fmt"]},
    ]))
    return manifest


@pytest.fixture
def malformed_manifest(tmp_path: Path) -> Path:
    """Create a file that is not valid JSON."""
    manifest = tmp_path / "broken.json"
    manifest.write_text("{this is not json")
    return manifest
