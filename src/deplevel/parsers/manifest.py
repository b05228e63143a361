"""Item manifests: JSON or YAML files describing items and their dependencies.

Two shapes are accepted, either at the top level or under an ``items`` key:

Mapping form (identity -> dependencies)::

    items:
      build: [fetch, configure]
      configure: [fetch]
      fetch: []

List form (one record per item, ``deps`` optional)::

    [
      {"id": "fetch"},
      {"id": "build", "deps": ["fetch"]}
    ]

Identities are kept exactly as the document types them (strings, integers,
...). Dependency lists that are ``null`` or missing are treated as empty.

JSON object keys are always strings, so in the JSON mapping form every
dependency must be a string too: ``{"0": [], "1": [0]}`` is rejected
because ``0`` could never match the key ``"0"``. Write ``{"1": ["0"]}`` or
use the list form when identities are numbers.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from deplevel.core.leveling import SimpleItem, items_from_mapping
from deplevel.exceptions import ManifestError

logger = logging.getLogger(__name__)

_JSON_SUFFIXES = frozenset({".json"})
_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def load_manifest(path: Path | str) -> list[SimpleItem]:
    """Read a manifest file and return its items in document order.

    Args:
        path: A ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        ManifestError: If the file cannot be read, is not valid JSON/YAML,
            or does not describe a set of items.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in _JSON_SUFFIXES | _YAML_SUFFIXES:
        raise ManifestError(
            f"Unsupported manifest type {suffix or '(none)'!r}: "
            "expected .json, .yaml or .yml"
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc

    try:
        if suffix in _JSON_SUFFIXES:
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ManifestError(f"Malformed manifest {path}: {exc}") from exc

    items = parse_manifest(data, string_keys=suffix in _JSON_SUFFIXES)
    logger.debug("Loaded %d items from %s", len(items), path)
    return items


def parse_manifest(data: Any, string_keys: bool = False) -> list[SimpleItem]:
    """Convert an already-decoded manifest document into items.

    Args:
        data: The decoded document.
        string_keys: The document format only allows string mapping keys
            (JSON). Mapping-form dependencies must then be strings as well.

    Raises:
        ManifestError: If *data* is neither the mapping nor the list form.
    """
    if isinstance(data, dict) and set(data) == {"items"}:
        data = data["items"]
    if data is None:
        return []
    if isinstance(data, dict):
        for key, deps in data.items():
            _check_deps(key, deps)
            if string_keys:
                _check_string_deps(key, deps)
        return items_from_mapping(data)
    if isinstance(data, list):
        return [_parse_record(index, record) for index, record in enumerate(data)]
    raise ManifestError(
        f"Manifest must be a mapping or a list of items, got {type(data).__name__}"
    )


def _parse_record(index: int, record: Any) -> SimpleItem:
    """Parse one ``{"id": ..., "deps": [...]}`` entry of the list form."""
    if not isinstance(record, dict) or "id" not in record:
        raise ManifestError(f"Item #{index} must be a mapping with an 'id' key")
    unknown = set(record) - {"id", "deps"}
    if unknown:
        raise ManifestError(
            f"Item #{index} has unknown keys: {', '.join(sorted(map(str, unknown)))}"
        )
    identity = record["id"]
    deps = record.get("deps")
    _check_deps(identity, deps)
    return SimpleItem(identity, tuple(deps or ()))


def _check_deps(identity: Any, deps: Any) -> None:
    if isinstance(identity, (dict, list)):
        raise ManifestError(f"Item identity must be a scalar, got {identity!r}")
    if deps is not None and not isinstance(deps, list):
        raise ManifestError(
            f"Dependencies of {identity!r} must be a list, got {type(deps).__name__}"
        )
    for dep in deps or ():
        if isinstance(dep, (dict, list)):
            raise ManifestError(
                f"Dependencies of {identity!r} must be scalar identities, got {dep!r}"
            )


def _check_string_deps(key: str, deps: list | None) -> None:
    for dep in deps or ():
        if not isinstance(dep, str):
            raise ManifestError(
                f"Dependency {dep!r} of {key!r} must be a string: JSON object "
                f"keys are always strings, so it could never match an item "
                f"(write {str(dep)!r} or use the list form)"
            )
