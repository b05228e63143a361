"""Readers that turn item manifests on disk into resolver input."""

from deplevel.parsers.manifest import load_manifest, parse_manifest

__all__ = ["load_manifest", "parse_manifest"]
