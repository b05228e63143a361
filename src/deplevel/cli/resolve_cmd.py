"""``deplevel resolve <manifest>`` - Level the items of a manifest.

Loads the manifest, resolves it, and prints the levels (table), the flat
processing order (order), or a JSON snapshot (json).

Exit Codes:
    0 - Resolution succeeded.
    1 - Resolution failed (unknown dependency, cycle, duplicate with --strict).
    2 - The manifest could not be read or parsed.
"""

from __future__ import annotations

import json
import sys

import click

from deplevel.core.leveling import DepResolver, DuplicatePolicy, ResolvedDeps
from deplevel.exceptions import ManifestError, ResolveError
from deplevel.parsers import load_manifest


def resolve_manifest(path: str, strict: bool) -> ResolvedDeps:
    """Load *path* and resolve its items.

    Raises:
        ManifestError: If the manifest is unreadable or malformed.
        ResolveError: If the items cannot be leveled.
    """
    items = load_manifest(path)
    policy = DuplicatePolicy.ERROR if strict else DuplicatePolicy.OVERWRITE
    return DepResolver(duplicates=policy).add(items).resolve()


@click.command("resolve")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format", "output_format",
    type=click.Choice(["table", "order", "json"]),
    default="table",
    help="Output format (default: table).",
)
@click.option(
    "--strict",
    is_flag=True,
    envvar="DEPLEVEL_STRICT",
    help="Reject duplicate identities instead of keeping the last one.",
)
def resolve_command(manifest: str, output_format: str, strict: bool) -> None:
    """Resolve the items in MANIFEST into dependency levels.

    Items on the same level do not depend on each other and can be
    processed in parallel; levels must be processed in ascending order.

    Exit code 0 on success, 1 on resolution failure, 2 on a bad manifest.
    """
    from deplevel.cli.output import (
        error_to_json, print_failure, print_levels, print_order,
    )

    try:
        resolved = resolve_manifest(manifest, strict)
    except (ManifestError, ResolveError) as exc:
        if output_format == "json":
            click.echo(json.dumps(error_to_json(exc), indent=2, default=str))
        else:
            print_failure(exc)
        sys.exit(2 if isinstance(exc, ManifestError) else 1)

    if output_format == "json":
        click.echo(json.dumps(resolved.to_dict(), indent=2, default=str))
    elif output_format == "order":
        print_order(resolved)
    else:
        print_levels(resolved)
    sys.exit(0)
