"""``deplevel check <manifest>`` - Validate a manifest without printing levels.

Exit Codes:
    0 - The manifest resolves.
    1 - Resolution failed.
    2 - The manifest could not be read or parsed.
"""

from __future__ import annotations

import sys

import click

from deplevel.cli.resolve_cmd import resolve_manifest
from deplevel.exceptions import ManifestError, ResolveError


@click.command("check")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--strict",
    is_flag=True,
    envvar="DEPLEVEL_STRICT",
    help="Reject duplicate identities instead of keeping the last one.",
)
def check_command(manifest: str, strict: bool) -> None:
    """Check that the items in MANIFEST can be resolved.

    Exit code 0 if they can, 1 on resolution failure, 2 on a bad manifest.
    """
    try:
        resolved = resolve_manifest(manifest, strict)
    except ManifestError as exc:
        click.echo(f"Error: {exc}")
        sys.exit(2)
    except ResolveError as exc:
        click.echo(f"FAIL: {exc}")
        sys.exit(1)

    click.echo(f"OK: {len(resolved)} items in {resolved.depth} levels")
    sys.exit(0)
