"""deplevel CLI - Dependency levels for parallel batch processing.

Entry point for the ``deplevel`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    resolve  - Print the dependency levels of a manifest.
    check    - Validate that a manifest resolves.

Usage::

    deplevel resolve tasks.yaml
    deplevel resolve tasks.json --format order
    deplevel resolve tasks.json --format json --strict
    deplevel -v check tasks.yaml
"""

from __future__ import annotations

import logging

import click

from deplevel import __version__
from deplevel.cli.check_cmd import check_command
from deplevel.cli.resolve_cmd import resolve_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """deplevel: order items so every one comes after its dependencies.

    Reads items from a JSON or YAML manifest and groups them into levels
    that can each be processed in parallel.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


# Register all subcommands
cli.add_command(resolve_command)
cli.add_command(check_command)
