"""Rich output formatting helpers for the deplevel CLI.

Provides the level table, processing order, and failure panel printed by
``deplevel resolve``.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from deplevel.core.leveling import ResolvedDeps
from deplevel.exceptions import (
    CyclicDependency, DepLevelError, DuplicateIdentity, UnknownDependency,
)

console = Console()


def print_levels(resolved: ResolvedDeps) -> None:
    """Print one table row per level with its member identities.

    Args:
        resolved: A successful resolution.
    """
    if not len(resolved):
        console.print("[dim]No items to resolve.[/dim]")
        return

    table = Table(title="Dependency Levels", show_header=True, header_style="bold")
    table.add_column("Level", justify="right", style="bold")
    table.add_column("Count", justify="right")
    table.add_column("Items")

    for entry in resolved.to_dict()["levels"]:
        items = entry["items"]
        table.add_row(
            str(entry["level"]), str(len(items)), Text(", ".join(map(str, items)))
        )

    console.print(table)
    console.print(
        f"[bold]{len(resolved)}[/bold] items | "
        f"[bold]{resolved.depth}[/bold] levels"
    )


def print_order(resolved: ResolvedDeps) -> None:
    """Print the flat processing order, one identity per line."""
    for identity in resolved.sorted_by_level():
        console.print(str(identity), markup=False, highlight=False)


def print_failure(error: DepLevelError) -> None:
    """Print a resolution or manifest failure with a short diagnosis."""
    console.print(Panel("[bold red]Resolution failed[/bold red]", title="deplevel"))
    if isinstance(error, CyclicDependency):
        console.print("  Cycle:", style="red")
        for identity in error.cycle:
            console.print(f"    {identity!r}", markup=False, style="red")
        console.print(f"    -> back to {error.cycle[0]!r}", markup=False, style="dim")
    elif isinstance(error, UnknownDependency):
        console.print(
            f"  {error.item_id!r} depends on {error.missing_id!r}, "
            "which is not in the manifest",
            markup=False,
            style="red",
        )
    else:
        console.print(f"  {error}", markup=False, style="red")


def error_to_json(error: DepLevelError) -> dict[str, Any]:
    """Convert an error into a JSON-serializable dict."""
    data: dict[str, Any] = {"error": type(error).__name__, "message": str(error)}
    if isinstance(error, CyclicDependency):
        data["cycle"] = list(error.cycle)
    elif isinstance(error, UnknownDependency):
        data["item"] = error.item_id
        data["missing"] = error.missing_id
    elif isinstance(error, DuplicateIdentity):
        data["identity"] = error.identity
    return data
