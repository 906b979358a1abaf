"""CLI command for listing the fluid catalogue."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from expander_calc.core.fluids import category_label, list_categories, list_fluids


@click.command("fluids")
@click.option("--category", "-c", type=click.Choice(list_categories()), default=None,
              help="Only list one fluid category.")
@click.pass_context
def fluids(ctx: click.Context, category: str | None) -> None:
    """List available working fluids."""
    console: Console = ctx.obj.get("console", Console())
    table = Table(title="Available Fluids")
    table.add_column("Category", style="yellow")
    table.add_column("Name", style="cyan")
    table.add_column("CoolProp Name", style="dim")

    categories = [category] if category else list_categories()
    for cat in categories:
        for display, coolprop_name in list_fluids(cat).items():
            table.add_row(category_label(cat), display, coolprop_name)
    console.print(table)
