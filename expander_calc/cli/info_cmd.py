"""CLI command for inspecting saved case files."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from expander_calc.core.config import load_case_json
from expander_calc.reports.summary import STATE_COLUMNS, describe_inputs, saved_state_rows, saved_summary_rows


@click.command("info")
@click.argument("path", type=click.Path(exists=True))
@click.pass_context
def info(ctx: click.Context, path: str) -> None:
    """Display summary of a case file."""
    console: Console = ctx.obj.get("console", Console())
    try:
        state = load_case_json(path)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise SystemExit(1)

    tree = Tree(f"[bold]{state.meta.name}[/bold]")
    meta = tree.add("[cyan]Metadata[/cyan]")
    meta.add(f"Author: {state.meta.author or '—'}")
    meta.add(f"Version: {state.meta.version}")
    meta.add(f"Modified: {state.meta.modified or '—'}")
    meta.add(f"CoolProp: {state.meta.coolprop_version or '—'}")

    inputs = tree.add("[cyan]Inputs[/cyan]")
    inputs.add(f"Category: {state.category}")
    for label, value in describe_inputs(state):
        inputs.add(f"{label}: {value}")

    if state.results:
        states = tree.add("[cyan]State Points[/cyan]")
        for name, row in saved_state_rows(state.results):
            node = states.add(name)
            for (col, unit), value in zip(STATE_COLUMNS, row):
                node.add(f"{col}: {value} {unit}".rstrip())

        perf = tree.add("[cyan]Performance[/cyan]")
        for label, value, unit in saved_summary_rows(state.results):
            perf.add(f"{label}: {value} {unit}")

    console.print(tree)
