"""CLI command for generating case reports."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from expander_calc.core.config import load_case_json
from expander_calc.reports.summary import generate_html_report, generate_text_report


@click.command("report")
@click.argument("path", type=click.Path(exists=True))
@click.option("--format", "fmt", type=click.Choice(["text", "html"]), default="text", show_default=True,
              help="Report format.")
@click.option("--output", "-o", type=click.Path(), default=None, help="Write the report to a file.")
@click.pass_context
def report(ctx: click.Context, path: str, fmt: str, output: str | None) -> None:
    """Generate a report from a saved case file."""
    console: Console = ctx.obj.get("console", Console())
    try:
        state = load_case_json(path)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise SystemExit(1)

    text = generate_html_report(state) if fmt == "html" else generate_text_report(state)

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[dim]Report written to {output}[/dim]")
    else:
        click.echo(text)
