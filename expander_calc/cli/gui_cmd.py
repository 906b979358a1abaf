"""CLI command to launch the ExpanderCalc desktop form."""

from __future__ import annotations

import click


@click.command("gui")
def gui() -> None:
    """Launch the ExpanderCalc desktop application."""
    try:
        from expander_calc.ui.app import run

        run()
    except ImportError as e:
        click.echo(
            f"GUI dependencies not installed: {e}\n"
            f"Install with: pip install -e '.[ui]'"
        )
        raise SystemExit(1)
