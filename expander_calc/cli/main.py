"""ExpanderCalc command-line interface.

Entry point for the ``expcalc`` CLI tool.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from expander_calc import __app_name__, __version__
from expander_calc.core.context import AppContext

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name=__app_name__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """ExpanderCalc — real-fluid expander calculator.

    Expands a working fluid from an inlet state to an outlet pressure
    with CoolProp properties and reports the state points, mass flow
    and shaft power.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    ctx.obj["app"] = AppContext()


# Import and register sub-commands
from expander_calc.cli.run_cmd import run  # noqa: E402
from expander_calc.cli.fluids_cmd import fluids  # noqa: E402
from expander_calc.cli.info_cmd import info  # noqa: E402
from expander_calc.cli.report_cmd import report  # noqa: E402
from expander_calc.cli.gui_cmd import gui  # noqa: E402

cli.add_command(run)
cli.add_command(fluids)
cli.add_command(info)
cli.add_command(report)
cli.add_command(gui)


def main() -> None:
    """Convenience wrapper for entry-point scripts."""
    cli()
