"""ExpanderCalc command-line interface package.

Supports ``python -m expander_calc.cli`` as an alternative to the ``expcalc`` entry point.
"""

from expander_calc.cli.main import cli, main

__all__ = ["cli", "main"]
