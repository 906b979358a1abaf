"""Utility modules for ExpanderCalc."""

from expander_calc.utils.constants import BAR_TO_PA, T_CELSIUS_OFFSET
from expander_calc.utils.units import convert, get_unit_registry

__all__ = ["BAR_TO_PA", "T_CELSIUS_OFFSET", "convert", "get_unit_registry"]
