"""Unit conversion utilities for ExpanderCalc.

Provides a lightweight unit conversion system built on top of pint,
with convenience functions for the quantities entered on the form and
the command line (bar, °C, cm³, m³/h, %).
"""

from __future__ import annotations

from functools import lru_cache

import pint

# Module-level unit registry (singleton)
_ureg = pint.UnitRegistry()
_ureg.default_format = "~P"  # short pretty format


def get_unit_registry() -> pint.UnitRegistry:
    """Return the shared pint UnitRegistry instance."""
    return _ureg


Q_ = _ureg.Quantity


# --- Convenience conversion functions ---


def pressure_to_si(value: float, unit: str) -> float:
    """Convert pressure value to Pascals.

    Args:
        value: Numeric pressure value.
        unit: Source unit string (e.g. "bar", "psi", "MPa", "kPa").

    Returns:
        Pressure in Pa.
    """
    return Q_(value, unit).to("Pa").magnitude


def pressure_from_si(value_pa: float, unit: str) -> float:
    """Convert pressure from Pascals to target unit."""
    return Q_(value_pa, "Pa").to(unit).magnitude


def temperature_to_si(value: float, unit: str) -> float:
    """Convert temperature to Kelvin.

    Args:
        value: Numeric temperature value.
        unit: Source unit string (e.g. "degC", "degF", "K").

    Returns:
        Temperature in K.
    """
    return Q_(value, unit).to("K").magnitude


def temperature_from_si(value_k: float, unit: str) -> float:
    """Convert temperature from Kelvin to target unit."""
    return Q_(value_k, "K").to(unit).magnitude


def temperature_difference_to_si(value: float, unit: str) -> float:
    """Convert a temperature difference (e.g. superheat) to kelvin."""
    return Q_(value, unit).to("K").magnitude


def volume_to_si(value: float, unit: str) -> float:
    """Convert volume to m³ (e.g. a displacement given in "cm**3")."""
    return Q_(value, unit).to("m**3").magnitude


def volume_flow_to_m3_per_hour(value: float, unit: str) -> float:
    """Convert a volumetric flow rate to m³/h."""
    return Q_(value, unit).to("m**3/hour").magnitude


def mass_flow_to_si(value: float, unit: str) -> float:
    """Convert mass flow rate to kg/s."""
    return Q_(value, unit).to("kg/s").magnitude


def fraction_from_percent(value: float) -> float:
    """Convert a percentage (e.g. an efficiency entered as 85) to a fraction."""
    return Q_(value, "percent").to("dimensionless").magnitude


@lru_cache(maxsize=256)
def convert(value: float, from_unit: str, to_unit: str) -> float:
    """General-purpose unit conversion.

    Args:
        value: Numeric value in *from_unit*.
        from_unit: Source unit string.
        to_unit: Target unit string.

    Returns:
        Converted numeric value.
    """
    return Q_(value, from_unit).to(to_unit).magnitude
