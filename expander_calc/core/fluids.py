"""Fluid property interface wrapping CoolProp.

:class:`PropertyOracle` forwards property queries to CoolProp's
``PropsSI`` and translates every failure into :class:`FluidPropertyError`.
The oracle is built by :mod:`expander_calc.core.loader` once the CoolProp
module has been imported; this module never imports CoolProp itself.

The bundled fluid catalogue groups the selectable working fluids into
categories (ORC, steam, gases).
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import ModuleType
from typing import Any

import numpy as np

from expander_calc.core.phase import Phase

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_FLUID_DB_PATH = _DATA_DIR / "fluids.json"


class FluidPropertyError(Exception):
    """Raised when a fluid property calculation fails."""


@dataclass
class SaturationDome:
    """Saturation curve in the T-s plane.

    Temperatures in K, entropies in J/(kg·K).
    """

    fluid: str
    temperature: np.ndarray = field(default_factory=lambda: np.empty(0))
    s_liquid: np.ndarray = field(default_factory=lambda: np.empty(0))
    s_vapour: np.ndarray = field(default_factory=lambda: np.empty(0))
    critical: tuple[float, float] | None = None  # (s, T)

    @property
    def is_empty(self) -> bool:
        return self.temperature.size == 0


class PropertyOracle:
    """Deterministic property look-ups for pure and pseudo-pure fluids.

    Args:
        module: The imported ``CoolProp.CoolProp`` module.
    """

    def __init__(self, module: ModuleType):
        self._cp = module

    @property
    def version(self) -> str:
        """CoolProp library version string."""
        return self._cp.get_global_param_string("version")

    # --- Core property access ---

    def query(
        self,
        output: str,
        name1: str,
        value1: float,
        name2: str,
        value2: float,
        fluid: str,
    ) -> float:
        """Return property *output* at the state fixed by two inputs.

        Raises:
            FluidPropertyError: If CoolProp rejects the state or returns a
                non-finite value.
        """
        try:
            value = self._cp.PropsSI(output, name1, value1, name2, value2, fluid)
        except Exception as exc:
            raise FluidPropertyError(
                f"{output} lookup failed for {fluid} at "
                f"{name1}={value1:.6g}, {name2}={value2:.6g}: {exc}"
            ) from exc

        if not math.isfinite(value):
            raise FluidPropertyError(
                f"{output} is not defined for {fluid} at "
                f"{name1}={value1:.6g}, {name2}={value2:.6g}"
            )
        return float(value)

    def phase(self, name1: str, value1: float, name2: str, value2: float, fluid: str) -> Phase:
        """Phase of the state fixed by two inputs."""
        return Phase.from_index(self.query("Phase", name1, value1, name2, value2, fluid))

    def fluid_constant(self, output: str, fluid: str) -> float:
        """Trivial (state-independent) property such as ``Tcrit`` or ``Tmin``."""
        try:
            value = self._cp.PropsSI(output, fluid)
        except Exception as exc:
            raise FluidPropertyError(f"{output} lookup failed for {fluid}: {exc}") from exc
        if not math.isfinite(value):
            raise FluidPropertyError(f"{output} is not defined for {fluid}")
        return float(value)

    # --- Convenience lookups ---

    def saturation_pressure(self, fluid: str, T: float, quality: float) -> float:
        """Saturation pressure [Pa] at T [K] on the liquid (0) or vapour (1) line."""
        return self.query("P", "T", T, "Q", quality, fluid)

    def critical_point(self, fluid: str) -> tuple[float, float]:
        """Critical temperature [K] and pressure [Pa]."""
        return self.fluid_constant("Tcrit", fluid), self.fluid_constant("Pcrit", fluid)

    def saturation_dome(self, fluid: str, n_points: int = 100) -> SaturationDome:
        """Sample the saturation curve in the T-s plane.

        Points the oracle rejects (e.g. close to the triple point of some
        fluids) are skipped; an empty dome is returned when none succeed.
        """
        T_crit, _ = self.critical_point(fluid)
        try:
            T_min = self.fluid_constant("Tmin", fluid)
        except FluidPropertyError:
            T_min = self.fluid_constant("Ttriple", fluid)

        T_start, T_end = T_min * 1.01, T_crit * 0.999
        dome = SaturationDome(fluid=fluid)
        if T_start >= T_end:
            logger.warning("Empty saturation range for %s: %.3g K to %.3g K", fluid, T_start, T_end)
            return dome

        temps: list[float] = []
        s_liq: list[float] = []
        s_vap: list[float] = []
        for T in np.linspace(T_start, T_end, n_points):
            try:
                s_l = self.query("S", "T", T, "Q", 0.0, fluid)
                s_v = self.query("S", "T", T, "Q", 1.0, fluid)
            except FluidPropertyError as exc:
                logger.debug("Skipping saturation point T=%.2f K: %s", T, exc)
                continue
            temps.append(float(T))
            s_liq.append(s_l)
            s_vap.append(s_v)

        dome.temperature = np.asarray(temps)
        dome.s_liquid = np.asarray(s_liq)
        dome.s_vapour = np.asarray(s_vap)

        try:
            # (T, D) needs no flash at the critical point
            rho_crit = self.fluid_constant("rhomass_critical", fluid)
            s_crit = self.query("S", "T", T_crit, "D", rho_crit, fluid)
            dome.critical = (s_crit, T_crit)
        except FluidPropertyError as exc:
            logger.debug("Critical entropy unavailable for %s: %s", fluid, exc)

        logger.debug("Saturation dome for %s: %d points", fluid, dome.temperature.size)
        return dome

    def __repr__(self) -> str:
        return f"PropertyOracle({self._cp.__name__})"


# --- Fluid catalogue ---


@lru_cache(maxsize=1)
def _load_fluid_db() -> dict[str, Any]:
    """Load the fluid catalogue JSON file."""
    if not _FLUID_DB_PATH.exists():
        logger.warning("Fluid catalogue not found at %s", _FLUID_DB_PATH)
        return {}
    with open(_FLUID_DB_PATH) as f:
        return json.load(f)


def list_categories() -> list[str]:
    """Return the fluid category keys (e.g. ``orc``, ``steam``, ``gas``)."""
    return list(_load_fluid_db().keys())


def category_label(category: str) -> str:
    """Human-readable name of a category."""
    db = _load_fluid_db()
    if category not in db:
        raise KeyError(f"Fluid category '{category}' not found. Available: {list(db.keys())}")
    return db[category].get("label", category)


def list_fluids(category: str) -> dict[str, str]:
    """Return ``{display name: CoolProp name}`` for one category.

    Raises:
        KeyError: If the category is unknown.
    """
    db = _load_fluid_db()
    if category not in db:
        raise KeyError(f"Fluid category '{category}' not found. Available: {list(db.keys())}")
    return dict(db[category]["fluids"])


def get_fluid_info(name: str) -> dict[str, str]:
    """Look up a fluid by display name or CoolProp name.

    Args:
        name: Fluid name (case-insensitive lookup).

    Returns:
        Dictionary with ``display_name``, ``coolprop_name`` and ``category``.

    Raises:
        KeyError: If the fluid is not in the catalogue.
    """
    db = _load_fluid_db()
    for category, entry in db.items():
        for display, coolprop_name in entry["fluids"].items():
            if name.lower() in (display.lower(), coolprop_name.lower()):
                return {
                    "display_name": display,
                    "coolprop_name": coolprop_name,
                    "category": category,
                }
    raise KeyError(f"Fluid '{name}' not found in the catalogue")


def resolve_fluid_name(name: str) -> str:
    """CoolProp name for a catalogue entry; unknown names pass through.

    Passing through lets any CoolProp fluid be used from the command line;
    an invalid name then fails at the first oracle query.
    """
    try:
        return get_fluid_info(name)["coolprop_name"]
    except KeyError:
        return name
