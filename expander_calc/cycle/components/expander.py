"""Expander component model for ExpanderCalc cycle analysis.

Models a real-fluid expander (turbine, scroll or screw machine) expanding
the working fluid to a lower pressure with an isentropic efficiency.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from expander_calc.core.fluids import PropertyOracle
from expander_calc.cycle.components.base import CycleComponent, FluidState
from expander_calc.cycle.states import resolve_state


@dataclass(frozen=True)
class ExpanderResult:
    """Expander analysis result."""

    inlet: FluidState
    ideal_outlet: FluidState
    outlet: FluidState
    pressure_ratio: float = 0.0  # P_in / P_out
    isentropic_enthalpy_drop: float = 0.0  # J/kg
    actual_enthalpy_drop: float = 0.0  # J/kg
    shaft_power: float = 0.0  # W (positive = produced)
    efficiency: float = 0.0


class Expander(CycleComponent):
    """Real-fluid expander with isentropic efficiency.

    With inlet state 1 and outlet pressure P2:
        s2s = s1,  h2s = h(P2, s2s)
        h2a = h1 - η · (h1 - h2s)
        W = ṁ · (h1 - h2a)

    Args:
        oracle: Property oracle used for the outlet states.
        name: Component name.
        efficiency: Isentropic efficiency (0–1].
    """

    component_type = "expander"

    def __init__(self, oracle: PropertyOracle, name: str = "expander", efficiency: float = 0.85):
        self.name = name
        self._oracle = oracle
        self._efficiency = efficiency
        self._result: ExpanderResult | None = None

    @property
    def result(self) -> ExpanderResult | None:
        return self._result

    def compute(self, inlet: FluidState, outlet_pressure: float = 0.0, **kwargs: Any) -> FluidState:
        """Compute the actual expander outlet state.

        Args:
            inlet: Fully resolved inlet state, including mass flow.
            outlet_pressure: Expander discharge pressure [Pa].

        Returns:
            Actual outlet fluid state.
        """
        fluid = inlet.fluid_name

        ideal = resolve_state(
            self._oracle, fluid, "P", outlet_pressure, "S", inlet.entropy, mass_flow=inlet.mass_flow
        )

        dh_s = inlet.enthalpy - ideal.enthalpy
        h_out = inlet.enthalpy - self._efficiency * dh_s

        outlet = resolve_state(
            self._oracle, fluid, "P", outlet_pressure, "H", h_out, mass_flow=inlet.mass_flow
        )
        dh_a = inlet.enthalpy - outlet.enthalpy

        self._result = ExpanderResult(
            inlet=inlet,
            ideal_outlet=ideal,
            outlet=outlet,
            pressure_ratio=inlet.pressure / outlet_pressure,
            isentropic_enthalpy_drop=dh_s,
            actual_enthalpy_drop=dh_a,
            shaft_power=inlet.mass_flow * dh_a,
            efficiency=self._efficiency,
        )

        return outlet

    def power(self) -> float:
        """Shaft power [W] (negative convention: produced)."""
        return -(self._result.shaft_power) if self._result else 0.0

    def summary(self) -> dict[str, Any]:
        d = super().summary()
        if self._result:
            d["pressure_ratio"] = self._result.pressure_ratio
            d["efficiency"] = self._result.efficiency
            d["isentropic_dh_kJ_kg"] = self._result.isentropic_enthalpy_drop / 1e3
            d["actual_dh_kJ_kg"] = self._result.actual_enthalpy_drop / 1e3
            d["shaft_power_kW"] = self._result.shaft_power / 1e3
        return d
