"""Expander cycle evaluation for ExpanderCalc.

Resolves the inlet state, expands the fluid to the outlet pressure
through an :class:`Expander` and reconciles mass flow, volume flow and
shaft power.

Supported input modes:
- Inlet: pressure + temperature, or saturation temperature + superheat
- Outlet: pressure, or condensing temperature
- Flow: mass flow, displacement + speed, or inlet volume flow
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Union

from expander_calc.core.fluids import PropertyOracle
from expander_calc.cycle.components.base import FluidState
from expander_calc.cycle.components.expander import Expander
from expander_calc.cycle.flow import (
    FlowSpec,
    MassFlow,
    flow_from_dict,
    flow_to_dict,
    resolve_mass_flow,
    validate_flow,
)
from expander_calc.cycle.states import resolve_state
from expander_calc.utils.constants import PA_TO_BAR
from expander_calc.utils.validation import (
    ValidationResult,
    validate_efficiency,
    validate_non_negative,
    validate_positive,
)

logger = logging.getLogger(__name__)


class CycleInputError(ValueError):
    """Raised when a cycle definition is invalid or physically inconsistent."""

    def __init__(self, validation: ValidationResult):
        self.validation = validation
        super().__init__(validation.describe())


# --- Inlet / outlet specifications ---


@dataclass(frozen=True)
class PressureTemperatureInlet:
    """Inlet fixed by pressure and temperature."""

    pressure: float  # Pa
    temperature: float  # K

    mode = "pt"


@dataclass(frozen=True)
class SaturationInlet:
    """Inlet fixed by saturation temperature and superheat above it."""

    saturation_temperature: float  # K
    superheat: float = 0.0  # K

    mode = "saturation"


@dataclass(frozen=True)
class OutletPressure:
    """Outlet pressure given directly."""

    pressure: float  # Pa

    mode = "pressure"


@dataclass(frozen=True)
class CondensingTemperature:
    """Outlet pressure taken as the saturated-liquid pressure at this temperature."""

    temperature: float  # K

    mode = "condensing"


InletSpec = Union[PressureTemperatureInlet, SaturationInlet]
OutletSpec = Union[OutletPressure, CondensingTemperature]

_INLET_TYPES: dict[str, type] = {
    PressureTemperatureInlet.mode: PressureTemperatureInlet,
    SaturationInlet.mode: SaturationInlet,
}
_OUTLET_TYPES: dict[str, type] = {
    OutletPressure.mode: OutletPressure,
    CondensingTemperature.mode: CondensingTemperature,
}


def _spec_to_dict(spec: Any) -> dict[str, Any]:
    d = dataclasses.asdict(spec)
    d["mode"] = spec.mode
    return d


def _spec_from_dict(data: dict[str, Any], types: dict[str, type], kind: str) -> Any:
    data = dict(data)
    mode = data.pop("mode", None)
    if mode not in types:
        raise ValueError(f"Unknown {kind} mode '{mode}'. Available: {list(types)}")
    return types[mode](**data)


@dataclass(frozen=True)
class CycleDefinition:
    """Everything needed to evaluate one expansion."""

    fluid: str = "R245fa"  # CoolProp fluid name
    inlet: InletSpec = PressureTemperatureInlet(pressure=20e5, temperature=423.15)
    outlet: OutletSpec = OutletPressure(pressure=4e5)
    isentropic_efficiency: float = 0.85
    flow: FlowSpec = MassFlow(mass_flow=1.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fluid": self.fluid,
            "inlet": _spec_to_dict(self.inlet),
            "outlet": _spec_to_dict(self.outlet),
            "isentropic_efficiency": self.isentropic_efficiency,
            "flow": flow_to_dict(self.flow),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CycleDefinition:
        return cls(
            fluid=data["fluid"],
            inlet=_spec_from_dict(data["inlet"], _INLET_TYPES, "inlet"),
            outlet=_spec_from_dict(data["outlet"], _OUTLET_TYPES, "outlet"),
            isentropic_efficiency=data["isentropic_efficiency"],
            flow=flow_from_dict(data["flow"]),
        )


@dataclass(frozen=True)
class CycleResult:
    """State points and flow/power summary of one expansion."""

    inlet: FluidState
    ideal_outlet: FluidState
    actual_outlet: FluidState
    mass_flow: float  # kg/s
    inlet_volume_flow: float  # m³/s
    power: float  # W (positive = produced)

    @property
    def isentropic_enthalpy_drop(self) -> float:
        """h1 - h2s [J/kg]."""
        return self.inlet.enthalpy - self.ideal_outlet.enthalpy

    @property
    def actual_enthalpy_drop(self) -> float:
        """h1 - h2a [J/kg]."""
        return self.inlet.enthalpy - self.actual_outlet.enthalpy

    @property
    def pressure_ratio(self) -> float:
        return self.inlet.pressure / self.actual_outlet.pressure

    @property
    def states(self) -> tuple[FluidState, FluidState, FluidState]:
        return self.inlet, self.ideal_outlet, self.actual_outlet

    def to_dict(self) -> dict[str, Any]:
        def _state(s: FluidState) -> dict[str, Any]:
            d = dataclasses.asdict(s)
            d["phase"] = s.phase.name
            d["quality_label"] = s.quality_label
            return d

        return {
            "inlet": _state(self.inlet),
            "ideal_outlet": _state(self.ideal_outlet),
            "actual_outlet": _state(self.actual_outlet),
            "mass_flow": self.mass_flow,
            "inlet_volume_flow": self.inlet_volume_flow,
            "power": self.power,
            "pressure_ratio": self.pressure_ratio,
            "isentropic_enthalpy_drop": self.isentropic_enthalpy_drop,
            "actual_enthalpy_drop": self.actual_enthalpy_drop,
        }


# --- Validation ---


def validate_definition(definition: CycleDefinition) -> ValidationResult:
    """Check every input that can be checked without the property oracle."""
    result = ValidationResult()

    if not isinstance(definition.fluid, str) or not definition.fluid.strip():
        result.error("fluid", "A working fluid must be selected")

    validate_efficiency("isentropic_efficiency", definition.isentropic_efficiency, result)

    inlet = definition.inlet
    if isinstance(inlet, PressureTemperatureInlet):
        validate_positive("inlet_pressure", inlet.pressure, result)
        validate_positive("inlet_temperature", inlet.temperature, result)
    elif isinstance(inlet, SaturationInlet):
        validate_positive("saturation_temperature", inlet.saturation_temperature, result)
        validate_non_negative("superheat", inlet.superheat, result)
    else:
        result.error("inlet", f"Unknown inlet specification: {inlet!r}")

    outlet = definition.outlet
    if isinstance(outlet, OutletPressure):
        validate_positive("outlet_pressure", outlet.pressure, result)
    elif isinstance(outlet, CondensingTemperature):
        validate_positive("condensing_temperature", outlet.temperature, result)
    else:
        result.error("outlet", f"Unknown outlet specification: {outlet!r}")

    validate_flow(definition.flow, result)
    return result


# --- Evaluation ---


def _resolve_inlet(oracle: PropertyOracle, fluid: str, inlet: InletSpec) -> FluidState:
    if isinstance(inlet, PressureTemperatureInlet):
        return resolve_state(oracle, fluid, "P", inlet.pressure, "T", inlet.temperature)

    P_sat = oracle.saturation_pressure(fluid, inlet.saturation_temperature, 1.0)
    if inlet.superheat == 0.0:
        # A (P, T) flash exactly on the saturation line is ill-defined
        return resolve_state(oracle, fluid, "P", P_sat, "Q", 1.0)
    T_in = inlet.saturation_temperature + inlet.superheat
    return resolve_state(oracle, fluid, "P", P_sat, "T", T_in)


def _resolve_outlet_pressure(oracle: PropertyOracle, fluid: str, outlet: OutletSpec) -> float:
    if isinstance(outlet, OutletPressure):
        return outlet.pressure
    return oracle.saturation_pressure(fluid, outlet.temperature, 0.0)


def evaluate_cycle(definition: CycleDefinition, oracle: PropertyOracle) -> CycleResult:
    """Evaluate one expansion.

    Args:
        definition: Fluid, inlet/outlet specification, efficiency and flow.
        oracle: Ready property oracle.

    Returns:
        CycleResult with the three state points, flows and power.

    Raises:
        CycleInputError: If the inputs are invalid (checked before any
            property query) or the outlet pressure is not below the inlet.
        FluidPropertyError: If a property query fails.
    """
    validation = validate_definition(definition)
    if not validation.is_valid:
        raise CycleInputError(validation)

    fluid = definition.fluid
    inlet = _resolve_inlet(oracle, fluid, definition.inlet)
    P_out = _resolve_outlet_pressure(oracle, fluid, definition.outlet)

    if P_out >= inlet.pressure:
        check = ValidationResult()
        check.error(
            "outlet_pressure",
            f"Outlet pressure {P_out * PA_TO_BAR:.4g} bar must be below "
            f"inlet pressure {inlet.pressure * PA_TO_BAR:.4g} bar",
            value=P_out,
            limit=inlet.pressure,
        )
        raise CycleInputError(check)

    mass_flow = resolve_mass_flow(definition.flow, inlet.specific_volume)
    inlet = dataclasses.replace(inlet, mass_flow=mass_flow)

    expander = Expander(oracle, efficiency=definition.isentropic_efficiency)
    expander.compute(inlet, outlet_pressure=P_out)
    stage = expander.result

    logger.debug(
        "Expanded %s %.4g -> %.4g bar: dh_s=%.5g J/kg, dh_a=%.5g J/kg, mdot=%.5g kg/s",
        fluid,
        inlet.pressure * PA_TO_BAR,
        P_out * PA_TO_BAR,
        stage.isentropic_enthalpy_drop,
        stage.actual_enthalpy_drop,
        mass_flow,
    )

    return CycleResult(
        inlet=inlet,
        ideal_outlet=stage.ideal_outlet,
        actual_outlet=stage.outlet,
        mass_flow=mass_flow,
        inlet_volume_flow=mass_flow * inlet.specific_volume,
        power=stage.shaft_power,
    )
