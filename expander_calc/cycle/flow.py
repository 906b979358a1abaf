"""Flow specifications and mass-flow resolution.

The mass flow through the expander is either given directly or derived
from a volume flow at the inlet, which needs the inlet specific volume.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from expander_calc.utils.constants import SECONDS_PER_HOUR, SECONDS_PER_MINUTE
from expander_calc.utils.validation import ValidationResult, validate_efficiency, validate_positive


@dataclass(frozen=True)
class MassFlow:
    """Mass flow rate given directly."""

    mass_flow: float  # kg/s

    mode = "mass"


@dataclass(frozen=True)
class DisplacementFlow:
    """Positive-displacement machine: swept volume per revolution and speed."""

    displacement: float  # m³ per revolution
    rpm: float  # 1/min
    volumetric_efficiency: float  # fraction (0, 1]

    mode = "displacement"

    @property
    def volume_flow(self) -> float:
        """Effective inlet volume flow [m³/s]."""
        return (self.displacement * self.rpm / SECONDS_PER_MINUTE) * self.volumetric_efficiency


@dataclass(frozen=True)
class VolumetricFlow:
    """Inlet volume flow rate given directly."""

    volume_flow: float  # m³/h

    mode = "volume"


FlowSpec = Union[MassFlow, DisplacementFlow, VolumetricFlow]

_FLOW_TYPES: dict[str, type] = {
    MassFlow.mode: MassFlow,
    DisplacementFlow.mode: DisplacementFlow,
    VolumetricFlow.mode: VolumetricFlow,
}


def validate_flow(flow: FlowSpec, result: ValidationResult) -> None:
    """Check that every numeric flow input is strictly positive."""
    if isinstance(flow, MassFlow):
        validate_positive("mass_flow", flow.mass_flow, result)
    elif isinstance(flow, DisplacementFlow):
        validate_positive("displacement", flow.displacement, result)
        validate_positive("rpm", flow.rpm, result)
        validate_efficiency("volumetric_efficiency", flow.volumetric_efficiency, result)
    elif isinstance(flow, VolumetricFlow):
        validate_positive("volume_flow", flow.volume_flow, result)
    else:
        result.error("flow", f"Unknown flow specification: {flow!r}")


def resolve_mass_flow(flow: FlowSpec, inlet_specific_volume: float) -> float:
    """Mass flow rate [kg/s] for a flow specification.

    Args:
        flow: Validated flow specification.
        inlet_specific_volume: Specific volume at the expander inlet [m³/kg].
    """
    if isinstance(flow, MassFlow):
        return flow.mass_flow
    if isinstance(flow, DisplacementFlow):
        return flow.volume_flow / inlet_specific_volume
    if isinstance(flow, VolumetricFlow):
        return (flow.volume_flow / SECONDS_PER_HOUR) / inlet_specific_volume
    raise TypeError(f"Unknown flow specification: {flow!r}")


def flow_to_dict(flow: FlowSpec) -> dict[str, Any]:
    d = {k: getattr(flow, k) for k in flow.__dataclass_fields__}
    d["mode"] = flow.mode
    return d


def flow_from_dict(data: dict[str, Any]) -> FlowSpec:
    """Rebuild a flow specification saved by :func:`flow_to_dict`."""
    data = dict(data)
    mode = data.pop("mode", MassFlow.mode)
    if mode not in _FLOW_TYPES:
        raise ValueError(f"Unknown flow mode '{mode}'. Available: {list(_FLOW_TYPES)}")
    return _FLOW_TYPES[mode](**data)
