"""State-point resolution from two independent properties."""

from __future__ import annotations

from expander_calc.core.fluids import PropertyOracle
from expander_calc.core.phase import QUALITY_NOT_APPLICABLE
from expander_calc.cycle.components.base import FluidState

_STATE_PROPERTIES = ("P", "T", "H", "S")


def resolve_state(
    oracle: PropertyOracle,
    fluid: str,
    name1: str,
    value1: float,
    name2: str,
    value2: float,
    mass_flow: float = 0.0,
) -> FluidState:
    """Build a full FluidState from two known properties.

    Known inputs are taken as given; P, T, H and S not among them are
    queried, together with density, phase and (two-phase only) quality.

    Raises:
        FluidPropertyError: If any query fails.
    """
    known = {name1: value1, name2: value2}
    props = {
        name: known[name] if name in known else oracle.query(name, name1, value1, name2, value2, fluid)
        for name in _STATE_PROPERTIES
    }
    density = oracle.query("D", name1, value1, name2, value2, fluid)
    phase = oracle.phase(name1, value1, name2, value2, fluid)

    if not phase.is_two_phase:
        quality = QUALITY_NOT_APPLICABLE
    elif "Q" in known:
        quality = known["Q"]
    else:
        quality = oracle.query("Q", name1, value1, name2, value2, fluid)

    return FluidState(
        pressure=props["P"],
        temperature=props["T"],
        enthalpy=props["H"],
        entropy=props["S"],
        specific_volume=1.0 / density,
        quality=quality,
        phase=phase,
        mass_flow=mass_flow,
        fluid_name=fluid,
    )
