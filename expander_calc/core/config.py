"""Case state management and project I/O for ExpanderCalc.

A case bundles the inputs of one calculation with its results so it can
be saved to JSON, inspected and turned into a report later.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from expander_calc.cycle.flow import DisplacementFlow, MassFlow, VolumetricFlow
from expander_calc.cycle.solver import (
    CondensingTemperature,
    CycleDefinition,
    CycleResult,
    OutletPressure,
    PressureTemperatureInlet,
    SaturationInlet,
)
from expander_calc.utils.units import (
    fraction_from_percent,
    pressure_to_si,
    temperature_difference_to_si,
    temperature_to_si,
    volume_to_si,
)

logger = logging.getLogger(__name__)

# Form defaults in user units
DEFAULT_INPUTS: dict[str, Any] = {
    "category": "orc",
    "inlet_mode": "pt",
    "inlet_pressure_bar": 20.0,
    "inlet_temperature_c": 150.0,
    "saturation_temperature_c": 120.0,
    "superheat_k": 10.0,
    "outlet_mode": "pressure",
    "outlet_pressure_bar": 4.0,
    "condensing_temperature_c": 35.0,
    "isentropic_efficiency_pct": 85.0,
    "flow_mode": "mass",
    "mass_flow_kg_s": 1.0,
    "displacement_cm3": 500.0,
    "rpm": 3000.0,
    "volumetric_efficiency_pct": 90.0,
    "volume_flow_m3_h": 100.0,
}


# --- Project metadata ---


@dataclass
class ProjectMeta:
    """Top-level case metadata."""

    name: str = "Untitled"
    description: str = ""
    author: str = ""
    version: str = "0.1.0"
    created: str = ""
    modified: str = ""
    coolprop_version: str = ""

    def touch(self) -> None:
        """Update the modified timestamp."""
        now = datetime.now(timezone.utc).isoformat()
        if not self.created:
            self.created = now
        self.modified = now


@dataclass
class CaseState:
    """One saved calculation: inputs plus results.

    ``results`` holds :meth:`CycleResult.to_dict` output and is empty for
    cases saved before evaluation.
    """

    meta: ProjectMeta = field(default_factory=ProjectMeta)
    category: str = "orc"
    definition: CycleDefinition = field(default_factory=CycleDefinition)
    results: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_result(
        cls,
        definition: CycleDefinition,
        result: CycleResult,
        *,
        category: str = "orc",
        name: str = "Untitled",
        coolprop_version: str = "",
    ) -> CaseState:
        return cls(
            meta=ProjectMeta(name=name, coolprop_version=coolprop_version),
            category=category,
            definition=definition,
            results=result.to_dict(),
        )


# --- JSON serialization ---


class _NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        return super().default(obj)


def save_case_json(state: CaseState, path: str | Path) -> None:
    """Save a case to a JSON file."""
    path = Path(path)
    state.meta.touch()

    data = {
        "meta": asdict(state.meta),
        "category": state.category,
        "definition": state.definition.to_dict(),
        "results": state.results,
    }

    with open(path, "w") as f:
        json.dump(data, f, indent=2, cls=_NumpyEncoder)

    logger.info("Saved case to %s", path)


def load_case_json(path: str | Path) -> CaseState:
    """Load a case from a JSON file.

    Raises:
        ValueError: If the file does not describe a valid case.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    try:
        meta = ProjectMeta(**data.get("meta", {}))
        definition = CycleDefinition.from_dict(data["definition"])
    except (KeyError, TypeError) as exc:
        raise ValueError(f"{path} is not a valid case file: {exc}") from exc

    return CaseState(
        meta=meta,
        category=data.get("category", "orc"),
        definition=definition,
        results=data.get("results", {}),
    )


# --- Form / command-line inputs ---


def definition_from_inputs(fluid: str, values: dict[str, Any]) -> CycleDefinition:
    """Build a CycleDefinition from inputs in user units.

    *values* uses the keys of :data:`DEFAULT_INPUTS` (bar, °C, K, %, cm³,
    m³/h); missing keys fall back to the defaults.

    Raises:
        ValueError: If a mode key names an unknown mode.
    """
    v = {**DEFAULT_INPUTS, **values}

    if v["inlet_mode"] == PressureTemperatureInlet.mode:
        inlet = PressureTemperatureInlet(
            pressure=pressure_to_si(v["inlet_pressure_bar"], "bar"),
            temperature=temperature_to_si(v["inlet_temperature_c"], "degC"),
        )
    elif v["inlet_mode"] == SaturationInlet.mode:
        inlet = SaturationInlet(
            saturation_temperature=temperature_to_si(v["saturation_temperature_c"], "degC"),
            superheat=temperature_difference_to_si(v["superheat_k"], "K"),
        )
    else:
        raise ValueError(f"Unknown inlet mode '{v['inlet_mode']}'")

    if v["outlet_mode"] == OutletPressure.mode:
        outlet = OutletPressure(pressure=pressure_to_si(v["outlet_pressure_bar"], "bar"))
    elif v["outlet_mode"] == CondensingTemperature.mode:
        outlet = CondensingTemperature(
            temperature=temperature_to_si(v["condensing_temperature_c"], "degC")
        )
    else:
        raise ValueError(f"Unknown outlet mode '{v['outlet_mode']}'")

    if v["flow_mode"] == MassFlow.mode:
        flow = MassFlow(mass_flow=v["mass_flow_kg_s"])
    elif v["flow_mode"] == DisplacementFlow.mode:
        flow = DisplacementFlow(
            displacement=volume_to_si(v["displacement_cm3"], "cm**3"),
            rpm=v["rpm"],
            volumetric_efficiency=fraction_from_percent(v["volumetric_efficiency_pct"]),
        )
    elif v["flow_mode"] == VolumetricFlow.mode:
        flow = VolumetricFlow(volume_flow=v["volume_flow_m3_h"])
    else:
        raise ValueError(f"Unknown flow mode '{v['flow_mode']}'")

    return CycleDefinition(
        fluid=fluid,
        inlet=inlet,
        outlet=outlet,
        isentropic_efficiency=fraction_from_percent(v["isentropic_efficiency_pct"]),
        flow=flow,
    )
