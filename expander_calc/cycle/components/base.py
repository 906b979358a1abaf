"""Base classes for cycle components.

Defines the state-point type and the common interface for thermodynamic
cycle components.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from expander_calc.core.phase import QUALITY_NOT_APPLICABLE, Phase, quality_label


@dataclass(frozen=True)
class FluidState:
    """Thermodynamic state of a fluid at a point in the cycle.

    All properties in SI units.
    """

    pressure: float = 0.0  # Pa
    temperature: float = 0.0  # K
    enthalpy: float = 0.0  # J/kg
    entropy: float = 0.0  # J/(kg·K)
    specific_volume: float = 0.0  # m³/kg
    quality: float = QUALITY_NOT_APPLICABLE  # vapour quality (-1 = single phase)
    phase: Phase = Phase.UNKNOWN
    mass_flow: float = 0.0  # kg/s
    fluid_name: str = ""

    @property
    def density(self) -> float:
        return 1.0 / self.specific_volume if self.specific_volume > 0 else 0.0

    @property
    def is_two_phase(self) -> bool:
        return self.phase.is_two_phase

    @property
    def quality_label(self) -> str:
        return quality_label(self.phase, self.quality)


class CycleComponent(ABC):
    """Abstract base class for a cycle component.

    Every component takes an inlet FluidState and produces an outlet
    FluidState, along with power and performance metrics.
    """

    name: str = ""
    component_type: str = ""

    @abstractmethod
    def compute(self, inlet: FluidState, **kwargs: Any) -> FluidState:
        """Run the component model.

        Args:
            inlet: Inlet fluid state.
            **kwargs: Component-specific parameters.

        Returns:
            Outlet fluid state.
        """
        ...

    @abstractmethod
    def power(self) -> float:
        """Net power [W] consumed (positive) or produced (negative)."""
        ...

    def summary(self) -> dict[str, Any]:
        """Return a summary dictionary of the component state."""
        return {
            "name": self.name,
            "type": self.component_type,
            "power_W": self.power(),
        }
