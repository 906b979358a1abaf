"""Phase classification for CoolProp states.

CoolProp reports the phase of a state as an integer index. This module
maps every index onto a closed :class:`Phase` enumeration and turns a
(phase, quality) pair into the label shown next to each state point.
"""

from __future__ import annotations

from enum import IntEnum

# Quality within this distance of 0 or 1 is shown as a saturation boundary.
QUALITY_TOLERANCE = 1e-6

# Sentinel for "quality not applicable" (single-phase states).
QUALITY_NOT_APPLICABLE = -1.0


class Phase(IntEnum):
    """Phase index as reported by CoolProp (``CoolProp.iphase_*``)."""

    LIQUID = 0
    SUPERCRITICAL = 1
    SUPERCRITICAL_GAS = 2
    SUPERCRITICAL_LIQUID = 3
    CRITICAL_POINT = 4
    GAS = 5
    TWO_PHASE = 6
    UNKNOWN = 7
    NOT_IMPOSED = 8

    @classmethod
    def from_index(cls, code: float | int) -> Phase:
        """Map a raw phase index onto the enumeration.

        CoolProp returns the index as a float through ``PropsSI``; codes
        without a member become :attr:`UNKNOWN`.
        """
        try:
            return cls(int(code))
        except (TypeError, ValueError, OverflowError):
            return cls.UNKNOWN

    @property
    def is_two_phase(self) -> bool:
        return self is Phase.TWO_PHASE


_PHASE_LABELS: dict[Phase, str] = {
    Phase.LIQUID: "Subcooled liquid",
    Phase.SUPERCRITICAL: "Supercritical",
    Phase.SUPERCRITICAL_GAS: "Supercritical gas",
    Phase.SUPERCRITICAL_LIQUID: "Supercritical liquid",
    Phase.CRITICAL_POINT: "Critical point",
    Phase.GAS: "Superheated vapour",
    Phase.TWO_PHASE: "Two-phase",
    Phase.UNKNOWN: "Unknown",
    Phase.NOT_IMPOSED: "Not imposed",
}

SATURATED_LIQUID_LABEL = "Saturated liquid"
SATURATED_VAPOUR_LABEL = "Saturated vapour"


def phase_label(phase: Phase) -> str:
    """Display label for a phase."""
    return _PHASE_LABELS[phase]


def quality_label(phase: Phase, quality: float, tolerance: float = QUALITY_TOLERANCE) -> str:
    """Label for the phase/quality column of a state point.

    Quality is only meaningful in the two-phase region; everywhere else
    the phase label is returned. Qualities within *tolerance* of the
    saturation lines get a boundary label instead of a number.
    """
    if not phase.is_two_phase:
        return phase_label(phase)
    if quality <= tolerance:
        return SATURATED_LIQUID_LABEL
    if quality >= 1.0 - tolerance:
        return SATURATED_VAPOUR_LABEL
    return f"{quality:.4f}"
