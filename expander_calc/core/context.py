"""Application context shared by the CLI and the desktop form.

The loaded oracle and the active fluid category live here instead of in
module globals, so the evaluator can be driven without any UI.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from expander_calc.core.fluids import FluidPropertyError, list_categories, list_fluids
from expander_calc.core.loader import OracleLoader, OracleLoadError, OracleNotReadyError
from expander_calc.cycle.solver import CycleDefinition, CycleInputError, CycleResult, evaluate_cycle

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "orc"


@dataclass(frozen=True)
class EvaluationOutcome:
    """Either a complete result or a message explaining the failure."""

    result: CycleResult | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass
class AppContext:
    """Loader handle plus the user's current fluid category."""

    loader: OracleLoader = field(default_factory=OracleLoader)
    category: str = DEFAULT_CATEGORY

    def select_category(self, category: str) -> dict[str, str]:
        """Switch category and return its fluids.

        Raises:
            KeyError: If the category is unknown.
        """
        if category not in list_categories():
            raise KeyError(f"Fluid category '{category}' not found. Available: {list_categories()}")
        self.category = category
        return self.fluids()

    def fluids(self) -> dict[str, str]:
        """``{display name: CoolProp name}`` for the active category."""
        return list_fluids(self.category)

    def evaluate(self, definition: CycleDefinition) -> CycleResult:
        """Evaluate a cycle with the loaded oracle.

        Raises:
            OracleNotReadyError: If the oracle has not loaded successfully.
            CycleInputError: If the inputs are invalid.
            FluidPropertyError: If a property query fails.
        """
        oracle = self.loader.require_ready()
        return evaluate_cycle(definition, oracle)

    def try_evaluate(self, definition: CycleDefinition) -> EvaluationOutcome:
        """Evaluate and turn every expected failure into a message."""
        try:
            result = self.evaluate(definition)
        except (OracleNotReadyError, OracleLoadError) as e:
            logger.error("Evaluation refused: %s", e)
            return EvaluationOutcome(message=f"Property library not available: {e}")
        except CycleInputError as e:
            logger.warning("Invalid input: %s", e)
            return EvaluationOutcome(message=f"Invalid input: {e}")
        except FluidPropertyError as e:
            logger.warning("Property evaluation failed: %s", e)
            return EvaluationOutcome(message=f"Calculation error: {e}")

        logger.info(
            "Evaluated %s: power %.3f kW, mass flow %.4f kg/s",
            definition.fluid,
            result.power / 1e3,
            result.mass_flow,
        )
        return EvaluationOutcome(result=result, message="Calculation complete.")
