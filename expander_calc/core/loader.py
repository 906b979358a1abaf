"""One-time initialisation of the CoolProp property oracle.

The loader is a small state machine::

    UNINITIALIZED -> LOADING -> READY
                             -> FAILED   (terminal)

Evaluations call :meth:`OracleLoader.require_ready`, which either hands
back the oracle or raises :class:`OracleNotReadyError`.
"""

from __future__ import annotations

import importlib
import logging
from enum import Enum

from expander_calc.core.fluids import PropertyOracle

logger = logging.getLogger(__name__)

COOLPROP_MODULE = "CoolProp.CoolProp"


class OracleStatus(Enum):
    """Initialisation state of the property oracle."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class OracleLoadError(Exception):
    """Raised when the property library cannot be loaded."""


class OracleNotReadyError(Exception):
    """Raised when an evaluation is requested before the oracle is ready."""


class OracleLoader:
    """Loads the property library once and remembers the outcome.

    Args:
        module_name: Dotted name of the module exposing ``PropsSI`` and
            ``get_global_param_string``.
    """

    def __init__(self, module_name: str = COOLPROP_MODULE):
        self.module_name = module_name
        self._status = OracleStatus.UNINITIALIZED
        self._oracle: PropertyOracle | None = None
        self._error: OracleLoadError | None = None

    @property
    def status(self) -> OracleStatus:
        return self._status

    @property
    def is_ready(self) -> bool:
        return self._status is OracleStatus.READY

    @property
    def error(self) -> OracleLoadError | None:
        """The load error, once the loader has failed."""
        return self._error

    @property
    def version(self) -> str | None:
        return self._oracle.version if self._oracle else None

    def load(self) -> PropertyOracle:
        """Import the property library and build the oracle.

        Returns:
            The ready oracle (the same instance on every successful call).

        Raises:
            OracleLoadError: If the import or the version probe fails, or if
                a previous attempt already failed.
        """
        if self._status is OracleStatus.READY:
            return self._oracle
        if self._status is OracleStatus.FAILED:
            raise self._error
        if self._status is OracleStatus.LOADING:
            raise OracleLoadError(f"{self.module_name} is already being loaded")

        self._status = OracleStatus.LOADING
        logger.info("Loading property library %s", self.module_name)
        try:
            module = importlib.import_module(self.module_name)
            oracle = PropertyOracle(module)
            version = oracle.version
        except Exception as exc:
            self._status = OracleStatus.FAILED
            self._error = OracleLoadError(_describe_load_failure(self.module_name, exc))
            logger.error("Property library failed to load: %s", exc)
            raise self._error from exc

        self._oracle = oracle
        self._status = OracleStatus.READY
        logger.info("CoolProp v%s ready", version)
        return oracle

    def require_ready(self) -> PropertyOracle:
        """Return the oracle, or raise if it has not been loaded successfully."""
        if self._status is OracleStatus.READY:
            return self._oracle
        if self._status is OracleStatus.FAILED:
            raise OracleNotReadyError(f"Property library unavailable: {self._error}")
        raise OracleNotReadyError(
            f"Property library not ready (status: {self._status.value})"
        )


def _describe_load_failure(module_name: str, exc: Exception) -> str:
    if isinstance(exc, ImportError):
        return (
            f"Could not import {module_name}: {exc}. "
            f"Install the property library with: pip install CoolProp"
        )
    return f"Loading {module_name} failed: {exc}"
