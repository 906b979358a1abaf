"""Shared fixtures for the ExpanderCalc test suite."""

import pytest

from expander_calc.core.loader import OracleLoader


class RecordingOracle:
    """Oracle double that records every call and refuses to answer.

    Used to check that invalid inputs are rejected before any property
    query is issued.
    """

    def __init__(self):
        self.calls = []

    def _refuse(self, name, *args):
        self.calls.append((name, args))
        raise AssertionError(f"unexpected oracle call: {name}{args}")

    def query(self, *args):
        self._refuse("query", *args)

    def phase(self, *args):
        self._refuse("phase", *args)

    def saturation_pressure(self, *args):
        self._refuse("saturation_pressure", *args)


@pytest.fixture(scope="session")
def oracle():
    """Real CoolProp oracle, loaded once per test session."""
    return OracleLoader().load()


@pytest.fixture
def recording_oracle():
    return RecordingOracle()
