"""Tests for state points and the expander component."""

import pytest

from expander_calc.core.phase import Phase
from expander_calc.cycle.components.base import FluidState
from expander_calc.cycle.components.expander import Expander
from expander_calc.cycle.states import resolve_state


class TestFluidState:
    def test_defaults(self):
        s = FluidState()
        assert s.quality == -1.0
        assert s.phase is Phase.UNKNOWN
        assert s.density == 0.0
        assert not s.is_two_phase

    def test_density(self):
        s = FluidState(specific_volume=0.002)
        assert s.density == pytest.approx(500.0)

    def test_quality_label(self):
        s = FluidState(quality=0.25, phase=Phase.TWO_PHASE)
        assert s.is_two_phase
        assert s.quality_label == "0.2500"
        assert FluidState(phase=Phase.GAS).quality_label == "Superheated vapour"


class TestResolveState:
    def test_known_inputs_kept(self, oracle):
        s = resolve_state(oracle, "R245fa", "P", 20e5, "T", 423.15, mass_flow=2.0)
        assert s.pressure == 20e5
        assert s.temperature == 423.15
        assert s.mass_flow == 2.0
        assert s.fluid_name == "R245fa"
        assert s.phase is Phase.GAS
        assert s.quality == -1.0

    def test_specific_volume_is_inverse_density(self, oracle):
        s = resolve_state(oracle, "Water", "P", 1e5, "T", 300.0)
        rho = oracle.query("D", "P", 1e5, "T", 300.0, "Water")
        assert s.specific_volume == pytest.approx(1.0 / rho)

    def test_two_phase_state(self, oracle):
        s = resolve_state(oracle, "Water", "P", 1e5, "Q", 0.5)
        assert s.phase is Phase.TWO_PHASE
        assert s.quality == 0.5
        assert s.temperature == pytest.approx(372.76, abs=0.1)


class TestExpander:
    @pytest.fixture
    def inlet(self, oracle):
        return resolve_state(oracle, "R245fa", "P", 20e5, "T", 423.15, mass_flow=1.5)

    def test_outlet_at_requested_pressure(self, oracle, inlet):
        exp = Expander(oracle, efficiency=0.8)
        out = exp.compute(inlet, outlet_pressure=4e5)
        assert out.pressure == 4e5
        assert exp.result.ideal_outlet.pressure == 4e5
        assert exp.result.pressure_ratio == pytest.approx(5.0)

    def test_ideal_outlet_is_isentropic(self, oracle, inlet):
        exp = Expander(oracle)
        exp.compute(inlet, outlet_pressure=4e5)
        assert exp.result.ideal_outlet.entropy == inlet.entropy

    def test_efficiency_scales_enthalpy_drop(self, oracle, inlet):
        exp = Expander(oracle, efficiency=0.7)
        exp.compute(inlet, outlet_pressure=4e5)
        r = exp.result
        assert r.actual_enthalpy_drop == pytest.approx(0.7 * r.isentropic_enthalpy_drop, rel=1e-9)

    def test_shaft_power(self, oracle, inlet):
        exp = Expander(oracle)
        exp.compute(inlet, outlet_pressure=4e5)
        r = exp.result
        assert r.shaft_power == inlet.mass_flow * r.actual_enthalpy_drop
        # Produced power is negative in the component sign convention
        assert exp.power() == -r.shaft_power
        assert exp.power() < 0

    def test_higher_efficiency_more_power(self, oracle, inlet):
        low = Expander(oracle, efficiency=0.6)
        high = Expander(oracle, efficiency=0.9)
        low.compute(inlet, outlet_pressure=4e5)
        high.compute(inlet, outlet_pressure=4e5)
        assert high.result.shaft_power > low.result.shaft_power
        assert high.result.outlet.temperature < low.result.outlet.temperature

    def test_power_before_compute(self, oracle):
        assert Expander(oracle).power() == 0.0

    def test_summary(self, oracle, inlet):
        exp = Expander(oracle, name="scroll", efficiency=0.75)
        exp.compute(inlet, outlet_pressure=4e5)
        d = exp.summary()
        assert d["name"] == "scroll"
        assert d["type"] == "expander"
        assert d["efficiency"] == 0.75
        assert d["shaft_power_kW"] > 0
        assert d["isentropic_dh_kJ_kg"] >= d["actual_dh_kJ_kg"]
