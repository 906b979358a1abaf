"""Tests for the expander cycle evaluator."""

import pytest

from expander_calc.core.fluids import FluidPropertyError
from expander_calc.core.phase import Phase
from expander_calc.cycle.flow import DisplacementFlow, MassFlow, VolumetricFlow
from expander_calc.cycle.solver import (
    CondensingTemperature,
    CycleDefinition,
    CycleInputError,
    OutletPressure,
    PressureTemperatureInlet,
    SaturationInlet,
    evaluate_cycle,
    validate_definition,
)


def water_case(**overrides):
    """Compressed water at 20 bar / 150 °C flashed to 4 bar."""
    kwargs = dict(
        fluid="Water",
        inlet=PressureTemperatureInlet(pressure=20e5, temperature=423.15),
        outlet=OutletPressure(pressure=4e5),
        isentropic_efficiency=0.85,
        flow=MassFlow(mass_flow=1.0),
    )
    kwargs.update(overrides)
    return CycleDefinition(**kwargs)


class TestWaterExpansion:
    def test_water_flash(self, oracle):
        result = evaluate_cycle(water_case(), oracle)

        assert result.inlet.phase is Phase.LIQUID
        assert result.actual_outlet.phase is Phase.TWO_PHASE
        assert 0.0 < result.actual_outlet.quality < 1.0
        # Outlet sits at the saturation temperature for 4 bar (~143.6 °C)
        assert result.actual_outlet.temperature == pytest.approx(416.76, abs=0.1)
        assert result.actual_outlet.temperature < result.inlet.temperature
        assert result.power > 0
        assert result.mass_flow == 1.0

    def test_states_in_order(self, oracle):
        result = evaluate_cycle(water_case(), oracle)
        assert result.states == (result.inlet, result.ideal_outlet, result.actual_outlet)


class TestOrcExpansion:
    def test_default_definition(self, oracle):
        """R245fa, 20 bar / 150 °C to 4 bar: a dry fluid stays superheated."""
        result = evaluate_cycle(CycleDefinition(), oracle)
        assert result.inlet.phase is Phase.GAS
        assert result.ideal_outlet.phase is Phase.GAS
        assert result.actual_outlet.phase is Phase.GAS
        assert result.pressure_ratio == pytest.approx(5.0)
        assert result.power > 0

    @pytest.mark.parametrize("eta", [0.3, 0.6, 0.85, 1.0])
    def test_isentropic_drop_bounds_actual(self, oracle, eta):
        result = evaluate_cycle(CycleDefinition(isentropic_efficiency=eta), oracle)
        assert result.isentropic_enthalpy_drop >= result.actual_enthalpy_drop
        assert result.actual_enthalpy_drop == pytest.approx(
            eta * result.isentropic_enthalpy_drop, rel=1e-9
        )

    def test_unit_efficiency_outlets_coincide(self, oracle):
        result = evaluate_cycle(CycleDefinition(isentropic_efficiency=1.0), oracle)
        ideal, actual = result.ideal_outlet, result.actual_outlet
        assert actual.enthalpy == pytest.approx(ideal.enthalpy, rel=1e-9)
        assert actual.temperature == pytest.approx(ideal.temperature, rel=1e-5)
        assert actual.entropy == pytest.approx(result.inlet.entropy, rel=1e-5)

    def test_inlet_volume_flow(self, oracle):
        result = evaluate_cycle(CycleDefinition(flow=MassFlow(mass_flow=2.0)), oracle)
        assert result.inlet_volume_flow == pytest.approx(2.0 * result.inlet.specific_volume)


class TestFlowModes:
    @pytest.mark.parametrize(
        "flow",
        [
            MassFlow(mass_flow=0.5),
            DisplacementFlow(displacement=500e-6, rpm=3000.0, volumetric_efficiency=0.90),
            VolumetricFlow(volume_flow=100.0),
        ],
    )
    def test_power_is_mass_flow_times_drop(self, oracle, flow):
        result = evaluate_cycle(CycleDefinition(flow=flow), oracle)
        assert result.power == result.mass_flow * result.actual_enthalpy_drop

    def test_displacement_mass_flow(self, oracle):
        flow = DisplacementFlow(displacement=500e-6, rpm=3000.0, volumetric_efficiency=0.90)
        result = evaluate_cycle(CycleDefinition(flow=flow), oracle)
        v1 = result.inlet.specific_volume
        assert result.mass_flow == 500e-6 * 3000.0 / 60.0 * 0.90 / v1

    def test_volumetric_mass_flow(self, oracle):
        result = evaluate_cycle(CycleDefinition(flow=VolumetricFlow(volume_flow=100.0)), oracle)
        v1 = result.inlet.specific_volume
        assert result.mass_flow == pytest.approx(100.0 / 3600.0 / v1)
        assert result.inlet_volume_flow == pytest.approx(100.0 / 3600.0)

    def test_inlet_carries_mass_flow(self, oracle):
        result = evaluate_cycle(CycleDefinition(flow=MassFlow(mass_flow=3.0)), oracle)
        assert result.inlet.mass_flow == 3.0


class TestInputModes:
    def test_saturation_inlet_with_superheat(self, oracle):
        defn = CycleDefinition(inlet=SaturationInlet(saturation_temperature=393.15, superheat=10.0))
        result = evaluate_cycle(defn, oracle)
        P_sat = oracle.saturation_pressure("R245fa", 393.15, 1.0)
        assert result.inlet.pressure == pytest.approx(P_sat)
        assert result.inlet.temperature == pytest.approx(403.15)
        assert result.inlet.phase is Phase.GAS

    def test_saturated_vapour_inlet(self, oracle):
        """Zero superheat puts the inlet on the saturated-vapour line."""
        defn = CycleDefinition(inlet=SaturationInlet(saturation_temperature=393.15, superheat=0.0))
        result = evaluate_cycle(defn, oracle)
        assert result.inlet.temperature == pytest.approx(393.15, abs=1e-3)
        assert result.inlet.quality_label == "Saturated vapour"
        assert result.power > 0

    def test_condensing_outlet(self, oracle):
        defn = CycleDefinition(outlet=CondensingTemperature(temperature=308.15))
        result = evaluate_cycle(defn, oracle)
        P_cond = oracle.saturation_pressure("R245fa", 308.15, 0.0)
        assert result.actual_outlet.pressure == pytest.approx(P_cond)
        assert result.ideal_outlet.pressure == pytest.approx(P_cond)


class TestInputErrors:
    @pytest.mark.parametrize("eta", [0.0, -0.5, 1.2])
    def test_bad_efficiency_rejected_before_query(self, recording_oracle, eta):
        with pytest.raises(CycleInputError, match="isentropic_efficiency"):
            evaluate_cycle(CycleDefinition(isentropic_efficiency=eta), recording_oracle)
        assert recording_oracle.calls == []

    @pytest.mark.parametrize(
        "flow, field",
        [
            (MassFlow(mass_flow=0.0), "mass_flow"),
            (MassFlow(mass_flow=-1.0), "mass_flow"),
            (DisplacementFlow(displacement=0.0, rpm=3000.0, volumetric_efficiency=0.9), "displacement"),
            (DisplacementFlow(displacement=5e-4, rpm=-1.0, volumetric_efficiency=0.9), "rpm"),
            (DisplacementFlow(displacement=5e-4, rpm=3000.0, volumetric_efficiency=0.0), "volumetric_efficiency"),
            (VolumetricFlow(volume_flow=0.0), "volume_flow"),
        ],
    )
    def test_bad_flow_rejected_before_query(self, recording_oracle, flow, field):
        with pytest.raises(CycleInputError) as exc:
            evaluate_cycle(CycleDefinition(flow=flow), recording_oracle)
        assert field in str(exc.value)
        assert recording_oracle.calls == []

    def test_all_errors_reported_together(self, recording_oracle):
        defn = CycleDefinition(
            fluid="",
            inlet=PressureTemperatureInlet(pressure=-1.0, temperature=400.0),
            isentropic_efficiency=2.0,
        )
        with pytest.raises(CycleInputError) as exc:
            evaluate_cycle(defn, recording_oracle)
        params = {m.parameter for m in exc.value.validation.errors}
        assert params == {"fluid", "isentropic_efficiency", "inlet_pressure"}

    def test_non_finite_input(self, recording_oracle):
        defn = CycleDefinition(outlet=OutletPressure(pressure=float("nan")))
        with pytest.raises(CycleInputError, match="outlet_pressure"):
            evaluate_cycle(defn, recording_oracle)

    def test_negative_superheat(self):
        defn = CycleDefinition(inlet=SaturationInlet(saturation_temperature=393.15, superheat=-5.0))
        assert not validate_definition(defn).is_valid

    def test_outlet_above_inlet(self, oracle):
        defn = CycleDefinition(
            inlet=PressureTemperatureInlet(pressure=4e5, temperature=373.15),
            outlet=OutletPressure(pressure=10e5),
        )
        with pytest.raises(CycleInputError) as exc:
            evaluate_cycle(defn, oracle)
        msg = str(exc.value)
        assert "10 bar" in msg
        assert "4 bar" in msg
        assert exc.value.validation.errors[0].parameter == "outlet_pressure"

    def test_equal_pressures_rejected(self, oracle):
        defn = CycleDefinition(outlet=OutletPressure(pressure=20e5))
        with pytest.raises(CycleInputError, match="below"):
            evaluate_cycle(defn, oracle)

    def test_input_error_is_value_error(self, recording_oracle):
        with pytest.raises(ValueError):
            evaluate_cycle(CycleDefinition(isentropic_efficiency=0.0), recording_oracle)

    def test_unknown_fluid(self, oracle):
        with pytest.raises(FluidPropertyError):
            evaluate_cycle(CycleDefinition(fluid="NotAFluid"), oracle)


class TestSerialization:
    def test_definition_round_trip(self):
        defn = CycleDefinition(
            fluid="Isobutane",
            inlet=SaturationInlet(saturation_temperature=380.0, superheat=5.0),
            outlet=CondensingTemperature(temperature=305.0),
            isentropic_efficiency=0.7,
            flow=DisplacementFlow(displacement=1e-4, rpm=1500.0, volumetric_efficiency=0.95),
        )
        assert CycleDefinition.from_dict(defn.to_dict()) == defn

    def test_unknown_inlet_mode(self):
        data = CycleDefinition().to_dict()
        data["inlet"]["mode"] = "enthalpy"
        with pytest.raises(ValueError, match="inlet"):
            CycleDefinition.from_dict(data)

    def test_result_to_dict(self, oracle):
        d = evaluate_cycle(water_case(), oracle).to_dict()
        assert d["inlet"]["phase"] == "LIQUID"
        assert d["actual_outlet"]["phase"] == "TWO_PHASE"
        assert d["inlet"]["quality_label"] == "Subcooled liquid"
        assert d["power"] > 0
