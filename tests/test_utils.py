"""Tests for utility modules: units, constants and validation."""

import pytest

from expander_calc.utils.constants import BAR_TO_PA, PA_TO_BAR, SECONDS_PER_HOUR, T_CELSIUS_OFFSET
from expander_calc.utils.units import (
    convert,
    fraction_from_percent,
    get_unit_registry,
    mass_flow_to_si,
    pressure_from_si,
    pressure_to_si,
    temperature_difference_to_si,
    temperature_from_si,
    temperature_to_si,
    volume_flow_to_m3_per_hour,
    volume_to_si,
)
from expander_calc.utils.validation import (
    Severity,
    ValidationResult,
    validate_efficiency,
    validate_finite,
    validate_non_negative,
    validate_positive,
    validate_range,
)


class TestUnits:
    def test_pressure_bar(self):
        assert pressure_to_si(20.0, "bar") == pytest.approx(2e6)
        assert pressure_from_si(4e5, "bar") == pytest.approx(4.0)

    def test_pressure_psi(self):
        assert pressure_to_si(1.0, "psi") == pytest.approx(6894.757, rel=1e-5)

    def test_temperature(self):
        assert temperature_to_si(150.0, "degC") == pytest.approx(423.15)
        assert temperature_from_si(373.15, "degC") == pytest.approx(100.0)

    def test_temperature_difference(self):
        """A difference in kelvin is not offset."""
        assert temperature_difference_to_si(10.0, "K") == pytest.approx(10.0)
        assert temperature_difference_to_si(18.0, "delta_degF") == pytest.approx(10.0)

    def test_volume(self):
        assert volume_to_si(500.0, "cm**3") == pytest.approx(5e-4)

    def test_volume_flow(self):
        assert volume_flow_to_m3_per_hour(1.0, "m**3/s") == pytest.approx(3600.0)
        assert volume_flow_to_m3_per_hour(1000.0, "L/hour") == pytest.approx(1.0)

    def test_mass_flow(self):
        assert mass_flow_to_si(3600.0, "kg/hour") == pytest.approx(1.0)

    def test_percent(self):
        assert fraction_from_percent(85.0) == pytest.approx(0.85)
        assert fraction_from_percent(100.0) == pytest.approx(1.0)

    def test_generic_convert(self):
        assert convert(1.0, "MPa", "bar") == pytest.approx(10.0)

    def test_registry_singleton(self):
        assert get_unit_registry() is get_unit_registry()


class TestConstants:
    def test_bar(self):
        assert BAR_TO_PA * PA_TO_BAR == pytest.approx(1.0)

    def test_offsets(self):
        assert T_CELSIUS_OFFSET == 273.15
        assert SECONDS_PER_HOUR == 3600.0


class TestValidation:
    def test_positive(self):
        r = ValidationResult()
        validate_positive("rpm", 3000.0, r)
        assert r.is_valid
        validate_positive("rpm", 0.0, r)
        assert not r.is_valid
        assert r.errors[0].message == "rpm must be positive, got 0.0"

    def test_non_negative(self):
        r = ValidationResult()
        validate_non_negative("superheat", 0.0, r)
        assert r.is_valid
        validate_non_negative("superheat", -1.0, r)
        assert not r.is_valid

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "20", None, True])
    def test_finite_rejects(self, value):
        r = ValidationResult()
        assert validate_finite("x", value, r) is False
        assert len(r.errors) == 1

    def test_positive_skips_range_for_non_number(self):
        r = ValidationResult()
        validate_positive("x", float("nan"), r)
        assert len(r.errors) == 1

    @pytest.mark.parametrize("value, ok", [(1.0, True), (0.5, True), (0.0, False), (1.0001, False)])
    def test_efficiency_interval(self, value, ok):
        r = ValidationResult()
        validate_efficiency("eta", value, r)
        assert r.is_valid is ok

    def test_range_warning(self):
        r = ValidationResult()
        validate_range("rpm", 1e6, 0.0, 1e5, r, severity=Severity.WARNING)
        assert r.is_valid
        assert r.has_warnings

    def test_merge_and_describe(self):
        a = ValidationResult()
        a.error("p", "first")
        b = ValidationResult()
        b.error("q", "second")
        b.info("r", "note")
        a.merge(b)
        assert len(a.messages) == 3
        assert a.describe() == "first; second"
