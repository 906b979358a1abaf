"""Tests for result formatting and report generation."""

import pytest

from expander_calc.core.config import CaseState, ProjectMeta
from expander_calc.cycle.solver import CycleDefinition, PressureTemperatureInlet, evaluate_cycle
from expander_calc.reports.summary import (
    STATE_NAMES,
    describe_inputs,
    fmt_enthalpy,
    fmt_entropy,
    fmt_mass_flow,
    fmt_power,
    fmt_pressure,
    fmt_specific_volume,
    fmt_temperature,
    fmt_volume_flow,
    generate_html_report,
    generate_text_report,
    saved_state_rows,
    state_rows,
    summary_rows,
)


@pytest.fixture
def water_result(oracle):
    defn = CycleDefinition(
        fluid="Water",
        inlet=PressureTemperatureInlet(pressure=20e5, temperature=423.15),
    )
    return defn, evaluate_cycle(defn, oracle)


@pytest.fixture
def water_case(water_result):
    defn, result = water_result
    return CaseState.from_result(defn, result, category="steam", name="Flash <test>")


class TestFormatters:
    def test_precision(self):
        assert fmt_pressure(2e6) == "20.00"
        assert fmt_temperature(423.15) == "150.00"
        assert fmt_enthalpy(632_190.0) == "632.19"
        assert fmt_entropy(1841.82) == "1.8418"
        assert fmt_specific_volume(0.0010897) == "0.00109"
        assert fmt_power(1500.0) == "1.50"
        assert fmt_mass_flow(1.0) == "1.000"

    def test_volume_flow_in_cubic_metres_per_hour(self):
        assert fmt_volume_flow(1.0 / 36.0) == "100.00"


class TestTables:
    def test_state_rows(self, water_result):
        _, result = water_result
        rows = state_rows(result)
        assert [name for name, _ in rows] == list(STATE_NAMES)
        inlet = rows[0][1]
        assert inlet[0] == "20.00"
        assert inlet[1] == "150.00"
        assert inlet[-1] == "Subcooled liquid"
        # Two-phase outlet shows its quality
        float(rows[2][1][-1])

    def test_summary_rows(self, water_result):
        _, result = water_result
        rows = dict((label, value) for label, value, _ in summary_rows(result))
        assert rows["Shaft Power"] == fmt_power(result.power)
        assert rows["Mass Flow"] == "1.000"
        assert rows["Pressure Ratio"] == "5.00"

    def test_saved_rows_match_live_rows(self, water_result, water_case):
        _, result = water_result
        assert saved_state_rows(water_case.results) == state_rows(result)

    def test_describe_inputs(self, water_case):
        lines = dict(describe_inputs(water_case))
        assert lines["Fluid"] == "Water"
        assert lines["Inlet"] == "20.00 bar, 150.00 °C"
        assert lines["Isentropic Efficiency"] == "85.0 %"


class TestReports:
    def test_text_report(self, water_case):
        text = generate_text_report(water_case)
        assert "Expansion Report" in text
        assert "INPUTS" in text
        assert "STATE POINTS" in text
        assert "PERFORMANCE" in text
        assert "Shaft Power" in text

    def test_text_report_without_results(self):
        text = generate_text_report(CaseState(meta=ProjectMeta(name="Empty")))
        assert "(no results stored)" in text
        assert "STATE POINTS" not in text

    def test_html_report_escapes(self, water_case):
        html = generate_html_report(water_case)
        assert html.startswith("<!DOCTYPE html>")
        assert "Flash &lt;test&gt;" in html
        assert "Flash <test>" not in html
        assert "<h2>State Points</h2>" in html
