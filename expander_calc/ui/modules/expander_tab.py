"""Expander calculator tab for the ExpanderCalc GUI."""

from __future__ import annotations

import logging

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QPushButton,
    QScrollArea,
    QSplitter,
    QTabBar,
    QVBoxLayout,
    QWidget,
)

from expander_calc.core.config import DEFAULT_INPUTS, definition_from_inputs
from expander_calc.core.context import AppContext
from expander_calc.core.fluids import FluidPropertyError, SaturationDome, category_label, list_categories
from expander_calc.reports.summary import STATE_COLUMNS, STATE_NAMES, state_rows, summary_rows
from expander_calc.ui.widgets.param_input import ParamForm
from expander_calc.ui.widgets.plot_widget import PlotCanvas
from expander_calc.ui.widgets.result_display import LogPanel, ResultTable

logger = logging.getLogger(__name__)

_MODE_FIELDS = {
    "inlet_mode": {
        "pt": ("inlet_pressure_bar", "inlet_temperature_c"),
        "saturation": ("saturation_temperature_c", "superheat_k"),
    },
    "outlet_mode": {
        "pressure": ("outlet_pressure_bar",),
        "condensing": ("condensing_temperature_c",),
    },
    "flow_mode": {
        "mass": ("mass_flow_kg_s",),
        "displacement": ("displacement_cm3", "rpm", "volumetric_efficiency_pct"),
        "volume": ("volume_flow_m3_h",),
    },
}

_SUMMARY_LABELS = ("Shaft Power", "Mass Flow", "Inlet Volume Flow")


class ExpanderTab(QWidget):
    """Input form, state-point table, summary, T-s diagram and log.

    Emits ``status_changed(state, message)`` where *state* is one of
    ``done``, ``error`` or ``idle``.
    """

    status_changed = Signal(str, str)

    def __init__(self, context: AppContext, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.context = context
        self._domes: dict[str, SaturationDome] = {}

        splitter = QSplitter()
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.addWidget(splitter)

        # --- Left ---
        left = QWidget()
        ll = QVBoxLayout(left)
        ll.setContentsMargins(4, 4, 4, 4)

        self._categories = list_categories()
        self.category_bar = QTabBar()
        for cat in self._categories:
            self.category_bar.addTab(category_label(cat))
        ll.addWidget(self.category_bar)

        d = DEFAULT_INPUTS
        self.form = ParamForm()
        self.form.add_header("Working Fluid")
        self.form.add_combo("fluid", "Fluid", {})

        self.form.add_separator()
        self.form.add_header("Inlet")
        self.form.add_combo("inlet_mode", "Given By",
                            {"pt": "Pressure + temperature", "saturation": "Saturation temp. + superheat"},
                            default=d["inlet_mode"])
        self.form.add_float("inlet_pressure_bar", "Pressure", d["inlet_pressure_bar"], unit="bar",
                            min_val=0.0, max_val=1000.0, step=0.5)
        self.form.add_float("inlet_temperature_c", "Temperature", d["inlet_temperature_c"], unit="°C",
                            min_val=-273.15, max_val=2000.0, step=1.0)
        self.form.add_float("saturation_temperature_c", "Saturation Temp.", d["saturation_temperature_c"],
                            unit="°C", min_val=-273.15, max_val=2000.0, step=1.0)
        self.form.add_float("superheat_k", "Superheat", d["superheat_k"], unit="K",
                            min_val=0.0, max_val=1000.0, step=1.0)

        self.form.add_separator()
        self.form.add_header("Outlet")
        self.form.add_combo("outlet_mode", "Given By",
                            {"pressure": "Pressure", "condensing": "Condensing temperature"},
                            default=d["outlet_mode"])
        self.form.add_float("outlet_pressure_bar", "Pressure", d["outlet_pressure_bar"], unit="bar",
                            min_val=0.0, max_val=1000.0, step=0.5)
        self.form.add_float("condensing_temperature_c", "Condensing Temp.", d["condensing_temperature_c"],
                            unit="°C", min_val=-273.15, max_val=2000.0, step=1.0)

        self.form.add_separator()
        self.form.add_header("Expander")
        self.form.add_float("isentropic_efficiency_pct", "Isentropic Efficiency", d["isentropic_efficiency_pct"],
                            unit="%", min_val=0.0, max_val=100.0, step=1.0)

        self.form.add_separator()
        self.form.add_header("Flow")
        self.form.add_combo("flow_mode", "Given By",
                            {"mass": "Mass flow", "displacement": "Displacement + speed",
                             "volume": "Volume flow"},
                            default=d["flow_mode"])
        self.form.add_float("mass_flow_kg_s", "Mass Flow", d["mass_flow_kg_s"], unit="kg/s",
                            min_val=0.0, max_val=1e4, decimals=3, step=0.1)
        self.form.add_float("displacement_cm3", "Displacement", d["displacement_cm3"], unit="cm³",
                            min_val=0.0, max_val=1e7, step=10.0)
        self.form.add_float("rpm", "Speed", d["rpm"], unit="rpm", min_val=0.0, max_val=1e6, step=100.0)
        self.form.add_float("volumetric_efficiency_pct", "Volumetric Efficiency", d["volumetric_efficiency_pct"],
                            unit="%", min_val=0.0, max_val=100.0, step=1.0)
        self.form.add_float("volume_flow_m3_h", "Inlet Volume Flow", d["volume_flow_m3_h"], unit="m³/h",
                            min_val=0.0, max_val=1e7, step=10.0)

        scroll = QScrollArea()
        scroll.setWidget(self.form)
        scroll.setWidgetResizable(True)
        ll.addWidget(scroll)

        buttons = QHBoxLayout()
        self.calculate_button = QPushButton("Loading CoolProp...")
        self.calculate_button.setEnabled(False)
        self.calculate_button.clicked.connect(self._compute)
        buttons.addWidget(self.calculate_button)

        self.clear_button = QPushButton("Clear")
        self.clear_button.setProperty("secondary", True)
        self.clear_button.clicked.connect(self.reset)
        buttons.addWidget(self.clear_button)
        ll.addLayout(buttons)

        # --- Right ---
        right = QWidget()
        rl = QVBoxLayout(right)
        rl.setContentsMargins(4, 4, 4, 4)

        headers = ["State"] + [f"{c} [{u}]" if u else c for c, u in STATE_COLUMNS]
        self.states = ResultTable("State Points", headers=headers)
        rl.addWidget(self.states)

        self.summary = ResultTable("Performance")
        rl.addWidget(self.summary)

        self.plot = PlotCanvas("T-s Diagram")
        rl.addWidget(self.plot)

        self.log = LogPanel("Log")
        self.log.setMaximumHeight(100)
        rl.addWidget(self.log)

        splitter.addWidget(left)
        splitter.addWidget(right)
        splitter.setSizes([380, 720])

        self.form.value_changed.connect(self._update_mode_fields)
        self.category_bar.currentChanged.connect(self._on_category_changed)

        self.category_bar.setCurrentIndex(self._categories.index(self.context.category))
        self._on_category_changed(self.category_bar.currentIndex())
        self._update_mode_fields()
        self._clear_results()

    # --- Oracle state ---

    def set_ready(self, ready: bool) -> None:
        """Enable calculation once the property library has loaded."""
        self.calculate_button.setEnabled(ready)
        self.calculate_button.setText("Calculate" if ready else "Unavailable")

    # --- Form handling ---

    def _on_category_changed(self, index: int) -> None:
        fluids = self.context.select_category(self._categories[index])
        self.form.set_options("fluid", {coolprop: display for display, coolprop in fluids.items()})

    def _update_mode_fields(self) -> None:
        for mode_field, modes in _MODE_FIELDS.items():
            active = self.form.get(mode_field)
            for mode, fields in modes.items():
                for name in fields:
                    self.form.set_visible(name, mode == active)

    def reset(self) -> None:
        """Restore default inputs and clear all results."""
        for name, value in DEFAULT_INPUTS.items():
            if name != "category":
                self.form.set_value(name, value)
        self._clear_results()
        self.log.clear()
        self.status_changed.emit("idle", "Cleared.")

    def _clear_results(self) -> None:
        self.states.set_placeholders(STATE_NAMES)
        self.summary.set_data([(label, "--", "") for label in _SUMMARY_LABELS])
        self.plot.clear()

    # --- Evaluation ---

    def _compute(self) -> None:
        values = self.form.get_values()
        fluid = values.pop("fluid")
        definition = definition_from_inputs(fluid, values)

        outcome = self.context.try_evaluate(definition)
        if not outcome.ok:
            self._clear_results()
            self.log.log(f"ERROR: {outcome.message}")
            self.status_changed.emit("error", outcome.message)
            return

        result = outcome.result
        self.states.set_data([(name, *row) for name, row in state_rows(result)])
        self.summary.set_data(summary_rows(result))
        self.plot.ts_diagram(self._dome(fluid), result.states, ["1", "2s", "2a"])

        self.log.log(
            f"{fluid}: W = {result.power / 1e3:.2f} kW, mdot = {result.mass_flow:.3f} kg/s, "
            f"x2a = {result.actual_outlet.quality_label}"
        )
        self.status_changed.emit("done", outcome.message)

    def _dome(self, fluid: str) -> SaturationDome | None:
        if fluid not in self._domes:
            oracle = self.context.loader.require_ready()
            try:
                self._domes[fluid] = oracle.saturation_dome(fluid)
            except FluidPropertyError as e:
                logger.warning("No saturation dome for %s: %s", fluid, e)
                self.log.log(f"Saturation curve unavailable for {fluid}: {e}")
                return None
        return self._domes[fluid]
