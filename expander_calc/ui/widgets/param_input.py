"""Reusable parameter input form builder for the ExpanderCalc GUI.

Provides a declarative way to build input forms with numeric fields and
combo boxes whose rows can be shown or hidden by mode.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QComboBox,
    QDoubleSpinBox,
    QFormLayout,
    QLabel,
    QWidget,
)

_FIELD_MIN_WIDTH = 140


class ParamForm(QWidget):
    """Declarative parameter input form.

    Usage::

        form = ParamForm()
        form.add_float("inlet_pressure_bar", "Inlet Pressure", 20.0, unit="bar", min_val=0)
        form.add_combo("inlet_mode", "Inlet Given By", {"pt": "P and T", "saturation": "Tsat + superheat"})
        form.set_visible("inlet_pressure_bar", False)
        values = form.get_values()

    Combo boxes show a label per option but report the option key.
    """

    value_changed = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._layout = QFormLayout(self)
        self._layout.setContentsMargins(4, 4, 4, 4)
        self._layout.setSpacing(4)
        self._fields: dict[str, QDoubleSpinBox | QComboBox] = {}

    def add_header(self, text: str) -> None:
        """Add a bold header label."""
        self._layout.addRow(QLabel(f"<b>{text}</b>"))

    def add_separator(self) -> None:
        spacer = QLabel("")
        spacer.setFixedHeight(8)
        self._layout.addRow(spacer)

    def _add_field(self, name: str, label: str, unit: str, widget: QDoubleSpinBox | QComboBox) -> None:
        widget.setMinimumWidth(_FIELD_MIN_WIDTH)
        self._layout.addRow(f"{label} [{unit}]" if unit else label, widget)
        self._fields[name] = widget

    def add_float(
        self,
        name: str,
        label: str,
        default: float = 0.0,
        *,
        unit: str = "",
        min_val: float = 0.0,
        max_val: float = 1e9,
        decimals: int = 2,
        step: float = 1.0,
    ) -> QDoubleSpinBox:
        """Add a numeric field in user units."""
        spin = QDoubleSpinBox()
        spin.setRange(min_val, max_val)
        spin.setDecimals(decimals)
        spin.setSingleStep(step)
        spin.setValue(default)
        spin.valueChanged.connect(self.value_changed.emit)
        self._add_field(name, label, unit, spin)
        return spin

    def add_combo(
        self,
        name: str,
        label: str,
        options: dict[str, str],
        default: str | None = None,
    ) -> QComboBox:
        """Add a combo-box selection field.

        Args:
            options: ``{key: display label}``.
            default: Key selected initially.
        """
        combo = QComboBox()
        self._fill_combo(combo, options, default)
        combo.currentIndexChanged.connect(lambda _: self.value_changed.emit())
        self._add_field(name, label, "", combo)
        return combo

    def set_options(self, name: str, options: dict[str, str], default: str | None = None) -> None:
        """Replace the options of a combo-box field."""
        combo = self._fields[name]
        combo.blockSignals(True)
        combo.clear()
        self._fill_combo(combo, options, default)
        combo.blockSignals(False)
        self.value_changed.emit()

    @staticmethod
    def _fill_combo(combo: QComboBox, options: dict[str, str], default: str | None) -> None:
        for key, text in options.items():
            combo.addItem(text, key)
        if default is not None:
            idx = combo.findData(default)
            if idx >= 0:
                combo.setCurrentIndex(idx)

    def set_visible(self, name: str, visible: bool) -> None:
        """Show or hide a field together with its label."""
        self._layout.setRowVisible(self._fields[name], visible)

    def get_values(self) -> dict[str, Any]:
        """Return all current field values, keyed by field name."""
        return {name: self.get(name) for name in self._fields}

    def get(self, name: str) -> Any:
        widget = self._fields[name]
        if isinstance(widget, QComboBox):
            return widget.currentData()
        return widget.value()

    def set_value(self, name: str, value: Any) -> None:
        """Set a field value programmatically; unknown combo keys are ignored."""
        widget = self._fields[name]
        if isinstance(widget, QComboBox):
            idx = widget.findData(value)
            if idx >= 0:
                widget.setCurrentIndex(idx)
        else:
            widget.setValue(float(value))
