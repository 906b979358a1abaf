"""Matplotlib-based T-s diagram widget for PySide6."""

from __future__ import annotations

from collections.abc import Sequence

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from PySide6.QtWidgets import QVBoxLayout, QWidget

from expander_calc.core.fluids import SaturationDome
from expander_calc.cycle.components.base import FluidState
from expander_calc.utils.constants import J_TO_KJ, T_CELSIUS_OFFSET


class PlotCanvas(QWidget):
    """Embeddable matplotlib figure canvas.

    Usage::

        plot = PlotCanvas(title="T-s Diagram")
        plot.ts_diagram(dome, [inlet, ideal_outlet, actual_outlet], ["1", "2s", "2a"])
    """

    def __init__(
        self,
        title: str = "",
        parent: QWidget | None = None,
        figsize: tuple[float, float] = (5.0, 3.5),
    ) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._title = title
        self._figure = Figure(figsize=figsize, dpi=100)
        self._canvas = FigureCanvas(self._figure)
        layout.addWidget(self._canvas)

        self._ax = self._figure.add_subplot(111)
        if title:
            self._ax.set_title(title, fontsize=10)
        self._figure.tight_layout()

    @property
    def ax(self):
        return self._ax

    @property
    def figure(self):
        return self._figure

    def clear(self) -> None:
        """Clear the axes."""
        self._ax.clear()
        if self._title:
            self._ax.set_title(self._title, fontsize=10)
        self._canvas.draw()

    def ts_diagram(
        self,
        dome: SaturationDome | None,
        states: Sequence[FluidState],
        labels: Sequence[str],
    ) -> None:
        """Draw the saturation dome and the expansion in the T-s plane.

        The ideal expansion (1 → 2s) is dashed, the actual one (1 → 2a)
        solid. Temperatures in °C, entropies in kJ/(kg·K).
        """
        self._ax.clear()

        if dome is not None and not dome.is_empty:
            t_c = dome.temperature - T_CELSIUS_OFFSET
            self._ax.plot(dome.s_liquid * J_TO_KJ, t_c, color="slategray", linewidth=1.2)
            self._ax.plot(dome.s_vapour * J_TO_KJ, t_c, color="slategray", linewidth=1.2,
                          label="Saturation")
            if dome.critical is not None:
                s_c, T_c = dome.critical
                self._ax.plot(s_c * J_TO_KJ, T_c - T_CELSIUS_OFFSET, "o", color="slategray", markersize=3)

        s = [st.entropy * J_TO_KJ for st in states]
        t = [st.temperature - T_CELSIUS_OFFSET for st in states]
        if len(states) >= 3:
            self._ax.plot([s[0], s[1]], [t[0], t[1]], "--", color="steelblue", linewidth=1.2,
                          label="Isentropic")
            self._ax.plot([s[0], s[2]], [t[0], t[2]], "-", color="coral", linewidth=1.5,
                          label="Actual")
        self._ax.scatter(s, t, c="black", s=15, zorder=3)
        for x, y, text in zip(s, t, labels):
            self._ax.annotate(text, (x, y), textcoords="offset points", xytext=(5, 4), fontsize=8)

        self._ax.set_xlabel("s [kJ/(kg·K)]", fontsize=9)
        self._ax.set_ylabel("T [°C]", fontsize=9)
        if self._title:
            self._ax.set_title(self._title, fontsize=10)
        self._ax.grid(True, alpha=0.3)
        self._ax.legend(fontsize=8)
        self._ax.tick_params(labelsize=8)
        self._figure.tight_layout()
        self._canvas.draw()
