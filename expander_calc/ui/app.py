"""ExpanderCalc GUI application entry point.

Launch with:
    python -m expander_calc.ui.app
    expcalc gui        (via CLI command)
"""

from __future__ import annotations

import logging
import sys


def run() -> None:
    """Launch the ExpanderCalc desktop application."""
    from PySide6.QtWidgets import QApplication

    from expander_calc.ui.main_window import MainWindow
    from expander_calc.ui.styles.theme import STYLESHEET

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    app = QApplication(sys.argv)
    app.setApplicationName("ExpanderCalc")
    app.setStyle("Fusion")
    app.setStyleSheet(STYLESHEET)

    window = MainWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
