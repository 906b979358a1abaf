"""Main application window for the ExpanderCalc GUI."""

from __future__ import annotations

from PySide6.QtCore import QTimer
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QStatusBar, QVBoxLayout, QWidget

from expander_calc import __app_name__, __version__
from expander_calc.core.context import AppContext
from expander_calc.core.loader import OracleLoadError
from expander_calc.ui.modules.expander_tab import ExpanderTab


class MainWindow(QMainWindow):
    """ExpanderCalc main application window.

    Hosts the expander calculator and reports the property library state
    in the status bar. CoolProp is loaded once the event loop is running,
    so the window appears before the import completes.
    """

    def __init__(self, context: AppContext | None = None) -> None:
        super().__init__()

        self.setWindowTitle(f"{__app_name__} v{__version__}")
        self.setMinimumSize(1000, 700)
        self.resize(1200, 820)

        self.context = context or AppContext()

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(4, 4, 4, 4)

        self.expander_tab = ExpanderTab(self.context)
        layout.addWidget(self.expander_tab)
        self.expander_tab.status_changed.connect(self._set_status)

        self.status = QStatusBar()
        self.setStatusBar(self.status)
        self._set_status("loading", "Loading CoolProp property library...")

        self._build_menu()

        QTimer.singleShot(0, self._load_oracle)

    def _build_menu(self) -> None:
        menu = self.menuBar()

        file_menu = menu.addMenu("&File")

        clear_action = QAction("&Clear", self)
        clear_action.setShortcut("Ctrl+L")
        clear_action.triggered.connect(self.expander_tab.reset)
        file_menu.addAction(clear_action)

        quit_action = QAction("&Quit", self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        help_menu = menu.addMenu("&Help")

        about_action = QAction("&About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

    def _load_oracle(self) -> None:
        try:
            self.context.loader.load()
        except OracleLoadError as e:
            self.expander_tab.set_ready(False)
            self._set_status("error", f"Error: {e}")
            return
        self.expander_tab.set_ready(True)
        self._set_status("ready", f"CoolProp property library loaded (v{self.context.loader.version})")

    def _set_status(self, state: str, message: str) -> None:
        self.status.setProperty("state", state)
        self.status.style().unpolish(self.status)
        self.status.style().polish(self.status)
        self.status.showMessage(message)

    def _show_about(self) -> None:
        from PySide6.QtWidgets import QMessageBox

        version = self.context.loader.version or "not loaded"
        QMessageBox.about(
            self,
            f"About {__app_name__}",
            f"<h3>{__app_name__} v{__version__}</h3>"
            f"<p>Real-fluid expander calculator</p>"
            f"<p>Thermodynamic properties by CoolProp ({version}).</p>"
            f"<p>MIT License</p>",
        )
