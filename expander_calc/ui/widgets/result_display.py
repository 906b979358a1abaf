"""Reusable result display widgets for the ExpanderCalc GUI.

Provides table-based result views and a log/status output panel.
"""

from __future__ import annotations

from collections.abc import Sequence

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QHeaderView,
    QLabel,
    QPlainTextEdit,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

PLACEHOLDER = "--"


class ResultTable(QWidget):
    """Read-only result table.

    The first column is a row label; the remaining columns are
    right-aligned values. Defaults to Parameter | Value | Unit.
    """

    def __init__(
        self,
        title: str = "Results",
        headers: Sequence[str] = ("Parameter", "Value", "Unit"),
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._title_label = QLabel(f"<b>{title}</b>")
        layout.addWidget(self._title_label)

        self._table = QTableWidget()
        self._table.setColumnCount(len(headers))
        self._table.setHorizontalHeaderLabels(list(headers))
        header = self._table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        for col in range(1, len(headers)):
            header.setSectionResizeMode(col, QHeaderView.ResizeMode.ResizeToContents)
        self._table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self._table.setAlternatingRowColors(True)
        self._table.verticalHeader().setVisible(False)
        layout.addWidget(self._table)

    def set_title(self, title: str) -> None:
        self._title_label.setText(f"<b>{title}</b>")

    def clear(self) -> None:
        self._table.setRowCount(0)

    def set_data(self, rows: Sequence[Sequence[str]]) -> None:
        """Set table data, one sequence of cell texts per row."""
        self._table.setRowCount(len(rows))
        for i, row in enumerate(rows):
            for j, text in enumerate(row):
                item = QTableWidgetItem(text)
                if j > 0:
                    item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
                self._table.setItem(i, j, item)

    def set_placeholders(self, row_labels: Sequence[str]) -> None:
        """Show one row per label with every value cell set to ``--``."""
        n_values = self._table.columnCount() - 1
        self.set_data([(label, *([PLACEHOLDER] * n_values)) for label in row_labels])


class LogPanel(QWidget):
    """Read-only text log for status messages."""

    def __init__(self, title: str = "Log", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._title_label = QLabel(f"<b>{title}</b>")
        layout.addWidget(self._title_label)

        self._text = QPlainTextEdit()
        self._text.setReadOnly(True)
        self._text.setMaximumBlockCount(500)
        font = QFont("Consolas, Courier New, monospace", 9)
        self._text.setFont(font)
        layout.addWidget(self._text)

    def log(self, message: str) -> None:
        self._text.appendPlainText(message)

    def clear(self) -> None:
        self._text.clear()
