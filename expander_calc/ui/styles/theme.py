"""Application theme and stylesheet for the ExpanderCalc GUI.

The status bar is coloured through its ``state`` dynamic property
(``loading``, ``ready``, ``done``, ``error``, ``idle``).
"""

STYLESHEET = """
QWidget {
    background-color: #fafafa;
    color: #262626;
    font-size: 11px;
}
QTabBar::tab {
    background-color: #f0f0f0;
    color: #595959;
    padding: 6px 14px;
    border: 1px solid #d9d9d9;
    border-bottom: none;
    border-top-left-radius: 4px;
    border-top-right-radius: 4px;
    margin-right: 2px;
}
QTabBar::tab:selected {
    background-color: #ffffff;
    color: #1677ff;
    border-bottom: 2px solid #1677ff;
}
QPushButton {
    background-color: #1677ff;
    color: #ffffff;
    border: none;
    border-radius: 4px;
    padding: 6px 16px;
    font-weight: bold;
    min-height: 28px;
}
QPushButton:hover {
    background-color: #4096ff;
}
QPushButton:disabled {
    background-color: #d9d9d9;
    color: #8c8c8c;
}
QPushButton[secondary="true"] {
    background-color: #f0f0f0;
    color: #262626;
    border: 1px solid #d9d9d9;
}
QDoubleSpinBox, QSpinBox, QComboBox {
    background-color: #ffffff;
    border: 1px solid #d9d9d9;
    border-radius: 3px;
    padding: 3px 6px;
    min-height: 22px;
}
QDoubleSpinBox:focus, QSpinBox:focus, QComboBox:focus {
    border: 1px solid #1677ff;
}
QTableWidget {
    background-color: #ffffff;
    alternate-background-color: #f5f5f5;
    gridline-color: #e8e8e8;
    border: 1px solid #d9d9d9;
}
QHeaderView::section {
    background-color: #f0f0f0;
    color: #262626;
    padding: 4px 6px;
    border: none;
    border-bottom: 1px solid #d9d9d9;
    font-weight: bold;
}
QPlainTextEdit {
    background-color: #ffffff;
    border: 1px solid #d9d9d9;
    font-family: "Consolas", "Courier New", monospace;
    font-size: 10px;
}
QStatusBar {
    background-color: #f9f9f9;
    color: #555555;
    border-top: 1px solid #d9d9d9;
}
QStatusBar[state="loading"] {
    background-color: #fffbe6;
    color: #ad6800;
}
QStatusBar[state="ready"] {
    background-color: #e6f7ff;
    color: #006d75;
}
QStatusBar[state="done"] {
    background-color: #f6ffed;
    color: #389e0d;
}
QStatusBar[state="error"] {
    background-color: #fff1f0;
    color: #cf1322;
}
"""
