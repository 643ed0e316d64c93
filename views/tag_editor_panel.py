"""
Tag editor panel.

Floating key/value table for editing one region's tags. The panel is
created by the tag binding when the tags button is checked and discarded
when it is unchecked; the binding reads ``tags()`` before ``close()``.
"""

from typing import Dict, Optional

from PyQt6.QtCore import QPoint
from PyQt6.QtWidgets import (
    QFrame, QVBoxLayout, QHBoxLayout, QTableWidget, QTableWidgetItem,
    QHeaderView, QPushButton, QWidget,
)


class TagEditorPanel(QFrame):
    """Editable table of tag names and values."""

    def __init__(self, tags: Dict[str, str], parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._setup_ui()
        self.set_tags(tags)

    def _setup_ui(self):
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setStyleSheet("""
            TagEditorPanel {
                background: white;
                border: 1px solid #D1D5DB;
                border-radius: 6px;
            }
            QPushButton {
                padding: 4px 10px;
                border-radius: 4px;
                border: 1px solid #D1D5DB;
                background: #F9FAFB;
            }
            QPushButton:hover {
                background: #F3F4F6;
            }
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        self._table = QTableWidget(0, 2)
        self._table.setHorizontalHeaderLabels(["Name", "Value"])
        self._table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self._table.verticalHeader().setVisible(False)
        self._table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        layout.addWidget(self._table)

        buttons = QHBoxLayout()
        add_btn = QPushButton("Add")
        add_btn.clicked.connect(lambda: self._add_row())
        buttons.addWidget(add_btn)

        remove_btn = QPushButton("Remove")
        remove_btn.clicked.connect(self._remove_selected)
        buttons.addWidget(remove_btn)
        buttons.addStretch()
        layout.addLayout(buttons)

        self.resize(260, 200)

    def set_tags(self, tags: Dict[str, str]):
        self._table.setRowCount(0)
        for name, value in tags.items():
            self._add_row(name, value)

    def tags(self) -> Dict[str, str]:
        """Current table contents; rows without a name are dropped."""
        result = {}
        for row in range(self._table.rowCount()):
            name_item = self._table.item(row, 0)
            value_item = self._table.item(row, 1)
            name = name_item.text().strip() if name_item else ""
            if not name:
                continue
            result[name] = value_item.text() if value_item else ""
        return result

    def place_below(self, anchor: QWidget):
        """Position the panel just under its trigger control."""
        margins = anchor.contentsMargins()
        pos = QPoint(anchor.x() + margins.left() - 2,
                     anchor.y() + anchor.height() + margins.bottom() + 2)
        parent = self.parentWidget()
        if parent is not None and anchor.parentWidget() is not None:
            pos = anchor.parentWidget().mapTo(parent, pos)
        self.move(pos)

    def close(self) -> bool:
        self.hide()
        self.deleteLater()
        return True

    def _add_row(self, name: str = "", value: str = ""):
        row = self._table.rowCount()
        self._table.insertRow(row)
        self._table.setItem(row, 0, QTableWidgetItem(name))
        self._table.setItem(row, 1, QTableWidgetItem(value))

    def _remove_selected(self):
        rows = sorted({index.row() for index in self._table.selectedIndexes()}, reverse=True)
        for row in rows:
            self._table.removeRow(row)


__all__ = ["TagEditorPanel"]
