"""Small Qt helper utilities used across widgets."""

from __future__ import annotations

from PySide6.QtWidgets import QInputDialog, QMessageBox, QWidget


def alert(parent: QWidget, title: str, text: str) -> None:
    QMessageBox.information(parent, title, text)


def confirm(parent: QWidget, title: str, text: str) -> bool:
    return QMessageBox.question(parent, title, text) == QMessageBox.StandardButton.Yes


def ask_text(parent: QWidget, title: str, label: str, text: str = "") -> str:
    value, ok = QInputDialog.getText(parent, title, label, text=text)
    return value.strip() if ok else ""
