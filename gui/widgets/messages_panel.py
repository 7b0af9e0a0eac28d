"""Read-only view of the shared message log."""

from __future__ import annotations

from typing import List

from PySide6.QtWidgets import QHBoxLayout, QLabel, QPlainTextEdit, QPushButton, QVBoxLayout, QWidget

from heroes.services import MessageService


class MessagesPanel(QWidget):
    def __init__(self, messages: MessageService) -> None:
        super().__init__()
        self._messages = messages

        layout = QVBoxLayout(self)
        row = QHBoxLayout()
        row.addWidget(QLabel("Messages"))
        row.addStretch(1)
        clear_btn = QPushButton("Clear messages")
        clear_btn.clicked.connect(self._messages.clear)
        row.addWidget(clear_btn)
        layout.addLayout(row)

        self.view = QPlainTextEdit()
        self.view.setReadOnly(True)
        layout.addWidget(self.view)

        self._messages.subscribe(self.render)
        self.render(self._messages.messages)

    # ------------------------------------------------------------------
    def render(self, messages: List[str]) -> None:
        self.view.setPlainText("\n".join(messages))

    def detach(self) -> None:
        self._messages.unsubscribe(self.render)
