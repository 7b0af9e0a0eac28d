"""Search-as-you-type over hero names."""

from __future__ import annotations

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QLineEdit, QListWidget, QVBoxLayout, QWidget

from heroes.services import HeroService

from ..util.aio import LoopRunner

DEBOUNCE_MS = 300


class SearchPanel(QWidget):
    """Queries the service once typing pauses and the term has changed."""

    def __init__(self, service: HeroService, runner: LoopRunner) -> None:
        super().__init__()
        self._service = service
        self._runner = runner
        self._last_term: str | None = None

        layout = QVBoxLayout(self)
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Hero search")
        layout.addWidget(self.search_edit)
        self.results = QListWidget()
        layout.addWidget(self.results)

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(DEBOUNCE_MS)
        self._timer.timeout.connect(self.search)
        self.search_edit.textChanged.connect(lambda _text: self._timer.start())

    # ------------------------------------------------------------------
    def set_service(self, service: HeroService) -> None:
        self._service = service
        self._last_term = None
        self.results.clear()

    def search(self) -> None:
        term = self.search_edit.text()
        if term == self._last_term:
            return
        self._last_term = term
        heroes = self._runner.run(self._service.search_heroes(term))
        self.results.clear()
        self.results.addItems([hero.name for hero in heroes])
