"""Main window for the heroes console.

The window wires together a header with backend selection, the hero panels
and the shared message log.  Switching backends rebuilds the client and the
:class:`~heroes.services.HeroService`; the message log survives the switch.
"""

from __future__ import annotations

import logging
import os
import sys

try:  # Provide a helpful error if PySide6 is missing
    from PySide6.QtWidgets import (
        QApplication,
        QComboBox,
        QHBoxLayout,
        QLabel,
        QLineEdit,
        QMainWindow,
        QTabWidget,
        QVBoxLayout,
        QWidget,
    )
except ModuleNotFoundError as exc:  # pragma: no cover - import guard
    raise ModuleNotFoundError(
        "PySide6 is required to run the GUI. Install it with"
        " `python -m pip install -e .[gui]`."
    ) from exc

from heroes import config
from heroes.api_client import create_client
from heroes.services import HeroService, MessageService

from .util.aio import LoopRunner
from .widgets.heroes_panel import HeroesPanel
from .widgets.messages_panel import MessagesPanel
from .widgets.search_panel import SearchPanel
from .widgets.server_panel import ServerPanel

logger = logging.getLogger(__name__)

_BACKEND_LABELS = {"local": "Local", "http": "HTTP"}


# ---------------------------------------------------------------------------
class ControlCenter(QMainWindow):
    """Main application window."""

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Tour of Heroes")

        api = config.get_api_settings()
        self.runner = LoopRunner()
        self.messages = MessageService()
        self.service = self._build_service(api["backend"], api["base_url"])

        # ------------------------------------------------------------------
        # Header bar with backend selector
        header = QWidget()
        hb = QHBoxLayout(header)
        hb.addWidget(QLabel("Backend:"))
        self.backend_combo = QComboBox()
        self.backend_combo.addItems(list(_BACKEND_LABELS.values()))
        self.backend_combo.setCurrentText(_BACKEND_LABELS[api["backend"]])
        hb.addWidget(self.backend_combo)
        self.base_url_edit = QLineEdit(api["base_url"])
        hb.addWidget(self.base_url_edit)
        hb.addStretch(1)

        # ------------------------------------------------------------------
        self.tabs = QTabWidget()
        self.heroes_panel = HeroesPanel(self.service, self.runner)
        self.search_panel = SearchPanel(self.service, self.runner)
        self.server_panel = ServerPanel()
        self.tabs.addTab(self.heroes_panel, "Heroes")
        self.tabs.addTab(self.search_panel, "Search")
        self.tabs.addTab(self.server_panel, "Server")
        self.server_panel.base_url_changed.connect(self.set_base_url)
        self.base_url_edit.editingFinished.connect(self.base_url_edited)
        self.server_panel.set_enabled(api["backend"] == "http")
        self.messages_panel = MessagesPanel(self.messages)

        central = QWidget()
        v = QVBoxLayout(central)
        v.addWidget(header)
        v.addWidget(self.tabs, 3)
        v.addWidget(self.messages_panel, 1)
        self.setCentralWidget(central)

        self.backend_combo.currentTextChanged.connect(self.switch_backend)
        self.heroes_panel.refresh()

    # ------------------------------------------------------------------
    def _build_service(self, backend: str, base_url: str) -> HeroService:
        settings = config.get_api_settings()
        client = create_client(backend, base_url=base_url or None)
        return HeroService(client, self.messages, heroes_url=settings["heroes_path"])

    def current_backend(self) -> str:
        return "local" if self.backend_combo.currentText() == _BACKEND_LABELS["local"] else "http"

    def switch_backend(self, text: str) -> None:
        backend = "local" if text == _BACKEND_LABELS["local"] else "http"
        logger.info("switching backend to %s", backend)
        self._rebuild_service(backend)
        self.server_panel.set_enabled(backend == "http")

    def set_base_url(self, url: str) -> None:
        self.base_url_edit.setText(url)
        self.base_url_edited()

    def base_url_edited(self) -> None:
        if self.current_backend() == "http":
            logger.info("HTTP backend now at %s", self.base_url_edit.text())
            self._rebuild_service("http")

    def _rebuild_service(self, backend: str) -> None:
        self.runner.run(self.service.aclose())
        self.service = self._build_service(backend, self.base_url_edit.text())
        # propagate new service to panels
        self.heroes_panel.set_service(self.service)
        self.search_panel.set_service(self.service)

    # ------------------------------------------------------------------
    def closeEvent(self, event):  # pragma: no cover - Qt hook
        self.server_panel.stop_server()
        self.messages_panel.detach()
        self.runner.run(self.service.aclose())
        self.runner.close()
        super().closeEvent(event)


# ---------------------------------------------------------------------------
def main() -> None:  # pragma: no cover - manual entry point
    config.configure_logging()
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen" if not os.environ.get("DISPLAY") else "")
    app = QApplication(sys.argv)
    win = ControlCenter()
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":  # pragma: no cover
    main()
