"""Embedded uvicorn server controller for the in-memory heroes API."""

from __future__ import annotations

import sys

from PySide6.QtCore import QProcess, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from heroes import config


class ServerPanel(QWidget):
    """Start/stop a uvicorn subprocess and show logs."""

    base_url_changed = Signal(str)

    def __init__(self) -> None:
        super().__init__()
        self.proc: QProcess | None = None
        self._enabled = True
        server = config.get_server_settings()

        layout = QVBoxLayout(self)
        row = QHBoxLayout()
        row.addWidget(QLabel("Host:"))
        self.host_edit = QLineEdit(server["host"])
        row.addWidget(self.host_edit)
        row.addWidget(QLabel("Port:"))
        self.port_edit = QLineEdit(str(server["port"]))
        row.addWidget(self.port_edit)
        layout.addLayout(row)

        btn_row = QHBoxLayout()
        self.start_btn = QPushButton("Start")
        self.start_btn.clicked.connect(self.start_server)
        btn_row.addWidget(self.start_btn)
        self.stop_btn = QPushButton("Stop")
        self.stop_btn.clicked.connect(self.stop_server)
        self.stop_btn.setEnabled(False)
        btn_row.addWidget(self.stop_btn)
        layout.addLayout(btn_row)

        self.log_view = QPlainTextEdit()
        self.log_view.setReadOnly(True)
        layout.addWidget(self.log_view)

    # ------------------------------------------------------------------
    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if not enabled:
            self.stop_server()
        self.start_btn.setEnabled(enabled and self.proc is None)

    # ------------------------------------------------------------------
    def base_url(self) -> str:
        return f"http://{self.host_edit.text() or '127.0.0.1'}:{self.port_edit.text() or '8000'}"

    def start_server(self) -> None:
        if self.proc is not None:
            return
        host = self.host_edit.text() or "127.0.0.1"
        port = self.port_edit.text() or "8000"
        self.proc = QProcess(self)
        self.proc.setProcessChannelMode(QProcess.ProcessChannelMode.MergedChannels)
        self.proc.readyRead.connect(self._read_output)
        self.proc.start(
            sys.executable,
            ["-m", "uvicorn", "heroes.main:app", "--host", host, "--port", port],
        )
        self.start_btn.setEnabled(False)
        self.stop_btn.setEnabled(True)
        self.base_url_changed.emit(self.base_url())

    # ------------------------------------------------------------------
    def stop_server(self) -> None:
        if self.proc is None:
            return
        self.proc.terminate()
        self.proc.waitForFinished(3000)
        if self.proc.state() != QProcess.ProcessState.NotRunning:
            self.proc.kill()
            self.proc.waitForFinished(1000)
        self.proc = None
        self.start_btn.setEnabled(self._enabled)
        self.stop_btn.setEnabled(False)

    # ------------------------------------------------------------------
    def _read_output(self) -> None:  # pragma: no cover - Qt callback
        if self.proc:
            data = bytes(self.proc.readAll()).decode("utf-8", "ignore")
            self.log_view.appendPlainText(data.rstrip())
