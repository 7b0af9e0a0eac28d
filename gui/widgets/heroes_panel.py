"""Heroes list with add/rename/delete actions."""

from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from heroes.models import Hero
from heroes.services import HeroService

from ..util import qt
from ..util.aio import LoopRunner


class HeroesPanel(QWidget):
    """Browse and edit the heroes collection."""

    def __init__(self, service: HeroService, runner: LoopRunner) -> None:
        super().__init__()
        self._service = service
        self._runner = runner
        self._heroes: List[Hero] = []

        layout = QVBoxLayout(self)
        self.list = QListWidget()
        layout.addWidget(self.list)

        btn_row = QHBoxLayout()
        for label, slot in (
            ("Refresh", self.refresh),
            ("Add…", self.add_hero),
            ("Rename…", self.rename_selected),
            ("Delete", self.delete_selected),
        ):
            btn = QPushButton(label)
            btn.clicked.connect(slot)
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

        detail_row = QHBoxLayout()
        detail_row.addWidget(QLabel("Hero id:"))
        self.id_spin = QSpinBox()
        self.id_spin.setRange(1, 1_000_000)
        self.id_spin.setValue(12)
        detail_row.addWidget(self.id_spin)
        fetch_btn = QPushButton("Fetch")
        fetch_btn.clicked.connect(self.fetch_detail)
        detail_row.addWidget(fetch_btn)
        self.detail_label = QLabel("")
        detail_row.addWidget(self.detail_label, 1)
        layout.addLayout(detail_row)

    # ------------------------------------------------------------------
    def set_service(self, service: HeroService) -> None:
        self._service = service
        self.refresh()

    # ------------------------------------------------------------------
    def refresh(self) -> None:
        self._heroes = self._runner.run(self._service.get_heroes())
        self.list.clear()
        for hero in self._heroes:
            item = QListWidgetItem(f"{hero.id}  {hero.name}")
            item.setData(Qt.ItemDataRole.UserRole, hero.id)
            self.list.addItem(item)

    def selected_hero(self) -> Optional[Hero]:
        item = self.list.currentItem()
        if item is None:
            return None
        hero_id = item.data(Qt.ItemDataRole.UserRole)
        return next((h for h in self._heroes if h.id == hero_id), None)

    # ------------------------------------------------------------------
    def add_hero(self) -> None:
        name = qt.ask_text(self, "Add hero", "Name:")
        if not name:
            return
        if self._runner.run(self._service.add_hero(Hero(name=name))) is not None:
            self.refresh()

    def rename_selected(self) -> None:
        hero = self.selected_hero()
        if hero is None:
            return
        name = qt.ask_text(self, "Rename hero", "Name:", hero.name)
        if not name or name == hero.name:
            return
        self._runner.run(self._service.update_hero(hero.model_copy(update={"name": name})))
        self.refresh()

    def delete_selected(self) -> None:
        hero = self.selected_hero()
        if hero is None:
            return
        if not qt.confirm(self, "Delete hero", f"Delete {hero.name}?"):
            return
        self._runner.run(self._service.delete_hero(hero.id))
        self.refresh()

    def fetch_detail(self) -> None:
        hero = self._runner.run(self._service.get_hero(self.id_spin.value()))
        self.detail_label.setText(f"{hero.id}: {hero.name}" if hero else "<not found>")
