from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from PySide6.QtCore import QPoint, Qt
from PySide6.QtWidgets import (
    QLabel,
    QMainWindow,
    QMenu,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from questtab.core.catalog import PlayerState, QuestCatalog, QuestCategory, QuestStatus
from questtab.core.config import ConfigStore, ConfigStoreError
from questtab.core.filtering import (
    COMPLETE_COLOR,
    IN_PROGRESS_COLOR,
    NOT_STARTED_COLOR,
    Section,
)
from questtab.core.menu import CANCEL, MenuEntries
from questtab.plugin import QUEST_LIST_GROUP, QuestTabPlugin
from questtab.ui.colors import PanelColors
from questtab.ui.quest_list import ROW_WIDTH, QuestListPanel

logger = logging.getLogger(__name__)

QUEST_TAB_ID = "resizable_viewport_quests_tab"

_SECTION_BY_CATEGORY = {
    QuestCategory.FREE: Section.FREE,
    QuestCategory.MEMBERS: Section.MEMBERS,
    QuestCategory.MINIQUEST: Section.MINIQUESTS,
}

_COLOR_BY_STATUS = {
    QuestStatus.COMPLETE: COMPLETE_COLOR,
    QuestStatus.IN_PROGRESS: IN_PROGRESS_COLOR,
    QuestStatus.NOT_STARTED: NOT_STARTED_COLOR,
}


class MainWindow(QMainWindow):
    """Side panel with a quest tab button; right-click the tab for the list options."""

    def __init__(self, catalog: QuestCatalog, store: ConfigStore, player: PlayerState) -> None:
        super().__init__()
        self._catalog = catalog
        self._player = player

        self._panel = QuestListPanel()
        self._plugin = QuestTabPlugin(self._panel, catalog, store, lambda: self._player, parent=self)
        self._panel.loaded.connect(self._plugin.on_widget_loaded)

        self._tab_button = QPushButton("Quests")
        self._tab_button.setObjectName(QUEST_TAB_ID)
        self._tab_button.setContextMenuPolicy(Qt.CustomContextMenu)
        self._tab_button.customContextMenuRequested.connect(self._show_tab_menu)
        self._tab_button.clicked.connect(self._on_tab_clicked)

        self._status_label = QLabel("")
        self._status_label.setObjectName("statusLabel")

        self._build_ui()
        self._panel.load(self._host_rows(), QUEST_LIST_GROUP)

    def _build_ui(self) -> None:
        self.setWindowTitle("Quest List")
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)
        layout.addWidget(self._tab_button, 0)
        layout.addWidget(self._panel, 1)
        layout.addWidget(self._status_label, 0)
        self.setCentralWidget(central)
        self.setMinimumSize(ROW_WIDTH + 40, 420)
        central.setStyleSheet(
            f"""
            QWidget {{ background: {PanelColors.BG_DARK}; }}
            QPushButton#{QUEST_TAB_ID} {{
                background: {PanelColors.TAB_BG};
                color: {PanelColors.TITLE};
                border: 1px solid {PanelColors.BORDER};
                padding: 6px 12px;
            }}
            QPushButton#{QUEST_TAB_ID}:hover {{ background: {PanelColors.TAB_BG_HOVER}; }}
            QLabel#statusLabel {{ color: {PanelColors.TEXT_MUTED}; }}
            """
        )

    def _host_rows(self) -> Dict[Section, List[Tuple[str, int]]]:
        """Quest rows the way the game lists them: alphabetical, colored by status."""
        rows: Dict[Section, List[Tuple[str, int]]] = {section: [] for section in Section}
        for info in sorted(self._catalog.all(), key=lambda q: q.name.lower()):
            status = self._player.quest_statuses.get(info.name, QuestStatus.NOT_STARTED)
            section = _SECTION_BY_CATEGORY.get(info.category, Section.MEMBERS)
            rows[section].append((info.name, _COLOR_BY_STATUS[status]))
        return rows

    def _on_tab_clicked(self) -> None:
        self._plugin.on_menu_option_clicked(QUEST_TAB_ID)

    def _show_tab_menu(self, pos: QPoint) -> None:
        entries = MenuEntries()
        self._plugin.on_menu_opened(entries, "Quest List", QUEST_TAB_ID)

        menu = QMenu(self)
        actions = {}
        for entry in entries.current_entries():
            actions[menu.addAction(entry.label)] = entry
        chosen = menu.exec(self._tab_button.mapToGlobal(pos))
        entry = actions.get(chosen) if chosen is not None else None
        if entry is None or entry.label == CANCEL:
            return

        self._plugin.on_menu_option_clicked(QUEST_TAB_ID)
        try:
            self._plugin.on_filter_menu_clicked(entry.label)
        except ConfigStoreError as e:
            logger.warning("Option change failed: %s", e)
            self._status_label.setText("Could not save option")
            return
        self._status_label.setText(entry.label)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._plugin.scheduler.request()
