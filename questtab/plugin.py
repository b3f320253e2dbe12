"""Quest list filtering plugin: connects host events to the reflow engine."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, Slot

from questtab.core.catalog import PlayerState, QuestCatalog
from questtab.core.config import CONFIG_GROUP, ConfigStore
from questtab.core.engine import QuestListEngine, WidgetSurface
from questtab.core.menu import QUEST_TAB_WIDGETS, MenuContributor, MenuSurface
from questtab.core.scheduler import ReflowScheduler

logger = logging.getLogger(__name__)

QUEST_LIST_GROUP = "quest_list"


class QuestTabPlugin(QObject):
    def __init__(
        self,
        surface: WidgetSurface,
        catalog: QuestCatalog,
        store: ConfigStore,
        player: Optional[Callable[[], PlayerState]] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self.engine = QuestListEngine(surface, catalog, store.options, player)
        self.menu = MenuContributor(store)
        self.scheduler = ReflowScheduler(self.engine.reflow, parent=self)
        store.changed.connect(self.on_config_changed)

    @Slot(str, str)
    def on_config_changed(self, group: str, key: str) -> None:
        if group == CONFIG_GROUP:
            logger.debug("Option %r changed; scheduling reflow", key or "<reset>")
            self.scheduler.request()

    def on_widget_loaded(self, group_id: str) -> None:
        if group_id == QUEST_LIST_GROUP:
            self.scheduler.request()

    def on_menu_option_clicked(self, widget_id: str) -> None:
        """Any click on the quest tab may rebuild the list, so refresh it."""
        if widget_id in QUEST_TAB_WIDGETS:
            self.scheduler.request()

    def on_menu_opened(self, menu: MenuSurface, target: str, widget_id: str) -> int:
        return self.menu.contribute(menu, target, widget_id)

    def on_filter_menu_clicked(self, label: str) -> bool:
        return self.menu.invoke(label)
