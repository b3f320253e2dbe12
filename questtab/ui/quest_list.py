"""Quest list panel: three absolutely-positioned sections inside a scroll area."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtWidgets import QLabel, QScrollArea, QWidget

from questtab.core.filtering import SECTION_ORDER, Section
from questtab.ui.colors import PanelColors, int_to_hex, markup_to_html

ROW_WIDTH = 220
LABEL_HEIGHT = 15
_TITLES = {
    Section.FREE: "Free Quests",
    Section.MEMBERS: "Members' Quests",
    Section.MINIQUESTS: "Miniquests",
}


class QuestListElement:
    """Adapter exposing a label or section widget the way the reflow engine expects."""

    def __init__(self, widget: QWidget, name: str, text: str = "", text_color: int = 0, on_move=None) -> None:
        self._widget = widget
        self._name = name
        self._text = text
        self._text_color = text_color
        self._on_move = on_move
        self._render()

    @property
    def widget(self) -> QWidget:
        return self._widget

    @property
    def name(self) -> str:
        return self._name

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value
        self._render()

    @property
    def hidden(self) -> bool:
        return self._widget.isHidden()

    @hidden.setter
    def hidden(self, value: bool) -> None:
        self._widget.setHidden(value)
        if self._on_move is not None:
            self._on_move()

    @property
    def vertical_offset(self) -> int:
        return self._widget.y()

    @vertical_offset.setter
    def vertical_offset(self, value: int) -> None:
        self._widget.move(self._widget.x(), value)
        if self._on_move is not None:
            self._on_move()

    @property
    def text_color(self) -> int:
        return self._text_color

    def _render(self) -> None:
        if isinstance(self._widget, QLabel):
            self._widget.setText(markup_to_html(self._text))


class QuestListPanel(QScrollArea):
    """Host-side quest list; implements the widget surface read by the engine."""

    loaded = Signal(str)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._content = QWidget()
        self._content.setObjectName("questListContent")
        self._sections: Dict[Section, QuestListElement] = {}
        self._children: Dict[Section, List[QuestListElement]] = {}
        self._geometry_pending = False

        self.setWidget(self._content)
        self.setWidgetResizable(False)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setStyleSheet(
            f"""
            QScrollArea {{ background: {PanelColors.BG}; border: 1px solid {PanelColors.BORDER}; }}
            QWidget#questListContent {{ background: {PanelColors.BG}; }}
            QLabel#questListTitle {{ color: {PanelColors.TITLE}; font-weight: 700; }}
            """
        )

    def section(self, section: Section) -> Optional[QuestListElement]:
        return self._sections.get(section)

    def section_children(self, section: Section) -> Optional[List[QuestListElement]]:
        children = self._children.get(section)
        return list(children) if children is not None else None

    def load(self, quests: Mapping[Section, Sequence[Tuple[str, int]]], group_id: str) -> None:
        """Rebuild the panel from ``(label, text color)`` rows in host order, then announce it."""
        for element in self._sections.values():
            element.widget.deleteLater()
        self._sections.clear()
        self._children.clear()

        y = 0
        for section in SECTION_ORDER:
            rows = quests.get(section, ())
            box = QWidget(self._content)
            box.setGeometry(0, y, ROW_WIDTH, 20 + LABEL_HEIGHT * len(rows))
            container = QuestListElement(box, section.value, on_move=self._schedule_geometry)

            title = QLabel(box)
            title.setObjectName("questListTitle")
            title.setGeometry(4, 0, ROW_WIDTH - 8, 18)
            children = [QuestListElement(title, "", _TITLES[section])]

            for index, (label, color) in enumerate(rows):
                widget = QLabel(box)
                widget.setTextFormat(Qt.RichText)
                widget.setStyleSheet(f"color: {int_to_hex(color)};")
                widget.setGeometry(8, 20 + LABEL_HEIGHT * index, ROW_WIDTH - 12, LABEL_HEIGHT)
                children.append(QuestListElement(widget, label, label, color, self._schedule_geometry))

            self._sections[section] = container
            self._children[section] = children
            y += box.height()
            box.show()

        self._content.resize(ROW_WIDTH, y)
        self.loaded.emit(group_id)

    def _schedule_geometry(self) -> None:
        if not self._geometry_pending:
            self._geometry_pending = True
            QTimer.singleShot(0, self._update_geometry)

    def _update_geometry(self) -> None:
        self._geometry_pending = False
        bottom = 0
        for section in SECTION_ORDER:
            container = self._sections.get(section)
            if container is None or container.hidden:
                continue
            box = container.widget
            rows_bottom = max(
                (c.widget.y() + LABEL_HEIGHT for c in self._children[section] if not c.hidden),
                default=20,
            )
            box.resize(ROW_WIDTH, rows_bottom)
            bottom = max(bottom, box.y() + rows_bottom)
        self._content.resize(ROW_WIDTH, bottom)
