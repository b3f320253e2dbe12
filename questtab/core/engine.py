"""One reflow pass over the quest list panel.

A pass reads every section from the widget surface, rebuilds its rows from
scratch, filters, sorts, lays out and annotates them, and only then writes
the result back. If the panel is not fully built yet the pass is dropped and
nothing is written.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from questtab.core.catalog import PlayerState, QuestCatalog, QuestStatus
from questtab.core.config import QuestTabOptions
from questtab.core.filtering import (
    SECTION_ORDER,
    QuestItem,
    Section,
    is_hidden,
    is_section_hidden,
    status_from_color,
)
from questtab.core.labels import annotate, strip_annotations
from questtab.core.layout import reflow as layout_sections
from questtab.core.models import Row, RowKind, SectionRows, index_rows
from questtab.core.sorting import sort_rows

logger = logging.getLogger(__name__)


class ListElement(Protocol):
    name: str
    text: str
    hidden: bool
    vertical_offset: int

    @property
    def text_color(self) -> int: ...


class WidgetSurface(Protocol):
    def section(self, section: Section) -> Optional[ListElement]: ...

    def section_children(self, section: Section) -> Optional[Sequence[Optional[ListElement]]]: ...


_Snapshot = List[Tuple[Section, ListElement, List[ListElement]]]


class QuestListEngine:
    """Filters, sorts and positions the quest list according to the current options."""

    def __init__(
        self,
        surface: WidgetSurface,
        catalog: QuestCatalog,
        options: Callable[[], QuestTabOptions],
        player: Optional[Callable[[], PlayerState]] = None,
    ) -> None:
        self._surface = surface
        self._catalog = catalog
        self._options = options
        self._player = player or PlayerState
        self._sections: List[SectionRows] = []
        self._rows: Dict[Tuple[Section, int], Row] = {}
        self._content_height = 0

    @property
    def sections(self) -> List[SectionRows]:
        """Rows of the last committed pass."""
        return list(self._sections)

    @property
    def content_height(self) -> int:
        return self._content_height

    def row(self, section: Section, index: int) -> Row:
        return self._rows[(section, index)]

    def reflow(self) -> bool:
        snapshot = self._read_surface()
        if snapshot is None:
            return False

        options = self._options()
        player = self._player_with_statuses(snapshot)
        sections = [self._build_section(section, children, options, player) for section, _, children in snapshot]
        height = layout_sections(sections)

        self._commit(snapshot, sections)
        self._sections = sections
        self._rows = index_rows(sections)
        self._content_height = height
        logger.debug("Quest list reflowed, content height %d", height)
        return True

    def _read_surface(self) -> Optional[_Snapshot]:
        snapshot: _Snapshot = []
        for section in SECTION_ORDER:
            container = self._surface.section(section)
            children = self._surface.section_children(section)
            if container is None or children is None or any(child is None for child in children):
                logger.debug("Quest list %s section not ready; skipping pass", section.value)
                return None
            snapshot.append((section, container, list(children)))
        return snapshot

    def _player_with_statuses(self, snapshot: _Snapshot) -> PlayerState:
        player = self._player()
        statuses: Dict[str, QuestStatus] = dict(player.quest_statuses)
        for _, _, children in snapshot:
            for child in children:
                status = status_from_color(child.text_color)
                if child.name and status is not None:
                    statuses[strip_annotations(child.text)] = status
        return PlayerState(skills=player.skills, quest_points=player.quest_points, quest_statuses=statuses)

    def _build_section(
        self,
        section: Section,
        children: List[ListElement],
        options: QuestTabOptions,
        player: PlayerState,
    ) -> SectionRows:
        block = SectionRows(section=section, hidden=is_section_hidden(section, options))
        for index, child in enumerate(children):
            base = strip_annotations(child.text)
            # Section titles are the only unnamed children.
            if not child.name:
                block.rows.append(
                    Row(RowKind.TITLE, section, index, base, hidden=block.hidden, text=child.text)
                )
                continue

            info = self._catalog.lookup(base)
            item = QuestItem(
                label=base,
                section=section,
                info=info,
                status=status_from_color(child.text_color),
                eligible=info.is_eligible(player),
            )
            row = Row(RowKind.QUEST, section, index, base, item=item)
            row.hidden = block.hidden or is_hidden(item, options)
            row.text = annotate(base, info, options)
            block.rows.append(row)

        if not block.hidden:
            block.ordered = sort_rows(block.quest_rows, options)
        return block

    def _commit(self, snapshot: _Snapshot, sections: List[SectionRows]) -> None:
        for (_, container, children), block in zip(snapshot, sections):
            container.hidden = block.hidden
            if block.offset is not None:
                container.vertical_offset = block.offset
            for child, row in zip(children, block.rows):
                child.hidden = row.hidden
                if row.kind is RowKind.TITLE:
                    continue
                child.text = row.text
                if row.offset is not None:
                    child.vertical_offset = row.offset
