"""Per-pass records for the quest list: rows and sections."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from questtab.core.catalog import UNKNOWN_QUEST, QuestInfo
from questtab.core.filtering import QuestItem, Section


class RowKind(Enum):
    TITLE = "title"
    QUEST = "quest"


@dataclass
class Row:
    """One child of a section: offset, visibility and rendered text."""

    kind: RowKind
    section: Section
    index: int
    base_text: str
    item: Optional[QuestItem] = None
    hidden: bool = False
    offset: Optional[int] = None
    text: str = ""

    @property
    def info(self) -> QuestInfo:
        return self.item.info if self.item is not None else UNKNOWN_QUEST

    @property
    def key(self) -> Tuple[Section, int]:
        return (self.section, self.index)


@dataclass
class SectionRows:
    """A section's rows in host order plus its quest rows in display order."""

    section: Section
    rows: List[Row] = field(default_factory=list)
    ordered: List[Row] = field(default_factory=list)
    hidden: bool = False
    offset: Optional[int] = None

    @property
    def quest_rows(self) -> List[Row]:
        return [row for row in self.rows if row.kind is RowKind.QUEST]


def index_rows(sections: List[SectionRows]) -> Dict[Tuple[Section, int], Row]:
    return {row.key: row for block in sections for row in block.rows}
