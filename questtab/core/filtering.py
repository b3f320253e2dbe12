"""Quest visibility rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from questtab.core.catalog import QuestInfo, QuestStatus
from questtab.core.config import QuestTabOptions

COMPLETE_COLOR = 0x0DC10D
IN_PROGRESS_COLOR = 0xFFFF00
NOT_STARTED_COLOR = 0xFF0000

_STATUS_BY_COLOR = {
    COMPLETE_COLOR: QuestStatus.COMPLETE,
    IN_PROGRESS_COLOR: QuestStatus.IN_PROGRESS,
    NOT_STARTED_COLOR: QuestStatus.NOT_STARTED,
}


class Section(Enum):
    FREE = "free"
    MEMBERS = "members"
    MINIQUESTS = "miniquests"


# Rendering order of the quest list.
SECTION_ORDER = (Section.FREE, Section.MEMBERS, Section.MINIQUESTS)


@dataclass(frozen=True)
class QuestItem:
    label: str
    section: Section
    info: QuestInfo
    status: Optional[QuestStatus]
    eligible: bool = True


def status_from_color(color: int) -> Optional[QuestStatus]:
    """Map the quest list text color to a status, or None for any other color."""
    return _STATUS_BY_COLOR.get(color)


def is_section_hidden(section: Section, options: QuestTabOptions) -> bool:
    if section is Section.FREE:
        return options.hide_free
    if section is Section.MEMBERS:
        return options.hide_members
    return options.hide_miniquests


def is_hidden(item: QuestItem, options: QuestTabOptions) -> bool:
    """Status rules and the can't-do rule are OR'd; either one hides the item."""
    if item.status is QuestStatus.COMPLETE and options.hide_completed:
        return True
    if item.status is QuestStatus.IN_PROGRESS and options.hide_in_progress:
        return True
    if item.status is QuestStatus.NOT_STARTED and options.hide_not_started:
        return True
    return options.hide_cant_do and not item.eligible
