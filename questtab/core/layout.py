from __future__ import annotations

from typing import Sequence

from questtab.core.filtering import Section
from questtab.core.models import SectionRows

TITLE_HEIGHT = 20
ROW_HEIGHT = 15
TOP_PADDING = 10
BOTTOM_PADDING = 8


def reflow(sections: Sequence[SectionRows]) -> int:
    """Assign header and row offsets in place and return the list's content height.

    Header offsets are global; row offsets are relative to their section and
    start below the title. Hidden rows get no offset and leave no gap.
    """
    cursor = TOP_PADDING
    for block in sections:
        if block.hidden:
            block.offset = None
            for row in block.rows:
                row.hidden = True
                row.offset = None
            continue

        block.offset = cursor
        cursor += TITLE_HEIGHT
        local = TITLE_HEIGHT
        for row in block.ordered:
            if row.hidden:
                row.offset = None
                continue
            row.offset = local
            local += ROW_HEIGHT
            cursor += ROW_HEIGHT

        if block.section is Section.FREE:
            cursor += BOTTOM_PADDING
    return cursor
