"""Theme colors and color markup helpers for the quest list panel."""

import html
import re


class PanelColors:
    """Dark stone palette of the in-game side panel."""

    BG = "#3e3529"
    BG_DARK = "#2b251c"
    BORDER = "#1f1a13"

    TITLE = "#ff981f"
    TEXT_MUTED = "#9f9484"

    TAB_BG = "#4b4133"
    TAB_BG_HOVER = "#5a4e3d"


_COL_TAG = re.compile(r"<col=([0-9A-Fa-f]{1,6})>(.*?)</col>")


def int_to_hex(color: int) -> str:
    """0xRRGGBB int -> '#RRGGBB'. Out-of-range values are clamped."""
    color = max(0, min(0xFFFFFF, int(color)))
    return f"#{color:06X}"


def markup_to_html(text: str) -> str:
    """Turn ``<col=RRGGBB>..</col>`` markup into HTML spans; everything else is escaped."""
    parts = []
    pos = 0
    for m in _COL_TAG.finditer(text):
        parts.append(html.escape(text[pos:m.start()]))
        color = m.group(1).upper().zfill(6)
        parts.append(f'<span style="color:#{color}">{html.escape(m.group(2))}</span>')
        pos = m.end()
    parts.append(html.escape(text[pos:]))
    return "".join(parts)

