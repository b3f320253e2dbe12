"""Colored length/difficulty codes prepended to quest list labels."""

from __future__ import annotations

from typing import Dict, Tuple

from questtab.core.catalog import QuestDifficulty, QuestInfo, QuestLength
from questtab.core.config import QuestTabOptions

# (letter, color) pairs; colors are host markup hex without a leading '#'.
LENGTH_CODES: Dict[QuestLength, Tuple[str, str]] = {
    QuestLength.SHORT: ("S", "DC10D"),
    QuestLength.MEDIUM: ("M", "FFFF00"),
    QuestLength.LONG: ("L", "FF8C00"),
    QuestLength.VERY_LONG: ("V", "FF0000"),
}

DIFFICULTY_CODES: Dict[QuestDifficulty, Tuple[str, str]] = {
    QuestDifficulty.NOVICE: ("N", "DC10D"),
    QuestDifficulty.INTERMEDIATE: ("I", "9ACD32"),
    QuestDifficulty.EXPERIENCED: ("E", "FFFF00"),
    QuestDifficulty.MASTER: ("M", "FF8C00"),
    QuestDifficulty.GRANDMASTER: ("G", "FF0000"),
}


def code_prefix(letter: str, color: str) -> str:
    return f"<col={color}>{letter}</col> "


def strip_annotations(text: str) -> str:
    """Return the bare label: everything after the last ``</col> `` prefix."""
    if ">" not in text:
        return text
    return text[text.rindex(">") + 2:]


def annotate(text: str, info: QuestInfo, options: QuestTabOptions) -> str:
    """Return ``text`` with the codes ``options`` asks for; safe to re-run on its own output.

    Length is inserted first and difficulty second, so difficulty ends up leftmost:
    ``[difficulty][length][label]``.
    """
    rendered = strip_annotations(text)
    if options.show_length and info.length is not None:
        rendered = code_prefix(*LENGTH_CODES[info.length]) + rendered
    if options.show_difficulty and info.difficulty is not None:
        rendered = code_prefix(*DIFFICULTY_CODES[info.difficulty]) + rendered
    return rendered
