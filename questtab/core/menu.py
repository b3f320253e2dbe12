"""Quest tab context-menu entries that toggle the list options."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from questtab.core.config import CONFIG_GROUP, ConfigStore, QuestTabOptions

logger = logging.getLogger(__name__)

RESET = "Reset"
CANCEL = "Cancel"

# Widgets the quest tab menu can be opened on.
QUEST_TAB_WIDGETS = frozenset(
    {
        "fixed_viewport_quests_tab",
        "resizable_viewport_quests_tab",
        "resizable_viewport_bottom_line_quest_tab",
    }
)


@dataclass(frozen=True)
class _Toggle:
    key: str
    when_on: str
    when_off: str

    def label_for(self, options: QuestTabOptions) -> str:
        return self.when_on if getattr(options, self.key) else self.when_off


# Top-to-bottom menu order after Reset.
_TOGGLES: Tuple[_Toggle, ...] = (
    _Toggle("sort_length", "Unsort by Length", "Sort by Length"),
    _Toggle("show_length", "Hide Length", "Show Length"),
    _Toggle("sort_difficulty", "Unsort by Difficulty", "Sort by Difficulty"),
    _Toggle("show_difficulty", "Hide Difficulty", "Show Difficulty"),
    _Toggle("hide_cant_do", "Show Can't-Do", "Hide Can't-Do"),
    _Toggle("hide_not_started", "Show Not-Started", "Hide Not-Started"),
    _Toggle("hide_in_progress", "Show In-Progress", "Hide In-Progress"),
    _Toggle("hide_completed", "Show Complete", "Hide Complete"),
    _Toggle("hide_miniquests", "Show Miniquests", "Hide Miniquests"),
    _Toggle("hide_members", "Show Members", "Hide Members"),
    _Toggle("hide_free", "Show Free", "Hide Free"),
)

# label -> (option key, value the click writes)
LABEL_ACTIONS: Dict[str, Tuple[str, bool]] = {}
for _toggle in _TOGGLES:
    LABEL_ACTIONS[_toggle.when_on] = (_toggle.key, False)
    LABEL_ACTIONS[_toggle.when_off] = (_toggle.key, True)
del _toggle


@dataclass
class MenuEntry:
    label: str
    target: str = ""
    target_context: str = ""
    on_invoke: Optional[Callable[[], None]] = None

    def invoke(self) -> None:
        if self.on_invoke is not None:
            self.on_invoke()


class MenuSurface(Protocol):
    def current_entries(self) -> Sequence[MenuEntry]: ...

    def insert_before_last(self, entry: MenuEntry) -> None: ...


class MenuEntries:
    """List-backed menu whose last entry is always the cancel slot."""

    def __init__(self, entries: Optional[Sequence[MenuEntry]] = None) -> None:
        self._entries: List[MenuEntry] = list(entries) if entries else [MenuEntry(CANCEL)]

    def current_entries(self) -> List[MenuEntry]:
        return list(self._entries)

    def insert_before_last(self, entry: MenuEntry) -> None:
        self._entries.insert(max(len(self._entries) - 1, 0), entry)

    def labels(self) -> List[str]:
        return [entry.label for entry in self._entries]


def build_entries(options: QuestTabOptions) -> List[str]:
    """Labels offered for the current options, Reset first."""
    return [RESET] + [toggle.label_for(options) for toggle in _TOGGLES]


def insert_entry(menu: MenuSurface, entry: MenuEntry) -> bool:
    if any(existing.label == entry.label for existing in menu.current_entries()):
        return False
    menu.insert_before_last(entry)
    return True


class MenuContributor:
    """Adds the option toggles to quest tab menus and applies them when clicked."""

    def __init__(self, store: ConfigStore, group: str = CONFIG_GROUP) -> None:
        self._store = store
        self._group = group

    def build_entries(self, target: str = "", target_context: str = "") -> List[MenuEntry]:
        options = self._store.options(self._group)
        return [
            MenuEntry(
                label=label,
                target=target,
                target_context=target_context,
                on_invoke=partial(self.invoke, label),
            )
            for label in build_entries(options)
        ]

    def contribute(self, menu: MenuSurface, target: str, target_context: str) -> int:
        """Insert the toggles into ``menu``; return how many entries were added."""
        if target_context not in QUEST_TAB_WIDGETS:
            return 0
        if not self._store.options(self._group).menu_option:
            return 0
        added = 0
        for entry in self.build_entries(target, target_context):
            if insert_entry(menu, entry):
                added += 1
        return added

    def invoke(self, label: str) -> bool:
        """Apply the option change behind ``label``. Write failures propagate."""
        if label == RESET:
            self._store.reset_to_defaults(self._group)
            return True
        action = LABEL_ACTIONS.get(label)
        if action is None:
            return False
        key, value = action
        logger.info("Menu option %r sets %s to %s", label, key, value)
        self._store.set(self._group, key, value)
        return True
