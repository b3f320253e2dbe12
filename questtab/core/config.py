from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Dict, Optional

from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)

CONFIG_GROUP = "questtab"


class ConfigStoreError(RuntimeError):
    """Raised when an option change cannot be written to disk."""


@dataclass(frozen=True)
class QuestTabOptions:
    hide_free: bool = False
    hide_members: bool = False
    hide_miniquests: bool = False
    hide_completed: bool = False
    hide_in_progress: bool = False
    hide_not_started: bool = False
    hide_cant_do: bool = False
    show_length: bool = False
    sort_length: bool = False
    show_difficulty: bool = False
    sort_difficulty: bool = False
    menu_option: bool = True

    def with_changes(self, **changes: bool) -> "QuestTabOptions":
        return replace(self, **changes)


OPTION_KEYS = tuple(f.name for f in fields(QuestTabOptions))


def default_config_path() -> Path:
    base = os.environ.get("QUESTTAB_CONFIG_DIR")
    root = Path(base) if base else Path.home() / ".questtab"
    return root / "config.json"


class ConfigStore(QObject):
    """Boolean options grouped by plugin name, persisted to a JSON file.

    Every successful change emits ``changed(group, key)``; ``key`` is empty
    when a whole group was reset.
    """

    changed = Signal(str, str)

    def __init__(self, path: Optional[Path] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._file_path = path or default_config_path()
        self._groups: Dict[str, Dict[str, bool]] = self._load()

    @property
    def path(self) -> Path:
        return self._file_path

    def get(self, group: str, key: str) -> bool:
        _check_key(group, key)
        return self._groups.get(group, {}).get(key, getattr(QuestTabOptions(), key))

    def set(self, group: str, key: str, value: bool) -> None:
        _check_key(group, key)
        if not isinstance(value, bool):
            raise TypeError(f"option {key!r} expects a bool, got {type(value).__name__}")
        if self.get(group, key) == value:
            return
        values = self._groups.setdefault(group, {})
        previous = values.get(key)
        values[key] = value
        try:
            self._save()
        except ConfigStoreError:
            if previous is None:
                values.pop(key, None)
            else:
                values[key] = previous
            raise
        logger.debug("Option %s.%s set to %s", group, key, value)
        self.changed.emit(group, key)

    def reset_to_defaults(self, group: str = CONFIG_GROUP) -> None:
        """Drop every stored value of ``group`` so the defaults apply again."""
        previous = self._groups.pop(group, None)
        try:
            self._save()
        except ConfigStoreError:
            if previous is not None:
                self._groups[group] = previous
            raise
        logger.info("Options for %s reset to defaults", group)
        self.changed.emit(group, "")

    def options(self, group: str = CONFIG_GROUP) -> QuestTabOptions:
        stored = self._groups.get(group, {})
        return QuestTabOptions(**{k: v for k, v in stored.items() if k in OPTION_KEYS})

    def _load(self) -> Dict[str, Dict[str, bool]]:
        groups: Dict[str, Dict[str, bool]] = {}
        if not self._file_path.exists():
            return groups
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load options from %s: %s", self._file_path, e)
            return groups
        if not isinstance(payload, dict):
            logger.warning("Ignoring malformed options file %s", self._file_path)
            return groups

        for group, values in payload.items():
            if not isinstance(values, dict):
                continue
            groups[group] = {
                key: value
                for key, value in values.items()
                if key in OPTION_KEYS and isinstance(value, bool)
            }
        return groups

    def _save(self) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(self._groups, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save options to %s: %s", self._file_path, e)
            raise ConfigStoreError(f"could not save options to {self._file_path}") from e


def _check_key(group: str, key: str) -> None:
    if key not in OPTION_KEYS:
        raise KeyError(f"unknown option {group}.{key}")
