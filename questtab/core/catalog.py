from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import yaml


class QuestStatus(Enum):
    COMPLETE = "complete"
    IN_PROGRESS = "in_progress"
    NOT_STARTED = "not_started"


class QuestCategory(Enum):
    FREE = "free"
    MEMBERS = "members"
    MINIQUEST = "miniquest"


class QuestLength(Enum):
    SHORT = 0
    MEDIUM = 1
    LONG = 2
    VERY_LONG = 3


class QuestDifficulty(Enum):
    NOVICE = 0
    INTERMEDIATE = 1
    EXPERIENCED = 2
    MASTER = 3
    GRANDMASTER = 4


DEFAULT_SKILL_LEVELS: Dict[str, int] = {"hitpoints": 10}


@dataclass
class PlayerState:
    """What eligibility is checked against: skills, quest points, quest progress."""

    skills: Dict[str, int] = field(default_factory=dict)
    quest_points: int = 0
    quest_statuses: Dict[str, QuestStatus] = field(default_factory=dict)

    def skill_level(self, skill: str) -> int:
        skill = skill.lower()
        return self.skills.get(skill, DEFAULT_SKILL_LEVELS.get(skill, 1))

    def has_completed(self, quest_name: str) -> bool:
        return self.quest_statuses.get(quest_name) is QuestStatus.COMPLETE

    @classmethod
    def load(cls, path: Path) -> "PlayerState":
        """Read a player file: ``quest_points``, ``skills`` and ``quests`` (name -> status)."""
        raw = _read_yaml(path) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"{path.name}: expected a mapping")
        skills = raw.get("skills") or {}
        if not isinstance(skills, dict):
            raise ValueError(f"{path.name}: 'skills' must be a mapping")
        quests = raw.get("quests") or {}
        if not isinstance(quests, dict):
            raise ValueError(f"{path.name}: 'quests' must be a mapping")
        try:
            statuses = {str(name): QuestStatus(str(value)) for name, value in quests.items()}
        except ValueError as e:
            raise ValueError(f"{path.name}: invalid quest status: {e}") from e
        return cls(
            skills={str(k).lower(): _to_int(path.name, f"skills.{k}", v) for k, v in skills.items()},
            quest_points=_to_int(path.name, "quest_points", raw.get("quest_points", 0)),
            quest_statuses=statuses,
        )


@dataclass(frozen=True)
class Requirement:
    quest_points: int = 0
    skills: Tuple[Tuple[str, int], ...] = ()
    quests: Tuple[str, ...] = ()

    def is_met(self, player: PlayerState) -> bool:
        if player.quest_points < self.quest_points:
            return False
        for skill, level in self.skills:
            if player.skill_level(skill) < level:
                return False
        return all(player.has_completed(name) for name in self.quests)


NO_REQUIREMENT = Requirement()


@dataclass(frozen=True)
class QuestInfo:
    name: str
    category: Optional[QuestCategory]
    length: Optional[QuestLength]
    difficulty: Optional[QuestDifficulty]
    requirement: Requirement = NO_REQUIREMENT

    def is_eligible(self, player: PlayerState) -> bool:
        return self.requirement.is_met(player)


# Labels the catalog does not know about (e.g. newly released quests).
UNKNOWN_QUEST = QuestInfo(name="Unknown", category=None, length=None, difficulty=None)

_DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "quests.yaml"


class QuestCatalog:
    """Read-only quest metadata keyed by the label shown in the quest list."""

    def __init__(self, path: Optional[Path] = None, quests: Optional[Mapping[str, QuestInfo]] = None) -> None:
        """Load ``path`` (the bundled catalog by default), or use ``quests`` as given."""
        self._path = path or _DEFAULT_CATALOG_PATH
        self._quests = dict(quests) if quests is not None else self._load_quests()

    def __len__(self) -> int:
        return len(self._quests)

    def __contains__(self, label: object) -> bool:
        return label in self._quests

    def all(self) -> list[QuestInfo]:
        return list(self._quests.values())

    def lookup(self, label: str) -> QuestInfo:
        return self._quests.get(label, UNKNOWN_QUEST)

    def _load_quests(self) -> Dict[str, QuestInfo]:
        if not self._path.exists():
            raise FileNotFoundError(f"Quest catalog not found: {self._path}")

        raw = _read_yaml(self._path)
        if not raw or not isinstance(raw, dict) or not isinstance(raw.get("quests"), list):
            raise ValueError(f"{self._path.name}: expected YAML with a 'quests' list")

        quests: Dict[str, QuestInfo] = {}
        for entry in raw["quests"]:
            info = _parse_quest(self._path.name, entry)
            if info.name in quests:
                raise ValueError(f"{self._path.name}: duplicate quest {info.name!r}")
            quests[info.name] = info

        if not quests:
            raise ValueError(f"{self._path.name}: no quests defined")
        return quests


def _read_yaml(path: Path):
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"{path.name}: invalid YAML: {e}") from e


def _to_int(source: str, field: str, value) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{source}: {field!r} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{source}: {field!r} must be an integer, got {value!r}") from None


def _parse_enum(source: str, name: str, enum_cls, value) -> Optional[Enum]:
    if value is None:
        return None
    try:
        return enum_cls[str(value).strip().upper()]
    except KeyError:
        raise ValueError(f"{source}: {name!r} has unknown {enum_cls.__name__} {value!r}") from None


def _parse_quest(source: str, entry) -> QuestInfo:
    if not isinstance(entry, dict):
        raise ValueError(f"{source}: quest entries must be mappings")
    name = entry.get("name")
    if not name or not isinstance(name, str):
        raise ValueError(f"{source}: quest entry missing or invalid 'name'")
    name = name.strip()

    category = entry.get("category")
    if category is None:
        raise ValueError(f"{source}: {name!r} missing 'category'")
    try:
        parsed_category = QuestCategory(str(category).strip().lower())
    except ValueError:
        raise ValueError(f"{source}: {name!r} has unknown category {category!r}") from None

    reqs = entry.get("requirements") or {}
    if not isinstance(reqs, dict):
        raise ValueError(f"{source}: {name!r} 'requirements' must be a mapping")
    skills = reqs.get("skills") or {}
    if not isinstance(skills, dict):
        raise ValueError(f"{source}: {name!r} requirement 'skills' must be a mapping")
    prerequisites = reqs.get("quests") or []
    if not isinstance(prerequisites, list):
        raise ValueError(f"{source}: {name!r} requirement 'quests' must be a list")

    requirement = Requirement(
        quest_points=_to_int(source, f"{name}: quest_points", reqs.get("quest_points", 0)),
        skills=tuple(sorted(
            (str(k).lower(), _to_int(source, f"{name}: skills.{k}", v)) for k, v in skills.items()
        )),
        quests=tuple(str(q).strip() for q in prerequisites if str(q).strip()),
    )
    return QuestInfo(
        name=name,
        category=parsed_category,
        length=_parse_enum(source, name, QuestLength, entry.get("length")),
        difficulty=_parse_enum(source, name, QuestDifficulty, entry.get("difficulty")),
        requirement=requirement,
    )
