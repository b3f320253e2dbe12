"""Tests for questtab.core.catalog – YAML quest catalog and requirements."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from questtab.core.catalog import (
    UNKNOWN_QUEST,
    PlayerState,
    QuestCatalog,
    QuestCategory,
    QuestDifficulty,
    QuestInfo,
    QuestLength,
    QuestStatus,
    Requirement,
)


def _write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "quests.yaml"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


# ===========================================================================
# Bundled catalog
# ===========================================================================

class TestBundledCatalog:
    @pytest.fixture(scope="class")
    def bundled(self) -> QuestCatalog:
        return QuestCatalog()

    def test_loads_quests(self, bundled: QuestCatalog):
        assert len(bundled) > 0

    def test_cooks_assistant(self, bundled: QuestCatalog):
        info = bundled.lookup("Cook's Assistant")
        assert info.category is QuestCategory.FREE
        assert info.length is QuestLength.SHORT
        assert info.difficulty is QuestDifficulty.NOVICE

    def test_monkey_madness(self, bundled: QuestCatalog):
        info = bundled.lookup("Monkey Madness")
        assert info.length is QuestLength.VERY_LONG
        assert info.difficulty is QuestDifficulty.MASTER
        assert "The Grand Tree" in info.requirement.quests

    def test_every_category_present(self, bundled: QuestCatalog):
        categories = {q.category for q in bundled.all()}
        assert categories == set(QuestCategory)

    def test_unknown_label(self, bundled: QuestCatalog):
        assert bundled.lookup("Not A Real Quest") is UNKNOWN_QUEST

    def test_prefixed_label_is_unknown(self, bundled: QuestCatalog):
        assert bundled.lookup("<col=DC10D>S</col> Cook's Assistant") is UNKNOWN_QUEST

    def test_contains(self, bundled: QuestCatalog):
        assert "Dragon Slayer" in bundled
        assert "Dragon Slayer III" not in bundled


# ===========================================================================
# Loading custom files
# ===========================================================================

class TestLoadCatalog:
    def test_minimal_file(self, tmp_path: Path):
        path = _write(tmp_path, """
            quests:
              - name: Sheep Shearer
                category: free
                length: short
                difficulty: novice
        """)
        catalog = QuestCatalog(path)
        assert len(catalog) == 1
        assert catalog.lookup("Sheep Shearer").requirement == Requirement()

    def test_requirements_parsed(self, tmp_path: Path):
        path = _write(tmp_path, """
            quests:
              - name: Lost City
                category: members
                length: medium
                difficulty: experienced
                requirements:
                  quest_points: 3
                  skills:
                    Woodcutting: 36
                    crafting: 31
                  quests: [Druidic Ritual]
        """)
        req = QuestCatalog(path).lookup("Lost City").requirement
        assert req.quest_points == 3
        assert req.skills == (("crafting", 31), ("woodcutting", 36))
        assert req.quests == ("Druidic Ritual",)

    def test_missing_length_allowed(self, tmp_path: Path):
        path = _write(tmp_path, """
            quests:
              - name: Bear Your Soul
                category: miniquest
        """)
        info = QuestCatalog(path).lookup("Bear Your Soul")
        assert info.length is None
        assert info.difficulty is None

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            QuestCatalog(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path: Path):
        path = _write(tmp_path, "")
        with pytest.raises(ValueError, match="quests"):
            QuestCatalog(path)

    def test_empty_list(self, tmp_path: Path):
        path = _write(tmp_path, "quests: []\n")
        with pytest.raises(ValueError, match="no quests"):
            QuestCatalog(path)

    def test_unknown_length(self, tmp_path: Path):
        path = _write(tmp_path, """
            quests:
              - name: Odd
                category: free
                length: endless
        """)
        with pytest.raises(ValueError, match="endless"):
            QuestCatalog(path)

    def test_unknown_category(self, tmp_path: Path):
        path = _write(tmp_path, """
            quests:
              - name: Odd
                category: premium
        """)
        with pytest.raises(ValueError, match="premium"):
            QuestCatalog(path)

    def test_missing_category(self, tmp_path: Path):
        path = _write(tmp_path, """
            quests:
              - name: Odd
        """)
        with pytest.raises(ValueError, match="category"):
            QuestCatalog(path)

    def test_duplicate_name(self, tmp_path: Path):
        path = _write(tmp_path, """
            quests:
              - name: Twice
                category: free
              - name: Twice
                category: free
        """)
        with pytest.raises(ValueError, match="duplicate"):
            QuestCatalog(path)

    def test_malformed_yaml(self, tmp_path: Path):
        path = _write(tmp_path, "quests: [\n  - name: x\n")
        with pytest.raises(ValueError, match="invalid YAML"):
            QuestCatalog(path)

    def test_non_integer_requirement(self, tmp_path: Path):
        path = _write(tmp_path, """
            quests:
              - name: Lost City
                category: members
                requirements:
                  skills:
                    crafting: lots
        """)
        with pytest.raises(ValueError, match="crafting"):
            QuestCatalog(path)

    def test_given_quests_skip_loading(self, tmp_path: Path):
        info = QuestInfo("Sheep Shearer", QuestCategory.FREE, QuestLength.SHORT, QuestDifficulty.NOVICE)
        catalog = QuestCatalog(tmp_path / "missing.yaml", quests={info.name: info})
        assert catalog.lookup("Sheep Shearer") is info
        assert len(catalog) == 1


# ===========================================================================
# Requirements
# ===========================================================================

class TestRequirement:
    def test_empty_always_met(self):
        assert Requirement().is_met(PlayerState())

    def test_quest_points(self):
        req = Requirement(quest_points=32)
        assert not req.is_met(PlayerState(quest_points=31))
        assert req.is_met(PlayerState(quest_points=32))

    def test_skill_levels(self):
        req = Requirement(skills=(("mining", 10),))
        assert not req.is_met(PlayerState())
        assert req.is_met(PlayerState(skills={"mining": 10}))

    def test_hitpoints_default_is_ten(self):
        assert Requirement(skills=(("hitpoints", 10),)).is_met(PlayerState())

    def test_prerequisite_must_be_complete(self):
        req = Requirement(quests=("The Grand Tree",))
        assert not req.is_met(PlayerState(quest_statuses={"The Grand Tree": QuestStatus.IN_PROGRESS}))
        assert req.is_met(PlayerState(quest_statuses={"The Grand Tree": QuestStatus.COMPLETE}))

    def test_unknown_quest_always_eligible(self):
        assert UNKNOWN_QUEST.is_eligible(PlayerState())


# ===========================================================================
# Player files
# ===========================================================================

class TestPlayerStateLoad:
    def test_load(self, tmp_path: Path):
        path = tmp_path / "player.yaml"
        path.write_text(textwrap.dedent("""
            quest_points: 40
            skills:
              Mining: 15
            quests:
              Cook's Assistant: complete
              Dragon Slayer: in_progress
        """), encoding="utf-8")
        player = PlayerState.load(path)
        assert player.quest_points == 40
        assert player.skill_level("mining") == 15
        assert player.has_completed("Cook's Assistant")
        assert player.quest_statuses["Dragon Slayer"] is QuestStatus.IN_PROGRESS

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "player.yaml"
        path.write_text("", encoding="utf-8")
        assert PlayerState.load(path) == PlayerState()

    def test_bad_status(self, tmp_path: Path):
        path = tmp_path / "player.yaml"
        path.write_text("quests:\n  Imp Catcher: finished\n", encoding="utf-8")
        with pytest.raises(ValueError, match="status"):
            PlayerState.load(path)

    def test_malformed_yaml(self, tmp_path: Path):
        path = tmp_path / "player.yaml"
        path.write_text("skills: [attack: 1\n", encoding="utf-8")
        with pytest.raises(ValueError, match="player.yaml: invalid YAML"):
            PlayerState.load(path)

    def test_quest_points_not_an_integer(self, tmp_path: Path):
        path = tmp_path / "player.yaml"
        path.write_text("quest_points: [1, 2]\n", encoding="utf-8")
        with pytest.raises(ValueError, match="quest_points"):
            PlayerState.load(path)

    def test_skill_level_not_an_integer(self, tmp_path: Path):
        path = tmp_path / "player.yaml"
        path.write_text("skills:\n  Mining: high\n", encoding="utf-8")
        with pytest.raises(ValueError, match="skills.Mining"):
            PlayerState.load(path)
