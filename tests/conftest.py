"""Shared fixtures: a Qt core application, a fake quest list panel and a small catalog."""

from __future__ import annotations

from pathlib import Path

import pytest
from PySide6.QtCore import QCoreApplication

from quest_fixtures import COMPLETE, COOKS, DRAGON, IN_PROGRESS, MONKEY, NOT_STARTED, FakeSurface
from questtab.core.catalog import QuestCatalog
from questtab.core.config import ConfigStore
from questtab.core.filtering import Section


@pytest.fixture(scope="session", autouse=True)
def qt_app() -> QCoreApplication:
    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture()
def catalog() -> QuestCatalog:
    return QuestCatalog(quests={q.name: q for q in (COOKS, DRAGON, MONKEY)})


@pytest.fixture()
def scenario_surface() -> FakeSurface:
    return FakeSurface(
        {
            Section.FREE: [
                ("Cook's Assistant", COMPLETE),
                ("Dragon Slayer", IN_PROGRESS),
                ("Monkey Madness", NOT_STARTED),
            ]
        }
    )


@pytest.fixture()
def store(tmp_path: Path) -> ConfigStore:
    """ConfigStore backed by a temp file so tests don't touch ~/.questtab."""
    return ConfigStore(tmp_path / "config.json")
