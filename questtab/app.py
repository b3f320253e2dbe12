"""Application entry point for the quest list panel."""

import logging
import os
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from questtab.core.catalog import PlayerState, QuestCatalog
from questtab.core.config import ConfigStore, default_config_path
from questtab.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get("QUESTTAB_DEBUG") == "1" else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def load_player(path: Path) -> PlayerState:
    """Read the player file next to the config, falling back to a fresh account."""
    if not path.exists():
        logging.info(f"No player file at {path}; using a fresh account")
        return PlayerState()
    try:
        return PlayerState.load(path)
    except (OSError, ValueError) as e:
        logging.warning(f"Could not read player file {path}: {e}")
        return PlayerState()


def run() -> None:
    """Load the catalog and options, then show the quest panel."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Quest List")
    app.setApplicationDisplayName("Quest List")

    catalog = QuestCatalog()
    store = ConfigStore()
    player = load_player(default_config_path().parent / "player.yaml")
    logging.info(f"Loaded {len(catalog)} quests; options from {store.path}")

    window = MainWindow(catalog=catalog, store=store, player=player)
    window.resize(280, 640)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
