"""
Pomodomate — Pomodoro timer with coins, streaks and Domate the tomato.
Entry point for the application.
"""

import faulthandler
import logging
import sqlite3
import sys
from pathlib import Path

faulthandler.enable()

from PySide6.QtWidgets import QApplication

from pomodomate.config import load_config
from pomodomate.data.database import Database, resolve_db_path
from pomodomate.ui.main_window import MainWindow
from pomodomate.ui.styles import APP_STYLESHEET


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler("pomodomate.log", encoding="utf-8"),
        ],
    )


def open_database(config: dict) -> Database:
    """Open the configured DB; fall back to an in-memory one if the file is unusable."""
    logger = logging.getLogger(__name__)
    db = Database(resolve_db_path(config.get("db_path")))
    try:
        db.connect()
    except sqlite3.Error as e:
        logger.warning("Could not open %s (%s); progress will not be saved.", db.db_path, e)
        db = Database(Path(":memory:"))
        db.connect()
    return db


def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Starting Pomodomate...")

    config = load_config()

    app = QApplication(sys.argv)
    app.setApplicationName("Pomodomate")
    app.setOrganizationName("Pomodomate")
    app.setStyleSheet(APP_STYLESHEET)

    window = MainWindow(open_database(config), config)
    window.show()

    logger.info("Application started.")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
