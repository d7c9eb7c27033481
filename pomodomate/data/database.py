"""
SQLite database initialization and connection management.

Single responsibility: own the connection and create the key-value table.
All reads and writes of app state live in StateRepository.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Default DB lives next to the repo root
DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent.parent / "pomodomate.db"
DB_PATH_ENV = "POMODOMATE_DB"

SCHEMA_SQL = """
-- Key-value entries (JSON-encoded values) ------------------------------------
CREATE TABLE IF NOT EXISTS kv_store (
    key         TEXT    PRIMARY KEY,
    value       TEXT    NOT NULL,
    updated_at  TEXT    NOT NULL DEFAULT (datetime('now'))
);
"""


def resolve_db_path(configured: Optional[str] = None) -> Path:
    """Env var wins over the config file, which wins over the default."""
    env = os.environ.get(DB_PATH_ENV)
    if env:
        return Path(env)
    if configured:
        return Path(configured)
    return DEFAULT_DB_PATH


class Database:
    """Thin wrapper around a SQLite connection."""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        self.db_path = db_path or resolve_db_path()
        self.conn: Optional[sqlite3.Connection] = None

    # -- lifecycle -----------------------------------------------------------

    def connect(self) -> sqlite3.Connection:
        """Open (or return existing) connection and ensure schema exists."""
        if self.conn is not None:
            return self.conn
        logger.info("Connecting to SQLite at %s", self.db_path)
        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row
        self._create_tables()
        return self.conn

    def close(self) -> None:
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.info("Database connection closed.")

    # -- internal ------------------------------------------------------------

    def _create_tables(self) -> None:
        assert self.conn is not None
        self.conn.executescript(SCHEMA_SQL)
        self.conn.commit()
        logger.info("Database schema ensured.")


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Opens the SQLite file and makes sure the single kv_store table exists.
#
# Key pieces:
#   - SCHEMA_SQL: one key-value table. CREATE IF NOT EXISTS makes it safe to
#     run on every launch.
#   - resolve_db_path(): POMODOMATE_DB env var, then the config's db_path,
#     then pomodomate.db next to the project.
#   - Database class: holds one connection; connect() is idempotent.
#
# Data flow:
#   main.py → Database.connect() → SQLiteBackend(conn) → StateRepository
#
# Interviewer-friendly talking points:
#   1. A key-value table instead of one column per setting: adding a new
#      persisted value needs no migration.
#   2. The env var override lets tests and demos point at a scratch file
#      without touching the user's real data.
