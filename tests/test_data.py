"""Unit tests for the data layer (database, repository, models)."""

import json
import sqlite3
import pytest
from datetime import date
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pomodomate.data.database import Database, SCHEMA_SQL, resolve_db_path
from pomodomate.data.models import Mode, RewardLedger, Settings
from pomodomate.data.repository import (
    KEY_COINS, KEY_LAST_COMPLETION_DATE, KEY_SETTINGS, KEY_STREAK_DAYS,
    MemoryBackend, SQLiteBackend, StateRepository,
)


@pytest.fixture
def conn():
    """In-memory database with the schema applied."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.executescript(SCHEMA_SQL)
    conn.commit()
    return conn


@pytest.fixture
def repo(conn):
    return StateRepository(SQLiteBackend(conn))


class BrokenBackend:
    """Backend whose every access fails like a full or locked disk."""

    def get(self, key):
        raise sqlite3.OperationalError("database is locked")

    def set(self, key, value):
        raise sqlite3.OperationalError("database or disk is full")


class TestModels:
    def test_settings_defaults(self):
        s = Settings()
        assert (s.work, s.short_break, s.long_break) == (25, 5, 15)

    def test_minutes_and_seconds_for_mode(self):
        s = Settings(work=50, short_break=10, long_break=20)
        assert s.minutes_for(Mode.SHORT_BREAK) == 10
        assert s.seconds_for(Mode.LONG_BREAK) == 1200

    def test_to_dict_uses_stored_keys(self):
        assert Settings().to_dict() == {"work": 25, "shortBreak": 5, "longBreak": 15}

    def test_from_dict_fills_missing(self):
        s = Settings.from_dict({"work": 40})
        assert s == Settings(work=40, short_break=5, long_break=15)

    def test_mode_bounds(self):
        assert Mode.WORK.max_minutes == 60
        assert Mode.SHORT_BREAK.max_minutes == 30
        assert Mode.LONG_BREAK.max_minutes == 60
        assert Mode.SHORT_BREAK.is_break and not Mode.WORK.is_break


class TestDatabase:
    def test_connect_creates_table(self, tmp_path):
        db = Database(tmp_path / "test.db")
        conn = db.connect()
        tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        assert "kv_store" in tables
        assert db.connect() is conn
        db.close()
        assert db.conn is None

    def test_env_var_overrides_config(self, monkeypatch, tmp_path):
        monkeypatch.setenv("POMODOMATE_DB", str(tmp_path / "env.db"))
        assert resolve_db_path("other.db") == tmp_path / "env.db"

    def test_config_path_used_without_env(self, monkeypatch):
        monkeypatch.delenv("POMODOMATE_DB", raising=False)
        assert resolve_db_path("other.db") == Path("other.db")


class TestRepository:
    def test_empty_store_gives_defaults(self, repo):
        state = repo.load()
        assert state.settings == Settings()
        assert state.ledger == RewardLedger(0, 0, None)

    def test_save_and_load(self, repo):
        repo.save_settings(Settings(work=50, short_break=10, long_break=30))
        repo.save_ledger(RewardLedger(7, 3, date(2026, 10, 18)))

        state = repo.load()
        assert state.settings == Settings(50, 10, 30)
        assert state.ledger == RewardLedger(7, 3, date(2026, 10, 18))

    def test_values_are_json_encoded(self, conn, repo):
        repo.save_settings(Settings())
        repo.save_ledger(RewardLedger(2, 1, None))
        rows = dict(conn.execute("SELECT key, value FROM kv_store").fetchall())
        assert json.loads(rows[KEY_SETTINGS]) == {"work": 25, "shortBreak": 5, "longBreak": 15}
        assert json.loads(rows[KEY_COINS]) == 2
        assert json.loads(rows[KEY_STREAK_DAYS]) == 1
        assert json.loads(rows[KEY_LAST_COMPLETION_DATE]) == ""

    def test_upsert_keeps_one_row(self, conn, repo):
        repo.save(KEY_COINS, 1)
        repo.save(KEY_COINS, 2)
        count = conn.execute("SELECT COUNT(*) FROM kv_store WHERE key = ?", (KEY_COINS,)).fetchone()[0]
        assert count == 1
        assert repo.load().ledger.coins == 2

    def test_malformed_entry_only_resets_itself(self):
        backend = MemoryBackend({
            KEY_SETTINGS: json.dumps({"work": 45, "shortBreak": 5, "longBreak": 15}),
            KEY_COINS: "{not json",
            KEY_STREAK_DAYS: "4",
        })
        state = StateRepository(backend).load()
        assert state.settings.work == 45
        assert state.ledger.coins == 0
        assert state.ledger.streak_days == 4

    @pytest.mark.parametrize("raw", ["true", "-3", '"12"', "1.5", "{broken", "1" * 5000])
    def test_bad_counter_values(self, raw):
        backend = MemoryBackend({KEY_COINS: raw})
        assert StateRepository(backend).load().ledger.coins == 0

    def test_oversized_number_only_resets_its_entry(self):
        backend = MemoryBackend({
            KEY_COINS: "1" * 5000,
            KEY_STREAK_DAYS: "3",
            KEY_SETTINGS: json.dumps({"work": 40, "shortBreak": 5, "longBreak": 15}),
        })
        state = StateRepository(backend).load()
        assert state.ledger.coins == 0
        assert state.ledger.streak_days == 3
        assert state.settings.work == 40

    def test_bad_settings_field_falls_back_per_field(self):
        backend = MemoryBackend({
            KEY_SETTINGS: json.dumps({"work": 0, "shortBreak": 45, "longBreak": 20}),
        })
        settings = StateRepository(backend).load().settings
        assert settings == Settings(work=25, short_break=5, long_break=20)

    def test_settings_not_an_object(self):
        backend = MemoryBackend({KEY_SETTINGS: "[1, 2, 3]"})
        assert StateRepository(backend).load().settings == Settings()

    def test_bad_dates_are_ignored(self):
        for raw in ('""', '"yesterday"', "20261018"):
            backend = MemoryBackend({KEY_LAST_COMPLETION_DATE: raw})
            assert StateRepository(backend).load().ledger.last_completion_date is None

    def test_read_failure_gives_defaults(self):
        state = StateRepository(BrokenBackend()).load()
        assert state.settings == Settings()
        assert state.ledger.coins == 0

    def test_write_failure_is_swallowed(self):
        repo = StateRepository(BrokenBackend())
        assert repo.save(KEY_COINS, 3) is False
        assert repo.save_ledger(RewardLedger(1, 1, date(2026, 10, 19))) is False
        assert repo.save_settings(Settings()) is False
