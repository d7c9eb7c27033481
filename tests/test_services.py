"""Unit tests for the service layer."""

import itertools
import json
import random
import sqlite3
import pytest
from datetime import date, timedelta
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pomodomate.data.models import Mode, RewardLedger, Settings
from pomodomate.data.repository import (
    KEY_COINS, KEY_LAST_COMPLETION_DATE, KEY_SETTINGS, KEY_STREAK_DAYS,
    MemoryBackend, StateRepository,
)
from pomodomate.services.phrases import CELEBRATION_PHRASES, MOTIVATIONAL_PHRASES, PhrasePicker
from pomodomate.services.pomodoro_service import CELEBRATION_MS, PomodoroService
from pomodomate.services.reward_ledger import RewardLedgerService, next_ledger
from pomodomate.services.scheduler import ManualScheduler
from pomodomate.services.settings_service import SettingsStore, coerce_minutes

TODAY = date(2026, 10, 19)


class CountingPhrases(PhrasePicker):
    """Predictable phrases: m1, m2, ... and c1, c2, ..."""

    def __init__(self):
        super().__init__(random.Random(0))
        self._m = itertools.count(1)
        self._c = itertools.count(1)

    def motivational(self):
        return f"m{next(self._m)}"

    def celebration(self):
        return f"c{next(self._c)}"


class WriteFailingBackend(MemoryBackend):
    def set(self, key, value):
        raise sqlite3.OperationalError("database or disk is full")


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def repo(backend):
    return StateRepository(backend)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def svc(repo, scheduler):
    return PomodoroService(repo, scheduler, CountingPhrases(), today=lambda: TODAY)


def finish(svc, scheduler, mode=None):
    """Run the active (or given) mode to completion with a 1-minute duration."""
    if mode is not None:
        svc.change_mode(mode)
    svc.save_settings({svc.mode.value: 1})
    svc.start()
    scheduler.advance(60_000)


class TestRewardLedger:
    def test_first_completion_starts_streak(self):
        ledger = next_ledger(RewardLedger(0, 0, None), TODAY)
        assert ledger == RewardLedger(1, 1, TODAY)

    def test_consecutive_day_extends_streak(self):
        ledger = next_ledger(RewardLedger(10, 4, TODAY - timedelta(days=1)), TODAY)
        assert ledger == RewardLedger(11, 5, TODAY)

    def test_gap_resets_streak(self):
        ledger = next_ledger(RewardLedger(10, 4, TODAY - timedelta(days=5)), TODAY)
        assert ledger == RewardLedger(11, 1, TODAY)

    def test_same_day_does_not_double_count(self):
        once = next_ledger(RewardLedger(0, 3, TODAY - timedelta(days=1)), TODAY)
        twice = next_ledger(once, TODAY)
        assert once.streak_days == twice.streak_days == 4
        assert twice.coins == 2
        assert twice.last_completion_date == TODAY

    def test_month_boundary(self):
        today = date(2026, 3, 1)
        ledger = next_ledger(RewardLedger(0, 2, date(2026, 2, 28)), today)
        assert ledger.streak_days == 3

    def test_service_persists(self, repo):
        rewards = RewardLedgerService(repo, RewardLedger())
        rewards.record_completion(TODAY)
        assert repo.load().ledger == RewardLedger(1, 1, TODAY)


class TestSettingsStore:
    @pytest.mark.parametrize("raw, expected", [
        ("abc", 1), ("", 1), (None, 1), ("0", 1), ("-5", 1), (True, 1),
        ("12.7", 12), (12.9, 12), (" 7 ", 7), ("30min", 30), (45, 45),
        ("90", 60), (float("nan"), 1), ("9" * 5000, 60), ("-" + "9" * 5000, 1),
        ("0000000000007", 7),
    ])
    def test_coerce_work_minutes(self, raw, expected):
        assert coerce_minutes(raw, Mode.WORK) == expected

    def test_short_break_bound(self):
        assert coerce_minutes(45, Mode.SHORT_BREAK) == 30
        assert coerce_minutes(45, Mode.LONG_BREAK) == 45

    def test_save_persists_and_closes(self, repo):
        store = SettingsStore(repo, Settings())
        store.open_editor()
        saved = store.save({"work": "50", "shortBreak": "x", "longBreak": 20})
        assert saved == Settings(work=50, short_break=1, long_break=20)
        assert store.editor_open is False
        assert repo.load().settings == saved

    def test_save_accepts_mode_keys_and_keeps_missing(self, repo):
        store = SettingsStore(repo, Settings(work=40, short_break=8, long_break=12))
        saved = store.save({Mode.SHORT_BREAK: 3})
        assert saved == Settings(work=40, short_break=3, long_break=12)

    def test_close_without_save(self, repo):
        store = SettingsStore(repo, Settings())
        store.open_editor()
        store.close_editor()
        assert store.editor_open is False
        assert repo.load().settings == Settings()


class TestPhrasePicker:
    def test_seeded_choice_is_deterministic(self):
        a = PhrasePicker(random.Random(42))
        b = PhrasePicker(random.Random(42))
        assert [a.motivational() for _ in range(5)] == [b.motivational() for _ in range(5)]

    def test_choices_come_from_fixed_sets(self):
        picker = PhrasePicker(random.Random(1))
        for _ in range(50):
            assert picker.motivational() in MOTIVATIONAL_PHRASES
            assert picker.celebration() in CELEBRATION_PHRASES

    def test_empty_set_rejected(self):
        with pytest.raises(ValueError):
            PhrasePicker(motivational=[])


class TestPomodoroService:
    def test_initial_state(self, svc):
        snap = svc.snapshot()
        assert snap.mode is Mode.WORK
        assert snap.time_text == "25:00"
        assert snap.running is False
        assert snap.progress == 0.0
        assert snap.motivational_phrase == "m1"
        assert snap.celebration_visible is False

    def test_loads_persisted_state(self, scheduler):
        backend = MemoryBackend({
            KEY_SETTINGS: json.dumps({"work": 50, "shortBreak": 10, "longBreak": 30}),
            KEY_COINS: "9",
            KEY_STREAK_DAYS: "2",
        })
        svc = PomodoroService(StateRepository(backend), scheduler, CountingPhrases())
        snap = svc.snapshot()
        assert snap.time_text == "50:00"
        assert (snap.coins, snap.streak_days) == (9, 2)

    def test_work_completion_awards_coin(self, svc, scheduler, repo):
        finish(svc, scheduler)
        snap = svc.snapshot()
        assert snap.coins == 1
        assert snap.streak_days == 1
        assert snap.remaining_seconds == 0
        assert snap.running is False
        assert snap.celebration_visible is True
        assert snap.celebration_coin_awarded is True
        assert snap.celebration_phrase == "c1"
        assert snap.motivational_phrase == "m2"
        assert repo.load().ledger == RewardLedger(1, 1, TODAY)

    def test_break_completion_changes_nothing(self, svc, scheduler):
        finish(svc, scheduler, Mode.SHORT_BREAK)
        snap = svc.snapshot()
        assert (snap.coins, snap.streak_days) == (0, 0)
        assert snap.celebration_visible is True
        assert snap.celebration_coin_awarded is False
        assert snap.motivational_phrase == "m1"

    def test_celebration_hides_after_window(self, svc, scheduler):
        finish(svc, scheduler)
        scheduler.advance(CELEBRATION_MS - 1)
        assert svc.snapshot().celebration_visible is True
        scheduler.advance(1)
        assert svc.snapshot().celebration_visible is False

    def test_same_day_repeat_keeps_streak(self, svc, scheduler):
        finish(svc, scheduler)
        svc.change_mode(Mode.SHORT_BREAK)
        finish(svc, scheduler, Mode.WORK)
        snap = svc.snapshot()
        assert snap.coins == 2
        assert snap.streak_days == 1

    def test_streak_continues_from_yesterday(self, scheduler):
        backend = MemoryBackend({
            KEY_STREAK_DAYS: "3",
            KEY_LAST_COMPLETION_DATE: json.dumps((TODAY - timedelta(days=1)).isoformat()),
        })
        svc = PomodoroService(StateRepository(backend), scheduler, CountingPhrases(),
                              today=lambda: TODAY)
        finish(svc, scheduler)
        assert svc.snapshot().streak_days == 4

    def test_entering_work_picks_new_phrase(self, svc):
        svc.change_mode(Mode.LONG_BREAK)
        assert svc.snapshot().motivational_phrase == "m1"
        svc.change_mode(Mode.WORK)
        assert svc.snapshot().motivational_phrase == "m2"

    def test_change_mode_resets_countdown(self, svc, scheduler):
        svc.start()
        scheduler.advance(5000)
        svc.change_mode(Mode.SHORT_BREAK)
        snap = svc.snapshot()
        assert snap.time_text == "05:00"
        assert snap.running is False

    def test_save_settings_restarts_active_mode(self, svc, scheduler):
        svc.open_settings()
        svc.start()
        scheduler.advance(5000)
        svc.save_settings({"work": "30", "shortBreak": "", "longBreak": "99"})
        snap = svc.snapshot()
        assert snap.time_text == "30:00"
        assert snap.running is False
        assert snap.settings_open is False
        assert snap.settings == Settings(work=30, short_break=1, long_break=60)

    def test_save_settings_with_oversized_numbers(self, svc, repo):
        huge = "9" * 5000
        svc.save_settings({"work": huge, "shortBreak": huge, "longBreak": "-" + huge})
        assert svc.snapshot().settings == Settings(work=60, short_break=30, long_break=1)
        assert repo.load().settings == Settings(work=60, short_break=30, long_break=1)

    def test_reset_intent(self, svc, scheduler):
        svc.toggle()
        scheduler.advance(90_000)
        assert svc.snapshot().time_text == "23:30"
        svc.reset()
        assert svc.snapshot().time_text == "25:00"

    def test_settings_editor_flag(self, svc):
        svc.open_settings()
        assert svc.snapshot().settings_open is True
        svc.close_settings()
        assert svc.snapshot().settings_open is False

    def test_listeners_get_one_snapshot_per_intent(self, svc):
        seen = []
        svc.add_listener(seen.append)
        svc.change_mode(Mode.WORK)
        assert len(seen) == 1
        assert seen[0].motivational_phrase == "m2"

    def test_listener_errors_do_not_stop_others(self, svc, scheduler):
        seen = []

        def broken(snap):
            raise RuntimeError("widget gone")

        svc.add_listener(broken)
        svc.add_listener(seen.append)
        svc.start()
        scheduler.advance(1000)
        assert [s.remaining_seconds for s in seen] == [1500, 1499]

    def test_completion_listener(self, svc, scheduler):
        events = []
        svc.add_completion_listener(lambda mode, coin: events.append((mode, coin)))
        finish(svc, scheduler)
        finish(svc, scheduler, Mode.LONG_BREAK)
        assert events == [(Mode.WORK, True), (Mode.LONG_BREAK, False)]

    def test_progress_ratio(self, svc, scheduler):
        svc.start()
        scheduler.advance(750_000)
        assert svc.snapshot().progress == pytest.approx(0.5)

    def test_state_survives_restart(self, repo, scheduler):
        svc = PomodoroService(repo, scheduler, CountingPhrases(), today=lambda: TODAY)
        finish(svc, scheduler)
        again = PomodoroService(repo, ManualScheduler(), CountingPhrases(), today=lambda: TODAY)
        snap = again.snapshot()
        assert (snap.coins, snap.streak_days) == (1, 1)
        assert snap.time_text == "01:00"

    def test_storage_failure_keeps_session_alive(self, scheduler):
        repo = StateRepository(WriteFailingBackend())
        svc = PomodoroService(repo, scheduler, CountingPhrases(), today=lambda: TODAY)
        finish(svc, scheduler)
        assert svc.snapshot().coins == 1
        assert svc.snapshot().settings.work == 1

    def test_shutdown_cancels_pending(self, svc, scheduler):
        svc.start()
        finish(svc, scheduler)
        svc.start()
        svc.shutdown()
        assert scheduler.pending == 0
