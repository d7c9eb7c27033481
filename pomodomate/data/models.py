"""
Data models for Pomodomate.

Plain dataclasses and enums describing the timer, the per-mode settings and
the reward ledger. Persistence and behavior live elsewhere; these types are
the shared vocabulary of every layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class Mode(Enum):
    """The three timer modes. Value is the persisted settings key."""
    WORK = "work"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]

    @property
    def max_minutes(self) -> int:
        return _MODE_MAX_MINUTES[self]

    @property
    def is_break(self) -> bool:
        return self is not Mode.WORK


_MODE_LABELS = {
    Mode.WORK: "Pomodoro",
    Mode.SHORT_BREAK: "Short Break",
    Mode.LONG_BREAK: "Long Break",
}

_MODE_MAX_MINUTES = {
    Mode.WORK: 60,
    Mode.SHORT_BREAK: 30,
    Mode.LONG_BREAK: 60,
}

MIN_MINUTES = 1


@dataclass
class TimerState:
    """Countdown position. remaining_seconds never goes below zero."""
    remaining_seconds: int = 0
    running: bool = False


@dataclass
class Settings:
    """Duration in minutes for each mode."""
    work: int = 25
    short_break: int = 5
    long_break: int = 15

    def minutes_for(self, mode: Mode) -> int:
        if mode is Mode.WORK:
            return self.work
        if mode is Mode.SHORT_BREAK:
            return self.short_break
        if mode is Mode.LONG_BREAK:
            return self.long_break
        raise KeyError(mode)

    def seconds_for(self, mode: Mode) -> int:
        return self.minutes_for(mode) * 60

    def to_dict(self) -> dict:
        return {
            Mode.WORK.value: self.work,
            Mode.SHORT_BREAK.value: self.short_break,
            Mode.LONG_BREAK.value: self.long_break,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        defaults = cls()
        return cls(
            work=data.get(Mode.WORK.value, defaults.work),
            short_break=data.get(Mode.SHORT_BREAK.value, defaults.short_break),
            long_break=data.get(Mode.LONG_BREAK.value, defaults.long_break),
        )


@dataclass
class RewardLedger:
    """Coins and daily streak earned by finishing work intervals."""
    coins: int = 0
    streak_days: int = 0
    last_completion_date: Optional[date] = None


@dataclass
class PersistedState:
    """Everything loaded from the key-value store at startup."""
    settings: Settings = field(default_factory=Settings)
    ledger: RewardLedger = field(default_factory=RewardLedger)


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Defines the shape of the app state. Mode is the active timer type,
#   TimerState the countdown, Settings the per-mode durations and
#   RewardLedger the coins/streak counters.
#
# Key points:
#   - Mode values double as the persisted JSON keys ("work", "shortBreak",
#     "longBreak") so Settings.to_dict() writes exactly the stored shape.
#   - Per-mode bounds (60 / 30 / 60 minutes) sit next to the enum so the
#     settings form and the validation code read the same numbers.
#   - last_completion_date is a real datetime.date in memory; the string
#     form only exists at the storage boundary.
#
# Interviewer-friendly talking points:
#   1. Enum with properties instead of scattered dicts: one place to look
#      up a mode's label, bound and storage key.
#   2. Dataclasses keep equality and repr for free, which makes the tests
#      short (assert ledger == RewardLedger(...)).
