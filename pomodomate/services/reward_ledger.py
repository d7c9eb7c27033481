"""
Reward Ledger — coins and the daily streak.

Only a finished WORK interval reaches this module. Each one earns a coin;
the streak counts consecutive calendar days with at least one completion.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from pomodomate.data.models import RewardLedger
from pomodomate.data.repository import StateRepository

logger = logging.getLogger(__name__)


def next_ledger(ledger: RewardLedger, today: date) -> RewardLedger:
    """Ledger after one more completion on `today`."""
    coins = ledger.coins + 1
    last = ledger.last_completion_date

    if last == today:
        return RewardLedger(coins, ledger.streak_days, last)

    if last == today - timedelta(days=1):
        streak = ledger.streak_days + 1
    else:
        streak = 1
    return RewardLedger(coins, streak, today)


class RewardLedgerService:
    """Holds the current ledger and persists it after every completion."""

    def __init__(self, repo: StateRepository, ledger: RewardLedger) -> None:
        self.repo = repo
        self.ledger = ledger

    @property
    def coins(self) -> int:
        return self.ledger.coins

    @property
    def streak_days(self) -> int:
        return self.ledger.streak_days

    def record_completion(self, today: date) -> RewardLedger:
        previous = self.ledger
        self.ledger = next_ledger(previous, today)
        logger.info(
            "Work interval completed: coins %d -> %d, streak %d -> %d",
            previous.coins, self.ledger.coins,
            previous.streak_days, self.ledger.streak_days,
        )
        self.repo.save_ledger(self.ledger)
        return self.ledger


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Applies the coin and daily-streak rule when a Pomodoro finishes.
#
# Key pieces:
#   - next_ledger(): pure function. Same day keeps the streak, yesterday
#     extends it, anything older (or never) restarts it at 1.
#   - RewardLedgerService: holds the current ledger and saves it.
#
# Data flow:
#   TimerEngine completes (WORK) → PomodoroService → record_completion(today)
#     → StateRepository.save_ledger()
#
# Interviewer-friendly talking points:
#   1. "today" is passed in, so streak tests pin dates instead of mocking
#      the clock.
#   2. A second Pomodoro on the same day still earns a coin but does not
#      bump the streak.
