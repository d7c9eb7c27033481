"""
Seed State — writes a demo ledger and settings into the local database.

Useful for checking the header and the streak logic without finishing
real Pomodoros. The stored last completion date is yesterday, so the next
finished work interval extends the streak.

Run: python scripts/seed_state.py [coins] [streak_days]
"""

import sys
from datetime import date, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pomodomate.data.database import Database
from pomodomate.data.models import RewardLedger, Settings
from pomodomate.data.repository import SQLiteBackend, StateRepository


def seed(coins: int = 42, streak_days: int = 6) -> None:
    db = Database()
    db.connect()
    repo = StateRepository(SQLiteBackend(db.conn))

    repo.save_settings(Settings(work=25, short_break=5, long_break=15))
    repo.save_ledger(RewardLedger(
        coins=coins,
        streak_days=streak_days,
        last_completion_date=date.today() - timedelta(days=1),
    ))

    state = repo.load()
    db.close()
    print(
        f"Seeded {db.db_path}: {state.ledger.coins} coins, "
        f"{state.ledger.streak_days}-day streak, last completion "
        f"{state.ledger.last_completion_date}."
    )


if __name__ == "__main__":
    args = [int(a) for a in sys.argv[1:3]]
    seed(*args)
