from .database import Database
from .models import Mode, PersistedState, RewardLedger, Settings, TimerState
from .repository import MemoryBackend, SQLiteBackend, StateRepository

__all__ = [
    "Database", "Mode", "PersistedState", "RewardLedger", "Settings", "TimerState",
    "MemoryBackend", "SQLiteBackend", "StateRepository",
]
