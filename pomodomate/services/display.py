"""Formatting helpers and the read-only snapshot the UI renders."""

from __future__ import annotations

from dataclasses import dataclass

from pomodomate.data.models import Mode, Settings


def format_time(seconds: int) -> str:
    """mm:ss with both parts zero-padded; minutes are not folded into hours."""
    if seconds < 0:
        raise ValueError(f"Cannot format negative time: {seconds}")
    mins, secs = divmod(int(seconds), 60)
    return f"{mins:02d}:{secs:02d}"


def progress_ratio(total_seconds: int, remaining_seconds: int) -> float:
    """Fraction of the interval already elapsed, in [0, 1]."""
    if total_seconds <= 0:
        return 0.0
    ratio = (total_seconds - remaining_seconds) / total_seconds
    return max(0.0, min(ratio, 1.0))


@dataclass(frozen=True)
class TimerSnapshot:
    mode: Mode
    remaining_seconds: int
    total_seconds: int
    running: bool
    coins: int
    streak_days: int
    motivational_phrase: str
    celebration_visible: bool
    celebration_phrase: str
    celebration_coin_awarded: bool
    settings: Settings
    settings_open: bool

    @property
    def time_text(self) -> str:
        return format_time(self.remaining_seconds)

    @property
    def progress(self) -> float:
        return progress_ratio(self.total_seconds, self.remaining_seconds)


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Everything the window needs to draw one frame: mm:ss text, the progress
#   ratio, and the frozen TimerSnapshot passed to listeners.
#
# Interviewer-friendly talking points:
#   1. The snapshot is immutable, so a listener cannot change service state
#      by accident.
