"""
Settings Store — validated per-mode durations and the editor flag.

User input is never rejected: anything that does not read as a positive
whole number becomes 1 minute, and values above a mode's bound are clamped.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Mapping, Union

from pomodomate.data.models import MIN_MINUTES, Mode, Settings
from pomodomate.data.repository import StateRepository

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?)0*(\d{1,9})")


def coerce_minutes(value: Any, mode: Mode) -> int:
    """Turn raw form input into a duration within the mode's bounds."""
    minutes = _parse_int(value)
    if minutes < MIN_MINUTES:
        return MIN_MINUTES
    return min(minutes, mode.max_minutes)


def _parse_int(value: Any) -> int:
    """Leading whole number of value, 0 when there is none ("12.7" -> 12, "abc" -> 0)."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _LEADING_INT.match(str(value))
    # at most 9 significant digits; anything longer is clamped to the bound anyway
    return int(match.group(1) + match.group(2)) if match else 0


class SettingsStore:
    """Current settings, persisted on every save."""

    def __init__(self, repo: StateRepository, settings: Settings) -> None:
        self.repo = repo
        self.settings = settings
        self.editor_open = False

    def open_editor(self) -> None:
        self.editor_open = True

    def close_editor(self) -> None:
        self.editor_open = False

    def save(self, raw: Mapping[Union[str, Mode], Any]) -> Settings:
        """Coerce, persist and close the editor. Missing modes keep their value."""
        values = {}
        for mode in Mode:
            if mode in raw:
                value = raw[mode]
            elif mode.value in raw:
                value = raw[mode.value]
            else:
                values[mode.value] = self.settings.minutes_for(mode)
                continue
            values[mode.value] = coerce_minutes(value, mode)

        self.settings = Settings.from_dict(values)
        self.repo.save_settings(self.settings)
        self.editor_open = False
        logger.info("Settings saved: %s", self.settings.to_dict())
        return self.settings


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Turns whatever the user typed into valid durations and persists them.
#
# Key pieces:
#   - coerce_minutes(): leading whole number of the input ("30min" → 30),
#     below 1 becomes 1, above the mode's bound is clamped.
#   - SettingsStore: the current Settings plus the "editor open" flag.
#
# Data flow:
#   SettingsDialog → PomodoroService.save_settings(raw) → SettingsStore.save()
#     → StateRepository.save_settings() → ModeController.apply_settings()
#
# Interviewer-friendly talking points:
#   1. Input is coerced, never rejected: there is no error path in the form.
#   2. The digit run is capped before int(), so absurdly long input cannot
#      trip Python's integer-string conversion limit.
