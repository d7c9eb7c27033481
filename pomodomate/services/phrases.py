"""
Phrase Picker — Domate the tomato's lines.

Motivational phrases go in the mascot's speech card; celebration phrases
title the completion overlay. Choice is uniform over a fixed list, using an
injected random.Random so tests can seed it.
"""

from __future__ import annotations

import random
from typing import Optional, Sequence

MOTIVATIONAL_PHRASES = (
    "Excellent work! \U0001F345 Keep it up.",
    "Domate is proud of you! \U0001F31F",
    "One Pomodoro closer to your goals \U0001F680",
    "Fantastic! Your focus is incredible \U0001F4AA",
    "Well done! You deserve a break \U0001F60A",
    "Domate congratulates you on your dedication! \U0001F389",
    "Amazing! Every Pomodoro counts \U0001F525",
    "Keep harvesting wins! \U0001F331",
)

CELEBRATION_PHRASES = (
    "Pomodoro complete! \U0001F3AF",
    "Mission accomplished! \U0001F3C6",
    "Excellent session! ⭐",
    "Time well spent! \U0001F48E",
)


class PhrasePicker:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        motivational: Sequence[str] = MOTIVATIONAL_PHRASES,
        celebration: Sequence[str] = CELEBRATION_PHRASES,
    ) -> None:
        if not motivational or not celebration:
            raise ValueError("Phrase lists must not be empty")
        self.rng = rng or random.Random()
        self.motivational_phrases = tuple(motivational)
        self.celebration_phrases = tuple(celebration)

    def motivational(self) -> str:
        return self.rng.choice(self.motivational_phrases)

    def celebration(self) -> str:
        return self.rng.choice(self.celebration_phrases)


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Holds Domate's phrase lists and picks from them.
#
# Interviewer-friendly talking points:
#   1. The random.Random instance is injected, so tests seed it (or pass a
#      stub) and get the same phrase every run.
