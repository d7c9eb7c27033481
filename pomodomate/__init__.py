"""Pomodomate — a Pomodoro timer that pays you in coins and streaks."""

__version__ = "1.0.0"
