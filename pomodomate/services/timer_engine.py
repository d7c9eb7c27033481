"""
Timer Engine — the one-second countdown.

Owns remaining seconds and the running flag. While running it keeps exactly
one pending tick with the injected scheduler; pause() and reset() cancel
that tick before returning. Reaching zero stops the engine and fires the
completion callback once.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from pomodomate.data.models import TimerState

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class TimerEngine:
    """Countdown driven by a tick scheduler."""

    def __init__(
        self,
        scheduler,
        initial_seconds: int = 0,
        on_complete: Optional[Callable[[], None]] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        if initial_seconds < 0:
            raise ValueError("initial_seconds must be non-negative")
        self.scheduler = scheduler
        self.state = TimerState(remaining_seconds=initial_seconds, running=False)
        self.on_complete = on_complete
        self.on_change = on_change
        self._handle: Optional[int] = None

    # ── Properties ──────────────────────────────────────────────────────────

    @property
    def remaining_seconds(self) -> int:
        return self.state.remaining_seconds

    @property
    def running(self) -> bool:
        return self.state.running

    # ── Public API ──────────────────────────────────────────────────────────

    def start(self) -> None:
        """Begin counting down. No-op if already running or already at zero."""
        if self.state.running or self.state.remaining_seconds == 0:
            return
        self.state.running = True
        self._schedule_next()
        logger.debug("Timer started at %ds", self.state.remaining_seconds)
        self._changed()

    def pause(self) -> None:
        if not self.state.running:
            return
        self._cancel_pending()
        self.state.running = False
        logger.debug("Timer paused at %ds", self.state.remaining_seconds)
        self._changed()

    def toggle(self) -> bool:
        """Flip between running and paused. Returns the new running flag."""
        if self.state.running:
            self.pause()
        else:
            self.start()
        return self.state.running

    def reset(self, new_seconds: int) -> None:
        """Stop and load a fresh countdown of new_seconds."""
        if new_seconds < 0:
            raise ValueError(f"Cannot reset timer to {new_seconds}s")
        self._cancel_pending()
        self.state.running = False
        self.state.remaining_seconds = int(new_seconds)
        self._changed()

    def stop(self) -> None:
        """Cancel any pending tick (used on shutdown)."""
        self._cancel_pending()
        self.state.running = False

    # ── Internal ────────────────────────────────────────────────────────────

    def _schedule_next(self) -> None:
        self._handle = self.scheduler.schedule_tick(self._tick, TICK_INTERVAL_MS)

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None

    def _tick(self) -> None:
        # A tick that outlived pause/reset has no handle any more
        if not self.state.running or self._handle is None:
            return
        self._handle = None

        if self.state.remaining_seconds > 0:
            self.state.remaining_seconds -= 1

        if self.state.remaining_seconds == 0:
            self.state.running = False
            logger.info("Countdown finished.")
            self._changed()
            if self.on_complete:
                self.on_complete()
            return

        self._schedule_next()
        self._changed()

    def _changed(self) -> None:
        if self.on_change:
            self.on_change()


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   The countdown itself: start / pause / toggle / reset, one decrement per
#   second, completion at zero.
#
# Key design decisions:
#   - One-shot ticks rescheduled after each decrement instead of a repeating
#     interval. The engine holds at most one handle, so "start while
#     running" cannot create a second countdown.
#   - The completion callback fires after running is already False, so a
#     handler that calls reset() or start() sees a consistent state.
#
# Interviewer-friendly talking points:
#   1. The scheduler is injected: QTimer in the app, a fake clock in tests.
#   2. remaining_seconds never goes negative; start() at zero is refused so
#      the user has to reset (or switch mode) to begin a new interval.
