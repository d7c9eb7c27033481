"""
Settings Dialog — the three duration fields plus the sound toggle.

Edits stay local until "Save"; closing the dialog discards them. Values are
read as text and handed to PomodoroService.save_settings, which coerces
anything malformed to 1 minute.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import (
    QCheckBox, QDialog, QFormLayout, QHBoxLayout, QLabel, QPushButton,
    QSlider, QSpinBox, QVBoxLayout, QWidget,
)

from pomodomate.animation.sound_manager import SoundManager
from pomodomate.data.models import MIN_MINUTES, Mode, Settings

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    Mode.WORK: "Pomodoro (minutes)",
    Mode.SHORT_BREAK: "Short break (minutes)",
    Mode.LONG_BREAK: "Long break (minutes)",
}


class SettingsDialog(QDialog):
    """Modal editor for per-mode durations."""

    # {settings key: raw text}
    save_requested = Signal(dict)
    sound_changed = Signal(bool, float)

    def __init__(self, sound: SoundManager, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.sound = sound
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(340)
        self._spins: Dict[Mode, QSpinBox] = {}
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(14)

        title = QLabel("Settings")
        title.setObjectName("title")
        layout.addWidget(title)

        form = QFormLayout()
        form.setSpacing(10)
        for mode in Mode:
            spin = QSpinBox()
            spin.setRange(MIN_MINUTES, mode.max_minutes)
            spin.setAlignment(Qt.AlignmentFlag.AlignRight)
            self._spins[mode] = spin
            form.addRow(FIELD_LABELS[mode], spin)
        layout.addLayout(form)

        sound_row = QHBoxLayout()
        self.cb_sound = QCheckBox("Sound")
        self.cb_sound.setChecked(self.sound.enabled)
        sound_row.addWidget(self.cb_sound)
        self.volume_slider = QSlider(Qt.Orientation.Horizontal)
        self.volume_slider.setRange(0, 100)
        self.volume_slider.setValue(int(self.sound.volume * 100))
        sound_row.addWidget(self.volume_slider)
        self._sound_state = (self.sound.enabled, self.sound.volume)
        # slider drags are reported on release, keyboard steps when the dialog closes
        self.cb_sound.toggled.connect(self._on_sound_edited)
        self.volume_slider.sliderReleased.connect(self._on_sound_edited)
        self.finished.connect(self._on_sound_edited)
        layout.addLayout(sound_row)

        save_btn = QPushButton("Save")
        save_btn.setObjectName("primary")
        save_btn.clicked.connect(self._on_save)
        layout.addWidget(save_btn)

    # ── Public ──────────────────────────────────────────────────────────

    def load(self, settings: Settings) -> None:
        """Reset the fields to the stored settings (drops unsaved edits)."""
        for mode, spin in self._spins.items():
            spin.setValue(settings.minutes_for(mode))

    # ── Slots ───────────────────────────────────────────────────────────

    @Slot()
    def _on_save(self) -> None:
        self._on_sound_edited()
        # cleanText() is the raw field content; the service does the coercion
        raw = {mode.value: spin.cleanText() for mode, spin in self._spins.items()}
        self.save_requested.emit(raw)

    def _on_sound_edited(self, *_args) -> None:
        state = (self.cb_sound.isChecked(), self.volume_slider.value() / 100.0)
        if state == self._sound_state:
            return
        self._sound_state = state
        self.sound_changed.emit(*state)
