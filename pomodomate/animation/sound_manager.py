"""
Sound Manager — completion jingle, coin chime and button clicks.

Uses pygame.mixer for lightweight audio. All sounds are synthesized at
startup from sine waves; there are no audio files to ship.
"""

from __future__ import annotations

import logging
import math
import struct
import wave
from io import BytesIO
from typing import Dict, List

import pygame.mixer
from pygame import error as PygameError

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050


class SoundManager:
    """Manages SFX playback with volume control and an on/off toggle."""

    def __init__(self, enabled: bool = True, volume: float = 0.5) -> None:
        self.enabled = enabled
        self.volume = max(0.0, min(volume, 1.0))
        self._initialized = False
        self._sounds: Dict[str, "pygame.mixer.Sound"] = {}

        if enabled:
            self._init_mixer()

    def _init_mixer(self) -> None:
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
        except PygameError as e:
            logger.warning("Could not init audio: %s", e)
            return
        self._initialized = True
        self._generate_sounds()
        logger.info("Sound manager initialized.")

    def _generate_sounds(self) -> None:
        sound_specs = {
            "timer_complete": self._gen_timer_done,
            "coin": self._gen_coin,
            "click": self._gen_click,
        }
        for name, gen_func in sound_specs.items():
            try:
                sound = pygame.mixer.Sound(file=BytesIO(gen_func()))
            except PygameError as e:
                logger.warning("Could not load sound %s: %s", name, e)
                continue
            sound.set_volume(self.volume)
            self._sounds[name] = sound

    def play(self, sound_name: str) -> None:
        """Play a named sound effect."""
        if not self.enabled or not self._initialized:
            return
        sound = self._sounds.get(sound_name)
        if sound:
            sound.set_volume(self.volume)
            sound.play()

    def set_volume(self, volume: float) -> None:
        self.volume = max(0.0, min(volume, 1.0))
        for s in self._sounds.values():
            s.set_volume(self.volume)

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled
        if enabled and not self._initialized:
            self._init_mixer()

    def shutdown(self) -> None:
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False

    # ── Sound generators (simple waveforms) ─────────────────────────────────

    @staticmethod
    def make_wav(samples: List[float], sample_rate: int = SAMPLE_RATE) -> bytes:
        """Pack raw samples into a 16-bit mono WAV byte string."""
        buf = BytesIO()
        with wave.open(buf, "wb") as w:
            w.setnchannels(1)
            w.setsampwidth(2)
            w.setframerate(sample_rate)
            data = b"".join(
                struct.pack("<h", max(-32768, min(32767, int(s)))) for s in samples
            )
            w.writeframes(data)
        return buf.getvalue()

    @classmethod
    def _gen_timer_done(cls) -> bytes:
        """Completion jingle: C major arpeggio up to C6."""
        sr = SAMPLE_RATE
        samples = []
        for freq in (523, 659, 784, 1047):
            dur = int(sr * 0.12)
            for t in range(dur):
                amp = 7000 * (1 - t / dur)
                samples.append(amp * math.sin(2 * math.pi * freq * t / sr))
        return cls.make_wav(samples, sr)

    @classmethod
    def _gen_coin(cls) -> bytes:
        """Two-note coin pickup (B5 then E6)."""
        sr = SAMPLE_RATE
        samples = []
        for freq, secs in ((988, 0.06), (1319, 0.18)):
            dur = int(sr * secs)
            for t in range(dur):
                amp = 6000 * math.exp(-t / (sr * 0.08))
                # square-ish tone for the retro coin feel
                samples.append(amp * (1 if math.sin(2 * math.pi * freq * t / sr) >= 0 else -1))
        return cls.make_wav(samples, sr)

    @classmethod
    def _gen_click(cls) -> bytes:
        """Short pop for buttons."""
        sr = SAMPLE_RATE
        samples = []
        for t in range(int(sr * 0.05)):
            amp = 8000 * math.exp(-t / (sr * 0.01))
            freq = 900 - (400 * t / (sr * 0.05))
            samples.append(amp * math.sin(2 * math.pi * freq * t / sr))
        return cls.make_wav(samples, sr)
