"""Alarm synthesis and playback using numpy + QSoundEffect.

The alarm is generated programmatically as a WAV file using sine-wave
synthesis with an ADSR envelope.  The file is cached to disk so later
launches skip the synthesis.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import SOUNDS_DIR

logger = logging.getLogger(__name__)

ALARM_NAME = "alarm"
SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def generate_alarm() -> bytes:
    """Phase-end alarm: three bright two-tone rings (A5 + E6)."""
    ring_dur = 0.25
    gap = 0.12
    parts: list[np.ndarray] = []
    for _ in range(3):
        tone = _sine(880.0, ring_dur) * 0.45 + _sine(1318.51, ring_dur) * 0.2
        env = _make_envelope(len(tone), attack=120, decay=600, sustain_level=0.5, release=2000)
        parts.append(tone * env)
        parts.append(np.zeros(int(SAMPLE_RATE * gap)))
    return _to_wav_bytes(np.concatenate(parts))


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Alarm sink: caches the WAV and plays it on request.

    Usage::

        mgr = SoundManager(parent=self)
        controller.alarm_requested.connect(mgr.on_alarm_requested)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._volume = 0.75  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effect: QSoundEffect | None = None

        self._ensure_wav_file()
        self._load_effect()

    # ── public API ────────────────────────────────────────────────────

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def alarm_path(self) -> Path:
        return self._sounds_dir / f"{ALARM_NAME}.wav"

    def set_volume(self, volume: float) -> None:
        """Set volume, clamped to [0, 1]."""
        self._volume = max(0.0, min(1.0, float(volume)))
        if self._effect is not None:
            self._effect.setVolume(self._volume)

    def on_alarm_requested(self, volume: float) -> None:
        self.set_volume(volume)
        if self._effect is None:
            logger.warning("Alarm requested but no sound is loaded")
            return
        self._effect.play()

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_file(self) -> None:
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        if not self.alarm_path.exists():
            self.alarm_path.write_bytes(generate_alarm())

    def _load_effect(self) -> None:
        effect = QSoundEffect(self)
        effect.setSource(QUrl.fromLocalFile(str(self.alarm_path)))
        effect.setVolume(self._volume)
        self._effect = effect
