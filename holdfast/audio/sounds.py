"""Cue tone synthesis and playback using numpy + QSoundEffect.

Every cue is generated programmatically as a WAV file from short sine
beeps with an exponential fade.  Files are cached to disk so subsequent
launches are instant.

Cue tones
---------
- ``start_hold``        — high beep (880 Hz)
- ``countdown``         — short medium beep (660 Hz), last 3 seconds
- ``end_hold``          — long low beep (440 Hz)
- ``start_rest``        — soft double beep (550 Hz)
- ``exercise_complete`` — rising triad (880 → 1100 → 1320 Hz)
- ``workout_complete``  — four-note fanfare (660 → 1320 Hz)
"""

from __future__ import annotations

import io
import wave
from pathlib import Path
from typing import Callable

import numpy as np
from loguru import logger

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from .cues import Cue


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Holdfast"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SAMPLE_RATE = 44100
PEAK_GAIN = 0.3
FADE_FLOOR = 0.01  # gain reached at the end of each beep


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _wave(freq: float, duration_ms: int) -> np.ndarray:
    t = np.arange(int(SAMPLE_RATE * duration_ms / 1000)) / SAMPLE_RATE
    return np.sin(2 * np.pi * freq * t)


def _beep(freq: float, duration_ms: int) -> np.ndarray:
    """One beep: instant attack, exponential ramp down to FADE_FLOOR."""
    tone = _wave(freq, duration_ms)
    if len(tone) == 0:
        return tone
    env = PEAK_GAIN * np.geomspace(1.0, FADE_FLOOR, len(tone))
    return tone * env


def _sequence(beeps: list[tuple[float, int, int]]) -> np.ndarray:
    """Lay out ``(freq, duration_ms, onset_ms)`` beeps on one timeline."""
    end_ms = max(onset + dur for _, dur, onset in beeps)
    out = np.zeros(int(SAMPLE_RATE * end_ms / 1000) + 1)
    for freq, dur, onset in beeps:
        tone = _beep(freq, dur)
        start = int(SAMPLE_RATE * onset / 1000)
        out[start:start + len(tone)] += tone
    return out


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


# ═══════════════════════════════════════════════════════════════════════════
#  CUE GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_start_hold() -> bytes:
    return _to_wav_bytes(_beep(880, 200))


def _generate_countdown() -> bytes:
    return _to_wav_bytes(_beep(660, 100))


def _generate_end_hold() -> bytes:
    return _to_wav_bytes(_beep(440, 300))


def _generate_start_rest() -> bytes:
    """Two soft beeps, 200 ms apart."""
    return _to_wav_bytes(_sequence([(550, 150, 0), (550, 150, 200)]))


def _generate_exercise_complete() -> bytes:
    return _to_wav_bytes(_sequence([
        (880, 100, 0),
        (1100, 100, 150),
        (1320, 200, 300),
    ]))


def _generate_workout_complete() -> bytes:
    return _to_wav_bytes(_sequence([
        (660, 150, 0),
        (880, 150, 200),
        (1100, 150, 400),
        (1320, 300, 600),
    ]))


_GENERATORS: dict[Cue, Callable[[], bytes]] = {
    Cue.START_HOLD: _generate_start_hold,
    Cue.COUNTDOWN: _generate_countdown,
    Cue.END_HOLD: _generate_end_hold,
    Cue.START_REST: _generate_start_rest,
    Cue.EXERCISE_COMPLETE: _generate_exercise_complete,
    Cue.WORKOUT_COMPLETE: _generate_workout_complete,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages cue synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play(Cue.START_HOLD)

    ``suspend()`` mutes the channel (e.g. while the window is hidden)
    until ``resume()`` is called.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._suspended = False
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[Cue, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def suspend(self) -> None:
        self._suspended = True

    def resume(self) -> None:
        self._suspended = False

    def play(self, cue: Cue) -> None:
        """Play a cue.  No-op if disabled, suspended, or not loaded."""
        if not self._enabled or self._suspended:
            return
        effect = self._effects.get(cue)
        if effect is not None:
            effect.play()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def suspended(self) -> bool:
        return self._suspended

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for cue, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{cue.value}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())
                logger.debug(f"Generated cue sound {path.name}")

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for cue in Cue:
            path = self._sounds_dir / f"{cue.value}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[cue] = effect
