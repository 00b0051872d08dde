"""The Notifier contract the timer engine talks to, and its desktop build.

The engine only ever *requests* feedback.  A notifier turns a request
into sound, vibration or speech, and must treat a missing or disabled
capability as a no-op.  ``DesktopNotifier`` also logs and swallows any
failure from the underlying Qt objects so a broken audio device can
never stall a workout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, Sequence

from loguru import logger

from .cues import Cue

if TYPE_CHECKING:
    from .sounds import SoundManager
    from .speech import Speaker


class Notifier(Protocol):
    def play_cue(self, cue: Cue) -> None: ...

    def vibrate(self, pattern: Sequence[int]) -> None: ...

    def speak(self, text: str, priority: bool = False) -> None: ...

    def resume_audio(self) -> None: ...


class NullNotifier:
    """Accepts every request and does nothing."""

    def play_cue(self, cue: Cue) -> None:
        pass

    def vibrate(self, pattern: Sequence[int]) -> None:
        pass

    def speak(self, text: str, priority: bool = False) -> None:
        pass

    def resume_audio(self) -> None:
        pass


class DesktopNotifier:
    """Routes cues to a :class:`SoundManager` and a :class:`Speaker`.

    Desktops have no vibration motor; pass ``vibrator`` (a callable
    taking the on/off pattern) to forward patterns to a paired device.
    """

    def __init__(
        self,
        sounds: SoundManager | None = None,
        speaker: Speaker | None = None,
        vibrator: Callable[[Sequence[int]], None] | None = None,
    ) -> None:
        self._sounds = sounds
        self._speaker = speaker
        self._vibrator = vibrator

    def play_cue(self, cue: Cue) -> None:
        if self._sounds is None:
            return
        try:
            self._sounds.play(cue)
        except Exception:
            logger.exception(f"Failed to play cue {cue.value}")

    def vibrate(self, pattern: Sequence[int]) -> None:
        if self._vibrator is None:
            return
        try:
            self._vibrator(tuple(pattern))
        except Exception:
            logger.exception(f"Failed to vibrate {list(pattern)}")

    def speak(self, text: str, priority: bool = False) -> None:
        if self._speaker is None:
            return
        try:
            self._speaker.say(text, priority=priority)
        except Exception:
            logger.exception(f"Failed to speak {text!r}")

    def resume_audio(self) -> None:
        if self._sounds is None or not self._sounds.suspended:
            return
        try:
            self._sounds.resume()
            logger.debug("Audio channel resumed")
        except Exception:
            logger.exception("Failed to resume audio channel")
