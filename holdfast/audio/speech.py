"""Spoken prompts via Qt's text-to-speech module.

The QtTextToSpeech module ships separately from QtMultimedia on some
platforms; when it (or a speech engine) is missing the speaker stays
silent instead of failing.
"""

from __future__ import annotations

from loguru import logger

from PyQt6.QtCore import QObject


class Speaker(QObject):
    """Thin wrapper over ``QTextToSpeech``.

    ``say(text, priority=True)`` stops whatever is being spoken first.
    """

    def __init__(self, parent: QObject | None = None, *, enabled: bool = True) -> None:
        super().__init__(parent)
        self._enabled = enabled
        self._tts = None

        try:
            from PyQt6.QtTextToSpeech import QTextToSpeech
        except ImportError:
            logger.warning("QtTextToSpeech not installed; spoken prompts disabled")
            return

        tts = QTextToSpeech(self)
        if tts.state() == QTextToSpeech.State.Error:
            logger.warning(f"Speech engine {tts.engine()!r} unavailable; spoken prompts disabled")
            return
        tts.setRate(0.0)
        tts.setPitch(0.0)
        tts.setVolume(0.8)
        self._tts = tts

    @property
    def available(self) -> bool:
        return self._tts is not None

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def say(self, text: str, priority: bool = False) -> None:
        if not self._enabled or self._tts is None or not text:
            return
        if priority:
            self._tts.stop()
        # enqueue() keeps earlier prompts playing; say() would cut them off
        self._tts.enqueue(text)

    def stop(self) -> None:
        if self._tts is not None:
            self._tts.stop()
