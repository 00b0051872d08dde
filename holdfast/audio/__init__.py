"""Feedback package: cue sounds, speech and the Notifier contract."""

from .cues import Cue, VIBRATION_PATTERNS
from .notifier import DesktopNotifier, Notifier, NullNotifier

__all__ = ["Cue", "VIBRATION_PATTERNS", "Notifier", "NullNotifier", "DesktopNotifier"]
