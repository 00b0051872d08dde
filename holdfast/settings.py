"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Holdfast/settings.json

Usage::

    settings = load_settings()
    settings.hold_duration = 8
    save_settings(settings)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from loguru import logger

from .timer.models import TimerSettings


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Holdfast"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── workout ───────────────────────────────────────────────────────
    hold_duration: int = 10                # seconds
    rest_duration: int = 10
    bad_day_hold_duration: int = 5         # replaces hold_duration on bad days
    level: int = 1

    # ── feedback ──────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100
    speech_enabled: bool = True
    vibration_enabled: bool = True

    def timer_settings(self, *, bad_day: bool = False) -> TimerSettings:
        """Settings for one workout.  Bad Day mode shortens the hold."""
        hold = self.bad_day_hold_duration if bad_day else self.hold_duration
        return TimerSettings(
            hold_duration=max(1, int(hold)),
            rest_duration=max(1, int(self.rest_duration)),
            sound_enabled=self.sound_enabled,
            vibration_enabled=self.vibration_enabled,
        )


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning(f"Ignoring unreadable settings at {SETTINGS_PATH}: {exc}")
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
