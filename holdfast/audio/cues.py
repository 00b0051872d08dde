"""Symbolic feedback cues and their vibration patterns."""

from __future__ import annotations

from enum import Enum


class Cue(Enum):
    START_HOLD = "start_hold"
    COUNTDOWN = "countdown"
    END_HOLD = "end_hold"
    START_REST = "start_rest"
    EXERCISE_COMPLETE = "exercise_complete"
    WORKOUT_COMPLETE = "workout_complete"


# Alternating on/off durations in milliseconds.
VIBRATION_PATTERNS: dict[Cue, tuple[int, ...]] = {
    Cue.START_HOLD: (200,),
    Cue.COUNTDOWN: (50,),
    Cue.END_HOLD: (100, 50, 100),
    Cue.START_REST: (50, 50, 50),
    Cue.EXERCISE_COMPLETE: (100, 100, 100, 100, 200),
    Cue.WORKOUT_COMPLETE: (200, 100, 200, 100, 400),
}
