"""Timer package."""

from .engine import TimerEngine, format_time, TRANSITION_SECONDS
from .models import (
    ExerciseChangeEvent,
    ExerciseDescriptor,
    ExerciseItem,
    Phase,
    PhaseChangeEvent,
    RepCompleteEvent,
    SetCompleteEvent,
    Side,
    TickEvent,
    TimerSettings,
    TimerState,
    WorkoutCallbacks,
    WorkoutCompleteEvent,
    WorkoutPlan,
)
from .scheduler import TickScheduler

__all__ = [
    "TimerEngine",
    "TickScheduler",
    "format_time",
    "TRANSITION_SECONDS",
    "Phase",
    "Side",
    "ExerciseDescriptor",
    "ExerciseItem",
    "WorkoutPlan",
    "TimerSettings",
    "TimerState",
    "WorkoutCallbacks",
    "TickEvent",
    "PhaseChangeEvent",
    "ExerciseChangeEvent",
    "RepCompleteEvent",
    "SetCompleteEvent",
    "WorkoutCompleteEvent",
]
