"""Plan, settings, state and event types for the workout timer.

The plan types are read-only input produced by the plan generator.
``TimerState`` is the single mutable record owned by
:class:`~holdfast.timer.engine.TimerEngine`; everything handed out of
the engine is either a frozen event or a copy of that state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable


# ── enums ─────────────────────────────────────────────────────────────────


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"


class Phase(Enum):
    IDLE = "idle"
    TRANSITION = "transition"
    HOLD = "hold"
    REST = "rest"
    COMPLETE = "complete"


# ── plan ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ExerciseDescriptor:
    id: str
    name: str
    side: Side | None = None
    instruction: str | None = None  # spoken on the first hold

    @property
    def label(self) -> str:
        """Display name with the side appended, e.g. ``Side Plank (Left)``."""
        if self.side is None:
            return self.name
        return f"{self.name} ({self.side.value.title()})"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExerciseDescriptor:
        try:
            ex_id = str(data["id"])
            name = str(data["name"])
        except (KeyError, TypeError) as exc:
            raise ValueError(f"exercise needs 'id' and 'name': {data!r}") from exc

        side = data.get("side")
        if side:
            try:
                side = Side(str(side).lower())
            except ValueError:
                raise ValueError(f"unknown side {side!r} for {ex_id}") from None
        else:
            side = None

        return cls(
            id=ex_id,
            name=name,
            side=side,
            instruction=data.get("instruction") or None,
        )


@dataclass(frozen=True)
class ExerciseItem:
    """One exercise with a fixed repetition count."""

    exercise: ExerciseDescriptor
    reps: int

    def __post_init__(self) -> None:
        if self.reps < 1:
            raise ValueError(
                f"{self.exercise.id}: reps must be >= 1, got {self.reps}"
            )


@dataclass(frozen=True)
class WorkoutPlan:
    exercises: tuple[ExerciseItem, ...]
    level: int = 1

    def __len__(self) -> int:
        return len(self.exercises)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorkoutPlan:
        """Build a plan from its JSON form::

            {"level": 2,
             "exercises": [{"exercise": {"id": "curl_up", "name": "Curl-Up"},
                            "reps": 5}]}
        """
        raw_items = data.get("exercises")
        if not isinstance(raw_items, list):
            raise ValueError("plan needs an 'exercises' list")

        items: list[ExerciseItem] = []
        for raw in raw_items:
            if not isinstance(raw, dict) or "exercise" not in raw:
                raise ValueError(f"malformed plan item: {raw!r}")
            try:
                reps = int(raw.get("reps", 1))
            except (TypeError, ValueError):
                raise ValueError(f"reps must be an integer: {raw!r}") from None
            items.append(
                ExerciseItem(ExerciseDescriptor.from_dict(raw["exercise"]), reps)
            )

        return cls(exercises=tuple(items), level=int(data.get("level", 1)))


# ── settings ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerSettings:
    """Per-workout settings, captured by the engine at start."""

    hold_duration: int = 10  # seconds
    rest_duration: int = 10
    sound_enabled: bool = True
    vibration_enabled: bool = True

    def __post_init__(self) -> None:
        for name in ("hold_duration", "rest_duration"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be whole seconds, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")


# ── state ─────────────────────────────────────────────────────────────────


@dataclass
class TimerState:
    phase: Phase = Phase.IDLE
    is_running: bool = False
    is_paused: bool = False
    current_time: int = 0
    hold_duration: int = 10
    rest_duration: int = 10
    current_exercise_index: int = 0
    current_rep: int = 0
    start_timestamp: float | None = None

    def copy(self) -> TimerState:
        return replace(self)


# ── events ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TickEvent:
    time: int
    phase: Phase
    exercise: ExerciseItem
    rep: int
    total_reps: int


@dataclass(frozen=True)
class PhaseChangeEvent:
    phase: Phase
    duration: int
    rep: int
    exercise: ExerciseItem


@dataclass(frozen=True)
class ExerciseChangeEvent:
    exercise: ExerciseItem
    exercise_index: int


@dataclass(frozen=True)
class RepCompleteEvent:
    rep: int
    total_reps: int


@dataclass(frozen=True)
class SetCompleteEvent:
    exercise: ExerciseItem
    exercise_index: int


@dataclass(frozen=True)
class WorkoutCompleteEvent:
    duration: int  # whole seconds
    exercises_completed: int
    level: int | None = None


TimerEvent = (
    TickEvent
    | PhaseChangeEvent
    | ExerciseChangeEvent
    | RepCompleteEvent
    | SetCompleteEvent
    | WorkoutCompleteEvent
)


@dataclass
class WorkoutCallbacks:
    """Event handlers supplied with :meth:`TimerEngine.start_workout`.

    Handlers run synchronously inside the tick that produced the event,
    so they must return quickly.
    """

    on_tick: Callable[[TickEvent], None] | None = None
    on_phase_change: Callable[[PhaseChangeEvent], None] | None = None
    on_exercise_change: Callable[[ExerciseChangeEvent], None] | None = None
    on_rep_complete: Callable[[RepCompleteEvent], None] | None = None
    on_set_complete: Callable[[SetCompleteEvent], None] | None = None
    on_workout_complete: Callable[[WorkoutCompleteEvent], None] | None = None
