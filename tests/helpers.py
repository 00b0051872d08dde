"""Shared test helpers for Holdfast."""

from holdfast.timer.engine import TimerEngine
from holdfast.timer.models import (
    ExerciseDescriptor,
    ExerciseItem,
    Side,
    WorkoutCallbacks,
    WorkoutPlan,
)


class EventCollector:
    """Records every engine event as ``(kind, event)`` in arrival order."""

    KINDS = (
        "tick",
        "phase_change",
        "exercise_change",
        "rep_complete",
        "set_complete",
        "workout_complete",
    )

    def __init__(self):
        self.items: list = []

    def callbacks(self) -> WorkoutCallbacks:
        return WorkoutCallbacks(**{
            f"on_{kind}": (lambda event, kind=kind: self.items.append((kind, event)))
            for kind in self.KINDS
        })

    def of(self, kind: str) -> list:
        return [event for k, event in self.items if k == kind]

    def kinds(self) -> list[str]:
        return [k for k, _ in self.items]

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class RecordingNotifier:
    """Notifier that remembers every request instead of making noise."""

    def __init__(self):
        self.cues: list = []
        self.vibrations: list = []
        self.speech: list = []
        self.audio_resumes = 0

    def play_cue(self, cue):
        self.cues.append(cue)

    def vibrate(self, pattern):
        self.vibrations.append(tuple(pattern))

    def speak(self, text, priority=False):
        self.speech.append((text, priority))

    def resume_audio(self):
        self.audio_resumes += 1

    @property
    def spoken(self) -> list[str]:
        return [text for text, _ in self.speech]


class BrokenNotifier:
    """Every request blows up, like a phone with no audio device."""

    def play_cue(self, cue):
        raise RuntimeError("no audio device")

    def vibrate(self, pattern):
        raise RuntimeError("no vibration motor")

    def speak(self, text, priority=False):
        raise RuntimeError("no speech engine")

    def resume_audio(self):
        raise RuntimeError("no audio device")


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now += seconds


def make_item(ex_id: str, reps: int, *, name: str | None = None,
              side: Side | None = None, instruction: str | None = None) -> ExerciseItem:
    return ExerciseItem(
        ExerciseDescriptor(
            id=ex_id,
            name=name or ex_id.replace("_", " ").title(),
            side=side,
            instruction=instruction,
        ),
        reps,
    )


def make_plan(*reps: int, level: int = 1) -> WorkoutPlan:
    """One exercise per argument, ``ex1``, ``ex2``…, with that many reps."""
    return WorkoutPlan(
        exercises=tuple(make_item(f"ex{i}", r) for i, r in enumerate(reps, start=1)),
        level=level,
    )


def tick(engine: TimerEngine, clock: FakeClock | None = None, times: int = 1) -> None:
    """Advance the engine by *times* seconds."""
    for _ in range(times):
        if clock is not None:
            clock.advance(1)
        engine.evaluate()


def run_to_completion(engine: TimerEngine, clock: FakeClock | None = None,
                      limit: int = 10_000) -> int:
    """Tick until the engine stops running; returns the number of ticks."""
    count = 0
    while engine.get_state().is_running:
        tick(engine, clock)
        count += 1
        assert count < limit, "workout never completed"
    return count
