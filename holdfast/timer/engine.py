"""Workout timer state machine for Holdfast.

Phases
------
IDLE        Nothing started, or the engine was reset.
TRANSITION  3-second "get ready" countdown before the first hold.
HOLD        One repetition's timed hold.
REST        Pause between repetitions, or between exercises.
COMPLETE    Last hold of the last exercise finished.

Transitions
-----------
IDLE → TRANSITION                          (start_workout)
TRANSITION → HOLD                          (countdown reaches 0)
HOLD → REST                                (more reps, or next exercise)
HOLD → COMPLETE                            (last rep of last exercise)
REST → HOLD                                (countdown reaches 0)
Any → IDLE                                 (reset)

Pause is a flag, not a phase: the scheduler keeps firing and
``evaluate()`` simply returns while paused, so resume is instantaneous.
``stop_timer()`` halts the scheduler but leaves the phase untouched.
"""

from __future__ import annotations

import time
from typing import Callable, Sequence

from loguru import logger

from ..audio.cues import Cue, VIBRATION_PATTERNS
from ..audio.notifier import Notifier, NullNotifier
from .models import (
    ExerciseChangeEvent,
    ExerciseItem,
    Phase,
    PhaseChangeEvent,
    RepCompleteEvent,
    SetCompleteEvent,
    TickEvent,
    TimerSettings,
    TimerState,
    WorkoutCallbacks,
    WorkoutCompleteEvent,
    WorkoutPlan,
)
from .scheduler import TickScheduler


# ── constants ─────────────────────────────────────────────────────────────

TRANSITION_SECONDS = 3
COUNTDOWN_CUE_SECONDS = (1, 2, 3)

DEFAULT_HOLD_PROMPT = "Hold"
REST_PROMPT = "Rest"
PAUSED_PROMPT = "Paused"
RESUMING_PROMPT = "Resuming"
COMPLETE_PROMPT = "Workout complete. Great job!"


def format_time(seconds: int) -> str:
    """Render seconds as ``m:ss``; minutes are unpadded and unbounded."""
    if seconds < 0:
        raise ValueError(f"seconds must be >= 0, got {seconds}")
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine:
    """Tick-driven workout timer.

    Every call to :meth:`evaluate` is one second of workout time; the
    :class:`TickScheduler` makes those calls on the Qt event loop, and
    tests can make them directly.

    Events go to the :class:`WorkoutCallbacks` passed to
    :meth:`start_workout`, synchronously and in order.  Feedback goes to
    the notifier and is best-effort: a failing notifier is logged and
    ignored.
    """

    def __init__(
        self,
        notifier: Notifier | None = None,
        scheduler: TickScheduler | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._notifier: Notifier = notifier or NullNotifier()
        self._scheduler = scheduler if scheduler is not None else TickScheduler()
        self._clock = clock

        self._state = TimerState()
        self._plan: WorkoutPlan | None = None
        self._settings = TimerSettings()
        self._callbacks = WorkoutCallbacks()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> TimerSettings:
        """Settings captured by the last ``start_workout``."""
        return self._settings

    @property
    def plan(self) -> WorkoutPlan | None:
        return self._plan

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def current_exercise(self) -> ExerciseItem | None:
        if self._plan is None:
            return None
        idx = self._state.current_exercise_index
        if 0 <= idx < len(self._plan.exercises):
            return self._plan.exercises[idx]
        return None

    def get_state(self) -> TimerState:
        """A copy of the timer state; changing it has no effect."""
        return self._state.copy()

    def get_progress_percent(self) -> float:
        """0 → 100 through the current hold or rest; 0 otherwise."""
        state = self._state
        if state.phase == Phase.HOLD:
            duration = state.hold_duration
        elif state.phase == Phase.REST:
            duration = state.rest_duration
        else:
            return 0.0
        elapsed = duration - state.current_time
        return max(0.0, min(100.0, elapsed / duration * 100))

    format_time = staticmethod(format_time)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start_workout(
        self,
        plan: WorkoutPlan,
        settings: TimerSettings | None = None,
        callbacks: WorkoutCallbacks | None = None,
    ) -> None:
        """Start *plan* from the top, replacing any workout in progress."""
        if plan is None:
            raise ValueError("start_workout requires a plan")

        self._scheduler.stop()
        self._plan = plan
        self._settings = settings or TimerSettings()
        self._callbacks = callbacks or WorkoutCallbacks()
        self._state = TimerState(
            phase=Phase.TRANSITION,
            is_running=True,
            is_paused=False,
            current_time=TRANSITION_SECONDS,
            hold_duration=self._settings.hold_duration,
            rest_duration=self._settings.rest_duration,
            current_exercise_index=0,
            current_rep=1,
            start_timestamp=self._clock(),
        )

        if not plan.exercises:
            logger.warning("Started an empty workout plan; completing immediately")
            self._complete_workout()
            return

        logger.info(
            f"Workout started: {len(plan.exercises)} exercises, level {plan.level}, "
            f"hold {self._settings.hold_duration}s, rest {self._settings.rest_duration}s"
        )
        first = plan.exercises[0]
        self._speak(f"Get ready for {first.exercise.label}")
        self._scheduler.start(self.evaluate)

    def pause(self) -> None:
        """Freeze the countdown.  No-op unless a workout is running."""
        if not self._state.is_running or self._state.is_paused:
            return
        self._state.is_paused = True
        logger.debug(f"Paused at {self._state.current_time}s in {self._state.phase.value}")
        self._speak(PAUSED_PROMPT)

    def resume(self) -> None:
        if not self._state.is_running or not self._state.is_paused:
            return
        self._state.is_paused = False
        logger.debug("Resumed")
        self._speak(RESUMING_PROMPT)
        self._notify(self._notifier.resume_audio)

    def stop_timer(self) -> None:
        """Halt the scheduler, keeping the last state for inspection."""
        self._scheduler.stop()
        self._state.is_running = False

    def reset(self) -> None:
        """Stop and return to IDLE defaults."""
        self._scheduler.stop()
        self._state = TimerState()
        self._plan = None
        self._callbacks = WorkoutCallbacks()

    # ══════════════════════════════════════════════════════════════════
    #  EVALUATION — one call per second
    # ══════════════════════════════════════════════════════════════════

    def evaluate(self) -> None:
        state = self._state
        if not state.is_running or state.is_paused:
            return

        if state.current_time > 0:
            state.current_time -= 1
            if state.current_time in COUNTDOWN_CUE_SECONDS:
                self._cue(Cue.COUNTDOWN)

            exercise = self.current_exercise
            self._emit(self._callbacks.on_tick, TickEvent(
                time=state.current_time,
                phase=state.phase,
                exercise=exercise,
                rep=state.current_rep,
                total_reps=exercise.reps,
            ))
            return

        self._finish_phase()

    def _finish_phase(self) -> None:
        phase = self._state.phase
        if phase == Phase.TRANSITION or phase == Phase.REST:
            self._start_hold()
        elif phase == Phase.HOLD:
            self._finish_hold()

    def _finish_hold(self) -> None:
        state = self._state
        exercise = self.current_exercise

        self._cue(Cue.END_HOLD)
        self._emit(self._callbacks.on_rep_complete, RepCompleteEvent(
            rep=state.current_rep,
            total_reps=exercise.reps,
        ))
        if self._superseded(state):
            return

        if state.current_rep < exercise.reps:
            state.current_rep += 1
            self._start_rest()
            return

        # ── set finished ──────────────────────────────────────────────
        self._cue(Cue.EXERCISE_COMPLETE)
        self._emit(self._callbacks.on_set_complete, SetCompleteEvent(
            exercise=exercise,
            exercise_index=state.current_exercise_index,
        ))
        if self._superseded(state):
            return

        if state.current_exercise_index < len(self._plan.exercises) - 1:
            state.current_exercise_index += 1
            state.current_rep = 1
            upcoming = self.current_exercise
            logger.info(
                f"Exercise {state.current_exercise_index + 1}/{len(self._plan.exercises)}: "
                f"{upcoming.exercise.label}"
            )
            self._speak(f"Next: {upcoming.exercise.label}", priority=True)
            self._emit(self._callbacks.on_exercise_change, ExerciseChangeEvent(
                exercise=upcoming,
                exercise_index=state.current_exercise_index,
            ))
            if self._superseded(state):
                return
            self._start_rest()
        else:
            self._complete_workout()

    def _start_hold(self) -> None:
        state = self._state
        exercise = self.current_exercise

        state.phase = Phase.HOLD
        state.current_time = state.hold_duration

        self._cue(Cue.START_HOLD)
        if state.current_rep == 1:
            self._speak(exercise.exercise.instruction or DEFAULT_HOLD_PROMPT)

        self._emit(self._callbacks.on_phase_change, PhaseChangeEvent(
            phase=Phase.HOLD,
            duration=state.hold_duration,
            rep=state.current_rep,
            exercise=exercise,
        ))

    def _start_rest(self) -> None:
        state = self._state

        state.phase = Phase.REST
        state.current_time = state.rest_duration

        self._cue(Cue.START_REST)
        self._speak(REST_PROMPT)

        self._emit(self._callbacks.on_phase_change, PhaseChangeEvent(
            phase=Phase.REST,
            duration=state.rest_duration,
            rep=state.current_rep,
            exercise=self.current_exercise,
        ))

    def _complete_workout(self) -> None:
        state = self._state
        state.phase = Phase.COMPLETE
        state.is_running = False
        state.is_paused = False
        state.current_time = 0

        self._cue(Cue.WORKOUT_COMPLETE)
        self._speak(COMPLETE_PROMPT, priority=True)

        duration = round(self._clock() - state.start_timestamp)
        event = WorkoutCompleteEvent(
            duration=max(0, duration),
            exercises_completed=len(self._plan.exercises),
            level=self._plan.level,
        )
        logger.info(
            f"Workout complete: {event.exercises_completed} exercises "
            f"in {format_time(event.duration)}"
        )
        self.stop_timer()
        self._emit(self._callbacks.on_workout_complete, event)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — feedback and events
    # ══════════════════════════════════════════════════════════════════

    def _cue(self, cue: Cue) -> None:
        if self._settings.sound_enabled:
            self._notify(self._notifier.play_cue, cue)
        if self._settings.vibration_enabled:
            pattern: Sequence[int] | None = VIBRATION_PATTERNS.get(cue)
            if pattern:
                self._notify(self._notifier.vibrate, pattern)

    def _speak(self, text: str, priority: bool = False) -> None:
        if self._settings.sound_enabled:
            self._notify(self._notifier.speak, text, priority)

    def _notify(self, request: Callable[..., None], *args) -> None:
        try:
            request(*args)
        except Exception:
            logger.opt(exception=True).warning(
                f"Notifier request {getattr(request, '__name__', request)} failed; continuing"
            )

    def _superseded(self, state: TimerState) -> bool:
        """True once a handler has stopped, reset or restarted the workout."""
        return self._state is not state or not state.is_running

    @staticmethod
    def _emit(handler, event) -> None:
        if handler is not None:
            handler(event)
