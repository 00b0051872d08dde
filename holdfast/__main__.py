"""Allow running Holdfast as a module: python -m holdfast.

Runs one workout in the terminal with sound and speech cues:

    python -m holdfast --plan my_plan.json --bad-day
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from loguru import logger

from PyQt6.QtWidgets import QApplication

from .audio.notifier import DesktopNotifier
from .audio.sounds import SoundManager
from .audio.speech import Speaker
from .log import setup_logger
from .settings import load_settings
from .timer import (
    Phase,
    TimerEngine,
    WorkoutCallbacks,
    WorkoutPlan,
    format_time,
)


DEMO_PLAN = {
    "level": 1,
    "exercises": [
        {
            "exercise": {
                "id": "curl_up",
                "name": "Modified Curl-Up",
                "instruction": "Brace your core and lift your head and shoulders slightly",
            },
            "reps": 3,
        },
        {
            "exercise": {"id": "side_plank", "name": "Side Plank", "side": "left"},
            "reps": 2,
        },
        {
            "exercise": {"id": "side_plank", "name": "Side Plank", "side": "right"},
            "reps": 2,
        },
        {
            "exercise": {
                "id": "bird_dog",
                "name": "Bird Dog",
                "side": "left",
                "instruction": "Extend opposite arm and leg, keep your back flat",
            },
            "reps": 3,
        },
        {
            "exercise": {"id": "bird_dog", "name": "Bird Dog", "side": "right"},
            "reps": 3,
        },
    ],
}


def load_plan(path: Path | None) -> WorkoutPlan:
    if path is None:
        return WorkoutPlan.from_dict(DEMO_PLAN)
    return WorkoutPlan.from_dict(json.loads(path.read_text(encoding="utf-8")))


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="holdfast", description=__doc__.splitlines()[0])
    parser.add_argument("--plan", type=Path, help="workout plan JSON (default: demo plan)")
    parser.add_argument("--bad-day", action="store_true", help="shorter holds for a rough day")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    setup_logger(level=args.log_level, log_file=args.log_file)

    settings = load_settings()
    try:
        plan = load_plan(args.plan)
    except (OSError, ValueError) as exc:
        logger.error(f"Could not load plan: {exc}")
        sys.exit(2)

    app = QApplication(sys.argv)
    app.setApplicationName("Holdfast")
    app.setOrganizationName("Holdfast")

    sounds = SoundManager(app)
    sounds.set_volume(settings.sound_volume)
    speaker = Speaker(app, enabled=settings.speech_enabled)
    engine = TimerEngine(notifier=DesktopNotifier(sounds, speaker))

    def on_tick(event):
        if event.phase in (Phase.HOLD, Phase.REST):
            pct = engine.get_progress_percent()
            print(
                f"  {event.phase.value:<5} {format_time(event.time)}  "
                f"rep {event.rep}/{event.total_reps}  {pct:5.1f}%"
            )
        else:
            print(f"  starting in {event.time}…")

    def on_phase_change(event):
        print(f"{event.phase.value.upper()}: {event.exercise.exercise.label}, "
              f"rep {event.rep}/{event.exercise.reps} ({event.duration}s)")

    def on_exercise_change(event):
        print(f"\nNext exercise ({event.exercise_index + 1}/{len(plan)}): "
              f"{event.exercise.exercise.label}")

    def on_workout_complete(event):
        print(f"\nDone! {event.exercises_completed} exercises in "
              f"{format_time(event.duration)}")
        app.quit()

    engine.start_workout(
        plan,
        settings.timer_settings(bad_day=args.bad_day),
        WorkoutCallbacks(
            on_tick=on_tick,
            on_phase_change=on_phase_change,
            on_exercise_change=on_exercise_change,
            on_workout_complete=on_workout_complete,
        ),
    )
    if engine.phase == Phase.COMPLETE:
        return

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
