"""Shared pytest fixtures for Holdfast tests."""

import os
import sys
import pytest

# Run Qt headless so the suite works without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from holdfast.timer.engine import TimerEngine
from holdfast.timer.scheduler import TickScheduler

from helpers import FakeClock, RecordingNotifier


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def scheduler(qapp):
    """A real Qt scheduler.  No event loop runs, so it never fires on its own."""
    sched = TickScheduler()
    yield sched
    sched.stop()


@pytest.fixture
def engine(notifier, scheduler, clock):
    """Fresh TimerEngine; tests drive it with ``tick()`` from helpers."""
    return TimerEngine(notifier=notifier, scheduler=scheduler, clock=clock)
