import datetime

import pytest

from sit_break.engine import ReminderEngine
from sit_break.store import ProfileStore

MONDAY_10AM = datetime.datetime(2026, 10, 19, 10, 0, 0)


class FakeClock:
    def __init__(self, start=MONDAY_10AM):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds=0, **kw):
        self.now += datetime.timedelta(seconds=seconds, **kw)

    def set(self, when):
        self.now = when


def first(seq):
    return seq[0]


def run(engine, clock, seconds):
    """Let ``seconds`` of wall time pass, one scheduler second at a time."""
    for _ in range(seconds):
        clock.advance(1)
        engine.scheduler.advance(1000)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(tmp_path):
    return ProfileStore("tester", str(tmp_path))


@pytest.fixture
def engine(store, clock):
    return ReminderEngine(store, clock=clock, choice=first)


@pytest.fixture
def events(engine):
    seen = []
    for name in ("alarm_entered", "alert_pulse", "nudge_available", "nudge_cleared", "exercise_opened"):
        engine.on(name, lambda payload, name=name: seen.append((name, payload)))
    return seen
