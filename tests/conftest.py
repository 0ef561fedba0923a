"""Fixtures for attendance store tests."""

import datetime

import pytest

from sarattend import model

START_TIME = datetime.datetime(2026, 10, 19, 9, 0)
ROSTER = ["Alice Adams", "Bob Brown", "Carol Chen", "Dave Diaz"]


class FakeClock:
    """Returns a later time on each call so timestamps are predictable."""

    def __init__(
        self,
        start: datetime.datetime = START_TIME,
        step: datetime.timedelta = datetime.timedelta(minutes=5),
    ) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime.datetime:
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def empty_store(clock: FakeClock) -> model.AttendanceStore:
    """Store with a roster but no sessions or log."""
    return model.AttendanceStore(members=ROSTER, clock=clock)


@pytest.fixture
def full_store(clock: FakeClock) -> model.AttendanceStore:
    """Store with two members signed in and two completed sessions.

    Timeline: Alice in 09:00, Bob in 09:05, Alice out 09:10, Carol in 09:15,
    Bob out 09:20, Dave in 09:25.
    """
    attendance = model.AttendanceStore(
        members=ROSTER, task_number="20261019-01", clock=clock
    )
    attendance.sign_in("Alice Adams")
    attendance.sign_in("Bob Brown")
    attendance.sign_out("Alice Adams")
    attendance.sign_in("Carol Chen")
    attendance.sign_out("Bob Brown")
    attendance.sign_in("Dave Diaz")
    return attendance
