"""Test signing in, signing out, tasks, and clearing the log."""

import datetime

import rich  # noqa: F401

from sarattend import model


def test_sign_in(empty_store: model.AttendanceStore) -> None:
    """Signing in creates an active session."""
    # Act
    result = empty_store.sign_in("Bob Brown")
    # Assert
    assert result
    assert empty_store.is_signed_in("Bob Brown")
    assert len(empty_store.active_sessions) == 1
    assert empty_store.active_sessions[0].sign_in_time == datetime.datetime(
        2026, 10, 19, 9, 0
    )


def test_sign_in_twice(empty_store: model.AttendanceStore) -> None:
    """A member who is already signed in can't sign in again."""
    # Arrange
    empty_store.sign_in("Bob Brown")
    # Act
    result = empty_store.sign_in("Bob Brown")
    # Assert
    assert not result
    assert len(empty_store.active_sessions) == 1


def test_sign_in_empty_name(empty_store: model.AttendanceStore) -> None:
    """An empty name is ignored."""
    # Act, Assert
    assert not empty_store.sign_in("")
    assert empty_store.active_sessions == []


def test_active_sessions_sorted(empty_store: model.AttendanceStore) -> None:
    """Active sessions are kept in name order, not sign in order."""
    # Act
    for name in ["Dave Diaz", "Alice Adams", "Carol Chen"]:
        empty_store.sign_in(name)
    # Assert
    assert [s.name for s in empty_store.active_sessions] == [
        "Alice Adams",
        "Carol Chen",
        "Dave Diaz",
    ]


def test_available_for_sign_in(full_store: model.AttendanceStore) -> None:
    """Only members without an active session can sign in."""
    # Act
    available = [m.name for m in full_store.available_for_sign_in()]
    # Assert
    assert available == ["Alice Adams", "Bob Brown"]


def test_sign_out(empty_store: model.AttendanceStore) -> None:
    """Signing out moves the session to the log."""
    # Arrange
    empty_store.sign_in("Alice Adams")
    # Act
    entry = empty_store.sign_out("Alice Adams")
    # Assert
    assert entry is not None
    assert entry.name == "Alice Adams"
    assert entry.sign_out_time >= entry.sign_in_time
    assert empty_store.active_sessions == []
    assert empty_store.attendance_log == [entry]


def test_sign_out_with_real_clock() -> None:
    """Sign out is never earlier than sign in with the system clock."""
    # Arrange
    attendance = model.AttendanceStore(members=["Alice"])
    attendance.sign_in("Alice")
    # Act
    entry = attendance.sign_out("Alice")
    # Assert
    assert entry is not None
    assert entry.sign_out_time >= entry.sign_in_time


def test_sign_out_not_signed_in(empty_store: model.AttendanceStore) -> None:
    """Signing out someone without a session does nothing."""
    # Act, Assert
    assert empty_store.sign_out("Alice Adams") is None
    assert empty_store.attendance_log == []


def test_sign_out_prepends(full_store: model.AttendanceStore) -> None:
    """The most recent sign out is first in the log."""
    # Act
    entry = full_store.sign_out("Carol Chen")
    # Assert
    assert full_store.attendance_log[0] == entry
    assert [e.name for e in full_store.attendance_log] == [
        "Carol Chen",
        "Bob Brown",
        "Alice Adams",
    ]


def test_sign_in_again_after_sign_out(full_store: model.AttendanceStore) -> None:
    """A member can have several log entries in one task."""
    # Act
    full_store.sign_in("Alice Adams")
    full_store.sign_out("Alice Adams")
    # Assert
    assert [e.name for e in full_store.attendance_log].count("Alice Adams") == 2


def test_start_new_task(full_store: model.AttendanceStore) -> None:
    """A new task clears sessions and log but keeps the roster."""
    # Act
    result = full_store.start_new_task("  20261020-01 ")
    # Assert
    assert result
    assert full_store.task_number == "20261020-01"
    assert not full_store.has_records
    assert len(full_store.members) == 4


def test_start_new_task_blank(full_store: model.AttendanceStore) -> None:
    """A blank task number is ignored."""
    # Act
    result = full_store.start_new_task("   ")
    # Assert
    assert not result
    assert full_store.task_number == "20261019-01"
    assert full_store.has_records


def test_clear_log(full_store: model.AttendanceStore) -> None:
    """Clearing the log removes sessions and completed entries."""
    # Act, Assert
    assert full_store.clear_log()
    assert full_store.active_sessions == []
    assert full_store.attendance_log == []
    assert full_store.task_number == "20261019-01"


def test_clear_empty_log(empty_store: model.AttendanceStore) -> None:
    """Clearing an empty log reports that nothing changed."""
    # Act, Assert
    assert not empty_store.clear_log()


def test_default_task_number() -> None:
    """Suggested task numbers use the date and a sequence of 01."""
    # Act, Assert
    assert model.default_task_number(datetime.date(2026, 1, 5)) == "20260105-01"
