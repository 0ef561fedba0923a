"""Test adding, renaming, and deleting members."""

import pytest
import rich  # noqa: F401

from sarattend import model


def test_add_member(empty_store: model.AttendanceStore) -> None:
    """Add a member and find them by their trimmed name."""
    # Act
    member = empty_store.add_member("  Erin Evans  ")
    # Assert
    assert member.name == "Erin Evans"
    found = empty_store.find_member("Erin Evans")
    assert found is not None
    assert found.name == "Erin Evans"
    assert len(empty_store.members) == 5


def test_members_sorted_after_add(empty_store: model.AttendanceStore) -> None:
    """The roster stays in alphabetical order, ignoring case."""
    # Act
    empty_store.add_member("aaron abbott")
    empty_store.add_member("Zed Zimmer")
    # Assert
    names = [m.name for m in empty_store.members]
    assert names[0] == "aaron abbott"
    assert names[-1] == "Zed Zimmer"
    assert names == sorted(names, key=str.casefold)


@pytest.mark.parametrize("name", ["Alice Adams", "alice adams", " ALICE ADAMS "])
def test_add_duplicate_member(empty_store: model.AttendanceStore, name: str) -> None:
    """Names must be unique regardless of case."""
    # Act, Assert
    with pytest.raises(model.ValidationError, match="already exists"):
        empty_store.add_member(name)
    assert len(empty_store.members) == 4


@pytest.mark.parametrize("name", ["", "   ", "\t"])
def test_add_empty_member(empty_store: model.AttendanceStore, name: str) -> None:
    """Blank names are rejected."""
    # Act, Assert
    with pytest.raises(model.ValidationError, match="cannot be empty"):
        empty_store.add_member(name)


def test_rename_member_cascades(full_store: model.AttendanceStore) -> None:
    """Renaming updates the roster, active sessions, and log entries."""
    # Arrange
    full_store.sign_in("Alice Adams")
    before = full_store.merged_view()
    # Act
    result = full_store.rename_member("Alice Adams", "Alicia Adams")
    # Assert
    assert result
    after = full_store.merged_view()
    assert len(after) == len(before)
    for old, new in zip(before, after):
        expected = "Alicia Adams" if old.name == "Alice Adams" else old.name
        assert new.name == expected
        assert new.sign_in_time == old.sign_in_time
        assert new.sign_out_time == old.sign_out_time
        assert new.status == old.status
    assert full_store.find_member("Alice Adams") is None
    assert full_store.find_member("Alicia Adams") is not None
    assert full_store.is_signed_in("Alicia Adams")


def test_rename_resorts_sessions(full_store: model.AttendanceStore) -> None:
    """Active sessions stay sorted by name after a rename."""
    # Act
    full_store.rename_member("Dave Diaz", "Aaron Diaz")
    # Assert
    assert [s.name for s in full_store.active_sessions] == ["Aaron Diaz", "Carol Chen"]
    assert full_store.members[0].name == "Aaron Diaz"


def test_rename_to_existing_name(empty_store: model.AttendanceStore) -> None:
    """A member can't take another member's name."""
    # Act, Assert
    with pytest.raises(model.ValidationError):
        empty_store.rename_member("Alice Adams", "bob brown")
    assert empty_store.find_member("Alice Adams") is not None


def test_rename_change_case_only(empty_store: model.AttendanceStore) -> None:
    """The member being renamed doesn't count as a duplicate."""
    # Act
    result = empty_store.rename_member("Alice Adams", "ALICE ADAMS")
    # Assert
    assert result
    assert empty_store.find_member("ALICE ADAMS") is not None


def test_rename_missing_member(empty_store: model.AttendanceStore) -> None:
    """Renaming someone who isn't on the roster does nothing."""
    # Act, Assert
    assert not empty_store.rename_member("Nobody", "Somebody")
    assert empty_store.find_member("Somebody") is None


def test_delete_requires_confirmation(full_store: model.AttendanceStore) -> None:
    """Nothing is deleted unless the caller confirms."""
    # Act
    result = full_store.delete_member("Carol Chen")
    # Assert
    assert not result
    assert full_store.find_member("Carol Chen") is not None
    assert full_store.is_signed_in("Carol Chen")


def test_delete_member_cascades(full_store: model.AttendanceStore) -> None:
    """Deleting a member removes their sessions and log entries."""
    # Arrange
    full_store.sign_in("Alice Adams")
    # Act
    result = full_store.delete_member("Alice Adams", confirmed=True)
    # Assert
    assert result
    assert full_store.find_member("Alice Adams") is None
    assert all(e.name != "Alice Adams" for e in full_store.merged_view())
    assert len(full_store.merged_view()) == 3


def test_replace_roster(full_store: model.AttendanceStore) -> None:
    """Replacing the roster drops blanks and duplicates and clears records."""
    # Act
    full_store.replace_roster(["Zoe Zhang", " Bob Brown ", "", "bob brown", "Al Ames"])
    # Assert
    assert [m.name for m in full_store.members] == ["Al Ames", "Bob Brown", "Zoe Zhang"]
    assert full_store.active_sessions == []
    assert full_store.attendance_log == []
    assert not full_store.has_records


def test_replace_roster_with_members(empty_store: model.AttendanceStore) -> None:
    """Member objects are accepted as well as names."""
    # Act
    empty_store.replace_roster([model.Member("Yuri"), model.Member("Xena")])
    # Assert
    assert [m.name for m in empty_store.members] == ["Xena", "Yuri"]
