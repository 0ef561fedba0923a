"""Test the markdown summary shown on the main screen."""

import rich  # noqa: F401

from sarattend import model
from sarattend.features import summary


def test_summary(full_store: model.AttendanceStore) -> None:
    """Summary shows task number, counts, and activity times."""
    # Act
    markdown = summary.get_summary(full_store)
    # Assert
    print()
    rich.print(markdown)
    assert "| 20261019-01 | 4 | 2 | 2 |" in markdown
    assert "| 2026-10-19T09:00:00 | 2026-10-19T09:20:00 |" in markdown


def test_summary_no_records(empty_store: model.AttendanceStore) -> None:
    """Activity section is left out when nobody has signed in."""
    # Act
    markdown = summary.get_summary(empty_store)
    # Assert
    assert "| (none) | 4 | 0 | 0 |" in markdown
    assert "Activity" not in markdown
