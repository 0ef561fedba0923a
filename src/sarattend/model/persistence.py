"""Save and restore the attendance store in a JSON file."""

import json
import logging
import os
import pathlib
from typing import Any, Iterable, Optional

from sarattend.model import records, store

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Error occurred while reading or writing the state file."""


class StateFile:
    """JSON file holding members, sessions, log, and task number."""

    path: pathlib.Path
    """Location of the JSON file."""

    def __init__(self, path: pathlib.Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> dict[str, Any]:
        """Load the saved snapshot."""
        try:
            with open(self.path, "rt", encoding="utf-8") as jfile:
                data = json.load(jfile)
        except (OSError, json.JSONDecodeError) as err:
            raise PersistenceError(f"Unable to read {self.path}: {err}") from err
        if not isinstance(data, dict):
            raise PersistenceError(f"Unexpected contents in {self.path}.")
        return data

    def write(self, data: dict[str, Any]) -> None:
        """Save a snapshot, replacing the file only after a complete write."""
        temp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "wt", encoding="utf-8") as jfile:
                json.dump(data, jfile, indent=2)
            os.replace(temp_path, self.path)
        except (OSError, TypeError, ValueError) as err:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError as unlink_err:
                logger.debug("Unable to remove %s: %s", temp_path, unlink_err)
            raise PersistenceError(f"Unable to write {self.path}: {err}") from err

    def set_aside(self) -> Optional[pathlib.Path]:
        """Rename an unreadable file to *.bad so the next save keeps it.

        Returns:
            The new location, or None if the file couldn't be renamed.
        """
        bad_path = self.path.with_name(self.path.name + ".bad")
        try:
            os.replace(self.path, bad_path)
        except OSError as err:
            logger.error("Unable to rename %s: %s", self.path, err)
            return None
        logger.warning("Moved unreadable state file to %s", bad_path)
        return bad_path


def load_store(
    state_file: StateFile, default_roster: Iterable[str]
) -> store.AttendanceStore:
    """Restore the saved store, or start fresh with the default roster.

    Read errors are logged and never raised, so a damaged file can't keep the
    application from starting. The damaged file is renamed to *.bad.
    """
    if state_file.exists():
        try:
            data = state_file.read()
            attendance = store.AttendanceStore.from_dict(data)
            logger.info(
                "Loaded %d members, %d active sessions, %d log entries from %s",
                len(attendance.members),
                len(attendance.active_sessions),
                len(attendance.attendance_log),
                state_file.path,
            )
            return attendance
        except PersistenceError as err:
            logger.error("%s Using default roster.", err)
        except (KeyError, TypeError, ValueError, AttributeError) as err:
            logger.error(
                "Saved data in %s is invalid (%s). Using default roster.",
                state_file.path,
                err,
            )
        state_file.set_aside()
    return store.AttendanceStore(members=[records.Member(n) for n in default_roster])


def save_store(attendance: store.AttendanceStore, state_file: StateFile) -> bool:
    """Save the store. Returns False and logs the problem if the write fails."""
    try:
        state_file.write(attendance.to_dict())
    except PersistenceError as err:
        logger.error("%s", err)
        return False
    logger.debug("Saved state to %s", state_file.path)
    return True
