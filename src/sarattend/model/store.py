"""Keep members, active sessions, and the attendance log consistent."""

from collections.abc import Callable, Iterable
import datetime
import logging
from typing import Any, Optional

from sarattend import config
from sarattend.model import records

logger = logging.getLogger(__name__)

MIN_NAME_WIDTH = len("Member")
STATUS_WIDTH = 12
TIMESTAMP_WIDTH = 22
RULE_WIDTH = 82
NO_RECORDS_MESSAGE = "No attendance records found."
SIGNED_OUT_PLACEHOLDER = "..."


def default_task_number(today: Optional[datetime.date] = None) -> str:
    """Suggested task number for a new task, e.g. 20261019-01."""
    today = datetime.date.today() if today is None else today
    return f"{today:%Y%m%d}-01"


def format_timestamp(timestamp: datetime.datetime) -> str:
    """Short timestamp used in the log, e.g. 'Oct 19, 3:05 PM'."""
    hour = timestamp.hour % 12 or 12
    return f"{timestamp:%b} {timestamp.day}, {hour}:{timestamp:%M %p}"


def format_generated_on(timestamp: datetime.datetime) -> str:
    """Timestamp for the export header, e.g. '10/19/2026, 3:05:07 PM'."""
    hour = timestamp.hour % 12 or 12
    return (
        f"{timestamp.month}/{timestamp.day}/{timestamp.year}, "
        f"{hour}:{timestamp:%M:%S %p}"
    )


def unique_members(items: Iterable[records.Member | str]) -> list[records.Member]:
    """Trimmed members sorted by name, without blanks or duplicates.

    Names that differ only by case are duplicates. The first spelling of a
    duplicated name is kept.
    """
    seen: set[str] = set()
    members = []
    for item in items:
        name = (item.name if isinstance(item, records.Member) else item).strip()
        if not name:
            continue
        if name.casefold() in seen:
            logger.debug("Dropped duplicate member %s", name)
            continue
        seen.add(name.casefold())
        members.append(records.Member(name))
    members.sort(key=lambda m: records.name_key(m.name))
    return members


class AttendanceStore:
    """Members, sessions, and log for the current task.

    Every mutation leaves the three collections consistent with each other.
    Nothing here touches the disk: callers save a snapshot (see `to_dict`)
    after each change.
    """

    members: list[records.Member]
    """Roster, sorted by name."""
    active_sessions: list[records.ActiveSession]
    """Members currently signed in, sorted by name."""
    attendance_log: list[records.LogEntry]
    """Completed sessions, most recent sign out first."""
    task_number: str
    """Identifies the current task. Empty string if no task started."""
    clock: Callable[[], datetime.datetime]
    """Returns the current time. Replaced in tests."""

    def __init__(
        self,
        members: Optional[Iterable[records.Member | str]] = None,
        active_sessions: Optional[Iterable[records.ActiveSession]] = None,
        attendance_log: Optional[Iterable[records.LogEntry]] = None,
        task_number: str = "",
        clock: Callable[[], datetime.datetime] = datetime.datetime.now,
    ) -> None:
        self.members = unique_members(members or [])
        self.active_sessions = []
        for session in active_sessions or []:
            if self.is_signed_in(session.name):
                logger.warning("Ignored extra active session for %s", session.name)
                continue
            self.active_sessions.append(session)
        self.attendance_log = []
        for entry in attendance_log or []:
            if entry.sign_out_time < entry.sign_in_time:
                logger.warning(
                    "Ignored log entry for %s that ends before it starts", entry.name
                )
                continue
            self.attendance_log.append(entry)
        self.task_number = task_number
        self.clock = clock
        self._sort()

    # Members
    # ------------------------------------------------------------------
    def find_member(self, name: str) -> Optional[records.Member]:
        """Get the member with the exact name, or None."""
        for member in self.members:
            if member.name == name:
                return member
        return None

    def _validate_name(self, name: str, exclude: Optional[str] = None) -> str:
        """Trim a name and verify it's not empty or already taken.

        Args:
            name: Name entered by the user.
            exclude: Name of the member being renamed, who doesn't count as
                a duplicate of themselves.
        """
        trimmed = name.strip()
        if not trimmed:
            raise records.ValidationError("Member name cannot be empty.")
        folded = trimmed.casefold()
        for member in self.members:
            if member.name == exclude:
                continue
            if member.name.casefold() == folded:
                raise records.ValidationError(
                    "A member with this name already exists."
                )
        return trimmed

    def _sort(self) -> None:
        self.members.sort(key=lambda m: records.name_key(m.name))
        self.active_sessions.sort(key=lambda s: records.name_key(s.name))

    def add_member(self, name: str) -> records.Member:
        """Add a new member to the roster."""
        member = records.Member(self._validate_name(name))
        self.members.append(member)
        self._sort()
        logger.info("Added member %s", member.name)
        return member

    def rename_member(self, old_name: str, new_name: str) -> bool:
        """Change a member's name everywhere it appears.

        Returns:
            False if there is no member named `old_name`.
        """
        member = self.find_member(old_name)
        if member is None:
            return False
        trimmed = self._validate_name(new_name, exclude=old_name)
        member.name = trimmed
        for session in self.active_sessions:
            if session.name == old_name:
                session.name = trimmed
        self.attendance_log = [
            entry.renamed(trimmed) if entry.name == old_name else entry
            for entry in self.attendance_log
        ]
        self._sort()
        logger.info("Renamed member %s to %s", old_name, trimmed)
        return True

    def delete_member(self, name: str, confirmed: bool = False) -> bool:
        """Remove a member and all of their sessions and log entries.

        Deletion can't be undone, so nothing happens unless the caller has
        confirmed it with the user.
        """
        if not confirmed or self.find_member(name) is None:
            return False
        self.members = [m for m in self.members if m.name != name]
        self.active_sessions = [s for s in self.active_sessions if s.name != name]
        self.attendance_log = [e for e in self.attendance_log if e.name != name]
        logger.info("Deleted member %s", name)
        return True

    def replace_roster(self, new_members: Iterable[records.Member | str]) -> None:
        """Replace the entire roster and clear all sessions and log entries.

        Blank names and case-insensitive duplicates are dropped; the first
        spelling of a duplicated name is kept.
        """
        self.members = unique_members(new_members)
        self.active_sessions = []
        self.attendance_log = []
        self._sort()
        logger.info("Roster replaced with %d members", len(self.members))

    # Sessions
    # ------------------------------------------------------------------
    def is_signed_in(self, name: str) -> bool:
        return any(session.name == name for session in self.active_sessions)

    def available_for_sign_in(self) -> list[records.Member]:
        """Members who don't have an active session, in roster order."""
        active = {session.name for session in self.active_sessions}
        return [member for member in self.members if member.name not in active]

    @property
    def has_records(self) -> bool:
        """True if anyone is signed in or the log has entries.

        Starting a new task, clearing the log, and replacing the roster all
        discard these records and need confirmation when this is True.
        """
        return bool(self.active_sessions or self.attendance_log)

    def sign_in(self, name: str) -> bool:
        """Start a session for a member.

        Returns:
            False, without changing anything, if the name is empty or the
            member is already signed in.
        """
        if not name or self.is_signed_in(name):
            return False
        self.active_sessions.append(records.ActiveSession(name, self.clock()))
        self._sort()
        logger.info("%s signed in", name)
        return True

    def sign_out(self, name: str) -> Optional[records.LogEntry]:
        """End a member's session and add it to the log.

        Returns:
            The new log entry, or None if the member wasn't signed in.
        """
        for index, session in enumerate(self.active_sessions):
            if session.name == name:
                break
        else:
            return None
        del self.active_sessions[index]
        entry = records.LogEntry(session.name, session.sign_in_time, self.clock())
        self.attendance_log.insert(0, entry)
        logger.info("%s signed out", name)
        return entry

    # Tasks
    # ------------------------------------------------------------------
    def start_new_task(self, task_number: str) -> bool:
        """Set the task number and discard sessions and log entries."""
        trimmed = task_number.strip()
        if not trimmed:
            return False
        self.task_number = trimmed
        self.active_sessions = []
        self.attendance_log = []
        logger.info("Started task %s", trimmed)
        return True

    def clear_log(self) -> bool:
        """Discard all sessions and log entries for the current task."""
        if not self.has_records:
            return False
        self.active_sessions = []
        self.attendance_log = []
        logger.info("Attendance log cleared")
        return True

    # Views
    # ------------------------------------------------------------------
    def merged_view(self) -> list[records.MergedEntry]:
        """Combine active sessions and log entries for display.

        Members who are signed in come first. Within each group, the most
        recent sign in is first.
        """
        entries = [
            records.MergedEntry(
                session.name,
                session.sign_in_time,
                None,
                records.SessionStatus.SIGNED_IN,
            )
            for session in self.active_sessions
        ]
        entries.extend(
            records.MergedEntry(
                entry.name,
                entry.sign_in_time,
                entry.sign_out_time,
                records.SessionStatus.SIGNED_OUT,
            )
            for entry in self.attendance_log
        )
        entries.sort(key=lambda e: e.sign_in_time, reverse=True)
        # Stable sort keeps the timestamp order within each status.
        entries.sort(key=lambda e: not e.signed_in)
        return entries

    def format_export(
        self,
        task_number: Optional[str] = None,
        generated_at: Optional[datetime.datetime] = None,
        organization: Optional[str] = None,
    ) -> str:
        """Plain text attendance log with fixed-width columns.

        Args:
            task_number: Shown in the header. Defaults to the current task.
            generated_at: Time shown in the header. Defaults to now.
            organization: Shown in the title. Defaults to the configured
                organization name.
        """
        task_number = self.task_number if task_number is None else task_number
        generated_at = self.clock() if generated_at is None else generated_at
        if organization is None:
            organization = config.settings.organization_name

        lines = [f"{organization} - Attendance Log"]
        if task_number:
            lines.append(f"Task #: {task_number}")
        lines.append(f"Generated on: {format_generated_on(generated_at)}")
        lines.append("=" * RULE_WIDTH)
        lines.append("")

        entries = self.merged_view()
        if not entries:
            lines.append("")
            lines.append(NO_RECORDS_MESSAGE)
            return "\n".join(lines) + "\n"

        name_width = max(MIN_NAME_WIDTH, *(len(e.name) for e in entries))
        lines.append(
            " | ".join(
                [
                    "Member".ljust(name_width),
                    "Status".ljust(STATUS_WIDTH),
                    "Signed In".ljust(TIMESTAMP_WIDTH),
                    "Signed Out",
                ]
            )
        )
        lines.append(
            "-+-".join(
                "-" * width
                for width in [
                    name_width,
                    STATUS_WIDTH,
                    TIMESTAMP_WIDTH,
                    TIMESTAMP_WIDTH,
                ]
            )
        )
        for entry in entries:
            signed_out = (
                SIGNED_OUT_PLACEHOLDER
                if entry.sign_out_time is None
                else format_timestamp(entry.sign_out_time)
            )
            lines.append(
                " | ".join(
                    [
                        entry.name.ljust(name_width),
                        entry.status.value.ljust(STATUS_WIDTH),
                        format_timestamp(entry.sign_in_time).ljust(TIMESTAMP_WIDTH),
                        signed_out,
                    ]
                )
            )
        return "\n".join(lines) + "\n"

    # Snapshots
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        """Snapshot of the store for saving to a JSON file.

        Returns:
            {"members": [{"name": ...}],
             "active_sessions": [{"name": ..., "sign_in_time": <ISO>}],
             "attendance_log": [{"name": ..., "sign_in_time": <ISO>,
                                 "sign_out_time": <ISO>}],
             "task_number": str}
        """
        return {
            "members": [member.to_dict() for member in self.members],
            "active_sessions": [s.to_dict() for s in self.active_sessions],
            "attendance_log": [e.to_dict() for e in self.attendance_log],
            "task_number": self.task_number,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        clock: Callable[[], datetime.datetime] = datetime.datetime.now,
    ) -> "AttendanceStore":
        """Build a store from a snapshot created by `to_dict`.

        Snapshots saved by the browser version of the tracker use camelCase
        keys (activeSessions, signInTime, ...) and are accepted too.
        """
        members = [_get(row, "name") for row in _get(data, "members", [])]
        sessions = [
            records.ActiveSession(_get(row, "name"), _get(row, "sign_in_time"))
            for row in _get(data, "active_sessions", [])
        ]
        log = [
            records.LogEntry(
                _get(row, "name"),
                _get(row, "sign_in_time"),
                _get(row, "sign_out_time"),
            )
            for row in _get(data, "attendance_log", [])
        ]
        return cls(
            members=members,
            active_sessions=sessions,
            attendance_log=log,
            task_number=_get(data, "task_number", "") or "",
            clock=clock,
        )


_MISSING = object()


def _get(data: dict[str, Any], key: str, default: Any = _MISSING) -> Any:
    """Look up a snake_case key, falling back to its camelCase spelling."""
    if key in data:
        return data[key]
    first, *rest = key.split("_")
    camel = first + "".join(word.title() for word in rest)
    if camel in data:
        return data[camel]
    if default is _MISSING:
        raise KeyError(key)
    return default
