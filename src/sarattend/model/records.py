"""Members, active sessions, and completed attendance records."""

import dataclasses
import datetime
import enum
from typing import Any, Optional

import dateutil.parser


class ValidationError(Exception):
    """User supplied a member name that can't be used."""


class SessionStatus(enum.StrEnum):
    """Whether a row in the merged view is still open."""

    SIGNED_IN = "Signed In"
    SIGNED_OUT = "Signed Out"


def to_timestamp(value: datetime.datetime | str) -> datetime.datetime:
    """Convert an ISO-8601 string to a local, naive datetime.

    Strings saved by the browser version of the tracker are UTC with a
    trailing 'Z'. Those are converted to local time so they compare
    correctly with timestamps taken by this application.
    """
    match value:
        case datetime.datetime():
            timestamp = value
        case str():
            try:
                timestamp = dateutil.parser.isoparse(value)
            except ValueError as err:
                raise ValueError(f"Invalid timestamp: {value!r}") from err
        case _:
            raise TypeError(
                "Timestamp must be a datetime.datetime or an ISO-8601 string."
            )
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone().replace(tzinfo=None)
    return timestamp


def name_key(name: str) -> tuple[str, str]:
    """Sort key for member names: case-insensitive, then exact."""
    return (name.casefold(), name)


@dataclasses.dataclass
class Member:
    """A person who can sign in."""

    name: str

    def to_dict(self) -> dict[str, Any]:
        """Convert member to a dictionary."""
        return dataclasses.asdict(self)


@dataclasses.dataclass
class ActiveSession:
    """A member who is currently signed in."""

    name: str
    sign_in_time: datetime.datetime

    def __init__(self, name: str, sign_in_time: datetime.datetime | str) -> None:
        """Accept timestamps as datetimes or ISO-8601 strings."""
        self.name = name
        self.sign_in_time = to_timestamp(sign_in_time)

    def to_dict(self) -> dict[str, Any]:
        """Convert session to a dictionary with an ISO-formatted timestamp."""
        return {"name": self.name, "sign_in_time": self.sign_in_time.isoformat()}


@dataclasses.dataclass(frozen=True)
class LogEntry:
    """A completed session: sign in and sign out times for one member."""

    name: str
    sign_in_time: datetime.datetime
    sign_out_time: datetime.datetime

    def __init__(
        self,
        name: str,
        sign_in_time: datetime.datetime | str,
        sign_out_time: datetime.datetime | str,
    ) -> None:
        """Accept timestamps as datetimes or ISO-8601 strings."""
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "sign_in_time", to_timestamp(sign_in_time))
        object.__setattr__(self, "sign_out_time", to_timestamp(sign_out_time))

    def renamed(self, name: str) -> "LogEntry":
        """Copy of this entry with a different member name."""
        return LogEntry(name, self.sign_in_time, self.sign_out_time)

    def to_dict(self) -> dict[str, Any]:
        """Convert entry to a dictionary with ISO-formatted timestamps."""
        return {
            "name": self.name,
            "sign_in_time": self.sign_in_time.isoformat(),
            "sign_out_time": self.sign_out_time.isoformat(),
        }


@dataclasses.dataclass(frozen=True)
class MergedEntry:
    """One row of the combined sessions and log view."""

    name: str
    sign_in_time: datetime.datetime
    sign_out_time: Optional[datetime.datetime]
    """None while the member is still signed in."""
    status: SessionStatus

    @property
    def signed_in(self) -> bool:
        return self.status == SessionStatus.SIGNED_IN
