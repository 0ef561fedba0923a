"""The sarattend.model namespace."""

# ruff: noqa: F401
from sarattend.model.records import (
    ActiveSession,
    LogEntry,
    Member,
    MergedEntry,
    SessionStatus,
    ValidationError,
)
from sarattend.model.store import AttendanceStore, default_task_number
from sarattend.model.persistence import (
    PersistenceError,
    StateFile,
    load_store,
    save_store,
)
