"""Write the attendance log to a text file."""

import datetime
import logging
import pathlib
import re
from typing import Optional

from sarattend import model

logger = logging.getLogger(__name__)


def export_filename(task_number: str, today: datetime.date) -> str:
    """Name of the exported log file.

    Characters in the task number other than letters and digits are replaced
    with underscores so the name is safe on any file system.
    """
    date_string = today.isoformat()
    if not task_number:
        return f"attendance_log_{date_string}.txt"
    sanitized = re.sub(r"[^a-z0-9]", "_", task_number, flags=re.IGNORECASE)
    return f"task_{sanitized}_log_{date_string}.txt"


def write_export(
    attendance: model.AttendanceStore,
    folder: pathlib.Path,
    generated_at: Optional[datetime.datetime] = None,
    organization: Optional[str] = None,
) -> pathlib.Path:
    """Save the formatted log in `folder` and return the file's path."""
    generated_at = attendance.clock() if generated_at is None else generated_at
    content = attendance.format_export(
        attendance.task_number, generated_at, organization
    )
    folder.mkdir(parents=True, exist_ok=True)
    export_path = folder / export_filename(attendance.task_number, generated_at.date())
    export_path.write_text(content, encoding="utf-8")
    logger.info("Exported attendance log to %s", export_path)
    return export_path
