"""A summary of the current task in markdown format."""

from sarattend import model


def get_summary(attendance: model.AttendanceStore) -> str:
    """Get the current task summary in markdown."""
    task_number = attendance.task_number or "(none)"
    summary = [
        "## Current Task",
        "| Task # | Members | Signed In | Completed Sessions |",
        "| ------ | ------- | --------- | ------------------ |",
        (
            f"| {task_number} | {len(attendance.members)} "
            f"| {len(attendance.active_sessions)} "
            f"| {len(attendance.attendance_log)} |"
        ),
    ]
    entries = attendance.merged_view()
    if entries:
        first_in = min(entry.sign_in_time for entry in entries)
        sign_outs = [e.sign_out_time for e in entries if e.sign_out_time is not None]
        last_out = (
            max(sign_outs).replace(microsecond=0).isoformat() if sign_outs else ""
        )
        summary.extend(
            [
                "## Activity",
                "| First Sign In | Last Sign Out |",
                "| ------------- | ------------- |",
                f"| {first_in.replace(microsecond=0).isoformat()} | {last_out} |",
            ]
        )
    return str("\n".join(summary))
