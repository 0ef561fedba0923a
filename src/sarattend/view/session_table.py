"""Table of members who are signed in and members who have signed out."""

from typing import Optional

import textual
from rich import text
from textual import widgets

from sarattend import model
from sarattend.model import store


class SessionTable(widgets.DataTable):
    """Merged view of active sessions and the attendance log."""

    attendance: model.AttendanceStore
    """Members, sessions, and log for the current task."""
    entries: dict[str, model.MergedEntry]
    """Rows currently in the table, keyed by row key."""
    highlighted_key: Optional[str]
    """Row key of the highlighted row."""

    def __init__(self, attendance: model.AttendanceStore, *args, **kwargs) -> None:
        """Set link to the attendance store."""
        super().__init__(zebra_stripes=True, *args, **kwargs)
        self.attendance = attendance
        self.entries = {}
        self.highlighted_key = None

    def on_mount(self) -> None:
        """Initialize the table."""
        self.initialize_table()
        self.update_table()

    def initialize_table(self) -> None:
        """Set up table columns."""
        self.cursor_type = "row"
        for col in [
            ("Member", "name"),
            ("Status", "status"),
            ("Signed In", "sign_in_time"),
            ("Signed Out", "sign_out_time"),
        ]:
            self.add_column(col[0], key=col[1])

    @staticmethod
    def row_key(index: int, entry: model.MergedEntry) -> str:
        """Unique key for a row. A member can have several log entries.

        Args:
            index: Position of the entry in the merged view.
            entry: Row contents.
        """
        return (
            f"{index}|{entry.status.name}|{entry.name}|"
            f"{entry.sign_in_time.isoformat()}"
        )

    def update_table(self) -> None:
        """Populate the table from the store's merged view."""
        self.clear(columns=False)
        self.entries = {
            self.row_key(index, entry): entry
            for index, entry in enumerate(self.attendance.merged_view())
        }
        for key, entry in self.entries.items():
            if entry.signed_in:
                status = text.Text(entry.status.value, style="bold green")
                signed_out = text.Text("Enter to sign out", style="dim")
            else:
                status = text.Text(entry.status.value, style="yellow")
                signed_out = store.format_timestamp(entry.sign_out_time)
            self.add_row(
                text.Text(entry.name),
                status,
                store.format_timestamp(entry.sign_in_time),
                signed_out,
                key=key,
            )
        if self.highlighted_key not in self.entries:
            self.highlighted_key = None
        self.refresh()

    def selected_active_name(self) -> Optional[str]:
        """Name of the highlighted member if they are signed in."""
        if self.highlighted_key is None:
            return None
        entry = self.entries.get(self.highlighted_key)
        if entry is None or not entry.signed_in:
            return None
        return entry.name

    def on_data_table_row_highlighted(
        self, message: widgets.DataTable.RowHighlighted
    ) -> None:
        """Remember which row is highlighted."""
        self.highlighted_key = message.row_key.value
        textual.log(f"Row highlighted. Key: {self.highlighted_key}")
