"""Main screen of the SAR Attend application."""

import logging
from typing import Optional

import textual
from textual import app, containers, notifications, reactive, widgets

from sarattend import config, model
from sarattend.features import export, summary
import sarattend.view
from sarattend.view import dialogs, member_dialog, roster_dialog, session_table

logger = logging.getLogger(__name__)

# Actions that are unavailable while a dialog is open.
MAIN_ACTIONS = {
    "sign_in",
    "sign_out",
    "new_task",
    "add_member",
    "edit_member",
    "edit_list",
    "clear_log",
    "download_log",
}


class SarAttend(app.App):
    """Sign members in and out and display the attendance log."""

    CSS_PATH = sarattend.view.CSS_FOLDER / "root.tcss"

    TITLE = "SAR Attend"
    BINDINGS = [
        ("i", "sign_in", "Sign In"),
        ("o", "sign_out", "Sign Out"),
        ("t", "new_task", "New Task #"),
        ("a", "add_member", "Add Member"),
        ("e", "edit_member", "Edit Member"),
        ("l", "edit_list", "Edit List"),
        ("c", "clear_log", "Clear Log"),
        ("d", "download_log", "Download Log"),
    ]
    task_number: reactive.reactive[str] = reactive.reactive("", init=False)

    attendance: model.AttendanceStore
    """Members, sessions, and log for the current task."""
    state_file: Optional[model.StateFile]
    """Where the store is saved after each change. None disables saving."""

    def __init__(
        self,
        attendance: model.AttendanceStore,
        state_file: Optional[model.StateFile] = None,
    ) -> None:
        """Display and modify an attendance store."""
        super().__init__()
        self.attendance = attendance
        self.state_file = state_file

    def compose(self) -> app.ComposeResult:
        """Add widgets to screen."""
        yield widgets.Header()
        with containers.VerticalGroup(classes="pane"):
            yield widgets.Label(
                config.settings.organization_name, id="main-organization"
            )
            yield widgets.Label("", id="main-task-number", classes="emphasis")
            yield widgets.Static("Sign members in and out to track attendance.")

        with containers.HorizontalGroup(classes="pane"):
            with containers.HorizontalGroup(id="main-top-menu", classes="toolbar"):
                yield widgets.Button(
                    "Sign In", variant="primary", id="main-sign-in"
                )
                yield widgets.Button(
                    "Sign Out",
                    id="main-sign-out",
                    tooltip="Sign out the highlighted member.",
                )
                yield widgets.Button("New Task #", id="main-new-task")
                yield widgets.Button("Edit List", id="main-edit-list")
                yield widgets.Button("Add Member", id="main-add-member")
                yield widgets.Button("Edit Member", id="main-edit-member")

        with containers.HorizontalGroup():
            yield widgets.Label("Attendance Log", classes="emphasis")
            yield widgets.Label("", id="main-active-count")
        yield session_table.SessionTable(self.attendance, id="main-session-table")
        yield widgets.Static("No members have signed in yet.", id="main-empty-state")

        with containers.HorizontalGroup(id="main-page-actions", classes="toolbar"):
            yield widgets.Button("Clear Log", variant="error", id="main-clear-log")
            yield widgets.Button("Download Log (.txt)", id="main-download-log")
        yield widgets.Markdown(summary.get_summary(self.attendance), id="main-summary")
        yield widgets.Footer()

    def on_mount(self) -> None:
        """Called when the app is first mounted."""
        self.refresh_view()

    def refresh_view(self) -> None:
        """Redraw everything that depends on the store."""
        self.task_number = self.attendance.task_number
        self.query_one(session_table.SessionTable).update_table()
        active = len(self.attendance.active_sessions)
        self.query_one("#main-active-count", widgets.Label).update(
            f"{active} Active" if active else ""
        )
        self.query_one("#main-empty-state", widgets.Static).display = (
            not self.attendance.has_records
        )
        self.query_one("#main-sign-in", widgets.Button).disabled = (
            not self.attendance.available_for_sign_in()
        )
        for button_id in ["#main-clear-log", "#main-download-log"]:
            self.query_one(button_id, widgets.Button).disabled = (
                not self.attendance.has_records
            )
        self.query_one("#main-summary", widgets.Markdown).update(
            summary.get_summary(self.attendance)
        )

    def save_state(self) -> None:
        """Write the store to the state file. Failures are not fatal."""
        if self.state_file is None:
            return
        if not model.save_store(self.attendance, self.state_file):
            self.notify(
                f"Unable to save attendance data to {self.state_file.path}.",
                severity="warning",
            )

    def record_change(
        self, message: str, severity: notifications.SeverityLevel = "information"
    ) -> None:
        """Save and redraw after the store changes, then tell the user."""
        self.save_state()
        self.refresh_view()
        self.notify(message, severity=severity)

    def watch_task_number(self, task_number: str) -> None:
        """Show the task number in the header and under the title."""
        self.sub_title = f"Task #: {task_number}" if task_number else ""
        self.query_one("#main-task-number", widgets.Label).update(
            self.sub_title
        )

    @textual.on(widgets.Button.Pressed, "#main-sign-in")
    def action_sign_in(self) -> None:
        """Choose a member who isn't signed in and sign them in."""
        names = [m.name for m in self.attendance.available_for_sign_in()]
        if not names:
            self.notify("Everyone is already signed in.")
            return

        def _sign_in(name: str | None) -> None:
            if name and self.attendance.sign_in(name):
                self.record_change(f"{name} signed in.")

        self.push_screen(
            dialogs.ChooseMemberDialog(names, "Sign In a Member", "Sign In"),
            _sign_in,
        )

    @textual.on(widgets.Button.Pressed, "#main-sign-out")
    def action_sign_out(self) -> None:
        """Sign out the highlighted member."""
        name = self.query_one(session_table.SessionTable).selected_active_name()
        if name is None:
            self.notify("Highlight a signed in member first.")
            return
        self.sign_out(name)

    @textual.on(session_table.SessionTable.RowSelected)
    def on_session_selected(
        self, message: session_table.SessionTable.RowSelected
    ) -> None:
        """Pressing Enter on a signed in member signs them out."""
        table = self.query_one(session_table.SessionTable)
        entry = table.entries.get(str(message.row_key.value))
        if entry is not None and entry.signed_in:
            self.sign_out(entry.name)

    def sign_out(self, name: str) -> None:
        if self.attendance.sign_out(name) is not None:
            self.record_change(f"{name} signed out.")

    @textual.on(widgets.Button.Pressed, "#main-add-member")
    def action_add_member(self) -> None:
        """Show the member dialog and add a new member."""

        def _added(change: member_dialog.MemberChange | None) -> None:
            if change is not None:
                self.record_change("New member added.")

        self.push_screen(member_dialog.MemberDialog(self.attendance), _added)

    @textual.work
    @textual.on(widgets.Button.Pressed, "#main-edit-member")
    async def action_edit_member(self) -> None:
        """Choose a member, then rename or delete them."""
        names = [m.name for m in self.attendance.members]
        name = await self.push_screen_wait(
            dialogs.ChooseMemberDialog(names, "Edit Member", "Edit")
        )
        member = None if name is None else self.attendance.find_member(name)
        if member is None:
            return
        change = await self.push_screen_wait(
            member_dialog.MemberDialog(self.attendance, member)
        )
        match change:
            case member_dialog.MemberChange.UPDATED:
                self.record_change("Member updated.")
            case member_dialog.MemberChange.DELETED:
                self.record_change(f"{name} has been deleted.", severity="error")

    @textual.work
    @textual.on(widgets.Button.Pressed, "#main-edit-list")
    async def action_edit_list(self) -> None:
        """Edit the member list. Saving replaces the roster."""
        names = await self.push_screen_wait(
            roster_dialog.RosterDialog(
                [m.name for m in self.attendance.members],
                config.settings.default_roster,
            )
        )
        if names is None:
            return
        if self.attendance.has_records and not await self.push_screen_wait(
            dialogs.ConfirmDialog(
                "Saving the member list will clear all current attendance "
                "records. Are you sure?"
            )
        ):
            return
        self.attendance.replace_roster(names)
        self.record_change("Member list has been reset.")

    @textual.work
    @textual.on(widgets.Button.Pressed, "#main-new-task")
    async def action_new_task(self) -> None:
        """Start a new task, discarding the current sessions and log."""
        if self.attendance.has_records and not await self.push_screen_wait(
            dialogs.ConfirmDialog(
                "Starting a new task will clear all current attendance "
                "records. Are you sure?"
            )
        ):
            return
        task_number = await self.push_screen_wait(
            dialogs.TaskDialog(model.default_task_number())
        )
        if task_number and self.attendance.start_new_task(task_number):
            self.record_change(f"New task session started: {task_number}")

    @textual.work
    @textual.on(widgets.Button.Pressed, "#main-clear-log")
    async def action_clear_log(self) -> None:
        """Clear the sessions and log for the current task."""
        if not self.attendance.has_records:
            return
        if not await self.push_screen_wait(
            dialogs.ConfirmDialog(
                "Clear the attendance log for this task? This cannot be undone."
            )
        ):
            return
        if self.attendance.clear_log():
            self.record_change("Attendance log has been cleared.")

    @textual.on(widgets.Button.Pressed, "#main-download-log")
    def action_download_log(self) -> None:
        """Save the attendance log as a text file in the export folder."""
        if not self.attendance.has_records:
            self.notify("There are no attendance records to download.")
            return
        try:
            export_path = export.write_export(
                self.attendance, config.settings.export_folder
            )
        except OSError as err:
            logger.error("Unable to export attendance log: %s", err)
            self.notify(f"Unable to save log: {err}", severity="error")
            return
        self.notify(f"Log saved to {export_path}.")

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Disable main screen actions while a dialog is open."""
        if action in MAIN_ACTIONS and len(self.screen_stack) > 1:
            return False
        return True
