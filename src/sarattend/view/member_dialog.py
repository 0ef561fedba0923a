"""Modal dialog for adding, renaming, and deleting members."""

import enum

import textual
from textual import app, containers, screen, widgets

from sarattend import model
import sarattend.view
from sarattend.view import dialogs, validators


class MemberChange(enum.StrEnum):
    """What the member dialog did to the roster."""

    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"


class MemberDialog(screen.ModalScreen[MemberChange | None]):
    """A dialog for adding or editing a member.

    The dialog updates the store itself so that validation errors, such as a
    duplicate name, can be shown next to the input instead of closing the
    dialog.
    """

    CSS_PATH = sarattend.view.CSS_FOLDER / "dialogs.tcss"

    attendance: model.AttendanceStore
    """Store that receives the new or renamed member."""
    member: model.Member | None
    """Member being edited. None if adding a new member."""

    def __init__(
        self, attendance: model.AttendanceStore, member: model.Member | None = None
    ) -> None:
        """Initialize with member information if provided."""
        super().__init__()
        self.attendance = attendance
        self.member = member

    def compose(self) -> app.ComposeResult:
        """Create and arrange dialog widgets."""
        title = "Add New Member" if self.member is None else "Edit Member Name"
        exclude = None if self.member is None else self.member.name
        with containers.Vertical(id="member-dialog", classes="modal-dialog"):
            yield widgets.Label(title, classes="emphasis")
            yield widgets.Label("Member Name")
            yield widgets.Input(
                value=self.member.name if self.member else "",
                placeholder="Member Name",
                id="member-name-input",
                validators=[
                    validators.NotEmpty(),
                    validators.MemberNameAvailable(self.attendance, exclude),
                ],
                validate_on=["changed", "submitted"],
            )
            yield widgets.Label("", id="member-error", classes="error-message")
            with containers.Horizontal(classes="ok-cancel-row"):
                if self.member is not None:
                    yield widgets.Button(
                        "Delete Member", variant="error", id="delete-member"
                    )
                yield widgets.Button("Cancel", id="cancel-member")
                yield widgets.Button("Save", variant="primary", id="save-member")

    def on_mount(self) -> None:
        self.query_one("#member-name-input", widgets.Input).focus()

    def show_error(self, error: str) -> None:
        self.query_one("#member-error", widgets.Label).update(error)

    @textual.on(widgets.Input.Changed, "#member-name-input")
    def clear_error(self) -> None:
        """Hide a prior error while the user edits the name."""
        self.show_error("")

    @textual.on(widgets.Input.Submitted, "#member-name-input")
    @textual.on(widgets.Button.Pressed, "#save-member")
    def save_member(self) -> None:
        """Add or rename the member, or display why the name isn't allowed."""
        name = self.query_one("#member-name-input", widgets.Input).value
        try:
            if self.member is None:
                self.attendance.add_member(name)
                self.dismiss(MemberChange.ADDED)
            else:
                self.attendance.rename_member(self.member.name, name)
                self.dismiss(MemberChange.UPDATED)
        except model.ValidationError as err:
            self.show_error(str(err))

    @textual.on(widgets.Button.Pressed, "#cancel-member")
    def cancel_dialog(self) -> None:
        """Close the dialog and take no action."""
        self.dismiss(None)

    @textual.work
    @textual.on(widgets.Button.Pressed, "#delete-member")
    async def delete_member(self) -> None:
        """Delete the member after the user confirms."""
        if self.member is None:
            return
        name = self.member.name
        confirmed = await self.app.push_screen_wait(
            dialogs.ConfirmDialog(
                f"Delete {name}? This removes them from all records "
                "and cannot be undone."
            )
        )
        if self.attendance.delete_member(name, confirmed=bool(confirmed)):
            self.dismiss(MemberChange.DELETED)
