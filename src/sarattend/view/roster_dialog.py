"""Edit the whole member list at once."""

from typing import Optional

import textual
from textual import app, containers, screen, widgets
from textual.widgets import option_list

import sarattend.view


class RosterDialog(screen.ModalScreen[Optional[list[str]]]):
    """Remove members from a working copy of the roster.

    Nothing changes until Save is pressed. The caller replaces the roster
    with the returned names, which also clears all sign in records.
    """

    CSS_PATH = sarattend.view.CSS_FOLDER / "dialogs.tcss"
    BINDINGS = [
        ("delete", "remove_member", "Remove Member"),
        ("escape", "cancel", "Cancel"),
    ]

    names: list[str]
    """Working copy of the member list."""
    default_roster: list[str]
    """Names restored by the Restore Defaults button."""

    def __init__(self, names: list[str], default_roster: list[str]) -> None:
        super().__init__()
        self.names = list(names)
        self.default_roster = list(default_roster)

    def compose(self) -> app.ComposeResult:
        """Create and arrange dialog widgets."""
        with containers.Vertical(id="roster-dialog", classes="modal-dialog"):
            yield widgets.Label("Edit Member List", classes="emphasis")
            yield widgets.Static(
                "Remove members from the list. Saving will replace the entire "
                "member list and clear all existing sign-in data.",
                classes="instructions",
            )
            yield widgets.OptionList(id="roster-option")
            yield widgets.Label("", id="roster-count")
            with containers.Horizontal(classes="ok-cancel-row"):
                yield widgets.Button(
                    "Remove Selected", variant="error", id="roster-remove-button"
                )
                yield widgets.Button("Restore Defaults", id="roster-defaults-button")
                yield widgets.Button("Cancel", id="roster-cancel-button")
                yield widgets.Button(
                    "Save Changes", variant="primary", id="roster-save-button"
                )

    def on_mount(self) -> None:
        self.load_options()

    def load_options(self) -> None:
        """Show the working copy in the option list."""
        roster_options = self.query_one("#roster-option", widgets.OptionList)
        roster_options.clear_options()
        roster_options.add_options(
            [option_list.Option(name, id=name) for name in self.names]
        )
        if self.names:
            roster_options.highlighted = 0
            count = f"{len(self.names)} members"
        else:
            count = "No members to display."
        self.query_one("#roster-count", widgets.Label).update(count)

    @textual.on(widgets.Button.Pressed, "#roster-remove-button")
    def action_remove_member(self) -> None:
        """Drop the highlighted member from the working copy."""
        roster_options = self.query_one("#roster-option", widgets.OptionList)
        index = roster_options.highlighted
        if index is None or not self.names:
            return
        del self.names[index]
        self.load_options()
        if self.names:
            roster_options.highlighted = min(index, len(self.names) - 1)

    @textual.on(widgets.Button.Pressed, "#roster-defaults-button")
    def restore_defaults(self) -> None:
        self.names = list(self.default_roster)
        self.load_options()

    @textual.on(widgets.Button.Pressed, "#roster-save-button")
    def save_roster(self) -> None:
        self.dismiss(self.names)

    @textual.on(widgets.Button.Pressed, "#roster-cancel-button")
    def action_cancel(self) -> None:
        self.dismiss(None)
