"""Small modal dialogs: confirmation, member selection, and task number."""

from typing import Optional

import textual
from textual import app, containers, screen, widgets
from textual.widgets import option_list

import sarattend.view
from sarattend.view import validators


class ConfirmDialog(screen.ModalScreen[bool]):
    """Ask the user to confirm an action that can't be undone."""

    CSS_PATH = sarattend.view.CSS_FOLDER / "dialogs.tcss"
    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> app.ComposeResult:
        with containers.Vertical(id="confirm-dialog", classes="modal-dialog"):
            yield widgets.Label("Are you sure?", classes="emphasis")
            yield widgets.Static(self.message, id="confirm-message")
            with containers.Horizontal(classes="ok-cancel-row"):
                yield widgets.Button("Cancel", id="confirm-cancel-button")
                yield widgets.Button("Confirm", variant="error", id="confirm-ok-button")

    def on_mount(self) -> None:
        self.query_one("#confirm-cancel-button", widgets.Button).focus()

    @textual.on(widgets.Button.Pressed, "#confirm-ok-button")
    def on_ok_button_pressed(self) -> None:
        self.dismiss(True)

    @textual.on(widgets.Button.Pressed, "#confirm-cancel-button")
    def action_cancel(self) -> None:
        self.dismiss(False)


class ChooseMemberDialog(screen.ModalScreen[Optional[str]]):
    """Pick one member from a list, for signing in or editing."""

    CSS_PATH = sarattend.view.CSS_FOLDER / "dialogs.tcss"
    BINDINGS = [("escape", "cancel", "Cancel")]

    names: list[str]
    """Members that can be chosen."""

    def __init__(self, names: list[str], title: str, ok_label: str) -> None:
        super().__init__()
        self.names = names
        self.dialog_title = title
        self.ok_label = ok_label

    def compose(self) -> app.ComposeResult:
        """Arrange widgets within the dialog."""
        with containers.Vertical(id="choose-member-dialog", classes="modal-dialog"):
            yield widgets.Label(self.dialog_title, classes="emphasis")
            yield widgets.Label("Select Member")
            yield widgets.OptionList(
                *[option_list.Option(name, id=name) for name in self.names],
                id="choose-member-option",
            )
            with containers.Horizontal(classes="ok-cancel-row"):
                yield widgets.Button("Cancel", id="choose-member-cancel-button")
                yield widgets.Button(
                    self.ok_label,
                    variant="primary",
                    id="choose-member-ok-button",
                    disabled=not self.names,
                )

    def on_mount(self) -> None:
        member_options = self.query_one("#choose-member-option", widgets.OptionList)
        if self.names:
            member_options.highlighted = 0
        member_options.focus()

    @textual.on(widgets.OptionList.OptionSelected, "#choose-member-option")
    def on_option_selected(self, message: widgets.OptionList.OptionSelected) -> None:
        """Choosing an option with Enter or a double click closes the dialog."""
        self.dismiss(message.option.id)

    @textual.on(widgets.Button.Pressed, "#choose-member-ok-button")
    def on_ok_button_pressed(self) -> None:
        """Close the dialog and return the highlighted member."""
        member_options = self.query_one("#choose-member-option", widgets.OptionList)
        highlighted = member_options.highlighted_option
        self.dismiss(None if highlighted is None else highlighted.id)

    @textual.on(widgets.Button.Pressed, "#choose-member-cancel-button")
    def action_cancel(self) -> None:
        self.dismiss(None)


class TaskDialog(screen.ModalScreen[Optional[str]]):
    """Enter the number of a new task."""

    CSS_PATH = sarattend.view.CSS_FOLDER / "dialogs.tcss"
    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, default_task_number: str) -> None:
        super().__init__()
        self.default_task_number = default_task_number

    def compose(self) -> app.ComposeResult:
        with containers.Vertical(id="task-dialog", classes="modal-dialog"):
            yield widgets.Label("Start New Task Session", classes="emphasis")
            yield widgets.Label("Task Number")
            yield widgets.Input(
                value=self.default_task_number,
                placeholder="e.g., 20240101-01",
                id="task-number-input",
                validators=[validators.NotEmpty()],
            )
            with containers.Horizontal(classes="ok-cancel-row"):
                yield widgets.Button("Cancel", id="task-cancel-button")
                yield widgets.Button(
                    "Start Task", variant="primary", id="task-ok-button"
                )

    def on_mount(self) -> None:
        self.query_one("#task-number-input", widgets.Input).focus()

    @textual.on(widgets.Input.Submitted, "#task-number-input")
    @textual.on(widgets.Button.Pressed, "#task-ok-button")
    def on_ok_button_pressed(self) -> None:
        """Return the trimmed task number. Blank numbers are not accepted."""
        task_number = self.query_one("#task-number-input", widgets.Input).value.strip()
        if not task_number:
            self.notify("Task number cannot be empty.", severity="warning")
            return
        self.dismiss(task_number)

    @textual.on(widgets.Button.Pressed, "#task-cancel-button")
    def action_cancel(self) -> None:
        self.dismiss(None)
