"""Classes for verifying user enters valid input into Textual widgets."""

from typing import Optional

from textual import validation

from sarattend import model


class NotEmpty(validation.Validator):
    """Input widget can't be empty or contain only spaces."""

    def validate(self, value: str) -> validation.ValidationResult:
        """Validate successfully if value has non-whitespace characters."""
        if not value.strip():
            return self.failure("Field cannot be empty.")
        return self.success()


class MemberNameAvailable(validation.Validator):
    """No other member may have the same name, ignoring case."""

    def __init__(
        self, attendance: model.AttendanceStore, exclude: Optional[str] = None
    ) -> None:
        """Check names against the store's roster, skipping `exclude`."""
        super().__init__()
        self.attendance = attendance
        self.exclude = exclude

    def validate(self, value: str) -> validation.ValidationResult:
        folded = value.strip().casefold()
        for member in self.attendance.members:
            if member.name != self.exclude and member.name.casefold() == folded:
                return self.failure("A member with this name already exists.")
        return self.success()
