"""Form state for the create and edit pages.

A form moves through ``editing -> submitting -> (editing | done)``. Entered
values are never lost on a failed submission; a successful create clears them
so the next record can be typed in.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from ..errors import NetworkError, ValidationError
from ..models import FIELD_LABELS, USER_FIELDS, UserRecord, empty_form


logger = logging.getLogger(__name__)

EDITING = "editing"
SUBMITTING = "submitting"
DONE = "done"


@dataclass(frozen=True)
class Status:
    kind: str = "idle"
    message: str = ""

    @classmethod
    def idle(cls) -> "Status":
        return cls()

    @classmethod
    def success(cls, message: str) -> "Status":
        return cls("success", message)

    @classmethod
    def error(cls, message: str) -> "Status":
        return cls("error", message)


class UserForm(ABC):
    """Shared editing and submission flow; subclasses send the request."""

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self.values: Dict[str, str] = empty_form()
        self.state = EDITING
        self.status = Status.idle()
        if values:
            self.apply(values)

    def change(self, field: str, value: str) -> None:
        if field not in self.values:
            raise ValidationError(f"Unknown field: {field}")
        if self.state != EDITING:
            raise ValidationError(f"Form is {self.state}")
        self.values[field] = value

    def apply(self, mapping: Mapping[str, str]) -> None:
        for field in USER_FIELDS:
            if field in mapping:
                self.change(field, mapping[field])

    def missing_fields(self) -> List[str]:
        return [field for field in USER_FIELDS if not (self.values[field] or "").strip()]

    def validate(self) -> None:
        missing = self.missing_fields()
        if missing:
            labels = ", ".join(FIELD_LABELS[field] for field in missing)
            raise ValidationError(f"Please fill in: {labels}", missing=missing)

    def submit(self, client) -> bool:
        if self.state != EDITING:
            return False
        self.state = SUBMITTING
        try:
            ok = self._send(client)
        except NetworkError as e:
            logger.info("Submission failed: %s", e)
            self.status = Status.error(f"Error: {e}")
            ok = False
        if self.state == SUBMITTING:
            self.state = EDITING
        return ok

    @abstractmethod
    def _send(self, client) -> bool:
        """Issue the request; return True on success."""


class CreateUserForm(UserForm):
    def _send(self, client) -> bool:
        result = client.create(dict(self.values))
        if result.get("success"):
            self.values = empty_form()
            self.status = Status.success("User created successfully!")
            return True
        self.status = Status.error("Failed to create user.")
        return False


class EditUserForm(UserForm):
    """Seeded once from the resolved record; later edits never re-sync."""

    def __init__(self, record: UserRecord, values: Optional[Mapping[str, str]] = None):
        super().__init__(record.to_form())
        self.user_id = record.id
        if values:
            self.apply(values)

    def _send(self, client) -> bool:
        client.update(self.user_id, dict(self.values))
        self.state = DONE
        self.status = Status.success("User updated successfully!")
        return True
