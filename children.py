from __future__ import annotations

import logging
from datetime import date
from typing import Any

from domain.feedback import Notice, PendingConfirmation, ValidationError
from domain.models import Child
from services.api_client import ApiError, SpeechTrackerClient

logger = logging.getLogger(__name__)

DELETE_CHILD_PROMPT = (
    "Are you sure you want to delete this child? All associated data will be removed."
)


def parse_children(payload: Any) -> list[Child]:
    if not isinstance(payload, list):
        return []
    children: list[Child] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        try:
            children.append(Child.from_payload(item))
        except ValueError:
            logger.warning("Skipping child record without id: %r", item)
    return children


class ChildrenManager:
    def __init__(self, client: SpeechTrackerClient) -> None:
        self.client = client
        self.show_add_form = False
        self.add_error = ""
        self.pending_delete: PendingConfirmation | None = None
        self.notice: Notice | None = None
        self.busy = False

    def load(self) -> list[Child]:
        return parse_children(self.client.list_children())

    def toggle_add_form(self) -> None:
        self.show_add_form = not self.show_add_form
        self.add_error = ""

    def add(self, child_name: str, birth_date: date | str | None = None) -> Any:
        """Create a child; the name is required, the birth date optional."""
        name = child_name.strip()
        if not name:
            self.add_error = "Child's name is required."
            raise ValidationError([self.add_error])

        if isinstance(birth_date, date):
            birth_date_value: str | None = birth_date.isoformat()
        else:
            birth_date_value = (birth_date or "").strip() or None

        self.add_error = ""
        self.busy = True
        try:
            result = self.client.add_child(
                {"childName": name, "birthDate": birth_date_value}
            )
        except ApiError as exc:
            self.add_error = exc.user_message("Failed to add child")
            raise
        finally:
            self.busy = False

        self.show_add_form = False
        return result

    def request_delete(self, child: Child) -> None:
        self.pending_delete = PendingConfirmation(
            target_id=child.id, prompt=DELETE_CHILD_PROMPT
        )

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        """Delete the pending child; returns ``True`` when the backend accepted it."""
        pending = self.pending_delete
        if pending is None:
            return False
        self.pending_delete = None

        self.busy = True
        try:
            self.client.delete_child(pending.target_id)
        except ApiError as exc:
            self.notice = Notice(
                "Failed to delete child: " + exc.user_message(str(exc)),
                level="error",
                blocking=True,
            )
            return False
        finally:
            self.busy = False
        return True

    def take_notice(self) -> Notice | None:
        notice, self.notice = self.notice, None
        return notice
