"""Per-child data entry: one active record type, its records, add and delete."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from domain.feedback import Notice, PendingConfirmation, ValidationError
from domain.models import Child
from domain.record_types import (
    DEFAULT_RECORD_TYPE,
    RecordType,
    build_payload,
    get_record_type,
    validate_form,
)
from services.api_client import ApiError, SpeechTrackerClient

logger = logging.getLogger(__name__)

DELETE_RECORD_PROMPT = "Are you sure you want to delete this item?"


class DataEntryFlow:
    def __init__(
        self,
        client: SpeechTrackerClient,
        child: Child,
        *,
        active_type: str = DEFAULT_RECORD_TYPE,
    ) -> None:
        self.client = client
        self.child = child
        self.record_type: RecordType = get_record_type(active_type)
        self.records: list[dict[str, Any]] = []
        self.loaded = False
        self.loading = False
        self.show_form = False
        self.pending_delete: PendingConfirmation | None = None
        self.notice: Notice | None = None

    @property
    def active_type(self) -> str:
        return self.record_type.key

    def select_type(self, key: str) -> None:
        self.record_type = get_record_type(key)
        self.show_form = False
        self.pending_delete = None
        self.load()

    def select_child(self, child: Child) -> None:
        self.child = child
        self.show_form = False
        self.pending_delete = None
        self.load()

    def ensure_loaded(self) -> None:
        if not self.loaded:
            self.load()

    def load(self) -> list[dict[str, Any]]:
        """Replace the displayed records with the active type's records."""
        # Cleared up front so a failed load never shows the previous type's rows.
        self.records = []
        self.loading = True
        try:
            payload = self.client.list_records(self.record_type, self.child.id)
        except ApiError as exc:
            logger.warning(
                "Loading %s for child %s failed: %s",
                self.record_type.key,
                self.child.id,
                exc,
            )
            self.notice = Notice(
                exc.user_message(f"Could not load {self.record_type.key}."),
                level="error",
            )
            payload = []
        finally:
            self.loading = False
            self.loaded = True

        self.records = [item for item in payload or [] if isinstance(item, dict)]
        return self.records

    def open_form(self) -> None:
        self.show_form = True

    def close_form(self) -> None:
        self.show_form = False

    def toggle_form(self) -> None:
        self.show_form = not self.show_form

    def add(self, form_data: Mapping[str, Any]) -> Any:
        """Validate, create one record for the current child, close the form, reload.

        Raises :class:`ValidationError` without any request when the form is
        incomplete. Server failures propagate as :class:`ApiError` so the form
        can show them inline.
        """
        errors = validate_form(self.record_type, form_data)
        if errors:
            raise ValidationError(errors)

        payload = build_payload(self.record_type, form_data)
        created = self.client.add_record(self.record_type, self.child.id, payload)
        self.show_form = False
        self.load()
        return created

    def request_delete(self, record_id: Any) -> None:
        self.pending_delete = PendingConfirmation(
            target_id=record_id, prompt=DELETE_RECORD_PROMPT
        )

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        pending = self.pending_delete
        if pending is None:
            return False
        self.pending_delete = None

        try:
            self.client.delete_record(
                self.record_type, self.child.id, pending.target_id
            )
        except ApiError as exc:
            self.notice = Notice(
                "Failed to delete: " + exc.user_message(str(exc)),
                level="error",
                blocking=True,
            )
            return False

        self.load()
        return True

    def take_notice(self) -> Notice | None:
        notice, self.notice = self.notice, None
        return notice
