from __future__ import annotations

import logging
from typing import Literal

from children import parse_children
from domain.feedback import Notice
from domain.models import Child, User
from services.api_client import ApiError, SpeechTrackerClient

logger = logging.getLogger(__name__)

Tab = Literal["children", "data", "sheets"]

TAB_LABELS: dict[str, str] = {
    "children": "Manage Children",
    "data": "Data Entry",
    "sheets": "Google Sheets Sync",
}


class SessionShell:
    """Authenticated view state: children, selected child, active tab."""

    def __init__(self, client: SpeechTrackerClient, user: User) -> None:
        self.client = client
        self.user = user
        self.children: list[Child] = []
        self.selected_child: Child | None = None
        self.active_tab: Tab = "children"
        self.loaded = False
        self.logged_out = False
        self.notice: Notice | None = None

    @property
    def is_admin(self) -> bool:
        return self.user.is_admin

    def visible_tabs(self) -> list[str]:
        tabs = ["children", "data"]
        if self.is_admin:
            tabs.append("sheets")
        return tabs

    def tab_enabled(self, tab: str) -> bool:
        if tab not in self.visible_tabs():
            return False
        if tab == "data":
            return self.selected_child is not None
        return True

    def set_tab(self, tab: str) -> None:
        if tab not in self.visible_tabs():
            raise ValueError(f"Tab '{tab}' is not available for this user.")
        if not self.tab_enabled(tab):
            raise ValueError("Select a child before opening data entry.")
        self.active_tab = tab  # type: ignore[assignment]

    def ensure_loaded(self) -> None:
        if not self.loaded:
            self.load_children()

    def load_children(self) -> list[Child]:
        try:
            self.children = parse_children(self.client.list_children())
        except ApiError as exc:
            logger.error("Error loading children: %s", exc)
            self.children = []
            self.notice = Notice(
                exc.user_message("Could not load children."), level="error"
            )
        finally:
            self.loaded = True

        if self.selected_child is not None:
            self.selected_child = next(
                (c for c in self.children if c.id == self.selected_child.id), None
            )
        if self.selected_child is None and self.children:
            self.selected_child = self.children[0]
        if self.selected_child is None and self.active_tab == "data":
            self.active_tab = "children"
        return self.children

    def select_child(self, child: Child) -> None:
        self.selected_child = child
        if self.active_tab == "children":
            self.active_tab = "data"

    def child_added(self) -> None:
        self.load_children()

    def child_deleted(self) -> None:
        self.load_children()
        self.selected_child = None
        if self.active_tab == "data":
            self.active_tab = "children"

    def logout(self) -> None:
        """End the remote session; local state is cleared even if that fails."""
        try:
            self.client.logout()
        except ApiError as exc:
            logger.warning("Logout error: %s", exc)
        self.children = []
        self.selected_child = None
        self.active_tab = "children"
        self.loaded = False
        self.logged_out = True
