from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

NoticeLevel = Literal["info", "success", "error"]


class ValidationError(ValueError):
    """Client-side validation failed; no request was sent."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)


@dataclass(frozen=True, slots=True)
class Notice:
    """A message the view shows once, ``blocking`` ones as an error dialog."""

    message: str
    level: NoticeLevel = "info"
    blocking: bool = False


@dataclass(frozen=True, slots=True)
class PendingConfirmation:
    """A destructive action waiting for the user to confirm or cancel."""

    target_id: Any
    prompt: str
