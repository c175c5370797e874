from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from typing import Any

ADMIN_ROLE = "admin"


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    normalized = str(value).strip()
    return normalized or None


@dataclass(slots=True)
class User:
    id: int | None
    username: str
    email: str | None = None
    is_admin: bool = False

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        *,
        admin_user_ids: Collection[int] = (),
    ) -> "User":
        """Build the identity from an auth response.

        An explicit ``role`` or ``admin`` field wins; identities without one
        fall back to the configured admin id list.
        """
        user_id = _optional_int(payload.get("userId", payload.get("id")))

        role = payload.get("role")
        admin_flag = payload.get("admin")
        if isinstance(role, str) and role.strip():
            is_admin = role.strip().lower() == ADMIN_ROLE
        elif isinstance(admin_flag, bool):
            is_admin = admin_flag
        else:
            is_admin = user_id is not None and user_id in admin_user_ids

        return cls(
            id=user_id,
            username=str(payload.get("username") or "").strip(),
            email=_optional_str(payload.get("email")),
            is_admin=is_admin,
        )


@dataclass(slots=True)
class Child:
    id: int
    name: str
    birth_date: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Child":
        child_id = _optional_int(payload.get("childId", payload.get("id")))
        if child_id is None:
            raise ValueError(f"Child record without a usable childId: {dict(payload)!r}")
        return cls(
            id=child_id,
            name=str(payload.get("childName") or "").strip(),
            birth_date=_optional_str(payload.get("birthDate")),
            raw=dict(payload),
        )

    @property
    def label(self) -> str:
        return self.name or f"Child #{self.id}"
