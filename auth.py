from __future__ import annotations

import logging
from collections.abc import Collection, Mapping
from typing import Any, Literal

from domain.feedback import ValidationError
from domain.models import User
from services.api_client import ApiError, SpeechTrackerClient

logger = logging.getLogger(__name__)

AuthMode = Literal["login", "register"]

MIN_PASSWORD_LENGTH = 6
GENERIC_AUTH_ERROR = "An error occurred"


def validate_credentials(
    mode: AuthMode, username: str, password: str, email: str = ""
) -> list[str]:
    errors: list[str] = []
    if not username.strip():
        errors.append("Username is required.")
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
    if mode == "register":
        normalized_email = email.strip()
        if not normalized_email:
            errors.append("Email is required.")
        elif "@" not in normalized_email:
            errors.append("Please enter a valid email address.")
    return errors


class AuthAgent:
    """Login/register panel state: the active mode and the last error."""

    def __init__(
        self,
        client: SpeechTrackerClient,
        *,
        admin_user_ids: Collection[int] = (1,),
    ) -> None:
        self.client = client
        self.admin_user_ids = tuple(admin_user_ids)
        self.mode: AuthMode = "login"
        self.error = ""
        self.busy = False

    def toggle_mode(self) -> AuthMode:
        self.mode = "register" if self.mode == "login" else "login"
        self.error = ""
        return self.mode

    def _to_user(self, payload: Any) -> User:
        if not isinstance(payload, Mapping):
            raise ApiError(
                "response", "Unexpected identity payload", payload=payload
            )
        return User.from_payload(payload, admin_user_ids=self.admin_user_ids)

    def login(self, username: str, password: str) -> User:
        payload = self.client.login(username.strip(), password)
        return self._to_user(payload)

    def register(self, username: str, password: str, email: str) -> User:
        """Create the account, then log in with the same credentials.

        The returned identity comes from the login response; the registration
        response is discarded.
        """
        self.client.register(username.strip(), password, email.strip())
        logger.info("Registered user %s, logging in", username.strip())
        return self.login(username, password)

    def submit(self, username: str, password: str, email: str = "") -> User:
        errors = validate_credentials(self.mode, username, password, email)
        if errors:
            self.error = " ".join(errors)
            raise ValidationError(errors)

        self.error = ""
        self.busy = True
        try:
            if self.mode == "login":
                return self.login(username, password)
            return self.register(username, password, email)
        except ApiError as exc:
            self.error = exc.user_message(GENERIC_AUTH_ERROR)
            raise
        finally:
            self.busy = False

    def restore_session(self) -> User | None:
        """Return the identity of a still valid backend session, if any."""
        try:
            payload = self.client.get_current_user()
        except ApiError:
            return None
        if not isinstance(payload, Mapping) or payload.get("userId") is None:
            return None
        return User.from_payload(payload, admin_user_ids=self.admin_user_ids)
