"""HTTP client for the speech tracker REST backend.

Thin pass-through: one method per backend operation, the session cookie kept
in the client's cookie jar, transport failures logged and re-raised as
:class:`ApiError`. Nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Literal

import httpx

from domain.record_types import RecordType, get_record_type

logger = logging.getLogger(__name__)

ErrorKind = Literal["response", "network", "request"]

DEFAULT_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


class ApiError(RuntimeError):
    """A failed backend call.

    ``kind`` is ``"response"`` when the server answered with a non-2xx status,
    ``"network"`` when no response arrived and ``"request"`` when the request
    could not be built.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.payload = payload

    def user_message(self, fallback: str) -> str:
        if self.kind != "response":
            return fallback
        payload = self.payload
        if isinstance(payload, Mapping):
            for key in ("error", "message"):
                value = payload.get(key)
                if isinstance(value, str) and value.strip():
                    return value.strip()
            return fallback
        if isinstance(payload, str) and payload.strip():
            return payload.strip()
        return fallback


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


def _resolve_record_type(record_type: RecordType | str) -> RecordType:
    if isinstance(record_type, RecordType):
        return record_type
    return get_record_type(record_type)


class SpeechTrackerClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(
            base_url=base_url,
            headers=DEFAULT_HEADERS,
            timeout=timeout_seconds,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "SpeechTrackerClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, body: Any = None) -> Any:
        try:
            request = self._http.build_request(method, path, json=body)
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            logger.error("Request error: %s %s: %s", method, path, exc)
            raise ApiError("request", f"Could not build request: {exc}") from exc

        try:
            response = self._http.send(request)
        except httpx.UnsupportedProtocol as exc:
            logger.error("Request error: %s %s: %s", method, path, exc)
            raise ApiError("request", f"Could not send request: {exc}") from exc
        except httpx.RequestError as exc:
            logger.error("Network error: %s %s: %s", method, path, exc)
            raise ApiError("network", f"No response from server: {exc}") from exc

        payload = _decode_body(response)
        if response.is_success:
            return payload

        logger.error(
            "API error: %s %s -> %s %r", method, path, response.status_code, payload
        )
        raise ApiError(
            "response",
            f"{method} {path} failed with status {response.status_code}",
            status_code=response.status_code,
            payload=payload,
        )

    # Auth

    def login(self, username: str, password: str) -> Any:
        return self._request(
            "POST", "/api/auth/login", {"username": username, "password": password}
        )

    def register(self, username: str, password: str, email: str) -> Any:
        return self._request(
            "POST",
            "/api/auth/register",
            {"username": username, "password": password, "email": email},
        )

    def logout(self) -> Any:
        return self._request("POST", "/api/auth/logout")

    def get_current_user(self) -> Any:
        return self._request("GET", "/api/auth/me")

    # Children

    def list_children(self) -> Any:
        return self._request("GET", "/api/children")

    def get_child(self, child_id: int) -> Any:
        return self._request("GET", f"/api/children/{child_id}")

    def add_child(self, child_data: Mapping[str, Any]) -> Any:
        return self._request("POST", "/api/children", dict(child_data))

    def update_child(self, child_id: int, child_data: Mapping[str, Any]) -> Any:
        return self._request("PUT", f"/api/children/{child_id}", dict(child_data))

    def delete_child(self, child_id: int) -> Any:
        return self._request("DELETE", f"/api/children/{child_id}")

    # Milestone records

    @staticmethod
    def _records_path(record_type: RecordType | str, child_id: int) -> str:
        resource = _resolve_record_type(record_type).resource
        return f"/api/data/children/{child_id}/{resource}"

    def list_records(self, record_type: RecordType | str, child_id: int) -> Any:
        return self._request("GET", self._records_path(record_type, child_id))

    def add_record(
        self,
        record_type: RecordType | str,
        child_id: int,
        record_data: Mapping[str, Any],
    ) -> Any:
        return self._request(
            "POST", self._records_path(record_type, child_id), dict(record_data)
        )

    def update_record(
        self,
        record_type: RecordType | str,
        child_id: int,
        record_id: Any,
        record_data: Mapping[str, Any],
    ) -> Any:
        path = f"{self._records_path(record_type, child_id)}/{record_id}"
        return self._request("PUT", path, dict(record_data))

    def delete_record(
        self, record_type: RecordType | str, child_id: int, record_id: Any
    ) -> Any:
        path = f"{self._records_path(record_type, child_id)}/{record_id}"
        return self._request("DELETE", path)

    # Google Sheets import (admin)

    def fetch_from_sheets(self) -> Any:
        return self._request("POST", "/api/fetch")

    def sync_to_database(self) -> Any:
        return self._request("POST", "/api/sync")

    def test_connection(self) -> Any:
        return self._request("GET", "/api/test-connection")
