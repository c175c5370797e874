from __future__ import annotations

from datetime import date

import pytest

from children import DELETE_CHILD_PROMPT, ChildrenManager, parse_children
from domain.feedback import ValidationError
from domain.models import Child


def test_add_without_name_sends_no_request(backend, client) -> None:
    manager = ChildrenManager(client)

    with pytest.raises(ValidationError):
        manager.add("  ", date(2022, 5, 1))

    assert backend.calls == []
    assert manager.add_error == "Child's name is required."


def test_add_posts_name_and_iso_birth_date(backend, client) -> None:
    backend.on("POST", "/api/children", json={"message": "Child added successfully"})
    manager = ChildrenManager(client)
    manager.toggle_add_form()

    manager.add(" Mia ", date(2022, 5, 1))

    assert backend.calls[0].body == {"childName": "Mia", "birthDate": "2022-05-01"}
    assert manager.show_add_form is False


def test_birth_date_is_optional(backend, client) -> None:
    backend.on("POST", "/api/children", json={"message": "Child added successfully"})

    ChildrenManager(client).add("Leo")

    assert backend.calls[0].body == {"childName": "Leo", "birthDate": None}


def test_delete_waits_for_confirmation(backend, client) -> None:
    manager = ChildrenManager(client)

    manager.request_delete(Child(id=10, name="Mia"))

    assert manager.pending_delete.prompt == DELETE_CHILD_PROMPT
    manager.cancel_delete()
    assert manager.confirm_delete() is False
    assert backend.calls == []


def test_rejected_delete_surfaces_server_message(backend, client) -> None:
    backend.on("DELETE", "/api/children/10", status=403, json={"error": "Access denied"})
    manager = ChildrenManager(client)
    manager.request_delete(Child(id=10, name="Mia"))

    assert manager.confirm_delete() is False

    notice = manager.take_notice()
    assert notice is not None and notice.blocking
    assert notice.message == "Failed to delete child: Access denied"
    assert manager.take_notice() is None


def test_confirmed_delete_calls_backend_once(backend, client) -> None:
    backend.on("DELETE", "/api/children/10", json={"message": "Child deleted successfully"})
    manager = ChildrenManager(client)
    manager.request_delete(Child(id=10, name="Mia"))

    assert manager.confirm_delete() is True
    assert backend.requests() == [("DELETE", "/api/children/10")]


def test_parse_children_skips_malformed_rows() -> None:
    children = parse_children(
        [{"childId": 1, "childName": "Mia"}, {"childName": "No id"}, "garbage"]
    )

    assert children == [Child(id=1, name="Mia")]
    assert parse_children({"error": "nope"}) == []
