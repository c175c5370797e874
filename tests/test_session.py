from __future__ import annotations

import pytest

from domain.models import Child, User
from session import SessionShell

ADMIN = User(id=1, username="root", is_admin=True)
PARENT = User(id=2, username="amy", is_admin=False)
CHILDREN = [
    {"childId": 10, "childName": "Mia", "birthDate": "2022-05-01"},
    {"childId": 11, "childName": "Leo", "birthDate": None},
]


def test_admin_sees_sheets_tab(client) -> None:
    assert SessionShell(client, ADMIN).visible_tabs() == ["children", "data", "sheets"]


def test_non_admin_does_not_see_sheets_tab(client) -> None:
    shell = SessionShell(client, PARENT)

    assert "sheets" not in shell.visible_tabs()
    with pytest.raises(ValueError):
        shell.set_tab("sheets")


def test_load_children_selects_the_first_child(backend, client) -> None:
    backend.on("GET", "/api/children", json=CHILDREN)
    shell = SessionShell(client, PARENT)

    shell.ensure_loaded()
    shell.ensure_loaded()

    assert [child.name for child in shell.children] == ["Mia", "Leo"]
    assert shell.selected_child is not None and shell.selected_child.id == 10
    assert backend.requests() == [("GET", "/api/children")]


def test_load_children_keeps_an_existing_selection(backend, client) -> None:
    backend.on("GET", "/api/children", json=CHILDREN)
    shell = SessionShell(client, PARENT)
    shell.selected_child = Child(id=11, name="Leo")

    shell.load_children()

    assert shell.selected_child.id == 11


def test_data_tab_needs_a_selected_child(client) -> None:
    shell = SessionShell(client, PARENT)

    assert shell.tab_enabled("data") is False
    with pytest.raises(ValueError):
        shell.set_tab("data")


def test_selecting_a_child_on_children_tab_opens_data_entry(client) -> None:
    shell = SessionShell(client, PARENT)

    shell.select_child(Child(id=10, name="Mia"))

    assert shell.active_tab == "data"


def test_selecting_a_child_elsewhere_keeps_the_tab(client) -> None:
    shell = SessionShell(client, ADMIN)
    shell.set_tab("sheets")

    shell.select_child(Child(id=10, name="Mia"))

    assert shell.active_tab == "sheets"


def test_child_deleted_reloads_and_clears_selection(backend, client) -> None:
    backend.on("GET", "/api/children", json=CHILDREN[1:])
    shell = SessionShell(client, PARENT)
    shell.select_child(Child(id=10, name="Mia"))

    shell.child_deleted()

    assert shell.selected_child is None
    assert shell.active_tab == "children"
    assert [child.id for child in shell.children] == [11]


def test_failed_children_load_leaves_empty_list(backend, client) -> None:
    backend.on("GET", "/api/children", status=401, json={"error": "Not authenticated"})
    shell = SessionShell(client, PARENT)

    assert shell.load_children() == []
    assert shell.notice is not None and shell.notice.message == "Not authenticated"


def test_logout_clears_state_even_when_remote_call_fails(backend, client) -> None:
    backend.on("GET", "/api/children", json=CHILDREN)
    backend.on("POST", "/api/auth/logout", status=500, json={"error": "boom"})
    shell = SessionShell(client, PARENT)
    shell.load_children()
    shell.set_tab("data")

    shell.logout()

    assert ("POST", "/api/auth/logout") in backend.requests()
    assert shell.logged_out is True
    assert shell.children == []
    assert shell.selected_child is None
    assert shell.active_tab == "children"
