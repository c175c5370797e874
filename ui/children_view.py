from __future__ import annotations

import streamlit as st

from children import ChildrenManager
from domain.feedback import ValidationError
from domain.record_types import format_date
from services.api_client import ApiError
from session import SessionShell
from ui.layout import card, confirmation_prompt, section_header, show_notice


def _confirm_delete(manager: ChildrenManager, shell: SessionShell) -> None:
    if manager.confirm_delete():
        shell.child_deleted()


def _render_add_form(manager: ChildrenManager, shell: SessionShell) -> None:
    with card("Add New Child"):
        if manager.add_error:
            st.error(manager.add_error)
        with st.form("add_child_form", clear_on_submit=False, border=False):
            child_name = st.text_input(
                "Child's Name *", placeholder="Enter child's name"
            )
            birth_date = st.date_input("Birth Date", value=None, format="YYYY-MM-DD")
            submitted = st.form_submit_button(
                "Adding..." if manager.busy else "Add Child",
                type="primary",
                disabled=manager.busy,
            )

    if not submitted:
        return
    try:
        with st.spinner("Adding..."):
            manager.add(child_name, birth_date)
    except (ValidationError, ApiError):
        st.rerun()
    shell.child_added()
    st.rerun()


def render_children_manager(manager: ChildrenManager, shell: SessionShell) -> None:
    toggle_label = "Cancel" if manager.show_add_form else "+ Add Child"
    if section_header("Your Children", toggle_label, key="toggle_add_child"):
        manager.toggle_add_form()
        st.rerun()

    show_notice(manager.take_notice())

    if manager.show_add_form:
        _render_add_form(manager, shell)

    confirmation_prompt(
        manager.pending_delete,
        on_confirm=lambda: _confirm_delete(manager, shell),
        on_cancel=manager.cancel_delete,
        key="confirm_delete_child",
    )

    if not shell.children:
        st.info('No children added yet. Click "Add Child" to get started!')
    else:
        for child in shell.children:
            is_selected = (
                shell.selected_child is not None and shell.selected_child.id == child.id
            )
            with card(key=f"child_card_{child.id}"):
                info_col, select_col, delete_col = st.columns([4, 1, 1])
                with info_col:
                    marker = " ✓" if is_selected else ""
                    st.markdown(f"### {child.label}{marker}")
                    st.caption(f"Born: {format_date(child.birth_date) or 'Not set'}")
                with select_col:
                    if st.button(
                        "Select",
                        key=f"select_child_{child.id}",
                        disabled=is_selected,
                        use_container_width=True,
                    ):
                        shell.select_child(child)
                        st.rerun()
                with delete_col:
                    if st.button(
                        "Delete",
                        key=f"delete_child_{child.id}",
                        use_container_width=True,
                    ):
                        manager.request_delete(child)
                        st.rerun()

    if shell.selected_child is not None:
        st.success(
            f"✓ Currently viewing data for: **{shell.selected_child.label}**"
        )
