from __future__ import annotations

from typing import Callable

import streamlit as st

from data_entry import DataEntryFlow
from domain.record_types import RECORD_TYPE_KEYS, get_record_type
from ui.layout import confirmation_prompt, section_header, show_notice
from ui.record_form import render_record_form
from ui.record_list import render_record_list


def render_data_entry(flow: DataEntryFlow, *, on_back: Callable[[], None]) -> None:
    if section_header(
        f"Data Entry for {flow.child.label}", "← Back to Children", key="data_back"
    ):
        on_back()
        st.rerun()

    selected_type = st.segmented_control(
        "Record type",
        options=list(RECORD_TYPE_KEYS),
        format_func=lambda key: get_record_type(key).plural,
        default=flow.active_type,
        key=f"data_type_{flow.child.id}",
        label_visibility="collapsed",
    )
    if selected_type and selected_type != flow.active_type:
        with st.spinner("Loading..."):
            flow.select_type(selected_type)

    with st.spinner("Loading..."):
        flow.ensure_loaded()

    show_notice(flow.take_notice())

    record_type = flow.record_type
    toggle_label = "Cancel" if flow.show_form else f"+ Add {record_type.singular}"
    if st.button(toggle_label, key=f"toggle_form_{record_type.key}"):
        flow.toggle_form()
        st.rerun()

    if flow.show_form:
        if render_record_form(
            record_type, on_save=flow.add, on_cancel=flow.close_form
        ):
            st.rerun()

    confirmation_prompt(
        flow.pending_delete,
        on_confirm=flow.confirm_delete,
        on_cancel=flow.cancel_delete,
        key=f"confirm_delete_{record_type.key}",
    )

    render_record_list(record_type, flow.records, on_delete=flow.request_delete)
