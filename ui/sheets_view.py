from __future__ import annotations

import streamlit as st

from sheets_sync import SheetsSyncPanel
from ui.layout import card


def _render_status(panel: SheetsSyncPanel) -> None:
    status = panel.status
    if not status.message:
        return
    text = "  \n".join(status.message.split("\n"))
    if status.kind == "success":
        st.success(text)
    elif status.kind == "error":
        st.error(text)
    else:
        st.info(text)


def render_sheets_sync(panel: SheetsSyncPanel) -> None:
    st.subheader("Google Sheets Sync (Admin Only)")
    st.caption(
        "Imports milestone data from the configured Google Sheet for the backend's "
        'default child. Use "Fetch" to preview data without saving, or "Sync" to '
        "save it to the database."
    )

    test_col, fetch_col, sync_col = st.columns(3)
    with test_col:
        if st.button(
            "Test Connection", disabled=panel.busy, use_container_width=True
        ):
            with st.spinner("Testing connection..."):
                panel.test_connection()
    with fetch_col:
        if st.button(
            "Fetch from Google Sheets (Display Only)",
            disabled=panel.busy,
            use_container_width=True,
        ):
            with st.spinner("Fetching from Google Sheets..."):
                panel.fetch_preview()
    with sync_col:
        if st.button(
            "Sync from Google Sheets (Save to Database)",
            type="primary",
            disabled=panel.busy,
            use_container_width=True,
        ):
            with st.spinner("Syncing to database..."):
                panel.sync_commit()

    _render_status(panel)

    for title, table in panel.result_tables():
        with card(title):
            st.dataframe(table, hide_index=True, use_container_width=True)
