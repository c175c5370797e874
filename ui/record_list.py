from __future__ import annotations

from typing import Any, Callable

import streamlit as st

from domain.record_types import RecordType, summarize_record
from ui.layout import card


def render_record_list(
    record_type: RecordType,
    records: list[dict[str, Any]],
    *,
    on_delete: Callable[[Any], None],
) -> None:
    if not records:
        st.info(
            f'No {record_type.key} added yet. Click the "Add" button to get started!'
        )
        return

    st.markdown(f"### {record_type.plural} ({len(records)})")
    for index, record in enumerate(records):
        summary = summarize_record(record_type, record)
        with card(key=f"record_card_{record_type.key}_{summary.record_id}_{index}"):
            title_col, action_col = st.columns([5, 1])
            with title_col:
                st.markdown(f"#### {summary.title}")
            with action_col:
                if st.button(
                    "Delete",
                    key=f"delete_{record_type.key}_{summary.record_id}_{index}",
                    use_container_width=True,
                ):
                    on_delete(summary.record_id)
                    st.rerun()
            for label, value in summary.details:
                st.markdown(f"**{label}:** {value}")
