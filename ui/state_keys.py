from __future__ import annotations

from typing import Any

import streamlit as st


class UIKeys:
    CLIENT = "api.client"
    AUTH_AGENT = "auth.agent"
    USER = "auth.user"
    SHELL = "session.shell"
    CHILDREN_MANAGER = "children.manager"
    DATA_ENTRY = "data_entry.flow"
    SHEETS_PANEL = "sheets.panel"
    SESSION_RESTORE_TRIED = "auth.restore_tried"


def ss_get(key: str, default: Any = None) -> Any:
    return st.session_state.get(key, default)


def ss_set(key: str, value: Any) -> None:
    st.session_state[key] = value


def reset_keys(prefix: str) -> None:
    keys = [key for key in st.session_state.keys() if key.startswith(prefix)]
    for key in keys:
        del st.session_state[key]
