from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator

import streamlit as st

from domain.feedback import Notice, PendingConfirmation

_PAGE_CONFIG_DONE_KEY = "_ui.page_config_done"


def bootstrap_page(title: str, icon: str = "🗣️") -> None:
    if st.session_state.get(_PAGE_CONFIG_DONE_KEY):
        return
    st.set_page_config(page_title=title, page_icon=icon, layout="wide")
    st.session_state[_PAGE_CONFIG_DONE_KEY] = True


def page_header(
    title: str, subtitle: str | None = None, right: str | None = None
) -> None:
    header_col, right_col = st.columns([5, 1])
    with header_col:
        st.title(title)
        if subtitle:
            st.caption(subtitle)
    with right_col:
        if right:
            st.caption(right)


def section_header(
    title: str, action_label: str | None = None, *, key: str | None = None
) -> bool:
    """Section title with an optional right-aligned button; returns its click."""
    title_col, action_col = st.columns([4, 1])
    with title_col:
        st.subheader(title)
    if not action_label:
        return False
    with action_col:
        return st.button(action_label, key=key, use_container_width=True)


@contextmanager
def card(title: str | None = None, *, key: str | None = None) -> Iterator[None]:
    with st.container(border=True, key=key):
        if title:
            st.markdown(f"### {title}")
        yield


def show_notice(notice: Notice | None) -> None:
    if notice is None:
        return
    if notice.level == "error":
        st.error(notice.message, icon="🚫" if notice.blocking else None)
    elif notice.level == "success":
        st.success(notice.message)
    else:
        st.info(notice.message)


def confirmation_prompt(
    pending: PendingConfirmation | None,
    *,
    on_confirm: Callable[[], None],
    on_cancel: Callable[[], None],
    key: str,
) -> None:
    """Inline confirm/cancel replacement for a browser confirm dialog."""
    if pending is None:
        return
    with st.container(border=True):
        st.warning(pending.prompt)
        confirm_col, cancel_col = st.columns(2)
        with confirm_col:
            if st.button(
                "Yes, delete",
                type="primary",
                key=f"{key}_confirm",
                use_container_width=True,
            ):
                on_confirm()
                st.rerun()
        with cancel_col:
            if st.button("Cancel", key=f"{key}_cancel", use_container_width=True):
                on_cancel()
                st.rerun()

