## app.py
# Run: streamlit run app.py

from __future__ import annotations

import logging

import streamlit as st

from auth import AuthAgent
from children import ChildrenManager
from config import AppConfig, validate_config_or_stop
from data_entry import DataEntryFlow
from domain.models import User
from logging_setup import configure_logging
from services.api_client import SpeechTrackerClient
from session import TAB_LABELS, SessionShell
from sheets_sync import SheetsSyncPanel
from ui.children_view import render_children_manager
from ui.data_entry_view import render_data_entry
from ui.layout import bootstrap_page, show_notice
from ui.login_view import render_login
from ui.sheets_view import render_sheets_sync
from ui.state_keys import UIKeys, ss_get, ss_set

logger = logging.getLogger(__name__)

bootstrap_page("Toddler Speech Tracker")


def _get_client(app_config: AppConfig) -> SpeechTrackerClient:
    """One HTTP client (and cookie jar) per browser session."""
    client = ss_get(UIKeys.CLIENT)
    if client is None:
        client = SpeechTrackerClient(
            app_config.api.base_url,
            timeout_seconds=app_config.api.timeout_seconds,
        )
        ss_set(UIKeys.CLIENT, client)
    return client


def _start_session(client: SpeechTrackerClient, user: User) -> None:
    logger.info("User %s logged in (admin=%s)", user.username, user.is_admin)
    ss_set(UIKeys.USER, user)
    ss_set(UIKeys.SHELL, SessionShell(client, user))
    ss_set(UIKeys.CHILDREN_MANAGER, ChildrenManager(client))
    ss_set(UIKeys.SHEETS_PANEL, SheetsSyncPanel(client))
    st.session_state.pop(UIKeys.DATA_ENTRY, None)


def _end_session(shell: SessionShell) -> None:
    shell.logout()
    client = ss_get(UIKeys.CLIENT)
    st.session_state.clear()
    if client is not None:
        client.close()


def _data_entry_flow(
    client: SpeechTrackerClient, shell: SessionShell
) -> DataEntryFlow | None:
    child = shell.selected_child
    if child is None:
        return None
    flow: DataEntryFlow | None = ss_get(UIKeys.DATA_ENTRY)
    if flow is None:
        flow = DataEntryFlow(client, child)
        ss_set(UIKeys.DATA_ENTRY, flow)
    elif flow.child.id != child.id:
        flow.select_child(child)
    return flow


def _render_sidebar(shell: SessionShell) -> None:
    st.sidebar.title("Toddler Speech Tracker")
    welcome = f"Welcome, **{shell.user.username}**!"
    if shell.is_admin:
        welcome += " `Admin`"
    st.sidebar.markdown(welcome)

    for tab in shell.visible_tabs():
        if st.sidebar.button(
            TAB_LABELS[tab],
            key=f"nav_{tab}",
            type="primary" if shell.active_tab == tab else "secondary",
            disabled=not shell.tab_enabled(tab),
            use_container_width=True,
        ):
            shell.set_tab(tab)
            st.rerun()

    if shell.selected_child is not None:
        st.sidebar.caption(f"Selected child: {shell.selected_child.label}")

    if st.sidebar.button("Logout", key="logout"):
        _end_session(shell)
        st.rerun()


app_config = validate_config_or_stop()
configure_logging(app_config.log_level)
client = _get_client(app_config)

if ss_get(UIKeys.AUTH_AGENT) is None:
    ss_set(
        UIKeys.AUTH_AGENT,
        AuthAgent(client, admin_user_ids=app_config.auth.admin_user_ids),
    )
auth_agent: AuthAgent = ss_get(UIKeys.AUTH_AGENT)

# A backend session cookie may outlive a Streamlit rerun; try it once.
if ss_get(UIKeys.USER) is None and not ss_get(UIKeys.SESSION_RESTORE_TRIED):
    ss_set(UIKeys.SESSION_RESTORE_TRIED, True)
    restored_user = auth_agent.restore_session()
    if restored_user is not None:
        _start_session(client, restored_user)

if ss_get(UIKeys.USER) is None:
    # --- Login Screen ---
    logged_in_user = render_login(auth_agent)
    if logged_in_user is not None:
        _start_session(client, logged_in_user)
        st.rerun()
else:
    # --- Main Application (Post-Login) ---
    shell: SessionShell = ss_get(UIKeys.SHELL)
    children_manager: ChildrenManager = ss_get(UIKeys.CHILDREN_MANAGER)
    sheets_panel: SheetsSyncPanel = ss_get(UIKeys.SHEETS_PANEL)

    with st.spinner("Loading..."):
        shell.ensure_loaded()

    _render_sidebar(shell)
    st.header(TAB_LABELS[shell.active_tab])
    show_notice(shell.notice)
    shell.notice = None

    if shell.active_tab == "children":
        render_children_manager(children_manager, shell)
    elif shell.active_tab == "data":
        flow = _data_entry_flow(client, shell)
        if flow is not None:
            render_data_entry(flow, on_back=lambda: shell.set_tab("children"))
    elif shell.active_tab == "sheets" and shell.is_admin:
        render_sheets_sync(sheets_panel)
