from __future__ import annotations

import streamlit as st

from auth import MIN_PASSWORD_LENGTH, AuthAgent
from domain.feedback import ValidationError
from domain.models import User
from services.api_client import ApiError
from ui.layout import card, page_header


def render_login(agent: AuthAgent) -> User | None:
    """Login/register panel; returns the identity once authentication succeeds."""
    is_login = agent.mode == "login"
    page_header(
        "Toddler Speech Tracker",
        "Log new words, phrases, songs and letters as they happen.",
    )

    user: User | None = None
    with card("Login" if is_login else "Register"):
        with st.form(f"auth_form_{agent.mode}", border=False):
            username = st.text_input("Username", placeholder="Username")
            email = ""
            if not is_login:
                email = st.text_input("Email", placeholder="Email")
            password = st.text_input(
                "Password",
                type="password",
                placeholder=f"Password (min {MIN_PASSWORD_LENGTH} characters)",
            )
            submitted = st.form_submit_button(
                "Login" if is_login else "Register",
                type="primary",
                disabled=agent.busy,
                use_container_width=True,
            )

        if submitted:
            try:
                with st.spinner("Loading..."):
                    user = agent.submit(username, password, email)
            except (ValidationError, ApiError):
                # agent.error now holds the message rendered below
                user = None

        if agent.error:
            st.error(agent.error)

    prompt = "Don't have an account?" if is_login else "Already have an account?"
    st.caption(prompt)
    if st.button("Register" if is_login else "Login", key="auth_toggle_mode"):
        agent.toggle_mode()
        st.rerun()

    return user
