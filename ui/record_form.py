from __future__ import annotations

from typing import Any, Callable

import streamlit as st

from domain.feedback import ValidationError
from domain.record_types import (
    RATING_MAX,
    RATING_MIN,
    TRISTATE_LABELS,
    TRISTATE_OPTIONS,
    FieldSpec,
    RecordType,
    validate_form,
)
from services.api_client import ApiError
from ui.layout import card
from ui.state_keys import reset_keys

SAVE_ERROR_FALLBACK = "Failed to save data"


def _widget_key(record_type: RecordType, field_spec: FieldSpec) -> str:
    return f"record_form.{record_type.key}.{field_spec.name}"


def _render_field(
    record_type: RecordType, field_spec: FieldSpec, disabled: bool
) -> Any:
    label = f"{field_spec.label} *" if field_spec.required else field_spec.label
    key = _widget_key(record_type, field_spec)

    if field_spec.kind == "checkbox":
        return st.checkbox(label, key=key, disabled=disabled)
    if field_spec.kind == "date":
        help_text = None
        if field_spec.depends_on:
            parent = record_type.field(field_spec.depends_on).label
            help_text = f"Only saved when '{parent}' is checked."
        return st.date_input(
            label,
            value=None,
            format="YYYY-MM-DD",
            key=key,
            disabled=disabled,
            help=help_text,
        )
    if field_spec.kind == "rating":
        return st.number_input(
            label,
            min_value=RATING_MIN,
            max_value=RATING_MAX,
            value=None,
            step=1,
            key=key,
            disabled=disabled,
        )
    if field_spec.kind == "tristate":
        return st.selectbox(
            label,
            options=TRISTATE_OPTIONS,
            format_func=lambda value: TRISTATE_LABELS[value],
            key=key,
            disabled=disabled,
        )
    if field_spec.kind == "textarea":
        return st.text_area(
            label, placeholder=field_spec.placeholder, height=90, key=key, disabled=disabled
        )
    return st.text_input(
        label, placeholder=field_spec.placeholder, key=key, disabled=disabled
    )


def render_record_form(
    record_type: RecordType,
    *,
    on_save: Callable[[dict[str, Any]], Any],
    on_cancel: Callable[[], None],
    disabled: bool = False,
) -> bool:
    """Render the add form for ``record_type``; returns ``True`` after a save."""
    with card(f"Add New {record_type.singular}"):
        with st.form(key=f"record_form_{record_type.key}", border=False):
            form_data = {
                field_spec.name: _render_field(record_type, field_spec, disabled)
                for field_spec in record_type.fields
            }

            save_col, cancel_col = st.columns(2)
            with save_col:
                submitted = st.form_submit_button(
                    "Save", type="primary", disabled=disabled, use_container_width=True
                )
            with cancel_col:
                cancelled = st.form_submit_button(
                    "Cancel", use_container_width=True
                )

    if cancelled:
        on_cancel()
        st.rerun()
    if not submitted:
        return False

    errors = validate_form(record_type, form_data)
    if errors:
        for error in errors:
            st.error(error)
        return False

    with st.spinner("Saving..."):
        try:
            on_save(form_data)
        except ValidationError as exc:
            for error in exc.errors:
                st.error(error)
            return False
        except ApiError as exc:
            st.error(exc.user_message(SAVE_ERROR_FALLBACK))
            return False

    reset_keys(f"record_form.{record_type.key}.")
    return True
