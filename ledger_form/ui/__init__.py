"""Streamlit rendering components."""

from ledger_form.ui.components import (
    render_date_select,
    render_monetary_input,
    render_password_input,
    render_select,
    render_text_input,
)

__all__ = [
    "render_date_select",
    "render_monetary_input",
    "render_password_input",
    "render_select",
    "render_text_input",
]
