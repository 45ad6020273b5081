"""
Streamlit Form Components

Thin rendering glue between the form models and Streamlit widgets:
- labeled text and password inputs
- the monetary input (reformats on every change)
- a select list driven by SelectOption lists
- the three-select date widget driven by a CascadingDateSelect

DESIGN DECISION: Components hold no calendar logic. The date widget only
renders what the controller enumerates and forwards raw selections back.
"""

from datetime import datetime
from typing import Optional

import streamlit as st

from ledger_form.calendar import CascadingDateSelect
from ledger_form.formatting import convert_digit_string_to_monetary
from ledger_form.models.select import SelectOption


DATE_LEVEL_LABELS = ("Year", "Month", "Day")


def render_text_input(
    label: str,
    key: str,
    placeholder: str = "",
    help: Optional[str] = None,
) -> str:
    """Labeled single-line text input."""
    return st.text_input(label, key=key, placeholder=placeholder, help=help)


def render_password_input(label: str, key: str) -> str:
    """Labeled password input; the value is masked."""
    return st.text_input(label, key=key, type="password")


def render_monetary_input(
    label: str,
    key: str,
    currency_symbol: str = "",
) -> str:
    """
    Amount input that reformats itself as the user types.

    Whatever is typed is re-read as cents ("1234" -> "12.34") when the
    input changes. Returns the formatted text.
    """
    if key not in st.session_state:
        st.session_state[key] = convert_digit_string_to_monetary("")

    def reformat() -> None:
        st.session_state[key] = convert_digit_string_to_monetary(st.session_state[key])

    if currency_symbol:
        label = f"{label} ({currency_symbol})"

    st.text_input(label, key=key, placeholder="0.00", on_change=reformat)
    return st.session_state[key]


def render_select(
    label: str,
    options: list[SelectOption],
    key: Optional[str] = None,
    help: Optional[str] = None,
) -> Optional[str]:
    """
    Select list over SelectOptions.

    The option flagged selected is pre-selected; with no options the
    control is rendered empty and disabled. Returns the chosen raw value.
    """
    values = [option.value for option in options]
    labels = {option.value: option.display_text for option in options}
    selected_index = next(
        (i for i, option in enumerate(options) if option.selected),
        None,
    )

    return st.selectbox(
        label,
        options=values,
        index=selected_index,
        format_func=lambda value: labels.get(value, value),
        key=key,
        help=help,
        disabled=not values,
    )


def _selection_key(widget_id: str, level: str, options: list[SelectOption]) -> str:
    """Widget key that changes whenever the controller changes the options or selection."""
    selected = next((option.value for option in options if option.selected), "none")
    return f"{widget_id}_{level.lower()}_{len(options)}_{options[0].value if options else ''}_{selected}"


def render_date_select(
    widget_id: str,
    label: str,
    controller: CascadingDateSelect,
) -> Optional[datetime]:
    """
    Render the year / month / day selects for one controller.

    A changed selection is forwarded to the controller and the script is
    rerun so every level renders the settled state.

    Returns:
        The controller's current date (None if it does not resolve)
    """
    st.markdown(f"**{label}**")
    columns = st.columns(len(DATE_LEVEL_LABELS))

    for column, level_label, (options, on_select) in zip(
        columns, DATE_LEVEL_LABELS, controller.levels()
    ):
        with column:
            current = next((option.value for option in options if option.selected), None)
            chosen = render_select(
                level_label,
                options,
                key=_selection_key(widget_id, level_label, options),
            )
            if chosen is not None and chosen != current:
                on_select(chosen)
                st.rerun()

    return controller.selected_date
