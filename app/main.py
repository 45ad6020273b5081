"""
Streamlit Frontend for Ledger Form

The user interface for recording dated financial entries.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. The date can only be picked from valid year / month / day lists
3. Clear error messages in simple language
4. Nothing is submitted without an explicit "Save" action

Pages (sidebar navigation):
- Login
- New Entry
Unknown pages fall back to Login.
"""

import asyncio
from datetime import datetime, timezone

import streamlit as st

from ledger_form.audit import configure_logging, create_correlation_id
from ledger_form.config import get_settings, validate_all_settings
from ledger_form.orchestrator import EntryFlow, LoginFlow, create_app_components
from ledger_form.models.select import SelectOption
from ledger_form.ui import (
    render_date_select,
    render_monetary_input,
    render_password_input,
    render_select,
    render_text_input,
)


PAGES = {
    "🔑 Login": "login",
    "📝 New Entry": "new_entry",
}


# Page configuration
st.set_page_config(
    page_title="Ledger Form",
    page_icon="📒",
    layout="centered",
    initial_sidebar_state="expanded",
)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    try:
        configure_logging(get_settings().app.log_level)
        return create_app_components()
    except Exception as e:
        st.error(f"Failed to initialize: {e}")
        st.stop()


def main():
    """Main application entry point."""
    entry_flow, login_flow, _ = get_components()

    st.sidebar.title("📒 Ledger Form")
    st.sidebar.markdown("---")

    page = st.sidebar.radio("Navigate to:", list(PAGES), index=0)

    render_connection_status()

    route = PAGES.get(page, "login")
    if route == "new_entry":
        render_new_entry_page(entry_flow)
    else:
        render_login_page(login_flow)


def render_connection_status():
    """Show configuration status in the sidebar."""
    status = validate_all_settings()
    backend_url = get_settings().backend.url if status.get("backend") else None

    with st.sidebar.expander("⚙️ Configuration"):
        for name, key in (("Backend", "backend"), ("Application", "app")):
            if status.get(key, False):
                st.success(f"✅ {name} settings loaded")
            else:
                st.error(f"❌ {name} - {status.get(f'{key}_error', 'Not configured')}")
        if backend_url:
            st.caption(f"Backend: {backend_url}")
        else:
            st.caption("No BACKEND_URL set - running offline with default categories")


def render_login_page(login_flow: LoginFlow):
    """Render the login page."""
    st.title("🔑 Login")

    username = render_text_input("Username", key="login_username")
    password = render_password_input("Password", key="login_password")

    if st.button("Log in", type="primary"):
        succeeded, message = run_async(
            login_flow.login(username=username, password=password)
        )
        if succeeded:
            st.session_state.logged_in_as = username
            st.success(message)
        else:
            st.error(message)


def _start_form_session(entry_flow: EntryFlow):
    """Reset per-form state: correlation ID, categories and date selector."""
    now = datetime.now(timezone.utc)
    correlation_id = create_correlation_id()

    categories, from_backend, reason = run_async(
        entry_flow.load_categories(correlation_id=correlation_id)
    )

    def remember_date(selected):
        st.session_state.entry_date = selected

    st.session_state.correlation_id = correlation_id
    st.session_state.form_now = now
    st.session_state.categories = categories
    st.session_state.categories_warning = None if from_backend else reason
    st.session_state.date_select = entry_flow.create_date_select(
        now,
        on_date_change=remember_date,
        correlation_id=correlation_id,
    )
    st.session_state.saved_entry = None


def render_new_entry_page(entry_flow: EntryFlow):
    """Render the new entry form."""
    st.title("📝 New Entry")

    if "date_select" not in st.session_state:
        _start_form_session(entry_flow)

    if st.session_state.categories_warning:
        st.warning(
            "Categories could not be loaded from the server; "
            f"showing the default list. ({st.session_state.categories_warning})"
        )

    category = render_select(
        "Category",
        [SelectOption.from_text(c) for c in st.session_state.categories],
        key="entry_category",
    )
    description = render_text_input(
        "Description",
        key="entry_description",
        placeholder="What was this for?",
    )
    value_text = render_monetary_input(
        "Value",
        key="entry_value",
        currency_symbol=get_settings().app.currency_symbol,
    )
    entry_date = render_date_select(
        "entry_date",
        "Date",
        st.session_state.date_select,
    )

    st.markdown("---")
    col1, col2 = st.columns(2)

    with col1:
        if st.button("✅ Save Entry", type="primary"):
            entry, result, message = entry_flow.submit_entry(
                category=category,
                description=description,
                value_text=value_text,
                entry_date=entry_date,
                categories=st.session_state.categories,
                date_range=st.session_state.date_select.date_range,
                now=st.session_state.form_now,
                correlation_id=st.session_state.correlation_id,
            )
            if entry is None:
                st.error(message)
            else:
                if result.warnings:
                    st.warning(message)
                st.session_state.saved_entry = entry

    with col2:
        if st.button("❌ Discard"):
            entry_flow.reject_entry(
                reason="User discarded the form",
                correlation_id=st.session_state.correlation_id,
            )
            for key in ("entry_category", "entry_description", "entry_value", "date_select"):
                st.session_state.pop(key, None)
            st.rerun()

    saved = st.session_state.get("saved_entry")
    if saved is not None:
        st.success(
            f"Saved: {saved.category} · {saved.description} · "
            f"{saved.value:,.2f} on {saved.entry_date.strftime('%d %B %Y')}"
        )


if __name__ == "__main__":
    main()
