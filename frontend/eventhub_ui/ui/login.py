# eventhub_ui/ui/login.py

import streamlit as st

from eventhub_ui.api import ApiError
from eventhub_ui.ui.state import get_client, sign_in


def login_page():
    st.title("🎟️ EventHub")

    login_tab, register_tab, guest_tab = st.tabs(["Log in", "Register", "Continue as guest"])
    with login_tab:
        show_login_form()
    with register_tab:
        show_register_form()
    with guest_tab:
        show_guest_form()


def _submit(call, *args, success: str):
    try:
        result = call(*args)
    except ApiError as e:
        st.error(f"❌ {e.message}")
        return
    sign_in(result)
    st.success(success)
    st.rerun()


def show_login_form():
    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in")

    if submitted:
        with st.spinner("Logging in..."):
            _submit(get_client().login, email, password, success="✅ Logged in")


def show_register_form():
    with st.form("register_form"):
        name = st.text_input("Name")
        email = st.text_input("Email", key="register_email")
        password = st.text_input("Password", type="password", key="register_password")
        submitted = st.form_submit_button("Create account")

    if submitted:
        with st.spinner("Creating account..."):
            _submit(get_client().register, name, email, password, success="🎉 Account created")


def show_guest_form():
    st.caption("Browse and join events with just your email. You can set a password later.")
    with st.form("guest_form"):
        email = st.text_input("Email", key="guest_email")
        submitted = st.form_submit_button("Continue")

    if submitted:
        with st.spinner("Signing in..."):
            _submit(get_client().guest_login, email, success="✅ Signed in as guest")


def show_convert_guest_form():
    """Sidebar form that turns the current guest account into a full one."""
    with st.sidebar.expander("Keep your account"):
        with st.form("convert_guest_form"):
            name = st.text_input("Name")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Save")

        if submitted:
            _submit(get_client().convert_guest, name, password, success="🎉 Account saved")
