# eventhub_ui/main.py
# Run with: streamlit run frontend/eventhub_ui/main.py

import streamlit as st
from dotenv import load_dotenv

from eventhub_ui.ui.event_form import create_event_page, edit_event_page
from eventhub_ui.ui.events import event_details_page, events_page
from eventhub_ui.ui.login import login_page, show_convert_guest_form
from eventhub_ui.ui.state import navigate, sign_out

load_dotenv()

st.set_page_config(page_title="EventHub", page_icon="🎟️", layout="centered")


def sidebar():
    user = st.session_state["user"]
    st.sidebar.markdown(f"### 👋 {user['name']}")
    if user.get("isGuest"):
        st.sidebar.caption("Signed in as guest")
        show_convert_guest_form()

    if st.sidebar.button("📅 Events", width="stretch"):
        navigate("/events")
        st.rerun()
    if st.sidebar.button("➕ Create Event", width="stretch"):
        navigate("/events/new")
        st.rerun()
    if st.sidebar.button("🚪 Log out", width="stretch"):
        sign_out()
        st.rerun()


def main():
    if "token" not in st.session_state:
        login_page()
        return

    sidebar()

    page = st.session_state.get("page", "events")
    event_id = st.session_state.get("selected_event_id")
    if page == "details" and event_id is not None:
        event_details_page(event_id)
    elif page == "edit" and event_id is not None:
        edit_event_page(event_id)
    elif page == "create":
        create_event_page()
    else:
        events_page()


main()
