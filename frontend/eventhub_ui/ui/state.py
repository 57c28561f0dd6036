# eventhub_ui/ui/state.py

import re

import streamlit as st

from eventhub_ui.api import EventHubClient
from eventhub_ui.context import EventContext

EDIT_ROUTE = re.compile(r"^/events/(\d+)/edit$")
DETAILS_ROUTE = re.compile(r"^/events/(\d+)$")


def get_client() -> EventHubClient:
    return EventHubClient(token=st.session_state.get("token"))


def get_event_context() -> EventContext:
    """One EventContext per login; rebuilt when the token changes."""
    token = st.session_state.get("token")
    context = st.session_state.get("event_context")
    if context is None or context.client.token != token:
        context = EventContext(get_client())
        st.session_state["event_context"] = context
    return context


def sign_in(auth_response: dict):
    st.session_state["token"] = auth_response["token"]
    st.session_state["user"] = auth_response["user"]
    st.session_state["page"] = "events"


def sign_out():
    for key in ("token", "user", "event_context", "event_details", "page", "selected_event_id"):
        st.session_state.pop(key, None)


def navigate(route: str):
    """Map a path-style route onto the page keys main.py dispatches on."""
    edit = EDIT_ROUTE.match(route)
    details = DETAILS_ROUTE.match(route)
    if edit:
        st.session_state["page"] = "edit"
        st.session_state["selected_event_id"] = int(edit.group(1))
    elif details:
        st.session_state["page"] = "details"
        st.session_state["selected_event_id"] = int(details.group(1))
    elif route == "/events/new":
        st.session_state["page"] = "create"
    else:
        st.session_state["page"] = "events"


def close_details():
    st.session_state.pop("selected_event_id", None)
    st.session_state.pop("event_details", None)
    st.session_state["page"] = "events"
