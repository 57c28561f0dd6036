# eventhub_ui/ui/event_form.py

from datetime import date, datetime, time, timedelta, timezone

import streamlit as st

from eventhub_ui.api import ApiError
from eventhub_ui.components.event_details import parse_event_date
from eventhub_ui.ui.events import CATEGORIES
from eventhub_ui.ui.state import get_event_context, navigate

FORM_CATEGORIES = CATEGORIES[1:]


def create_event_page():
    st.header("➕ Create event")
    payload = _event_form("create_event_form", None)
    if payload is None:
        return

    try:
        created = get_event_context().create_event(payload)
    except ApiError as e:
        st.error(f"❌ {e.message}")
        return
    navigate(f"/events/{created['_id']}")
    st.rerun()


def edit_event_page(event_id):
    context = get_event_context()
    event = context.find(event_id)
    if event is None:
        st.warning("Event not found.")
        return

    st.header("✏️ Edit event")
    payload = _event_form("edit_event_form", event)
    if payload is None:
        return

    try:
        context.update_event(event_id, payload)
    except ApiError as e:
        st.error(f"❌ {e.message}")
        return
    navigate(f"/events/{event_id}")
    st.rerun()


def _event_form(key: str, event: dict | None):
    """Render the form; returns the request payload once submitted."""
    event = event or {}
    starts_at = (
        parse_event_date(event["date"])
        if event.get("date")
        else datetime.now(timezone.utc) + timedelta(days=7)
    )
    category = event.get("category", "Other")

    with st.form(key):
        title = st.text_input("Title", value=event.get("title", ""))
        description = st.text_area("Description", value=event.get("description") or "")
        category = st.selectbox(
            "Category",
            FORM_CATEGORIES,
            index=FORM_CATEGORIES.index(category) if category in FORM_CATEGORIES else len(FORM_CATEGORIES) - 1,
        )
        day = st.date_input("Date", value=starts_at.date(), min_value=date.today())
        at = st.time_input("Time", value=starts_at.time().replace(second=0, microsecond=0))
        location = st.text_input("Location", value=event.get("location") or "")
        image = st.text_input("Image URL", value=event.get("image") or "")
        limit = st.number_input(
            "Max attendees (0 = unlimited)",
            min_value=0,
            step=1,
            value=event.get("maxAttendees") or 0,
        )
        submitted = st.form_submit_button("Save")

    if not submitted:
        return None

    return {
        "title": title,
        "description": description or None,
        "category": category,
        "date": datetime.combine(day, time(at.hour, at.minute), tzinfo=timezone.utc).isoformat(),
        "location": location or None,
        "image": image or None,
        "maxAttendees": int(limit) or None,
    }
