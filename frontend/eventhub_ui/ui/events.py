# eventhub_ui/ui/events.py

import streamlit as st

from eventhub_ui.api import ApiError
from eventhub_ui.components.event_details import EventDetails, details_for, format_event_date
from eventhub_ui.ui.state import close_details, get_event_context, navigate

CATEGORIES = ["All", "Conference", "Workshop", "Meetup", "Social", "Sports", "Music", "Other"]


def events_page():
    st.header("📅 Upcoming events")
    context = get_event_context()

    category = st.selectbox("Category", CATEGORIES)
    try:
        context.load_events(category=None if category == "All" else category)
    except ApiError:
        st.error(f"❌ {context.error}")
        return

    if not context.events:
        st.info("No upcoming events yet.")
        return

    for event in context.events:
        with st.container(border=True):
            left, right = st.columns([4, 1])
            left.subheader(event["title"])
            left.caption(f"{event['category']} · {format_event_date(event['date'])} · {event.get('location') or 'TBA'}")
            if right.button("Details", key=f"details_{event['_id']}"):
                navigate(f"/events/{event['_id']}")
                st.rerun()


def event_details_page(event_id):
    context = get_event_context()
    if context.find(event_id) is None:
        try:
            context.load_events()
        except ApiError:
            st.error(f"❌ {context.error}")
            return

    details = details_for(
        st.session_state,
        event_id,
        context,
        st.session_state.get("user"),
        on_close=close_details,
        navigate=navigate,
    )
    if details.event is None:
        st.warning("Event not found.")
        if st.button("← Back to events"):
            close_details()
            st.rerun()
        return
    render_event_details(details)


def render_event_details(details: EventDetails):
    event = details.event
    if event is None:
        return

    if st.button("← Back to events"):
        close_details()
        st.rerun()

    title, category = st.columns([4, 1])
    title.title(event["title"])
    category.markdown(f"`{event['category']}`")
    if event.get("description"):
        st.write(event["description"])

    if event.get("image"):
        st.image(event["image"], width="stretch")

    st.subheader("Event Details")
    st.markdown(f"**Date & Time**  \n{format_event_date(event['date'])}")
    st.markdown(f"**Location**  \n{event.get('location') or 'TBA'}")
    st.markdown(f"**Attendees**  \n{details.attendance}")

    if details.context.error:
        st.error(details.context.error)

    if details.is_organizer:
        _render_organizer_actions(details)
    else:
        button = details.action_button()
        if st.button(
            button.label,
            disabled=button.disabled,
            type="secondary" if button.variant == "muted" else "primary",
        ):
            details.start_primary_action()
            st.rerun()

    st.subheader("Event Organizer")
    st.caption(f"Total Attendees: {details.attendance}")
    with st.container(border=True):
        avatar, info = st.columns([1, 6])
        avatar.markdown(f"### {details.organizer_initial}")
        info.markdown(
            f"**{details.organizer_display_name}**  \nOrganizer  \n{event['organizer']['email']}"
        )

    # The busy button is already on screen; send the request now
    if details.has_pending:
        details.run_pending()
        st.rerun()


def _render_organizer_actions(details: EventDetails):
    edit_col, delete_col = st.columns(2)
    if edit_col.button("Edit Event"):
        details.handle_edit()
        st.rerun()

    confirmed = delete_col.checkbox("Are you sure you want to delete this event?")
    button = details.delete_button()
    if delete_col.button(button.label, disabled=button.disabled, type="primary"):
        if details.start_delete(confirmed=confirmed):
            st.rerun()
        elif not confirmed:
            delete_col.warning("Tick the confirmation box first.")
